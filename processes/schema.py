"""Declarative input schemas for processes.

A schema tells a caller (UI form, CLI) which parameters a process expects.
It is advisory: the engine only enforces presence of required keys, through
the process's own validate().
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class InputFieldType(str, Enum):
    """Kinds of input a process can ask for."""

    TEXT_INPUT = "text_input"
    TEXT_AREA = "text_area"
    DROPDOWN = "dropdown"
    MULTI_SELECT = "multi_select"
    SCOPE_SELECTOR = "scope_selector"
    DOCUMENT_SELECTOR = "document_selector"
    NUMBER_INPUT = "number_input"
    DATE_PICKER = "date_picker"


class InputField(BaseModel):
    """One expected parameter."""

    name: str
    description: str = ""
    type: InputFieldType
    required: bool = True
    options: list[str] = Field(default_factory=list)
    default_value: Any = None


class InputSchema(BaseModel):
    """Ordered collection of input fields, built fluently.

    Example:
        schema = (
            InputSchema()
            .add_text_area("research_questions", "One per line")
            .add_text_input("relevance_threshold", "0.0-1.0", required=False)
        )
    """

    fields: list[InputField] = Field(default_factory=list)

    def _add(self, name: str, description: str, type: InputFieldType, required: bool, **kwargs) -> "InputSchema":
        self.fields.append(
            InputField(name=name, description=description, type=type, required=required, **kwargs)
        )
        return self

    def add_text_area(self, name: str, description: str, required: bool = True) -> "InputSchema":
        return self._add(name, description, InputFieldType.TEXT_AREA, required)

    def add_text_input(
        self, name: str, description: str, required: bool = True, default_value: Any = None
    ) -> "InputSchema":
        return self._add(
            name, description, InputFieldType.TEXT_INPUT, required, default_value=default_value
        )

    def add_dropdown(
        self, name: str, description: str, options: list[str], required: bool = True
    ) -> "InputSchema":
        return self._add(name, description, InputFieldType.DROPDOWN, required, options=list(options))

    def add_multi_select(
        self, name: str, description: str, options: list[str] | None = None, required: bool = True
    ) -> "InputSchema":
        return self._add(
            name, description, InputFieldType.MULTI_SELECT, required, options=list(options or [])
        )

    def add_scope_selector(self, name: str, description: str, required: bool = False) -> "InputSchema":
        return self._add(name, description, InputFieldType.SCOPE_SELECTOR, required)

    def add_document_selector(self, name: str, description: str, required: bool = True) -> "InputSchema":
        return self._add(name, description, InputFieldType.DOCUMENT_SELECTOR, required)

    @property
    def required_names(self) -> list[str]:
        """Names of required fields, in declaration order."""
        return [f.name for f in self.fields if f.required]

    def get(self, name: str) -> InputField | None:
        """Look up a field by name."""
        return next((f for f in self.fields if f.name == name), None)

    def missing_required(self, parameters: dict[str, Any]) -> list[str]:
        """Required field names absent from parameters (presence only, no shape checks)."""
        return [name for name in self.required_names if name not in parameters]
