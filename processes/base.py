"""Base class for analytical process implementations.

All process types must implement this interface to be runnable by the
ProcessEngine.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .context import ExecutionContext
from .schema import InputSchema

ResultStatus = Literal["success", "partial", "failed"]


class ProcessResult(BaseModel):
    """Outcome of one process run.

    status refines success: "partial" means the run succeeded but stopped
    early (cancellation), so data covers only part of the input.
    """

    success: bool
    status: ResultStatus = "success"
    data: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    @classmethod
    def ok(cls, data: dict[str, Any], partial: bool = False) -> "ProcessResult":
        return cls(success=True, status="partial" if partial else "success", data=data)

    @classmethod
    def failed(cls, error_message: str, data: Optional[dict[str, Any]] = None) -> "ProcessResult":
        return cls(success=False, status="failed", data=data or {}, error_message=error_message)


class ProcessCapabilities(BaseModel):
    """What a process can do and what it needs."""

    supports_batch: bool = False
    supports_streaming: bool = False
    requires_cognitive_service: bool = False
    processes_corpus: bool = False


class ProcessDescriptor(BaseModel):
    """Catalog entry for a registered process. Immutable."""

    model_config = ConfigDict(frozen=True)

    process_id: str
    name: str
    description: str
    category: str
    input_schema: InputSchema
    capabilities: ProcessCapabilities


class BaseProcess(ABC):
    """Abstract base class for process implementations.

    Subclasses must implement:
    - process_id, name, description, category
    - get_input_schema(): Parameters the process expects
    - execute(): Run the process and return a ProcessResult

    execute() should not raise. Expected failures (bad input, empty corpus)
    come back as ProcessResult.failed(...); the engine still guards against
    anything that escapes.

    Example:
        class EchoProcess(BaseProcess):
            process_id = "echo"
            name = "Echo"
            description = "Returns its input"
            category = "Utility"

            def get_input_schema(self):
                return InputSchema().add_text_input("text", "What to echo")

            async def execute(self, context):
                return ProcessResult.ok({"text": context.get_parameter("text")})
    """

    process_id: str
    name: str
    description: str
    category: str

    @abstractmethod
    def get_input_schema(self) -> InputSchema:
        """Return the parameters this process expects."""
        pass

    def validate(self, context: ExecutionContext) -> bool:
        """Check that every required parameter is present.

        Presence only. Shape errors (unparseable lists, bad numbers) surface
        from execute() as failed results.
        """
        return not self.missing_inputs(context)

    def missing_inputs(self, context: ExecutionContext) -> list[str]:
        return self.get_input_schema().missing_required(context.parameters)

    @abstractmethod
    async def execute(self, context: ExecutionContext) -> ProcessResult:
        """Run the process.

        Args:
            context: Per-run context with parameters, services, cancellation
                signal and progress sink

        Returns:
            ProcessResult; failed results carry error_message
        """
        pass

    def get_capabilities(self) -> ProcessCapabilities:
        return ProcessCapabilities()

    def describe(self) -> ProcessDescriptor:
        """Build the catalog entry for this process."""
        return ProcessDescriptor(
            process_id=self.process_id,
            name=self.name,
            description=self.description,
            category=self.category,
            input_schema=self.get_input_schema(),
            capabilities=self.get_capabilities(),
        )
