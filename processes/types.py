"""Domain records the processes read: documents, journeys, personas.

These mirror what the surrounding application stores. The processes only
read them; persistence is the collaborators' concern.
"""

from typing import Any

from pydantic import BaseModel, Field


class DocumentMetadata(BaseModel):
    """Bibliographic metadata attached to a corpus document."""

    title: str | None = None
    abstract: str | None = None
    authors: list[str] = Field(default_factory=list)
    year: int | None = None
    venue: str | None = None
    doi: str | None = None
    keywords: list[str] = Field(default_factory=list)
    extended_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def link(self) -> str:
        """Link to the document, stored in extended metadata when known."""
        value = self.extended_metadata.get("link")
        return str(value) if value else ""


class Document(BaseModel):
    """A document in a user's corpus."""

    id: str
    user_id: str | None = None
    file_name: str = ""
    metadata: DocumentMetadata | None = None

    @property
    def display_title(self) -> str:
        if self.metadata and self.metadata.title:
            return self.metadata.title
        return self.file_name or self.id


class PersonaContext(BaseModel):
    """The intellectual persona a journey is conducted under."""

    persona_id: str | None = None
    domain: str | None = None
    conceptual_vocabulary: dict[str, int] = Field(default_factory=dict)
    methodological_preferences: list[str] = Field(default_factory=list)


class JourneyContext(BaseModel):
    """Recent journey state handed to processes that want it."""

    purpose: str | None = None
    state: str | None = None
    recent_entries: list[str] = Field(default_factory=list)
    persona: PersonaContext | None = None


class Journey(BaseModel):
    """A user's bounded unit of intellectual work in which processes run."""

    id: str
    user_id: str
    purpose: str = ""
    state: str = "active"
    persona: PersonaContext | None = None

    def to_context(self) -> JourneyContext:
        return JourneyContext(purpose=self.purpose, state=self.state, persona=self.persona)


class SemanticExtraction(BaseModel):
    """Topics, entities and keywords extracted from an abstract."""

    topics: list[str] = Field(default_factory=list)
    entities: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
