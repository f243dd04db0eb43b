"""Interfaces of the services a process calls out to.

Processes receive concrete implementations through ProcessServices on the
execution context. In-memory implementations live in processes.shared.memory.
"""

from typing import Any, Protocol, runtime_checkable

from .types import Document, Journey, SemanticExtraction


@runtime_checkable
class DocumentLookup(Protocol):
    """Resolves document ids to documents owned by a user."""

    async def get_documents_by_ids(self, ids: list[str], user_id: str) -> list[Document]:
        """Return the user's documents among ids, in ids order.

        Each document appears at most once even if its id is repeated;
        unknown ids are dropped.
        """
        ...


@runtime_checkable
class DocumentWriter(Protocol):
    """Stores documents generated by a process."""

    async def save_generated_document(
        self,
        user_id: str,
        journey_id: str,
        file_name: str,
        content: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Persist content and return the new document id."""
        ...


@runtime_checkable
class JourneyLookup(Protocol):
    async def get_journey(self, journey_id: str) -> Journey | None:
        ...


@runtime_checkable
class SemanticExtractor(Protocol):
    """Derives topics, entities and keywords from an abstract."""

    async def extract_semantics(self, abstract_text: str) -> SemanticExtraction:
        ...


@runtime_checkable
class TabularExporter(Protocol):
    """Renders screening results to a tabular byte blob."""

    def write_to_table(self, results: list[Any], research_questions: list[str]) -> bytes:
        ...

