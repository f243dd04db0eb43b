"""In-memory collaborators for the CLI and tests."""

import logging
import uuid
from typing import Any, Iterable, Optional

from ..types import Document, DocumentMetadata, Journey

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """DocumentLookup and DocumentWriter over a dict of documents.

    Documents belong to the user_id they were added under; lookups for
    another user do not see them.
    """

    def __init__(self, documents: Iterable[Document] = ()):
        self._documents: dict[str, Document] = {}
        for document in documents:
            self.add(document)

    def add(self, document: Document, user_id: Optional[str] = None) -> Document:
        if user_id is not None:
            document = document.model_copy(update={"user_id": user_id})
        self._documents[document.id] = document
        return document

    def add_many(self, documents: Iterable[Document], user_id: Optional[str] = None) -> list[Document]:
        return [self.add(d, user_id=user_id) for d in documents]

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    async def get_documents_by_ids(self, ids: list[str], user_id: str) -> list[Document]:
        found = []
        for doc_id in dict.fromkeys(ids):
            document = self._documents.get(doc_id)
            if document is None or document.user_id != user_id:
                logger.debug(f"Document {doc_id} not found for user {user_id}")
                continue
            found.append(document)
        return found

    async def save_generated_document(
        self,
        user_id: str,
        journey_id: str,
        file_name: str,
        content: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> str:
        document = Document(
            id=str(uuid.uuid4()),
            user_id=user_id,
            file_name=file_name,
            metadata=DocumentMetadata(
                title=file_name,
                extended_metadata={
                    **(metadata or {}),
                    "journey_id": journey_id,
                    "content": content,
                },
            ),
        )
        self._documents[document.id] = document
        logger.info(f"Saved generated document {file_name} as {document.id}")
        return document.id

    def __len__(self) -> int:
        return len(self._documents)


class InMemoryJourneyStore:
    """JourneyLookup over a dict of journeys."""

    def __init__(self, journeys: Iterable[Journey] = ()):
        self._journeys = {j.id: j for j in journeys}

    def add(self, journey: Journey) -> Journey:
        self._journeys[journey.id] = journey
        return journey

    async def get_journey(self, journey_id: str) -> Optional[Journey]:
        return self._journeys.get(journey_id)
