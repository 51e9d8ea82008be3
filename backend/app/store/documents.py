"""Document store - authoritative in-memory collection backed by a repository.

All mutations go through the store. After the initial load, every mutation
saves the full snapshot and notifies subscribers. Persistence problems are
logged and never raised: the in-memory copy stays authoritative.
"""

import logging
import uuid
from collections.abc import Callable

from pydantic import ValidationError

from backend.app.db.repositories import DocumentRepository, StorageError
from backend.app.docs.extract import count_words
from backend.app.models.study import GeneratedOutputs, StudyDocument, utc_now

logger = logging.getLogger(__name__)

Subscriber = Callable[[list[StudyDocument]], None]


class DocumentNotFoundError(KeyError):
    """No document with the given id."""

    def __init__(self, doc_id: str) -> None:
        super().__init__(doc_id)
        self.doc_id = doc_id

    def __str__(self) -> str:
        return f"Document {self.doc_id} not found"


class DocumentStore:
    """Ordered collection of study documents plus the active selection."""

    def __init__(self, repository: DocumentRepository) -> None:
        self._repository = repository
        self._documents: dict[str, StudyDocument] = {}
        self._active_id: str | None = None
        self._loaded = False
        self._subscribers: list[Subscriber] = []

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def repository(self) -> DocumentRepository:
        return self._repository

    def load(self) -> list[StudyDocument]:
        """Load the persisted collection once.

        Malformed or unreadable data yields an empty collection.
        """
        if self._loaded:
            return self.list()

        try:
            documents = self._repository.load()
        except (StorageError, ValidationError) as e:
            logger.error(f"Failed to load documents from storage: {e}")
            documents = []

        self._documents = {doc.id: doc for doc in documents}
        self._loaded = True
        logger.info(f"Loaded {len(self._documents)} document(s)")
        return self.list()

    def list(self) -> list[StudyDocument]:
        """All documents in insertion order."""
        return list(self._documents.values())

    def get(self, doc_id: str) -> StudyDocument:
        """Get a document by id.

        Raises:
            DocumentNotFoundError: If no such document exists
        """
        doc = self._documents.get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(doc_id)
        return doc

    def exists(self, doc_id: str) -> bool:
        return doc_id in self._documents

    def add(self, name: str, content: str) -> StudyDocument:
        """Create a document from extracted text, append it and make it active."""
        doc = StudyDocument(
            id=str(uuid.uuid4()),
            name=name,
            timestamp=utc_now(),
            word_count=count_words(content),
            content=content,
            ai_outputs=GeneratedOutputs(),
        )
        self._documents[doc.id] = doc
        self._active_id = doc.id
        self._commit()
        return doc

    def update(self, doc_id: str, outputs: GeneratedOutputs) -> StudyDocument:
        """Merge generated outputs into a document.

        Only slots explicitly set on `outputs` are written; each written slot
        replaces the previous value wholesale.
        """
        doc = self.get(doc_id)
        changes = {name: getattr(outputs, name) for name in outputs.model_fields_set}
        merged = doc.ai_outputs.model_copy(update=changes)
        updated = doc.model_copy(update={"ai_outputs": merged})

        self._documents[doc_id] = updated
        self._commit()
        return updated

    def remove(self, doc_id: str) -> None:
        """Delete a document; clears the selection if it was active."""
        if doc_id not in self._documents:
            raise DocumentNotFoundError(doc_id)

        del self._documents[doc_id]
        if self._active_id == doc_id:
            self._active_id = None
        self._commit()

    def select(self, doc_id: str) -> StudyDocument:
        """Make a document the active one."""
        doc = self.get(doc_id)
        self._active_id = doc_id
        return doc

    def clear_selection(self) -> None:
        self._active_id = None

    @property
    def active(self) -> StudyDocument | None:
        """Currently active document, if any."""
        if self._active_id is None:
            return None
        return self._documents.get(self._active_id)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Function that removes the listener
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self) -> None:
        snapshot = self.list()

        if self._loaded:
            try:
                self._repository.save(snapshot)
            except StorageError as e:
                logger.error(f"Failed to save documents to storage: {e}")

        for callback in list(self._subscribers):
            callback(snapshot)
