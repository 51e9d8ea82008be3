"""Repository protocol for the persisted document collection."""

from typing import Protocol

from pydantic import TypeAdapter

from backend.app.models.study import StudyDocument

DEFAULT_STORAGE_KEY = "scholar-ai-documents"

_collection_adapter: TypeAdapter[list[StudyDocument]] = TypeAdapter(list[StudyDocument])


class StorageError(Exception):
    """The persistence medium could not be read or written."""


def serialize_collection(documents: list[StudyDocument]) -> str:
    """Serialize the whole collection as one JSON array (camelCase keys)."""
    return _collection_adapter.dump_json(documents, by_alias=True).decode("utf-8")


def deserialize_collection(raw: str | bytes) -> list[StudyDocument]:
    """Parse a persisted collection.

    Raises:
        pydantic.ValidationError: If the data is malformed
    """
    return _collection_adapter.validate_json(raw)


class DocumentRepository(Protocol):
    """Durable storage for the document collection under one named slot.

    There is no versioning or migration: the slot holds the latest snapshot.
    """

    def load(self) -> list[StudyDocument]:
        """Load the persisted collection.

        Returns:
            Documents in insertion order (empty if nothing was saved yet)

        Raises:
            StorageError: If the medium cannot be read
            pydantic.ValidationError: If the stored data is malformed
        """
        ...

    def save(self, documents: list[StudyDocument]) -> None:
        """Replace the persisted collection with a snapshot.

        Args:
            documents: Full collection snapshot

        Raises:
            StorageError: If the medium cannot be written
        """
        ...

    def ping(self) -> None:
        """Check that the medium is reachable.

        Raises:
            StorageError: If it is not
        """
        ...
