"""In-memory implementation of the document repository."""

from backend.app.db.repositories import deserialize_collection, serialize_collection
from backend.app.models.study import StudyDocument


class InMemoryDocumentRepository:
    """In-memory implementation of DocumentRepository.

    Keeps the serialized form so load/save behave like a real medium.
    """

    def __init__(self, raw: str | None = None) -> None:
        self.raw = raw
        self.save_count = 0

    def load(self) -> list[StudyDocument]:
        """Load the stored collection."""
        if self.raw is None:
            return []
        return deserialize_collection(self.raw)

    def save(self, documents: list[StudyDocument]) -> None:
        """Replace the stored collection."""
        self.raw = serialize_collection(documents)
        self.save_count += 1

    def ping(self) -> None:
        """Always reachable."""
