"""Redis implementation of the document repository."""

import redis

from backend.app.db.repositories import (
    DEFAULT_STORAGE_KEY,
    StorageError,
    deserialize_collection,
    serialize_collection,
)
from backend.app.models.study import StudyDocument


class RedisDocumentRepository:
    """Stores the collection as one JSON string under a single Redis key."""

    def __init__(self, client: "redis.Redis", key: str = DEFAULT_STORAGE_KEY) -> None:
        self._client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str = DEFAULT_STORAGE_KEY) -> "RedisDocumentRepository":
        """Create a repository from a redis:// URL."""
        client = redis.from_url(url, decode_responses=True)  # type: ignore[no-untyped-call]
        return cls(client, key)

    def load(self) -> list[StudyDocument]:
        """Load the collection; a missing key is an empty collection."""
        try:
            raw = self._client.get(self.key)
        except redis.RedisError as e:
            raise StorageError(f"Cannot read key {self.key}") from e
        except UnicodeDecodeError as e:
            raise StorageError(f"Stored collection under key {self.key} is malformed") from e

        if raw is None:
            return []
        return deserialize_collection(raw)  # type: ignore[arg-type]

    def save(self, documents: list[StudyDocument]) -> None:
        """Overwrite the key with the snapshot."""
        try:
            self._client.set(self.key, serialize_collection(documents))
        except redis.RedisError as e:
            raise StorageError(f"Cannot write key {self.key}") from e

    def ping(self) -> None:
        """Ping the Redis server."""
        try:
            self._client.ping()
        except redis.RedisError as e:
            raise StorageError("Redis unreachable") from e
