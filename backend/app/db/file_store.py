"""JSON file implementation of the document repository."""

import os
import tempfile
from pathlib import Path

from backend.app.db.repositories import (
    DEFAULT_STORAGE_KEY,
    StorageError,
    deserialize_collection,
    serialize_collection,
)
from backend.app.models.study import StudyDocument


class JsonFileDocumentRepository:
    """Stores the collection as `<directory>/<key>.json`."""

    def __init__(self, directory: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._directory = Path(directory)
        self.path = self._directory / f"{key}.json"

    def load(self) -> list[StudyDocument]:
        """Load the collection; a missing file is an empty collection."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}") from e
        except UnicodeDecodeError as e:
            raise StorageError(f"Stored collection in {self.path} is malformed") from e

        return deserialize_collection(raw)

    def save(self, documents: list[StudyDocument]) -> None:
        """Write the snapshot to a temp file, then atomically replace the slot."""
        payload = serialize_collection(documents)

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}") from e

    def ping(self) -> None:
        """Check the storage directory is usable."""
        if self._directory.exists() and not os.access(self._directory, os.W_OK):
            raise StorageError(f"Storage directory {self._directory} is not writable")
