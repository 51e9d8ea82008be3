"""Repository construction from settings."""

import logging

from backend.app.config import Settings
from backend.app.db.file_store import JsonFileDocumentRepository
from backend.app.db.inmemory import InMemoryDocumentRepository
from backend.app.db.redis_store import RedisDocumentRepository
from backend.app.db.repositories import DocumentRepository

logger = logging.getLogger(__name__)


def create_repository_from_settings(settings: Settings) -> DocumentRepository:
    """Pick the persistence medium named by STORAGE_BACKEND."""
    backend = settings.storage_backend

    if backend == "redis":
        if not settings.redis_url:
            raise ValueError("STORAGE_BACKEND=redis requires REDIS_URL")
        logger.info(f"Persisting documents to Redis key {settings.storage_key}")
        return RedisDocumentRepository.from_url(settings.redis_url, settings.storage_key)

    if backend == "memory":
        logger.warning("Using in-memory document storage; documents are lost on restart")
        return InMemoryDocumentRepository()

    logger.info(f"Persisting documents under {settings.storage_dir}")
    return JsonFileDocumentRepository(settings.storage_dir, settings.storage_key)
