"""Shared FastAPI dependencies: the document store and generation coordinator.

Both are process-wide singletons: the store is the authoritative copy of the
collection and the coordinator holds the per-feature request tokens.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from backend.app.config import get_settings
from backend.app.db.factory import create_repository_from_settings
from backend.app.llm.client import create_llm_client
from backend.app.orchestration.generation import GenerationCoordinator
from backend.app.store.documents import DocumentStore


@lru_cache
def get_document_store() -> DocumentStore:
    """Create and load the document store once."""
    store = DocumentStore(create_repository_from_settings(get_settings()))
    store.load()
    return store


@lru_cache
def get_generation_coordinator() -> GenerationCoordinator:
    """Create the generation coordinator once."""
    return GenerationCoordinator(get_document_store(), create_llm_client(get_settings()))


StoreDep = Annotated[DocumentStore, Depends(get_document_store)]
CoordinatorDep = Annotated[GenerationCoordinator, Depends(get_generation_coordinator)]
