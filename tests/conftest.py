"""Shared pytest fixtures for all test suites."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from backend.app.api.deps import get_document_store, get_generation_coordinator
from backend.app.db.inmemory import InMemoryDocumentRepository
from backend.app.llm.client import DeterministicStubClient, get_llm_client
from backend.app.main import app
from backend.app.models.study import Flashcard, QuizQuestion
from backend.app.orchestration.generation import GenerationCoordinator
from backend.app.store.documents import DocumentStore

SAMPLE_TEXT = (
    "Photosynthesis converts light energy into chemical energy. "
    "It takes place in the chloroplasts of plant cells. "
    "Chlorophyll absorbs mostly blue and red light. "
    "Oxygen is released as a by-product."
)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def stub_client() -> DeterministicStubClient:
    return DeterministicStubClient()


@pytest.fixture
def repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def store(repository: InMemoryDocumentRepository) -> DocumentStore:
    """Loaded store over an empty in-memory repository."""
    store = DocumentStore(repository)
    store.load()
    return store


@pytest.fixture
def sample_quiz() -> list[QuizQuestion]:
    """Three questions whose correct answers are 0, 1 and 2."""
    return [
        QuizQuestion(
            question=f"Question {i + 1}",
            options=[f"Q{i + 1} option {j}" for j in range(4)],
            correct_answer_index=i,
            explanation=f"Because of reason {i + 1}.",
        )
        for i in range(3)
    ]


@pytest.fixture
def sample_flashcards() -> list[Flashcard]:
    return [
        Flashcard(
            question="What does chlorophyll absorb?",
            answer="Mostly blue and red light.",
            explanation="Green light is reflected, which is why leaves look green.",
            options=["Green light", "Blue and red light", "Infrared", "Ultraviolet"],
            correct_option_index=1,
        )
    ]


@pytest.fixture
def coordinator(
    store: DocumentStore, stub_client: DeterministicStubClient
) -> GenerationCoordinator:
    return GenerationCoordinator(store, stub_client)


@pytest.fixture
def api_client(
    store: DocumentStore,
    coordinator: GenerationCoordinator,
    stub_client: DeterministicStubClient,
) -> Generator[TestClient, None, None]:
    """TestClient wired to a fresh store, its coordinator and the stub LLM client."""
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_generation_coordinator] = lambda: coordinator
    app.dependency_overrides[get_llm_client] = lambda: stub_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
