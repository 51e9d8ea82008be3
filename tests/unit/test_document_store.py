"""Unit tests for the document store."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from backend.app.db.file_store import JsonFileDocumentRepository
from backend.app.db.inmemory import InMemoryDocumentRepository
from backend.app.db.repositories import StorageError
from backend.app.models.study import Flashcard, GeneratedOutputs, QuizQuestion
from backend.app.store.documents import DocumentNotFoundError, DocumentStore


def test_add_creates_active_document(store: DocumentStore) -> None:
    doc = store.add("notes.txt", "The mitochondria is the powerhouse of cells.")

    assert doc.word_count == 7
    assert doc.ai_outputs == GeneratedOutputs()
    assert store.active == doc
    assert store.list() == [doc]


def test_documents_keep_insertion_order(store: DocumentStore) -> None:
    first = store.add("a.txt", "alpha")
    second = store.add("b.txt", "beta")

    assert [d.id for d in store.list()] == [first.id, second.id]
    assert first.id != second.id


def test_update_merges_only_given_slots(
    store: DocumentStore, sample_quiz: list[QuizQuestion]
) -> None:
    doc = store.add("a.txt", "alpha")
    store.update(doc.id, GeneratedOutputs(summary="S"))

    updated = store.update(doc.id, GeneratedOutputs(quiz=sample_quiz))

    assert updated.ai_outputs.summary == "S"
    assert updated.ai_outputs.quiz == sample_quiz
    assert updated.ai_outputs.notes is None
    assert store.get(doc.id) == updated


def test_update_replaces_slot_wholesale(
    store: DocumentStore, sample_flashcards: list[Flashcard]
) -> None:
    doc = store.add("a.txt", "alpha")
    store.update(doc.id, GeneratedOutputs(flashcards=sample_flashcards * 3))

    updated = store.update(doc.id, GeneratedOutputs(flashcards=sample_flashcards))

    assert updated.ai_outputs.flashcards == sample_flashcards


def test_update_round_trips_through_repository(
    repository: InMemoryDocumentRepository, sample_quiz: list[QuizQuestion]
) -> None:
    """Test that a reload sees exactly what was written."""
    store = DocumentStore(repository)
    store.load()
    doc = store.add("a.txt", "alpha beta")
    store.update(doc.id, GeneratedOutputs(notes="## Notes", quiz=sample_quiz))

    reloaded = DocumentStore(repository)
    reloaded.load()

    assert reloaded.get(doc.id) == store.get(doc.id)


def test_remove_persists_and_clears_active(repository: InMemoryDocumentRepository) -> None:
    store = DocumentStore(repository)
    store.load()
    keep = store.add("keep.txt", "keep")
    gone = store.add("gone.txt", "gone")

    store.remove(gone.id)

    assert store.active is None
    assert not store.exists(gone.id)
    assert [d.id for d in repository.load()] == [keep.id]


def test_remove_unknown_raises(store: DocumentStore) -> None:
    with pytest.raises(DocumentNotFoundError):
        store.remove("missing")


def test_get_unknown_raises_with_message(store: DocumentStore) -> None:
    with pytest.raises(DocumentNotFoundError) as exc_info:
        store.get("missing")

    assert str(exc_info.value) == "Document missing not found"


def test_select_and_clear_selection(store: DocumentStore) -> None:
    first = store.add("a.txt", "alpha")
    store.add("b.txt", "beta")

    store.select(first.id)
    assert store.active == first

    store.clear_selection()
    assert store.active is None
    assert len(store.list()) == 2


def test_malformed_storage_loads_empty(caplog: pytest.LogCaptureFixture) -> None:
    store = DocumentStore(InMemoryDocumentRepository(raw='{"not": "a list"}'))

    with caplog.at_level(logging.ERROR):
        assert store.load() == []

    assert store.loaded
    assert "Failed to load documents" in caplog.text


def test_undecodable_storage_file_loads_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    repository = JsonFileDocumentRepository(tmp_path, key="k")
    repository.path.write_bytes(b"\xff\xfe[not json")
    store = DocumentStore(repository)

    with caplog.at_level(logging.ERROR):
        assert store.load() == []

    assert store.loaded
    assert "Failed to load documents" in caplog.text


def test_unreadable_storage_loads_empty() -> None:
    repository = MagicMock()
    repository.load.side_effect = StorageError("disk gone")
    store = DocumentStore(repository)

    assert store.load() == []


def test_save_failure_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    repository = MagicMock()
    repository.load.return_value = []
    repository.save.side_effect = StorageError("quota exceeded")
    store = DocumentStore(repository)
    store.load()

    with caplog.at_level(logging.ERROR):
        doc = store.add("a.txt", "alpha")

    assert store.get(doc.id) == doc
    assert "Failed to save documents" in caplog.text


def test_nothing_saved_before_load() -> None:
    repository = InMemoryDocumentRepository()
    store = DocumentStore(repository)

    store.add("a.txt", "alpha")

    assert repository.save_count == 0


def test_load_is_idempotent(repository: InMemoryDocumentRepository) -> None:
    store = DocumentStore(repository)
    store.load()
    doc = store.add("a.txt", "alpha")
    repository.raw = None

    assert store.load() == [doc]


def test_subscribers_receive_snapshots(store: DocumentStore) -> None:
    seen: list[list[str]] = []
    unsubscribe = store.subscribe(lambda docs: seen.append([d.name for d in docs]))

    doc = store.add("a.txt", "alpha")
    store.update(doc.id, GeneratedOutputs(summary="S"))
    unsubscribe()
    store.remove(doc.id)

    assert seen == [["a.txt"], ["a.txt"]]
