"""Integration tests for the stateless /flows endpoints."""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from backend.app.llm.client import LLMProviderError, get_llm_client
from backend.app.main import app


def test_summarize_flow(api_client: TestClient, sample_text: str) -> None:
    response = api_client.post("/flows/summarize", json={"documentText": sample_text})

    assert response.status_code == 200
    assert response.json()["summary"].startswith("## 🎯 Introduction")


def test_notes_flow_returns_study_notes(api_client: TestClient, sample_text: str) -> None:
    response = api_client.post("/flows/notes", json={"documentContent": sample_text})

    assert response.status_code == 200
    assert "## Key Concepts" in response.json()["studyNotes"]


def test_flashcards_flow_uses_camel_case(api_client: TestClient, sample_text: str) -> None:
    response = api_client.post("/flows/flashcards", json={"documentContent": sample_text})

    cards = response.json()["flashcards"]
    assert len(cards) == 4
    assert set(cards[0]) == {"question", "answer", "explanation", "options", "correctOptionIndex"}


def test_quiz_flow(api_client: TestClient, sample_text: str) -> None:
    response = api_client.post("/flows/quiz", json={"documentText": sample_text})

    quiz = response.json()["quiz"]
    assert len(quiz) == 4
    assert set(quiz[0]) == {"question", "options", "correctAnswerIndex", "explanation"}


def test_missing_input_is_422(api_client: TestClient) -> None:
    assert api_client.post("/flows/quiz", json={}).status_code == 422


def test_flows_do_not_persist(api_client: TestClient, sample_text: str) -> None:
    api_client.post("/flows/summarize", json={"documentText": sample_text})

    assert api_client.get("/documents").json()["documents"] == []


def test_provider_failure_is_502(api_client: TestClient) -> None:
    failing = AsyncMock()
    failing.generate_json = AsyncMock(side_effect=LLMProviderError("down"))
    app.dependency_overrides[get_llm_client] = lambda: failing

    response = api_client.post("/flows/quiz", json={"documentText": "Some text."})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to generate quiz. Please try again."
