"""Tests for the LLM clients.

All tests are deterministic and do not make real network calls.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError
from pydantic import SecretStr

from backend.app.config import Settings
from backend.app.flows import BuildAIQuizOutput, CreateRevisionFlashcardsOutput
from backend.app.llm.client import (
    DeterministicStubClient,
    LLMProviderError,
    OpenAIClient,
    create_llm_client,
    split_sentences,
)


def _mock_openai_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


def test_split_sentences_drops_blanks() -> None:
    assert split_sentences("One. Two!  Three?\n\n") == ["One.", "Two!", "Three?"]
    assert split_sentences("   ") == []


@pytest.mark.asyncio
async def test_stub_summary_has_sections(sample_text: str) -> None:
    """Test that the stub summary uses ## headings."""
    client = DeterministicStubClient()

    raw = await client.generate_json(
        flow="summarize", prompt="", schema={}, variables={"documentText": sample_text}
    )

    summary = json.loads(raw)["summary"]
    assert "## 🎯 Introduction" in summary
    assert "## 🏁 Conclusion" in summary
    assert "Photosynthesis converts light energy" in summary


@pytest.mark.asyncio
async def test_stub_quiz_validates_against_output_schema(sample_text: str) -> None:
    """Test that stub quiz JSON parses into the quiz output model."""
    client = DeterministicStubClient()

    raw = await client.generate_json(
        flow="quiz", prompt="", schema={}, variables={"documentText": sample_text}
    )
    quiz = BuildAIQuizOutput.model_validate_json(raw).quiz

    assert len(quiz) == 4
    for i, question in enumerate(quiz):
        assert len(question.options) == 4
        assert question.correct_answer_index == i % 4
        assert question.options[question.correct_answer_index] == split_sentences(sample_text)[i]


@pytest.mark.asyncio
async def test_stub_flashcards_pad_short_documents() -> None:
    """Test that a one-sentence document still yields four options."""
    client = DeterministicStubClient()

    raw = await client.generate_json(
        flow="flashcards",
        prompt="",
        schema={},
        variables={"documentContent": "Mitochondria produce ATP."},
    )
    cards = CreateRevisionFlashcardsOutput.model_validate_json(raw).flashcards

    assert len(cards) == 1
    assert cards[0].options[0] == "Mitochondria produce ATP."
    assert "None of the above" in cards[0].options


@pytest.mark.asyncio
async def test_stub_is_deterministic(sample_text: str) -> None:
    client = DeterministicStubClient()
    variables = {"documentContent": sample_text}

    first = await client.generate_json(flow="notes", prompt="", schema={}, variables=variables)
    second = await client.generate_json(flow="notes", prompt="", schema={}, variables=variables)

    assert first == second


@pytest.mark.asyncio
async def test_stub_rejects_unknown_flow() -> None:
    client = DeterministicStubClient()

    with pytest.raises(LLMProviderError):
        await client.generate_json(flow="poem", prompt="", schema={}, variables={"x": "y"})


@pytest.mark.asyncio
async def test_openai_client_calls_api_in_json_mode() -> None:
    """Test that OpenAIClient requests a JSON object and returns the content (mocked)."""
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_mock_openai_response('{"summary": "## Intro\\nText"}')
    )

    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai_client

    raw = await client.generate_json(
        flow="summarize",
        prompt="Summarize this",
        schema={"type": "object", "required": ["summary"]},
        variables={"documentText": "Text"},
    )

    assert raw == '{"summary": "## Intro\\nText"}'
    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][1] == {"role": "user", "content": "Summarize this"}
    assert '"required"' in kwargs["messages"][0]["content"]


@pytest.mark.asyncio
async def test_openai_client_wraps_api_errors() -> None:
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(side_effect=OpenAIError("boom"))

    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai_client

    with pytest.raises(LLMProviderError):
        await client.generate_json(flow="quiz", prompt="p", schema={}, variables={})


@pytest.mark.asyncio
async def test_openai_client_rejects_empty_content() -> None:
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_mock_openai_response("   ")
    )

    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai_client

    with pytest.raises(LLMProviderError):
        await client.generate_json(flow="notes", prompt="p", schema={}, variables={})


def test_create_llm_client_without_key_returns_stub() -> None:
    client = create_llm_client(Settings(openai_api_key=None))
    assert isinstance(client, DeterministicStubClient)


def test_create_llm_client_with_key_returns_openai() -> None:
    client = create_llm_client(
        Settings(openai_api_key=SecretStr("sk-test"), openai_model="gpt-4o")
    )
    assert isinstance(client, OpenAIClient)
    assert client.model == "gpt-4o"
