"""Unit tests for the schema-validated prompt flows."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from backend.app.flows import (
    FlowError,
    PromptFlow,
    SummarizeDocumentInput,
    SummarizeDocumentOutput,
    build_ai_quiz,
    create_revision_flashcards,
    generate_study_notes,
    quiz_flow,
    summarize_document,
)
from backend.app.llm.client import DeterministicStubClient, LLMProviderError


def _client_returning(raw: str) -> AsyncMock:
    client = AsyncMock()
    client.generate_json = AsyncMock(return_value=raw)
    return client


@pytest.mark.asyncio
async def test_summarize_document_returns_summary() -> None:
    client = _client_returning(json.dumps({"summary": "## Intro\nFoo"}))

    result = await summarize_document("Some text.", client=client)

    assert result.summary == "## Intro\nFoo"
    kwargs = client.generate_json.call_args.kwargs
    assert kwargs["flow"] == "summarize"
    assert kwargs["variables"] == {"documentText": "Some text."}
    assert "Some text." in kwargs["prompt"]


@pytest.mark.asyncio
async def test_generate_study_notes_uses_wire_names() -> None:
    client = _client_returning(json.dumps({"studyNotes": "## Topic\n* point"}))

    result = await generate_study_notes("Body", client=client)

    assert result.study_notes == "## Topic\n* point"
    assert client.generate_json.call_args.kwargs["variables"] == {"documentContent": "Body"}


def test_quiz_prompt_renders_literal_json_example() -> None:
    """Test that the quiz template keeps its JSON example braces."""
    payload = quiz_flow.input_model(document_text="DOC")

    prompt = quiz_flow.render(payload)

    assert "DOC" in prompt
    assert '"correctAnswerIndex": 0' in prompt
    assert "{{" not in prompt


@pytest.mark.asyncio
async def test_flows_accept_stub_output(sample_text: str) -> None:
    """Test that every flow validates the stub client's output."""
    client = DeterministicStubClient()

    summary = await summarize_document(sample_text, client=client)
    notes = await generate_study_notes(sample_text, client=client)
    cards = await create_revision_flashcards(sample_text, client=client)
    quiz = await build_ai_quiz(sample_text, client=client)

    assert summary.summary.startswith("## ")
    assert "📘" in notes.study_notes
    assert len(cards.flashcards) == 4
    assert len(quiz.quiz) == 4


@pytest.mark.asyncio
async def test_wrong_option_count_is_invalid_output() -> None:
    """Test that a quiz question with three options fails validation."""
    raw = json.dumps(
        {
            "quiz": [
                {
                    "question": "Q?",
                    "options": ["a", "b", "c"],
                    "correctAnswerIndex": 0,
                    "explanation": "e",
                }
            ]
        }
    )

    with pytest.raises(FlowError) as exc_info:
        await build_ai_quiz("text", client=_client_returning(raw))

    assert exc_info.value.flow == "quiz"
    assert exc_info.value.reason == "invalid_output"


@pytest.mark.asyncio
async def test_out_of_range_index_is_invalid_output() -> None:
    raw = json.dumps(
        {
            "flashcards": [
                {
                    "question": "Q?",
                    "answer": "A",
                    "explanation": "E",
                    "options": ["a", "b", "c", "d"],
                    "correctOptionIndex": 4,
                }
            ]
        }
    )

    with pytest.raises(FlowError) as exc_info:
        await create_revision_flashcards("text", client=_client_returning(raw))

    assert exc_info.value.reason == "invalid_output"


@pytest.mark.asyncio
async def test_non_json_output_is_invalid_output() -> None:
    with pytest.raises(FlowError) as exc_info:
        await summarize_document("text", client=_client_returning("not json"))

    assert exc_info.value.reason == "invalid_output"


@pytest.mark.asyncio
async def test_provider_error_becomes_flow_error() -> None:
    client = AsyncMock()
    client.generate_json = AsyncMock(side_effect=LLMProviderError("down"))

    with pytest.raises(FlowError) as exc_info:
        await generate_study_notes("text", client=client)

    assert exc_info.value.reason == "provider_error"


@pytest.mark.asyncio
async def test_run_records_metrics_and_logs() -> None:
    """Test that a flow reports latency on success and errors on failure."""
    metrics = MagicMock()
    flow_logger = MagicMock()
    flow: PromptFlow[SummarizeDocumentInput, SummarizeDocumentOutput] = PromptFlow(
        name="summarize",
        input_model=SummarizeDocumentInput,
        output_model=SummarizeDocumentOutput,
        template="Summarize: {documentText}",
        metrics=metrics,
        flow_logger=flow_logger,
    )
    payload = SummarizeDocumentInput(document_text="abc")

    await flow.run(payload, _client_returning('{"summary": "ok"}'))

    metrics.record_latency.assert_called_once()
    assert metrics.record_latency.call_args.args[:2] == ("summarize", "success")
    assert flow_logger.log_call.call_args.args[3] == len("Summarize: abc")

    with pytest.raises(FlowError):
        await flow.run(payload, _client_returning("{}"))

    metrics.inc_error.assert_called_once_with("summarize", "invalid_output")
