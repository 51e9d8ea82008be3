"""LLM client for structured study-aid generation with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
Provides deterministic fallback when no key present for testing.
"""

import json
import logging
import re
from typing import Any, Protocol

from openai import AsyncOpenAI, OpenAIError

from backend.app.config import Settings, get_settings
from backend.app.models.study import OPTION_COUNT

logger = logging.getLogger(__name__)


class LLMProviderError(Exception):
    """Provider call failed or returned nothing usable."""


class LLMClient(Protocol):
    """Protocol for LLM client implementations."""

    async def generate_json(
        self,
        *,
        flow: str,
        prompt: str,
        schema: dict[str, Any],
        variables: dict[str, str],
    ) -> str:
        """Generate a JSON document for a prompt flow.

        Args:
            flow: Flow name (summarize, notes, flashcards, quiz)
            prompt: Fully rendered prompt template
            schema: JSON schema the response must satisfy
            variables: Raw template variables (document text)

        Returns:
            Raw JSON text; validation is the caller's job

        Raises:
            LLMProviderError: If the provider fails or returns empty content
        """
        ...


_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")
_FILLER_OPTIONS = [
    "None of the above",
    "The document does not say",
    "All of the above",
]


def split_sentences(text: str) -> list[str]:
    """Split text into trimmed, non-empty sentences."""
    return [s.strip() for s in _SENTENCE_RE.split(text.strip()) if s.strip()]


def _options_for(sentences: list[str], index: int) -> tuple[list[str], int]:
    """Build four options with sentence `index` as the correct one."""
    correct = sentences[index]
    distractors = [s for i, s in enumerate(sentences) if i != index][: OPTION_COUNT - 1]
    while len(distractors) < OPTION_COUNT - 1:
        distractors.append(_FILLER_OPTIONS[len(distractors)])

    position = index % OPTION_COUNT
    options = distractors[:position] + [correct] + distractors[position:]
    return options, position


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required).

    Output is derived from the document text only, so identical input always
    yields identical, schema-valid JSON.
    """

    async def generate_json(
        self,
        *,
        flow: str,
        prompt: str,
        schema: dict[str, Any],
        variables: dict[str, str],
    ) -> str:
        """Generate deterministic stub output for a flow."""
        text = next(iter(variables.values()), "")
        sentences = split_sentences(text) or [text.strip() or "The document is empty."]

        if flow == "summarize":
            payload: dict[str, Any] = {"summary": self._summary(sentences)}
        elif flow == "notes":
            payload = {"studyNotes": self._notes(sentences)}
        elif flow == "flashcards":
            payload = {"flashcards": self._flashcards(sentences[:15])}
        elif flow == "quiz":
            payload = {"quiz": self._quiz(sentences[:10])}
        else:
            raise LLMProviderError(f"Stub client has no output for flow '{flow}'")

        return json.dumps(payload)

    def _summary(self, sentences: list[str]) -> str:
        bullets = "\n".join(f"* {s}" for s in sentences[:5])
        return (
            "## 🎯 Introduction\n"
            f"{sentences[0]}\n\n"
            "## 🏁 Conclusion\n"
            f"{bullets}\n\n"
            "*This is a stub summary generated without an LLM.*"
        )

    def _notes(self, sentences: list[str]) -> str:
        points = "\n".join(f"* {s}" for s in sentences)
        return (
            "## Key Concepts\n\n"
            f"> 📘 {sentences[0]}\n\n"
            f"{points}\n\n"
            f"🧠 *{sentences[-1]}*"
        )

    def _flashcards(self, sentences: list[str]) -> list[dict[str, Any]]:
        cards = []
        for i, sentence in enumerate(sentences):
            options, correct = _options_for(sentences, i)
            cards.append(
                {
                    "question": f"Which statement is made in the document? (card {i + 1})",
                    "answer": sentence,
                    "explanation": "This statement appears directly in the source text.",
                    "options": options,
                    "correctOptionIndex": correct,
                }
            )
        return cards

    def _quiz(self, sentences: list[str]) -> list[dict[str, Any]]:
        questions = []
        for i in range(len(sentences)):
            options, correct = _options_for(sentences, i)
            questions.append(
                {
                    "question": f"Which statement is supported by the document? (question {i + 1})",
                    "options": options,
                    "correctAnswerIndex": correct,
                    "explanation": "Only this option is stated in the source text.",
                }
            )
        return questions


class OpenAIClient:
    """OpenAI-backed LLM client for real generation."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", temperature: float = 0.3):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
            temperature: Sampling temperature
        """
        # Failures surface to the user; re-invocation is user-initiated.
        self.client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self.model = model
        self.temperature = temperature

    async def generate_json(
        self,
        *,
        flow: str,
        prompt: str,
        schema: dict[str, Any],
        variables: dict[str, str],
    ) -> str:
        """Generate a JSON response using the OpenAI API."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self._build_system_prompt(schema)},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed for flow {flow}: {e}")
            raise LLMProviderError(f"Provider call failed for flow '{flow}'") from e

        content = response.choices[0].message.content or ""
        if not content.strip():
            logger.warning(f"OpenAI returned empty response for flow {flow}")
            raise LLMProviderError(f"Provider returned an empty response for flow '{flow}'")

        return content

    def _build_system_prompt(self, schema: dict[str, Any]) -> str:
        """Build system prompt pinning the response to the output schema."""
        return (
            "You are a study assistant that always answers with a single JSON object.\n"
            "The JSON object MUST validate against this JSON schema:\n"
            f"{json.dumps(schema, indent=2)}\n"
            "Do not wrap the JSON in markdown fences and do not add commentary."
        )


def create_llm_client(settings: Settings) -> LLMClient:
    """Build the LLM client for the given settings.

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for generation")
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            temperature=settings.openai_temperature,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()


async def get_llm_client() -> LLMClient:
    """Factory function to get appropriate LLM client based on config."""
    return create_llm_client(get_settings())
