"""Per-feature generation controller.

Runs a flow for a document and writes the result back into the store. Every
request takes a token for its (document, feature) pair; a response is applied
only if its token is still the latest one for that pair, so a slow, superseded
request can never overwrite a newer result. User edits call `supersede` so a
pending generation cannot overwrite them either. A token is dropped once its
request resolves.
"""

import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum

from backend.app.flows import (
    build_ai_quiz,
    create_revision_flashcards,
    generate_study_notes,
    summarize_document,
)
from backend.app.llm.client import LLMClient
from backend.app.models.study import GeneratedOutputs, StudyDocument
from backend.app.quiz.scoring import shuffle_questions
from backend.app.store.documents import DocumentStore
from backend.app.utils.metrics import PrometheusFlowMetrics

logger = logging.getLogger(__name__)


class Feature(str, Enum):
    """Generated-output slot of a document."""

    summary = "summary"
    notes = "notes"
    flashcards = "flashcards"
    quiz = "quiz"


FAILURE_MESSAGES: dict[Feature, str] = {
    Feature.summary: "Failed to generate summary. Please try again.",
    Feature.notes: "Failed to generate notes. Please try again.",
    Feature.flashcards: "Failed to generate flashcards. Please try again.",
    Feature.quiz: "Failed to generate quiz. Please try again.",
}


class EmptyGenerationError(Exception):
    """The provider returned a well-formed but empty list."""


@dataclass(frozen=True)
class GenerationToken:
    doc_id: str
    feature: Feature
    sequence: int


@dataclass
class GenerationOutcome:
    """Result of one generation request."""

    feature: Feature
    applied: bool
    document: StudyDocument | None


class GenerationCoordinator:
    """Invokes flows and caches their results in the document store."""

    def __init__(
        self,
        store: DocumentStore,
        client: LLMClient,
        rng: random.Random | None = None,
        metrics: PrometheusFlowMetrics | None = None,
    ) -> None:
        self._store = store
        self._client = client
        self._rng = rng or random.Random()
        self._metrics = metrics or PrometheusFlowMetrics()
        self._sequence = itertools.count(1)
        self._latest: dict[tuple[str, Feature], int] = {}

    def begin(self, doc_id: str, feature: Feature) -> GenerationToken:
        """Issue a token that supersedes all earlier ones for the pair."""
        token = GenerationToken(doc_id=doc_id, feature=feature, sequence=next(self._sequence))
        self._latest[(doc_id, feature)] = token.sequence
        return token

    def is_current(self, token: GenerationToken) -> bool:
        return self._latest.get((token.doc_id, token.feature)) == token.sequence

    def supersede(self, doc_id: str, feature: Feature) -> None:
        """Invalidate any in-flight request for the pair (e.g. before a user edit)."""
        self._latest.pop((doc_id, feature), None)

    def _finish(self, token: GenerationToken) -> None:
        if self.is_current(token):
            del self._latest[(token.doc_id, token.feature)]

    @property
    def in_flight(self) -> int:
        """Number of (document, feature) pairs with a pending request."""
        return len(self._latest)

    async def run_flow(self, feature: Feature, text: str) -> GeneratedOutputs:
        """Run the flow behind a feature and wrap its output as a partial update.

        Raises:
            FlowError: If the flow call fails
            EmptyGenerationError: If flashcards or quiz come back empty
        """
        if feature is Feature.summary:
            summary = await summarize_document(text, client=self._client)
            return GeneratedOutputs(summary=summary.summary)

        if feature is Feature.notes:
            notes = await generate_study_notes(text, client=self._client)
            return GeneratedOutputs(notes=notes.study_notes)

        if feature is Feature.flashcards:
            cards = await create_revision_flashcards(text, client=self._client)
            if not cards.flashcards:
                raise EmptyGenerationError(
                    "The AI could not generate flashcards from this document. "
                    "It might be too short or in an unsupported format."
                )
            return GeneratedOutputs(flashcards=cards.flashcards)

        quiz = await build_ai_quiz(text, client=self._client)
        if not quiz.quiz:
            raise EmptyGenerationError(
                "The AI could not generate a quiz from this document. "
                "It might be too short or in an unsupported format."
            )
        return GeneratedOutputs(quiz=shuffle_questions(quiz.quiz, self._rng))

    async def generate(self, doc_id: str, feature: Feature) -> GenerationOutcome:
        """Generate one feature for a document and cache it if still wanted.

        The cached value is only replaced on success; a failed request leaves
        the previous output in place.

        Raises:
            DocumentNotFoundError: If the document does not exist
            FlowError: If the flow call fails
            EmptyGenerationError: If flashcards or quiz come back empty
        """
        doc = self._store.get(doc_id)
        token = self.begin(doc_id, feature)

        try:
            outputs = await self.run_flow(feature, doc.content)

            if not self.is_current(token):
                logger.info(f"Discarding superseded {feature.value} result for document {doc_id}")
                self._metrics.inc_discarded(feature.value)
                return GenerationOutcome(feature=feature, applied=False, document=None)

            if not self._store.exists(doc_id):
                logger.info(f"Discarding {feature.value} result for deleted document {doc_id}")
                self._metrics.inc_discarded(feature.value)
                return GenerationOutcome(feature=feature, applied=False, document=None)

            updated = self._store.update(doc_id, outputs)
            return GenerationOutcome(feature=feature, applied=True, document=updated)
        finally:
            self._finish(token)
