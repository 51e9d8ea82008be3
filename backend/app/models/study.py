"""Study document domain models.

Field names are snake_case in Python and camelCase on the wire (API bodies,
persisted collection, exports) via aliases.
"""

import math
from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field

OPTION_COUNT = 4

OptionList = Annotated[list[str], Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)]
OptionIndex = Annotated[int, Field(ge=0, lt=OPTION_COUNT)]


class CamelModel(BaseModel):
    """Base model accepting both snake_case names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class Flashcard(CamelModel):
    """Multiple-choice flashcard with a detailed answer on the back."""

    question: str
    answer: str
    explanation: str
    options: OptionList
    correct_option_index: OptionIndex = Field(..., alias="correctOptionIndex")


class QuizQuestion(CamelModel):
    """Single multiple-choice quiz question."""

    question: str
    options: OptionList
    correct_answer_index: OptionIndex = Field(..., alias="correctAnswerIndex")
    explanation: str


class GeneratedOutputs(CamelModel):
    """Cached generated artifacts for a document.

    Each slot stays None until generated. Only explicitly set slots take part
    in a merge (see DocumentStore.update).
    """

    summary: str | None = None
    notes: str | None = None
    flashcards: list[Flashcard] | None = None
    quiz: list[QuizQuestion] | None = None


class StudyDocument(CamelModel):
    """One uploaded source text plus its cached study artifacts."""

    id: str
    name: str
    timestamp: datetime
    word_count: int = Field(..., ge=0, alias="wordCount")
    content: str
    ai_outputs: GeneratedOutputs = Field(default_factory=GeneratedOutputs, alias="aiOutputs")


class ResultItem(CamelModel):
    """A question paired with the option the user picked (None if unanswered)."""

    question: QuizQuestion
    selected_answer: int | None = Field(None, alias="selectedAnswer")


class QuizResult(CamelModel):
    """Outcome of a submitted quiz. Transient, never persisted."""

    score: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    answered_correctly: list[ResultItem] = Field(default_factory=list, alias="answeredCorrectly")
    answered_incorrectly: list[ResultItem] = Field(
        default_factory=list, alias="answeredIncorrectly"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> int:
        """Score as a percentage rounded half up (0 for an empty quiz)."""
        if self.total == 0:
            return 0
        return math.floor(self.score / self.total * 100 + 0.5)


class SummarySection(BaseModel):
    """Display section of a markdown summary."""

    title: str | None = None
    content: str


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
