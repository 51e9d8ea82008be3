"""Models package - re-exports for convenience."""

from backend.app.models.study import (
    OPTION_COUNT,
    Flashcard,
    GeneratedOutputs,
    QuizQuestion,
    QuizResult,
    ResultItem,
    StudyDocument,
    SummarySection,
)

__all__ = [
    "OPTION_COUNT",
    # Documents
    "StudyDocument",
    "GeneratedOutputs",
    # Study artifacts
    "Flashcard",
    "QuizQuestion",
    # Quiz scoring
    "QuizResult",
    "ResultItem",
    # Rendering
    "SummarySection",
]
