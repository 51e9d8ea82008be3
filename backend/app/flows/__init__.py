"""Prompt flows - re-exports for convenience."""

from backend.app.flows.base import FlowError, PromptFlow
from backend.app.flows.flashcards import (
    CreateRevisionFlashcardsInput,
    CreateRevisionFlashcardsOutput,
    create_revision_flashcards,
    flashcards_flow,
)
from backend.app.flows.notes import (
    GenerateStudyNotesInput,
    GenerateStudyNotesOutput,
    generate_study_notes,
    notes_flow,
)
from backend.app.flows.quiz import BuildAIQuizInput, BuildAIQuizOutput, build_ai_quiz, quiz_flow
from backend.app.flows.summarize import (
    SummarizeDocumentInput,
    SummarizeDocumentOutput,
    summarize_document,
    summarize_flow,
)

__all__ = [
    "FlowError",
    "PromptFlow",
    # Summary
    "SummarizeDocumentInput",
    "SummarizeDocumentOutput",
    "summarize_document",
    "summarize_flow",
    # Notes
    "GenerateStudyNotesInput",
    "GenerateStudyNotesOutput",
    "generate_study_notes",
    "notes_flow",
    # Flashcards
    "CreateRevisionFlashcardsInput",
    "CreateRevisionFlashcardsOutput",
    "create_revision_flashcards",
    "flashcards_flow",
    # Quiz
    "BuildAIQuizInput",
    "BuildAIQuizOutput",
    "build_ai_quiz",
    "quiz_flow",
]
