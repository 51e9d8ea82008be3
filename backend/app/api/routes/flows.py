"""Flow endpoints - the four prompt flows exposed as stateless calls.

Bodies use the flows' wire names (documentText, documentContent, studyNotes,
correctOptionIndex, correctAnswerIndex). Nothing is persisted here.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.flows import (
    BuildAIQuizInput,
    BuildAIQuizOutput,
    CreateRevisionFlashcardsInput,
    CreateRevisionFlashcardsOutput,
    FlowError,
    GenerateStudyNotesInput,
    GenerateStudyNotesOutput,
    SummarizeDocumentInput,
    SummarizeDocumentOutput,
    flashcards_flow,
    notes_flow,
    quiz_flow,
    summarize_flow,
)
from backend.app.llm.client import LLMClient, get_llm_client
from backend.app.orchestration.generation import FAILURE_MESSAGES, Feature

router = APIRouter(prefix="/flows", tags=["flows"])
logger = logging.getLogger(__name__)

ClientDep = Annotated[LLMClient, Depends(get_llm_client)]


def _flow_failed(e: FlowError, message: str) -> HTTPException:
    logger.error(f"{e}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)


@router.post("/summarize", response_model=SummarizeDocumentOutput)
async def summarize(request: SummarizeDocumentInput, client: ClientDep) -> SummarizeDocumentOutput:
    """summarize(documentText) -> {summary}."""
    try:
        return await summarize_flow.run(request, client)
    except FlowError as e:
        raise _flow_failed(e, FAILURE_MESSAGES[Feature.summary]) from e


@router.post("/notes", response_model=GenerateStudyNotesOutput)
async def notes(request: GenerateStudyNotesInput, client: ClientDep) -> GenerateStudyNotesOutput:
    """notes(documentContent) -> {studyNotes}."""
    try:
        return await notes_flow.run(request, client)
    except FlowError as e:
        raise _flow_failed(e, FAILURE_MESSAGES[Feature.notes]) from e


@router.post("/flashcards", response_model=CreateRevisionFlashcardsOutput)
async def flashcards(
    request: CreateRevisionFlashcardsInput, client: ClientDep
) -> CreateRevisionFlashcardsOutput:
    """flashcards(documentContent) -> {flashcards: [...]}."""
    try:
        return await flashcards_flow.run(request, client)
    except FlowError as e:
        raise _flow_failed(e, FAILURE_MESSAGES[Feature.flashcards]) from e


@router.post("/quiz", response_model=BuildAIQuizOutput)
async def quiz(request: BuildAIQuizInput, client: ClientDep) -> BuildAIQuizOutput:
    """quiz(documentText) -> {quiz: [...]}."""
    try:
        return await quiz_flow.run(request, client)
    except FlowError as e:
        raise _flow_failed(e, FAILURE_MESSAGES[Feature.quiz]) from e
