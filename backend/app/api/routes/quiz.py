"""Quiz endpoints - submit, restart, score and report."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from backend.app.api.deps import CoordinatorDep, StoreDep
from backend.app.api.routes.documents import get_document_or_404
from backend.app.models.study import GeneratedOutputs, QuizQuestion, QuizResult, StudyDocument
from backend.app.orchestration.generation import Feature
from backend.app.quiz.report import REPORT_FILENAME, render_quiz_report
from backend.app.quiz.scoring import IncompleteQuizError, QuizSession, score_quiz
from backend.app.render.exports import attachment_headers

router = APIRouter(tags=["quiz"])


class QuizSubmission(BaseModel):
    """Answers keyed by question position in the stored (shuffled) order."""

    answers: dict[int, int] = Field(default_factory=dict)


class ScoreRequest(BaseModel):
    """Arbitrary quiz plus answers; unanswered questions count as incorrect."""

    quiz: list[QuizQuestion]
    answers: dict[int, int] = Field(default_factory=dict)


def _stored_quiz(doc: StudyDocument) -> list[QuizQuestion]:
    if not doc.ai_outputs.quiz:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No quiz generated")
    return doc.ai_outputs.quiz


@router.post("/documents/{doc_id}/quiz/submit", response_model=QuizResult)
async def submit_quiz(doc_id: str, submission: QuizSubmission, store: StoreDep) -> QuizResult:
    """Score a completed attempt against the document's quiz.

    Every question must be answered; otherwise 409 with the missing positions.
    """
    session = QuizSession(_stored_quiz(get_document_or_404(store, doc_id)))

    try:
        for question_index, option_index in submission.answers.items():
            session.record_answer(question_index, option_index)
    except IndexError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    try:
        return session.submit()
    except IncompleteQuizError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Answer every question before submitting.",
                "unanswered": e.unanswered,
            },
        ) from e


@router.post("/documents/{doc_id}/quiz/restart", response_model=StudyDocument)
async def restart_quiz(
    doc_id: str, store: StoreDep, coordinator: CoordinatorDep
) -> StudyDocument:
    """Reshuffle the stored quiz so a new attempt starts in a fresh order.

    A pending quiz generation is superseded so it cannot replace the quiz
    mid-attempt.
    """
    session = QuizSession(_stored_quiz(get_document_or_404(store, doc_id)))
    coordinator.supersede(doc_id, Feature.quiz)
    return store.update(doc_id, GeneratedOutputs(quiz=session.restart()))


@router.post("/quiz/score", response_model=QuizResult)
async def score(request: ScoreRequest) -> QuizResult:
    """Score any quiz without touching the store."""
    return score_quiz(request.quiz, request.answers)


@router.post("/quiz/report", response_class=PlainTextResponse)
async def quiz_report(result: QuizResult) -> PlainTextResponse:
    """Render a scored quiz as a downloadable plain-text report."""
    return PlainTextResponse(
        render_quiz_report(result), headers=attachment_headers(REPORT_FILENAME)
    )
