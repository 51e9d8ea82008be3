"""Export endpoints - notes as Markdown, flashcards as JSON."""

from fastapi import APIRouter, HTTPException, Response, status

from backend.app.api.deps import StoreDep
from backend.app.api.routes.documents import get_document_or_404
from backend.app.render.exports import (
    FLASHCARDS_FILENAME,
    NOTES_FILENAME,
    attachment_headers,
    export_flashcards_json,
    export_notes_markdown,
)

router = APIRouter(prefix="/documents", tags=["exports"])


@router.get("/{doc_id}/exports/notes")
async def export_notes(doc_id: str, store: StoreDep) -> Response:
    """Download the document's notes as study-notes.md."""
    notes = get_document_or_404(store, doc_id).ai_outputs.notes
    if notes is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No notes generated")

    return Response(
        content=export_notes_markdown(notes),
        media_type="text/markdown",
        headers=attachment_headers(NOTES_FILENAME),
    )


@router.get("/{doc_id}/exports/flashcards")
async def export_flashcards(doc_id: str, store: StoreDep) -> Response:
    """Download the document's flashcards as flashcards.json."""
    flashcards = get_document_or_404(store, doc_id).ai_outputs.flashcards
    if flashcards is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No flashcards generated"
        )

    return Response(
        content=export_flashcards_json(flashcards),
        media_type="application/json",
        headers=attachment_headers(FLASHCARDS_FILENAME),
    )
