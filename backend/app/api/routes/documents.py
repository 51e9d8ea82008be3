"""Document endpoints - upload, list, select, delete and edit documents."""

import logging
from datetime import datetime

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status
from pydantic import BaseModel, Field

from backend.app.api.deps import CoordinatorDep, StoreDep
from backend.app.config import get_settings
from backend.app.docs.extract import (
    EmptyDocumentError,
    ExtractionError,
    UnsupportedMediaTypeError,
    extract_document_text,
)
from backend.app.models.study import GeneratedOutputs, StudyDocument, SummarySection
from backend.app.render.summary import parse_summary_sections
from backend.app.orchestration.generation import Feature
from backend.app.store.documents import DocumentNotFoundError, DocumentStore

router = APIRouter(prefix="/documents", tags=["documents"])
logger = logging.getLogger(__name__)


class DocumentListItem(BaseModel):
    """Document metadata for the home screen (no content)."""

    id: str
    name: str
    timestamp: datetime
    word_count: int = Field(..., serialization_alias="wordCount")
    generated: list[str] = Field(default_factory=list, description="Filled output slots")


class DocumentListResponse(BaseModel):
    """Response for GET /documents."""

    documents: list[DocumentListItem]
    active_id: str | None = Field(None, serialization_alias="activeId")


def get_document_or_404(store: DocumentStore, doc_id: str) -> StudyDocument:
    """Fetch a document or raise 404."""
    try:
        return store.get(doc_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


def _list_item(doc: StudyDocument) -> DocumentListItem:
    outputs = doc.ai_outputs
    generated = [
        name
        for name in ("summary", "notes", "flashcards", "quiz")
        if getattr(outputs, name) is not None
    ]
    return DocumentListItem(
        id=doc.id,
        name=doc.name,
        timestamp=doc.timestamp,
        word_count=doc.word_count,
        generated=generated,
    )


@router.post("", response_model=StudyDocument, status_code=status.HTTP_201_CREATED)
async def upload_document(store: StoreDep, file: UploadFile = File(...)) -> StudyDocument:
    """Upload a PDF or TXT file, extract its text and add it to the store.

    The media type is checked before the file is parsed. The new document
    becomes the active one.
    """
    limit = get_settings().max_upload_bytes
    data = await file.read(limit + 1)

    if len(data) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File is too large.",
        )

    try:
        text = extract_document_text(data, file.content_type)
    except UnsupportedMediaTypeError as e:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e)
        ) from e
    except (EmptyDocumentError, ExtractionError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    doc = store.add(file.filename or "Untitled document", text)
    logger.info(f"Added document {doc.id} ({doc.word_count} words)")
    return doc


@router.get("", response_model=DocumentListResponse)
async def list_documents(store: StoreDep) -> DocumentListResponse:
    """List all documents in upload order."""
    active = store.active
    return DocumentListResponse(
        documents=[_list_item(doc) for doc in store.list()],
        active_id=active.id if active else None,
    )


@router.get("/active", response_model=StudyDocument)
async def get_active_document(store: StoreDep) -> StudyDocument:
    """Get the currently active document."""
    active = store.active
    if active is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No active document")
    return active


@router.delete("/active", status_code=status.HTTP_204_NO_CONTENT)
async def clear_active_document(store: StoreDep) -> None:
    """Return to the document list without deleting anything."""
    store.clear_selection()


@router.get("/{doc_id}", response_model=StudyDocument)
async def get_document(doc_id: str, store: StoreDep) -> StudyDocument:
    """Get a document with its content and generated outputs."""
    return get_document_or_404(store, doc_id)


@router.delete("/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(doc_id: str, store: StoreDep) -> None:
    """Delete a document and its cached outputs."""
    try:
        store.remove(doc_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/{doc_id}/select", response_model=StudyDocument)
async def select_document(doc_id: str, store: StoreDep) -> StudyDocument:
    """Make a document the active one."""
    try:
        return store.select(doc_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.patch("/{doc_id}/outputs", response_model=StudyDocument)
async def update_outputs(
    doc_id: str, outputs: GeneratedOutputs, store: StoreDep, coordinator: CoordinatorDep
) -> StudyDocument:
    """Overwrite the output slots present in the body (e.g. edited notes).

    Slots omitted from the body are left untouched. Pending generations for the
    written slots are superseded so they cannot overwrite the edit.
    """
    try:
        updated = store.update(doc_id, outputs)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    for name in outputs.model_fields_set:
        coordinator.supersede(doc_id, Feature(name))
    return updated


@router.get("/{doc_id}/summary/sections", response_model=list[SummarySection])
async def get_summary_sections(
    doc_id: str,
    store: StoreDep,
    drop_incomplete: bool = Query(False, description="Drop sections missing a title or body"),
) -> list[SummarySection]:
    """Split the cached summary into display sections."""
    doc = get_document_or_404(store, doc_id)
    if doc.ai_outputs.summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No summary generated")
    return parse_summary_sections(doc.ai_outputs.summary, drop_incomplete=drop_incomplete)
