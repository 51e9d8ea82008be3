"""Generation endpoint - POST /documents/{doc_id}/generate/{feature}."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from backend.app.api.deps import CoordinatorDep
from backend.app.flows import FlowError
from backend.app.models.study import StudyDocument
from backend.app.orchestration.generation import FAILURE_MESSAGES, EmptyGenerationError, Feature
from backend.app.store.documents import DocumentNotFoundError

router = APIRouter(prefix="/documents", tags=["generation"])
logger = logging.getLogger(__name__)


class GenerateResponse(BaseModel):
    """Response for a generation request.

    `applied` is False when a newer request for the same document and feature
    superseded this one, or the document was deleted meanwhile.
    """

    feature: Feature
    applied: bool
    document: StudyDocument | None


@router.post("/{doc_id}/generate/{feature}", response_model=GenerateResponse)
async def generate_feature(
    doc_id: str, feature: Feature, coordinator: CoordinatorDep
) -> GenerateResponse:
    """Generate (or regenerate) one study artifact and cache it on the document."""
    try:
        outcome = await coordinator.generate(doc_id, feature)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except EmptyGenerationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    except FlowError as e:
        logger.error(f"Generation of {feature.value} failed for document {doc_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=FAILURE_MESSAGES[feature]
        ) from e

    return GenerateResponse(
        feature=outcome.feature, applied=outcome.applied, document=outcome.document
    )
