"""Health check endpoints.

- /health: liveness only
- /healthz: checks document storage and reports the LLM mode
"""

from typing import Any

from fastapi import APIRouter, Response

from backend.app.api.deps import StoreDep
from backend.app.config import Settings, get_settings
from backend.app.db.repositories import StorageError
from backend.app.store.documents import DocumentStore

router = APIRouter()


async def check_storage(store: DocumentStore) -> tuple[bool, str]:
    """Check the persistence medium.

    Returns:
        (is_ok, status_message)
    """
    try:
        store.repository.ping()
        return (True, "ok")
    except StorageError as e:
        return (False, f"error: {e}")


async def check_llm(settings: Settings) -> tuple[bool, str]:
    """Report whether a real provider is configured.

    The stub client is a valid mode, so this never fails the health check.
    """
    api_key = settings.openai_api_key
    if api_key and api_key.get_secret_value():
        return (True, "openai")
    return (True, "stub")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(store: StoreDep) -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if storage is ok
        503 if storage fails
    """
    settings = get_settings()

    storage_ok, storage_status = await check_storage(store)
    _, llm_status = await check_llm(settings)

    response_body = {
        "status": "ok" if storage_ok else "degraded",
        "components": {
            "storage": storage_status,
            "llm": llm_status,
        },
    }

    if not storage_ok:
        import json

        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
