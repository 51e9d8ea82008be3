"""FastAPI application - Scholar's AI Companion backend."""

from fastapi import FastAPI

from backend.app.api.routes.documents import router as documents_router
from backend.app.api.routes.exports import router as exports_router
from backend.app.api.routes.flows import router as flows_router
from backend.app.api.routes.generation import router as generation_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.quiz import router as quiz_router

app = FastAPI(title="Scholar's AI Companion API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(flows_router, tags=["flows"])
app.include_router(documents_router, tags=["documents"])
app.include_router(generation_router, tags=["generation"])
app.include_router(exports_router, tags=["exports"])
app.include_router(quiz_router, tags=["quiz"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Scholar's AI Companion API", "version": "0.1.0"}
