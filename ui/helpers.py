"""Helper functions for UI - backend HTTP client + pure view helpers."""

import math
import os
from datetime import datetime
from typing import Any

import httpx

ACCEPTED_UPLOAD_TYPES = ("application/pdf", "text/plain")

# Generation can take a while on long documents.
GENERATION_TIMEOUT_S = 180.0
DEFAULT_TIMEOUT_S = 30.0


def get_backend_url() -> str:
    """Backend base URL (BACKEND_URL env, default localhost)."""
    return os.getenv("BACKEND_URL", "http://localhost:8000").rstrip("/")


# --- Backend calls ---


def _request(
    method: str, path: str, timeout: float = DEFAULT_TIMEOUT_S, **kwargs: Any
) -> httpx.Response:
    response = httpx.request(method, f"{get_backend_url()}{path}", timeout=timeout, **kwargs)
    response.raise_for_status()
    return response


def list_documents() -> dict[str, Any]:
    """GET /documents."""
    result: dict[str, Any] = _request("GET", "/documents").json()
    return result


def upload_document(name: str, data: bytes, media_type: str) -> dict[str, Any]:
    """Upload a file; the backend extracts its text and makes it active.

    Raises:
        httpx.HTTPStatusError: 415 wrong type, 422 unreadable/empty, 413 too large
    """
    files = {"file": (name, data, media_type)}
    result: dict[str, Any] = _request(
        "POST", "/documents", timeout=GENERATION_TIMEOUT_S, files=files
    ).json()
    return result


def get_document(doc_id: str) -> dict[str, Any]:
    result: dict[str, Any] = _request("GET", f"/documents/{doc_id}").json()
    return result


def delete_document(doc_id: str) -> None:
    _request("DELETE", f"/documents/{doc_id}")


def select_document(doc_id: str) -> dict[str, Any]:
    result: dict[str, Any] = _request("POST", f"/documents/{doc_id}/select").json()
    return result


def clear_selection() -> None:
    _request("DELETE", "/documents/active")


def generate(doc_id: str, feature: str) -> dict[str, Any]:
    """Generate one feature (summary, notes, flashcards, quiz) for a document.

    Returns:
        {"feature", "applied", "document"}
    """
    result: dict[str, Any] = _request(
        "POST", f"/documents/{doc_id}/generate/{feature}", timeout=GENERATION_TIMEOUT_S
    ).json()
    return result


def update_outputs(doc_id: str, outputs: dict[str, Any]) -> dict[str, Any]:
    """Overwrite only the given output slots (e.g. {"notes": "..."})."""
    result: dict[str, Any] = _request("PATCH", f"/documents/{doc_id}/outputs", json=outputs).json()
    return result


def get_summary_sections(doc_id: str) -> list[dict[str, Any]]:
    result: list[dict[str, Any]] = _request("GET", f"/documents/{doc_id}/summary/sections").json()
    return result


def submit_quiz(doc_id: str, answers: dict[int, int]) -> dict[str, Any]:
    """Score a completed quiz attempt."""
    payload = {"answers": {str(k): v for k, v in answers.items()}}
    result: dict[str, Any] = _request(
        "POST", f"/documents/{doc_id}/quiz/submit", json=payload
    ).json()
    return result


def restart_quiz(doc_id: str) -> dict[str, Any]:
    """Reshuffle the stored quiz; returns the updated document."""
    result: dict[str, Any] = _request("POST", f"/documents/{doc_id}/quiz/restart").json()
    return result


def quiz_report(result: dict[str, Any]) -> str:
    return _request("POST", "/quiz/report", json=result).text


def export_notes(doc_id: str) -> bytes:
    return _request("GET", f"/documents/{doc_id}/exports/notes").content


def export_flashcards(doc_id: str) -> bytes:
    return _request("GET", f"/documents/{doc_id}/exports/flashcards").content


def error_message(exc: Exception) -> str:
    """User-facing message for a failed backend call."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            detail = exc.response.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            detail = detail.get("message")
        if isinstance(detail, str) and detail:
            return detail
        return f"Request failed with status {exc.response.status_code}"
    if isinstance(exc, httpx.RequestError):
        return "Cannot reach the backend. Is it running?"
    return str(exc) or "An unknown error occurred."


# --- Pure view helpers ---


def is_accepted_upload(media_type: str | None) -> bool:
    """Upload types allowed before anything is sent to the backend."""
    if not media_type:
        return False
    return media_type.split(";", 1)[0].strip().lower() in ACCEPTED_UPLOAD_TYPES


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Human-readable size: 0 -> '0 Bytes', 1536 -> '1.5 KB'."""
    if num_bytes == 0:
        return "0 Bytes"
    k = 1024
    sizes = ["Bytes", "KB", "MB", "GB", "TB"]
    i = min(int(math.floor(math.log(num_bytes) / math.log(k))), len(sizes) - 1)
    value = f"{num_bytes / k**i:.{max(decimals, 0)}f}"
    if "." in value:
        value = value.rstrip("0").rstrip(".")
    return f"{value} {sizes[i]}"


def format_timestamp(timestamp: str) -> str:
    """ISO timestamp -> 'June 10, 2025'; unparseable values pass through."""
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return str(timestamp)
    return parsed.strftime("%B %d, %Y")


def option_feedback(index: int, selected: int | None, correct: int, submitted: bool) -> str:
    """Feedback state for one flashcard option after checking an answer.

    Returns:
        "correct" for the right option, "incorrect" for a wrong pick,
        "neutral" otherwise (and for everything before submission)
    """
    if not submitted:
        return "neutral"
    if index == correct:
        return "correct"
    if index == selected:
        return "incorrect"
    return "neutral"


def card_position_label(current: int, total: int) -> str:
    """'Card 3 of 12' (current is 0-based)."""
    if total == 0:
        return "No cards"
    return f"Card {current + 1} of {total}"


def all_answered(answers: dict[int, int], total: int) -> bool:
    """Quiz can be submitted only once every question has an answer."""
    return total > 0 and all(i in answers for i in range(total))


def generated_badges(generated: list[str]) -> str:
    """Compact label of which artifacts exist for a document."""
    labels = {"summary": "📄", "notes": "📝", "flashcards": "🗂️", "quiz": "💡"}
    order = ("summary", "notes", "flashcards", "quiz")
    return " ".join(labels[name] for name in order if name in generated)
