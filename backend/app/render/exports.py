"""User-facing export formats for generated study artifacts."""

import json
from collections.abc import Sequence

from backend.app.models.study import Flashcard

NOTES_FILENAME = "study-notes.md"
FLASHCARDS_FILENAME = "flashcards.json"


def export_notes_markdown(notes: str) -> str:
    """Notes are already markdown; exported as-is."""
    return notes


def export_flashcards_json(flashcards: Sequence[Flashcard]) -> str:
    """Flashcards as a 2-space indented JSON array with camelCase keys."""
    data = [card.model_dump(by_alias=True) for card in flashcards]
    return json.dumps(data, indent=2, ensure_ascii=False)


def attachment_headers(filename: str) -> dict[str, str]:
    """Content-Disposition header that triggers a download."""
    return {"Content-Disposition": f'attachment; filename="{filename}"'}
