"""Document text extraction for uploaded files."""

import io
import logging

from pypdf import PdfReader

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"
APPLICATION_PDF = "application/pdf"
ACCEPTED_MEDIA_TYPES = (TEXT_PLAIN, APPLICATION_PDF)


class ExtractionError(Exception):
    """The file could not be read or parsed."""


class UnsupportedMediaTypeError(ExtractionError):
    """The file's media type is neither plain text nor PDF."""


class EmptyDocumentError(ExtractionError):
    """Extraction succeeded but produced only whitespace."""


def normalize_media_type(media_type: str | None) -> str:
    """Drop parameters and case from a media type (text/plain; charset=utf-8 -> text/plain)."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def validate_media_type(media_type: str | None) -> str:
    """Check that a media type is accepted for upload.

    Returns:
        Normalized media type

    Raises:
        UnsupportedMediaTypeError: If the type is not plain text or PDF
    """
    normalized = normalize_media_type(media_type)
    if normalized not in ACCEPTED_MEDIA_TYPES:
        raise UnsupportedMediaTypeError(
            f"Please upload a PDF or TXT file. You uploaded a {media_type or 'unknown'} file."
        )
    return normalized


def extract_pdf_text(data: bytes) -> str:
    """Concatenate per-page text in page order, one line break between pages."""
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def extract_text(data: bytes, media_type: str | None) -> str:
    """Extract raw text from an uploaded file.

    Args:
        data: File bytes
        media_type: Declared media type

    Returns:
        Extracted text (plain text is returned verbatim)

    Raises:
        UnsupportedMediaTypeError: Before any parsing, for other media types
        ExtractionError: If the file cannot be decoded or parsed
    """
    normalized = validate_media_type(media_type)

    try:
        if normalized == TEXT_PLAIN:
            return data.decode("utf-8")
        return extract_pdf_text(data)
    except Exception as e:
        logger.warning(f"Error processing {normalized} file: {type(e).__name__}: {e}")
        raise ExtractionError(
            "Failed to parse the document. It might be corrupted or in an unsupported format."
        ) from e


def extract_document_text(data: bytes, media_type: str | None) -> str:
    """Extract text and require it to be non-blank.

    Raises:
        EmptyDocumentError: If nothing but whitespace was extracted
    """
    text = extract_text(data, media_type)
    if not text.strip():
        raise EmptyDocumentError(
            "Could not extract any text from the document. "
            "Please ensure it's a text-based file."
        )
    return text


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())
