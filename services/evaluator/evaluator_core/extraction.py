from __future__ import annotations

from enum import Enum
from io import BytesIO
from typing import Optional

from pypdf import PdfReader

from libs.core.models import ExtractionResult

from .errors import ExtractionFailed, UnsupportedFormat

PDF_MEDIA_TYPE = "application/pdf"
PLAIN_TEXT_MEDIA_TYPE = "text/plain"
PAGE_SEPARATOR = "\n\n"


class DocumentFormat(str, Enum):
    plain_text = "plain_text"
    page_structured = "page_structured"
    unsupported = "unsupported"


_MEDIA_TYPE_FORMATS = {
    PLAIN_TEXT_MEDIA_TYPE: DocumentFormat.plain_text,
    PDF_MEDIA_TYPE: DocumentFormat.page_structured,
}


def normalize_media_type(media_type: Optional[str]) -> str:
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def classify_media_type(media_type: Optional[str]) -> DocumentFormat:
    return _MEDIA_TYPE_FORMATS.get(normalize_media_type(media_type), DocumentFormat.unsupported)


def extract_text(buffer: bytes, media_type: Optional[str]) -> ExtractionResult:
    document_format = classify_media_type(media_type)
    if document_format is DocumentFormat.plain_text:
        return ExtractionResult(plain_text=_decode_plain_text(buffer))
    if document_format is DocumentFormat.page_structured:
        return ExtractionResult(plain_text=_extract_pdf_text(buffer))
    raise UnsupportedFormat(media_type)


def _decode_plain_text(buffer: bytes) -> str:
    try:
        return buffer.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExtractionFailed(f"Text extraction failed: {exc}") from exc


def _extract_pdf_text(buffer: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(buffer))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:  # noqa: BLE001
        raise ExtractionFailed(f"PDF extraction failed: {exc}") from exc
    return PAGE_SEPARATOR.join(pages)
