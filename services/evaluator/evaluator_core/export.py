from __future__ import annotations

from io import BytesIO
from typing import Optional

from docx import Document

from libs.core.models import DEFAULT_DOWNLOAD_FILENAME

from .errors import ExportFailed

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
_HEADER_UNSAFE = str.maketrans("", "", '"\r\n')


def attachment_filename(filename: Optional[str]) -> str:
    stem = (filename or "").translate(_HEADER_UNSAFE) or DEFAULT_DOWNLOAD_FILENAME
    return f"{stem}.docx"


def export_docx(text: str, filename: str = DEFAULT_DOWNLOAD_FILENAME) -> bytes:
    """Render text as a single-paragraph .docx and return the file bytes.

    Each newline becomes a line break inside the one paragraph. Carriage
    returns stay in the run text so the paragraph reads back exactly as written.
    """
    try:
        document = Document()
        paragraph = document.add_paragraph()
        for index, line in enumerate(text.split("\n")):
            run = paragraph.add_run()
            if index:
                run.add_break()
            run._r.add_t(line)
        buffer = BytesIO()
        document.save(buffer)
    except Exception as exc:  # noqa: BLE001
        raise ExportFailed(f"Failed to export {filename}: {exc}") from exc
    return buffer.getvalue()
