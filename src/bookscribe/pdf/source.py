"""Uploaded PDF handle shared by the extraction, OCR and assembly stages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

import fitz  # PyMuPDF

from bookscribe.errors import UploadRejected

PDF_MEDIA_TYPE = "application/pdf"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """Raw bytes of an uploaded PDF plus its page count.

    ``doc_id`` changes on every upload, so derived state can tell whether it
    was computed against the current document.
    """

    filename: str
    data: bytes = field(repr=False)
    page_count: int
    doc_id: str = field(default_factory=lambda: uuid4().hex)

    def open(self) -> fitz.Document:
        """Open a fresh PyMuPDF document over the stored bytes."""
        return fitz.open(stream=self.data, filetype="pdf")


def load_source(data: bytes, filename: str = "upload.pdf", content_type: str | None = PDF_MEDIA_TYPE) -> SourceDocument:
    """Validate an upload and build a :class:`SourceDocument`.

    Args:
        data: File contents.
        filename: Client-side name, kept for logging and default stems.
        content_type: Declared MIME type; anything but ``application/pdf``
            is rejected.

    Raises:
        UploadRejected: Wrong content type, empty body or unparseable PDF.
    """
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared != PDF_MEDIA_TYPE:
        logger.info("upload_rejected filename=%s content_type=%s", filename, content_type)
        raise UploadRejected("Please upload a PDF file")
    if not data:
        raise UploadRejected("Uploaded file is empty")
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            page_count = doc.page_count
    except Exception as exc:
        logger.info("upload_unparseable filename=%s error=%s", filename, exc)
        raise UploadRejected(f"Cannot open PDF: {filename}") from exc
    if page_count == 0:
        raise UploadRejected(f"PDF has no pages: {filename}")
    src = SourceDocument(filename=Path(filename).name or "upload.pdf", data=data, page_count=page_count)
    logger.info(
        "source_loaded filename=%s pages=%s bytes=%s doc_id=%s",
        src.filename,
        page_count,
        len(data),
        src.doc_id,
    )
    return src


def read_source(path: str | Path) -> SourceDocument:
    """Load a PDF from disk (used by the CLI)."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    return load_source(p.read_bytes(), filename=p.name)
