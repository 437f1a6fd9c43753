"""Package PDF bytes or text as a named, typed file for download."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from bookscribe.errors import ExportError
from bookscribe.pdf.source import PDF_MEDIA_TYPE

__all__ = ["ExportFile", "clean_stem", "export_pdf", "export_text", "PDF_MEDIA_TYPE", "TEXT_MEDIA_TYPE"]

TEXT_MEDIA_TYPE = "text/plain"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportFile:
    """A ready-to-save file: name, MIME type and bytes."""

    filename: str
    media_type: str
    content: bytes = field(repr=False)

    def content_disposition(self) -> str:
        """Header value asking the browser to save instead of display."""
        ascii_name = self.filename.encode("ascii", "replace").decode("ascii").replace('"', "")
        return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(self.filename)}"

    def write_to(self, directory: str | Path) -> Path:
        """Save into ``directory`` (created if missing) and return the path."""
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        dest = out_dir / self.filename
        dest.write_bytes(self.content)
        logger.info("export_written path=%s bytes=%s", dest, len(self.content))
        return dest


def clean_stem(stem: str) -> str:
    """Return ``stem`` trimmed, or raise :class:`ExportError` if unusable.

    Stems end up in filenames and in the ``Content-Disposition`` header, so
    path separators and non-printable characters are refused.
    """
    cleaned = stem.strip()
    if not cleaned:
        raise ExportError("Please enter a filename")
    if (
        "/" in cleaned
        or "\\" in cleaned
        or cleaned in (".", "..")
        or not all(ch.isprintable() for ch in cleaned)
    ):
        raise ExportError(f"Invalid filename: {stem!r}")
    return cleaned


def export_pdf(data: bytes, stem: str) -> ExportFile:
    """Wrap assembled PDF bytes as ``<stem>.pdf``."""
    f = ExportFile(filename=f"{clean_stem(stem)}.pdf", media_type=PDF_MEDIA_TYPE, content=bytes(data))
    logger.info("export_ready filename=%s media_type=%s bytes=%s", f.filename, f.media_type, len(f.content))
    return f


def export_text(text: str, stem: str) -> ExportFile:
    """Wrap text as UTF-8 ``<stem>.txt``."""
    f = ExportFile(filename=f"{clean_stem(stem)}.txt", media_type=TEXT_MEDIA_TYPE, content=text.encode("utf-8"))
    logger.info("export_ready filename=%s media_type=%s bytes=%s", f.filename, f.media_type, len(f.content))
    return f
