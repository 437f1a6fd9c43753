"""OCR fallback for pages without an embedded text layer.

Pages are rendered with PyMuPDF, handed to Tesseract through pytesseract and
processed strictly one after another. A failing page yields a placeholder
block instead of aborting the batch.
"""

from __future__ import annotations

import io
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

import fitz  # PyMuPDF
import pytesseract
from PIL import Image

from bookscribe.errors import ExtractionError
from bookscribe.pdf.extract import format_page_block
from bookscribe.pdf.source import SourceDocument

__all__ = [
    "OcrPageResult",
    "configure_tesseract",
    "format_ocr_results",
    "ocr_pages",
    "perform_ocr",
    "render_page_png",
]

DEFAULT_SCALE = 1.5
DEFAULT_LANG = "eng"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OcrPageResult:
    """Outcome for one page: ``text`` on success, ``error`` otherwise."""

    page: int
    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        if self.ok:
            return format_page_block(self.page, self.text)
        return f"Page {self.page}: Error extracting text\n\n"


def render_page_png(doc: fitz.Document, page_number: int, scale: float = DEFAULT_SCALE) -> bytes:
    """Rasterise a 1-based page to PNG bytes at ``scale``."""
    if not 1 <= page_number <= doc.page_count:
        raise IndexError(f"page {page_number} out of range (1..{doc.page_count})")
    page = doc.load_page(page_number - 1)
    pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
    return pix.tobytes("png")


def _recognize(png: bytes, lang: str) -> str:
    with Image.open(io.BytesIO(png)) as img:
        return pytesseract.image_to_string(img, lang=lang)


def ocr_pages(
    source: SourceDocument,
    pages: Sequence[int],
    scale: float = DEFAULT_SCALE,
    lang: str = DEFAULT_LANG,
) -> list[OcrPageResult]:
    """Run render + OCR for each page in order.

    Raises:
        ExtractionError: Only when the document itself cannot be opened;
            per-page problems are captured in the returned results.
    """
    try:
        doc = source.open()
    except Exception as exc:
        raise ExtractionError(f"Failed to perform OCR: {exc}") from exc
    results: list[OcrPageResult] = []
    try:
        for number in pages:
            t0 = time.perf_counter()
            try:
                png = render_page_png(doc, number, scale)
                text = _recognize(png, lang)
            except Exception as exc:  # noqa: BLE001 - one bad page must not stop the batch
                logger.warning("ocr_page_failed doc=%s page=%s error=%s", source.filename, number, exc)
                results.append(OcrPageResult(page=number, error=str(exc) or type(exc).__name__))
                continue
            results.append(OcrPageResult(page=number, text=text))
            logger.debug(
                "ocr_page_done doc=%s page=%s chars=%s ms=%.1f",
                source.filename,
                number,
                len(text),
                (time.perf_counter() - t0) * 1000.0,
            )
    finally:
        doc.close()
    failed = sum(1 for r in results if not r.ok)
    logger.info("ocr_batch_done doc=%s pages=%s failed=%s lang=%s", source.filename, len(results), failed, lang)
    return results


def format_ocr_results(results: Sequence[OcrPageResult]) -> str:
    return "".join(r.render() for r in results)


def perform_ocr(
    source: SourceDocument,
    pages: Sequence[int],
    scale: float = DEFAULT_SCALE,
    lang: str = DEFAULT_LANG,
) -> str:
    """OCR ``pages`` and return the concatenated ``Page <n>:`` blocks."""
    return format_ocr_results(ocr_pages(source, pages, scale=scale, lang=lang))


def configure_tesseract(cmd: str | None) -> None:
    """Point pytesseract at a specific ``tesseract`` binary when configured."""
    if cmd:
        pytesseract.pytesseract.tesseract_cmd = cmd
        logger.debug("tesseract_cmd_set cmd=%s", cmd)
