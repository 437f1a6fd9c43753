"""Embedded-text extraction with a page cap.

Two interchangeable backends produce the same layout:

    Page 1:
    <page tokens joined by single spaces>

    Page 2:
    ...

PyMuPDF is the default (word tokens straight from the text layer); pypdf is
kept as a lighter alternative selectable through ``extract_backend``.
"""

from __future__ import annotations

import io
import logging
import time
from collections.abc import Iterator
from enum import Enum

from bookscribe.errors import ExtractionError
from bookscribe.logging_setup import TRACE_LEVEL
from bookscribe.pdf.source import SourceDocument

__all__ = ["ExtractionBackend", "DEFAULT_PAGE_CAP", "extract_text", "format_page_block", "truncation_notice"]

DEFAULT_PAGE_CAP = 50

logger = logging.getLogger(__name__)


class ExtractionBackend(str, Enum):
    PYMUPDF = "pymupdf"
    PYPDF = "pypdf"


def format_page_block(page_number: int, text: str) -> str:
    return f"Page {page_number}:\n{text}\n\n"


def truncation_notice(shown: int, total: int) -> str:
    return f"\n... Showing first {shown} pages only. The PDF has {total} pages in total.\n"


def _tokens_pymupdf(source: SourceDocument, limit: int) -> Iterator[list[str]]:
    try:
        doc = source.open()
    except Exception as exc:
        raise ExtractionError(f"Failed to extract text: {exc}") from exc
    try:
        for i in range(limit):
            # words: (x0, y0, x1, y1, word, block_no, line_no, word_no)
            words = doc.load_page(i).get_text("words")
            yield [w[4] for w in words]
    finally:
        doc.close()


def _tokens_pypdf(source: SourceDocument, limit: int) -> Iterator[list[str]]:
    import pypdf

    try:
        reader = pypdf.PdfReader(io.BytesIO(source.data))
        pages = reader.pages
    except Exception as exc:
        raise ExtractionError(f"Failed to extract text: {exc}") from exc
    for i in range(limit):
        yield (pages[i].extract_text() or "").split()


def extract_text(
    source: SourceDocument,
    page_cap: int = DEFAULT_PAGE_CAP,
    backend: ExtractionBackend | str = ExtractionBackend.PYMUPDF,
) -> str:
    """Return the embedded text of the first ``page_cap`` pages.

    Each processed page contributes ``Page <n>:`` followed by its tokens
    joined with single spaces and a blank line. When the document is longer
    than the cap a trailing notice names the shown and total page counts.

    Raises:
        ExtractionError: If the bytes cannot be parsed as a PDF.
    """
    backend = ExtractionBackend(backend)
    total = source.page_count
    limit = min(total, page_cap)
    t0 = time.perf_counter()
    logger.debug(
        "text_extract_start doc=%s backend=%s pages=%s cap=%s",
        source.filename,
        backend.value,
        total,
        page_cap,
    )
    producer = _tokens_pymupdf if backend is ExtractionBackend.PYMUPDF else _tokens_pypdf
    parts: list[str] = []
    try:
        for number, tokens in enumerate(producer(source, limit), start=1):
            parts.append(format_page_block(number, " ".join(tokens)))
            logger.log(TRACE_LEVEL, "text_extract_page doc=%s page=%s/%s tokens=%s", source.filename, number, limit, len(tokens))
    except ExtractionError:
        logger.warning("text_extract_failure doc=%s backend=%s", source.filename, backend.value)
        raise
    except Exception as exc:
        logger.warning("text_extract_failure doc=%s backend=%s error=%s", source.filename, backend.value, exc)
        raise ExtractionError(f"Failed to extract text: {exc}") from exc
    if total > limit:
        parts.append(truncation_notice(limit, total))
    text = "".join(parts)
    logger.info(
        "text_extract_success doc=%s backend=%s pages=%s/%s chars=%s ms=%.1f",
        source.filename,
        backend.value,
        limit,
        total,
        len(text),
        (time.perf_counter() - t0) * 1000.0,
    )
    return text
