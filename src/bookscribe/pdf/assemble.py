"""Copy selected pages into a new, compact PDF."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import fitz  # PyMuPDF

from bookscribe.errors import AssemblyError
from bookscribe.pdf.source import SourceDocument

__all__ = ["AssembledDocument", "assemble_pages"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssembledDocument:
    data: bytes = field(repr=False)
    page_count: int
    skipped: tuple[int, ...] = ()


def assemble_pages(source: SourceDocument, pages: Sequence[int]) -> AssembledDocument:
    """Build a document holding ``pages`` (1-based) of ``source`` in order.

    Page numbers past the end of the source are skipped with a warning
    instead of failing the whole request.

    Raises:
        AssemblyError: If the source cannot be opened or no page survives
            filtering.
    """
    try:
        src = source.open()
    except Exception as exc:
        raise AssemblyError(f"Failed to create PDF: {exc}") from exc
    out = fitz.open()
    skipped: list[int] = []
    try:
        total = src.page_count
        for number in pages:
            if not 1 <= number <= total:
                logger.warning("page_out_of_range_skipped doc=%s page=%s total=%s", source.filename, number, total)
                skipped.append(number)
                continue
            out.insert_pdf(src, from_page=number - 1, to_page=number - 1)
        if out.page_count == 0:
            raise AssemblyError("No valid pages to copy")
        # Object streams and garbage collection keep the output small.
        data = out.tobytes(garbage=3, deflate=True, use_objstms=1)
        page_count = out.page_count
    except AssemblyError:
        raise
    except Exception as exc:
        raise AssemblyError(f"Failed to create PDF: {exc}") from exc
    finally:
        out.close()
        src.close()
    logger.info(
        "pdf_assembled doc=%s pages=%s skipped=%s bytes=%s",
        source.filename,
        page_count,
        skipped,
        len(data),
    )
    return AssembledDocument(data=data, page_count=page_count, skipped=tuple(skipped))
