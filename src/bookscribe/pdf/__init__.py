"""PDF adapters.

Layered stages over third-party libraries:
1. ``extract`` – embedded text per page (PyMuPDF or pypdf), page capped.
2. ``ocr`` – render with PyMuPDF and recognise with Tesseract, per page.
3. ``assemble`` – copy selected pages into a new document (PyMuPDF).
"""

from __future__ import annotations

from .assemble import AssembledDocument, assemble_pages
from .extract import DEFAULT_PAGE_CAP, ExtractionBackend, extract_text
from .ocr import OcrPageResult, ocr_pages, perform_ocr
from .source import PDF_MEDIA_TYPE, SourceDocument, load_source, read_source

__all__ = [
    "AssembledDocument",
    "DEFAULT_PAGE_CAP",
    "ExtractionBackend",
    "OcrPageResult",
    "PDF_MEDIA_TYPE",
    "SourceDocument",
    "assemble_pages",
    "extract_text",
    "load_source",
    "ocr_pages",
    "perform_ocr",
    "read_source",
]
