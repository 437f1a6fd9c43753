from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import fitz  # PyMuPDF
import pytest

# Ensure src/ is on sys.path so we can import bookscribe.* without installing.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bookscribe.pdf.source import SourceDocument, load_source  # noqa: E402

PdfFactory = Callable[[Sequence[str]], bytes]


def build_pdf(page_texts: Sequence[str]) -> bytes:
    """Return PDF bytes with one page per entry; empty strings give blank pages."""
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def sample_page_texts(count: int) -> list[str]:
    return [f"Source page {i} carries some embedded words" for i in range(1, count + 1)]


@pytest.fixture
def make_pdf() -> PdfFactory:
    return build_pdf


@pytest.fixture
def text_pdf_bytes() -> bytes:
    """Ten pages of embedded text (well above the OCR threshold)."""
    return build_pdf(sample_page_texts(10))


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """Three pages with no text layer, standing in for a scanned document."""
    return build_pdf(["", "", ""])


@pytest.fixture
def text_source(text_pdf_bytes: bytes) -> SourceDocument:
    return load_source(text_pdf_bytes, filename="sample.pdf")


@pytest.fixture
def corrupt_source() -> SourceDocument:
    """A handle whose bytes are not a PDF (bypasses upload validation)."""
    return SourceDocument(filename="broken.pdf", data=b"this is not a pdf at all", page_count=3)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user config and log locations out of the tests."""
    for var in (
        "BOOKSCRIBE_CONFIG",
        "BOOKSCRIBE_PAGE_CAP",
        "BOOKSCRIBE_OCR_MIN_CHARS",
        "BOOKSCRIBE_OCR_SCALE",
        "BOOKSCRIBE_OCR_LANG",
        "BOOKSCRIBE_EXTRACT_BACKEND",
        "BOOKSCRIBE_TESSERACT_CMD",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("BOOKSCRIBE_LOG_DIR", str(tmp_path / "logs"))
