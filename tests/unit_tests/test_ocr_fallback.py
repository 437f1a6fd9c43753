"""OCR adapter: sequential per-page processing with isolated failures."""

from __future__ import annotations

from typing import Any

import pytest
from PIL import Image

from bookscribe.errors import ExtractionError
from bookscribe.pdf import ocr, load_source
from bookscribe.pdf.source import SourceDocument


@pytest.fixture
def twelve_page_scan(make_pdf) -> SourceDocument:
    return load_source(make_pdf([""] * 12), filename="scan.pdf")


def test_failed_page_does_not_abort_batch(twelve_page_scan: SourceDocument, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_ocr(img: Any, lang: str = "eng") -> str:
        calls.append(lang)
        if len(calls) == 2:
            raise RuntimeError("tesseract crashed")
        return f"recognised {len(calls)}"

    monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake_ocr)
    results = ocr.ocr_pages(twelve_page_scan, [3, 7, 12])
    assert [r.page for r in results] == [3, 7, 12]
    assert [r.ok for r in results] == [True, False, True]
    assert calls == ["eng", "eng", "eng"]

    text = ocr.format_ocr_results(results)
    assert text == (
        "Page 3:\nrecognised 1\n\n"
        "Page 7: Error extracting text\n\n"
        "Page 12:\nrecognised 3\n\n"
    )


def test_pages_rendered_at_one_and_a_half_scale(twelve_page_scan: SourceDocument, monkeypatch: pytest.MonkeyPatch) -> None:
    sizes: list[tuple[int, int]] = []

    def fake_ocr(img: Image.Image, lang: str = "eng") -> str:
        sizes.append(img.size)
        return "ok"

    monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake_ocr)
    with twelve_page_scan.open() as doc:
        rect = doc.load_page(0).rect
    ocr.perform_ocr(twelve_page_scan, [1])
    (width, height), = sizes
    assert abs(width - rect.width * 1.5) <= 1
    assert abs(height - rect.height * 1.5) <= 1


def test_out_of_range_page_becomes_placeholder(twelve_page_scan: SourceDocument, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ocr.pytesseract, "image_to_string", lambda img, lang="eng": "words")
    text = ocr.perform_ocr(twelve_page_scan, [1, 40])
    assert text == "Page 1:\nwords\n\nPage 40: Error extracting text\n\n"


def test_language_is_passed_through(twelve_page_scan: SourceDocument, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []
    monkeypatch.setattr(ocr.pytesseract, "image_to_string", lambda img, lang="eng": seen.append(lang) or "")
    ocr.perform_ocr(twelve_page_scan, [2], lang="fra")
    assert seen == ["fra"]


def test_unreadable_document_fails_whole_batch(corrupt_source: SourceDocument) -> None:
    with pytest.raises(ExtractionError):
        ocr.ocr_pages(corrupt_source, [1, 2])


def test_configure_tesseract_sets_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ocr.pytesseract.pytesseract, "tesseract_cmd", "tesseract")
    ocr.configure_tesseract(None)
    assert ocr.pytesseract.pytesseract.tesseract_cmd == "tesseract"
    ocr.configure_tesseract("/opt/tess/bin/tesseract")
    assert ocr.pytesseract.pytesseract.tesseract_cmd == "/opt/tess/bin/tesseract"
