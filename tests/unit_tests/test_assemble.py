"""Document assembly from a page selection."""

from __future__ import annotations

import fitz  # PyMuPDF
import pytest

from bookscribe.errors import AssemblyError
from bookscribe.pdf import assemble_pages
from bookscribe.pdf.source import SourceDocument


def _page_texts(data: bytes) -> list[str]:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return [doc.load_page(i).get_text("text").strip() for i in range(doc.page_count)]


def test_out_of_range_page_is_skipped(text_source: SourceDocument) -> None:
    result = assemble_pages(text_source, [2, 5, 999])
    assert result.page_count == 2
    assert result.skipped == (999,)
    texts = _page_texts(result.data)
    assert len(texts) == 2
    assert texts[0].startswith("Source page 2 ")
    assert texts[1].startswith("Source page 5 ")


def test_selection_order_is_preserved(text_source: SourceDocument) -> None:
    result = assemble_pages(text_source, [9, 1, 4])
    assert [t.split()[2] for t in _page_texts(result.data)] == ["9", "1", "4"]


def test_duplicates_are_copied_again(text_source: SourceDocument) -> None:
    assert assemble_pages(text_source, [3, 3]).page_count == 2


def test_output_is_a_valid_pdf(text_source: SourceDocument) -> None:
    result = assemble_pages(text_source, [1])
    assert result.data.startswith(b"%PDF-")


def test_no_valid_pages_fails(text_source: SourceDocument) -> None:
    with pytest.raises(AssemblyError, match="No valid pages"):
        assemble_pages(text_source, [0, 11, 999])


def test_unreadable_source_fails(corrupt_source: SourceDocument) -> None:
    with pytest.raises(AssemblyError):
        assemble_pages(corrupt_source, [1])
