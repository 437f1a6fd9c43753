"""Pydantic request/response models for the API routers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SessionResponse(BaseModel):
    """Snapshot of an editing session.

    Attributes:
        session_id (str): Session identifier.
        state (str): Pipeline state (idle, document_loaded, text_extracted,
            document_assembled).
        busy (bool): Whether an operation is currently running.
        filename (str | None): Name of the loaded PDF.
        page_count (int | None): Pages in the loaded PDF.
        selected_pages (list[int]): Selection in insertion order.
        has_text (bool): Whether text has been extracted.
        text_stale (bool): Extracted text predates the current document or
            selection.
        used_ocr (bool | None): Whether the text came from OCR.
        has_summary (bool): Whether a placeholder summary exists.
    """

    session_id: str
    state: str
    busy: bool = False
    filename: str | None = None
    page_count: int | None = None
    selected_pages: list[int] = []
    has_text: bool = False
    text_stale: bool = False
    used_ocr: bool | None = None
    has_summary: bool = False

    @classmethod
    def from_snapshot(cls, snap: dict[str, Any]) -> SessionResponse:
        return cls(**snap)


class TogglePageRequest(BaseModel):
    page: int


class PageRangeRequest(BaseModel):
    start: int
    end: int


class PageListRequest(BaseModel):
    pages: list[int] = Field(default_factory=list)


class ChapterRequest(BaseModel):
    """Chapter lookup input; ``number`` takes precedence over ``title``."""

    number: int | None = None
    title: str | None = None


class SelectionResponse(BaseModel):
    selected_pages: list[int]
    page_count: int
    selected: bool | None = None


class TextResponse(BaseModel):
    text: str
    used_ocr: bool
    pages: list[int]
    stale: bool = False


class SummaryResponse(BaseModel):
    summary: str


class PdfExportRequest(BaseModel):
    filename: str


class TextExportRequest(BaseModel):
    filename: str = "extracted-text"
    summary: bool = False
