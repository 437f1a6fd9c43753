"""Editing session: one document, its page selection and derived outputs.

State machine::

    IDLE -> DOCUMENT_LOADED -> TEXT_EXTRACTED -> DOCUMENT_ASSEMBLED

Once a document is loaded the later states can be revisited in any order
(re-extract, re-assemble). Failures leave the state unchanged; nothing is
retried automatically.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import uuid4

from bookscribe.chapters import lookup_chapter_pages
from bookscribe.config import ToolConfig, load_config
from bookscribe.errors import NoDocumentLoaded, OperationInProgress, SelectionInvalid, SessionNotFound, TextUnavailable
from bookscribe.export import ExportFile, clean_stem, export_pdf, export_text
from bookscribe.logging_setup import log_call
from bookscribe.pdf import assemble_pages, extract_text, load_source, perform_ocr
from bookscribe.pdf.ocr import configure_tesseract
from bookscribe.pdf.source import PDF_MEDIA_TYPE, SourceDocument
from bookscribe.selection import PageSelection
from bookscribe.summary import summarize

__all__ = ["SessionState", "ExtractedText", "EditorSession", "SessionStore"]

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    DOCUMENT_LOADED = "document_loaded"
    TEXT_EXTRACTED = "text_extracted"
    DOCUMENT_ASSEMBLED = "document_assembled"


@dataclass(frozen=True)
class ExtractedText:
    """Extracted text plus the document and selection it was computed from."""

    text: str
    doc_id: str
    pages: tuple[int, ...]
    used_ocr: bool


class EditorSession:
    """Holds the pipeline state that a single user edits.

    All operations run under a non-blocking guard: a call that overlaps one
    already running raises :class:`OperationInProgress` rather than racing.
    """

    def __init__(self, config: ToolConfig | None = None, session_id: str | None = None) -> None:
        self.id = session_id or uuid4().hex
        self.config = config or load_config()
        self.state = SessionState.IDLE
        self.source: SourceDocument | None = None
        self.selection = PageSelection(0)
        self.extracted: ExtractedText | None = None
        self.summary: str | None = None
        self._lock = threading.Lock()
        self._operation: str | None = None
        configure_tesseract(self.config.tesseract_cmd)

    # ----- guard -----------------------------------------------------------
    @contextmanager
    def _busy(self, operation: str) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            logger.info("session_busy id=%s running=%s requested=%s", self.id, self._operation, operation)
            raise OperationInProgress(f"Cannot {operation} while {self._operation} is running")
        self._operation = operation
        try:
            yield
        finally:
            self._operation = None
            self._lock.release()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _require_source(self) -> SourceDocument:
        if self.source is None:
            raise NoDocumentLoaded("Please upload a PDF first")
        return self.source

    def _require_pages(self) -> list[int]:
        self._require_source()
        if not self.selection:
            raise SelectionInvalid("Please select at least one page")
        return self.selection.pages

    # ----- document --------------------------------------------------------
    def load(self, data: bytes, filename: str = "upload.pdf", content_type: str | None = PDF_MEDIA_TYPE) -> SourceDocument:
        """Replace the current document; selection, text and summary reset."""
        with self._busy("upload"):
            source = load_source(data, filename=filename, content_type=content_type)
            self.source = source
            self.selection = PageSelection(source.page_count)
            self.extracted = None
            self.summary = None
            self.state = SessionState.DOCUMENT_LOADED
            logger.info("session_document_loaded id=%s doc=%s pages=%s", self.id, source.filename, source.page_count)
            return source

    # ----- selection -------------------------------------------------------
    @log_call()
    def toggle_page(self, page: int) -> bool:
        with self._busy("select pages"):
            self._require_source()
            return self.selection.toggle(page)

    @log_call()
    def select_range(self, start: int, end: int) -> list[int]:
        with self._busy("select pages"):
            self._require_source()
            return self.selection.set_range(start, end)

    @log_call()
    def select_pages(self, pages: Iterable[int]) -> list[int]:
        with self._busy("select pages"):
            self._require_source()
            return self.selection.set_explicit(pages)

    @log_call()
    def select_chapter(
        self,
        number: int | None = None,
        title: str | None = None,
        rng: random.Random | None = None,
    ) -> list[int]:
        """Select pages of a chapter using the simulated lookup."""
        with self._busy("select pages"):
            source = self._require_source()
            pages = lookup_chapter_pages(source.page_count, number=number, title=title, rng=rng)
            return self.selection.set_explicit(pages)

    # ----- text ------------------------------------------------------------
    @log_call(logging.INFO)
    def extract(self) -> ExtractedText:
        """Extract embedded text, falling back to OCR over the selection.

        OCR runs when the stripped embedded text is shorter than
        ``config.ocr_min_chars``.
        """
        with self._busy("extract text"):
            source = self._require_source()
            pages = self._require_pages()
            cfg = self.config
            text = extract_text(source, page_cap=cfg.page_cap, backend=cfg.extract_backend)
            used_ocr = False
            if len(text.strip()) < cfg.ocr_min_chars:
                logger.info(
                    "ocr_fallback id=%s chars=%s threshold=%s pages=%s",
                    self.id,
                    len(text.strip()),
                    cfg.ocr_min_chars,
                    pages,
                )
                text = perform_ocr(source, pages, scale=cfg.ocr_scale, lang=cfg.ocr_lang)
                used_ocr = True
            self.extracted = ExtractedText(text=text, doc_id=source.doc_id, pages=tuple(pages), used_ocr=used_ocr)
            self.summary = None
            self.state = SessionState.TEXT_EXTRACTED
            return self.extracted

    @property
    def text_is_stale(self) -> bool:
        """True when the document or selection changed after extraction.

        Stale text is reported, not discarded.
        """
        if self.extracted is None or self.source is None:
            return False
        return self.extracted.doc_id != self.source.doc_id or self.extracted.pages != tuple(self.selection.pages)

    @log_call()
    def summarize(self) -> str:
        with self._busy("summarize"):
            if self.extracted is None:
                raise TextUnavailable("Please extract text first")
            self.summary = summarize(self.extracted.text)
            return self.summary

    # ----- export ----------------------------------------------------------
    @log_call(logging.INFO)
    def create_pdf(self, stem: str) -> ExportFile:
        """Assemble the selected pages and package them as ``<stem>.pdf``."""
        with self._busy("create PDF"):
            source = self._require_source()
            pages = self._require_pages()
            stem = clean_stem(stem)
            assembled = assemble_pages(source, pages)
            exported = export_pdf(assembled.data, stem)
            self.state = SessionState.DOCUMENT_ASSEMBLED
            return exported

    @log_call()
    def save_text(self, stem: str, use_summary: bool = False) -> ExportFile:
        """Package the extracted text (or the summary) as ``<stem>.txt``."""
        with self._busy("save text"):
            text = self.summary if use_summary else (self.extracted.text if self.extracted else None)
            if not text:
                raise TextUnavailable("No text to save")
            return export_text(text, stem)

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the session for API responses."""
        return {
            "session_id": self.id,
            "state": self.state.value,
            "busy": self.busy,
            "filename": self.source.filename if self.source else None,
            "page_count": self.source.page_count if self.source else None,
            "selected_pages": self.selection.pages,
            "has_text": self.extracted is not None,
            "text_stale": self.text_is_stale,
            "used_ocr": self.extracted.used_ocr if self.extracted else None,
            "has_summary": self.summary is not None,
        }


class SessionStore:
    """In-memory registry of editing sessions (nothing is persisted)."""

    def __init__(self, config: ToolConfig | None = None) -> None:
        self._config = config
        self._sessions: dict[str, EditorSession] = {}
        self._lock = threading.Lock()

    def create(self) -> EditorSession:
        session = EditorSession(config=self._config or load_config())
        with self._lock:
            self._sessions[session.id] = session
        logger.info("session_created id=%s", session.id)
        return session

    def get(self, session_id: str) -> EditorSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(f"Unknown session: {session_id}")
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is None:
            raise SessionNotFound(f"Unknown session: {session_id}")
        logger.info("session_deleted id=%s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
