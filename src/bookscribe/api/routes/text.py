"""Text extraction and placeholder summary endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from bookscribe.errors import TextUnavailable
from bookscribe.session import EditorSession, ExtractedText

from ..deps import get_session
from .schemas import SummaryResponse, TextResponse

router = APIRouter(prefix="/sessions/{session_id}", tags=["text"])


def _text_response(extracted: ExtractedText, stale: bool = False) -> TextResponse:
    return TextResponse(
        text=extracted.text,
        used_ocr=extracted.used_ocr,
        pages=list(extracted.pages),
        stale=stale,
    )


@router.post("/extract", response_model=TextResponse)
def extract(session: EditorSession = Depends(get_session)) -> TextResponse:  # noqa: B008
    """Extract embedded text, using OCR on the selection when it is too short."""
    # Session state can change once the busy guard is released.
    return _text_response(session.extract())


@router.get("/text", response_model=TextResponse)
def read_text(session: EditorSession = Depends(get_session)) -> TextResponse:  # noqa: B008
    extracted = session.extracted
    if extracted is None:
        raise TextUnavailable("Please extract text first")
    return _text_response(extracted, stale=session.text_is_stale)


@router.post("/summary", response_model=SummaryResponse)
def summarize(session: EditorSession = Depends(get_session)) -> SummaryResponse:  # noqa: B008
    return SummaryResponse(summary=session.summarize())
