"""Page selection endpoints: toggle, range, explicit list and chapter lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from bookscribe.session import EditorSession

from ..deps import get_session
from .schemas import ChapterRequest, PageListRequest, PageRangeRequest, SelectionResponse, TogglePageRequest

router = APIRouter(prefix="/sessions/{session_id}/selection", tags=["selection"])


def _response(session: EditorSession, selected: bool | None = None) -> SelectionResponse:
    return SelectionResponse(
        selected_pages=session.selection.pages,
        page_count=session.selection.page_count,
        selected=selected,
    )


@router.get("", response_model=SelectionResponse)
def read_selection(session: EditorSession = Depends(get_session)) -> SelectionResponse:  # noqa: B008
    return _response(session)


@router.post("/toggle", response_model=SelectionResponse)
def toggle_page(body: TogglePageRequest, session: EditorSession = Depends(get_session)) -> SelectionResponse:  # noqa: B008
    """Add the page if absent, remove it otherwise."""
    selected = session.toggle_page(body.page)
    return _response(session, selected)


@router.post("/range", response_model=SelectionResponse)
def select_range(body: PageRangeRequest, session: EditorSession = Depends(get_session)) -> SelectionResponse:  # noqa: B008
    session.select_range(body.start, body.end)
    return _response(session)


@router.post("/pages", response_model=SelectionResponse)
def select_pages(body: PageListRequest, session: EditorSession = Depends(get_session)) -> SelectionResponse:  # noqa: B008
    session.select_pages(body.pages)
    return _response(session)


@router.post("/chapter", response_model=SelectionResponse)
def select_chapter(body: ChapterRequest, session: EditorSession = Depends(get_session)) -> SelectionResponse:  # noqa: B008
    """Select a chapter's pages via the simulated lookup."""
    session.select_chapter(number=body.number, title=body.title)
    return _response(session)
