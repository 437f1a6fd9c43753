"""Session lifecycle endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from bookscribe.session import EditorSession

from ..deps import get_session, get_store
from .schemas import SessionResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
def create_session(request: Request) -> SessionResponse:
    """Start an empty editing session."""
    session = get_store(request).create()
    return SessionResponse.from_snapshot(session.snapshot())


@router.get("/{session_id}", response_model=SessionResponse)
def read_session(session: EditorSession = Depends(get_session)) -> SessionResponse:  # noqa: B008
    return SessionResponse.from_snapshot(session.snapshot())


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, request: Request) -> Response:
    get_store(request).delete(session_id)
    return Response(status_code=204)
