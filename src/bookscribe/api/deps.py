"""Request-scoped helpers shared by the routers."""

from __future__ import annotations

from fastapi import Request

from bookscribe.session import EditorSession, SessionStore


def get_store(request: Request) -> SessionStore:
    return request.app.state.store


def get_session(session_id: str, request: Request) -> EditorSession:
    """Resolve the ``{session_id}`` path parameter (404 when unknown)."""
    return get_store(request).get(session_id)
