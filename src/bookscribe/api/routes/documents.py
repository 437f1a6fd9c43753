"""Document upload endpoint.

Uploading replaces the session's document wholesale and resets its
selection, extracted text and summary.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from bookscribe.session import EditorSession

from ..deps import get_session
from .schemas import SessionResponse

router = APIRouter(prefix="/sessions/{session_id}", tags=["documents"])


@router.post("/document", response_model=SessionResponse)
def upload_document(
    file: UploadFile = File(...),  # noqa: B008
    session: EditorSession = Depends(get_session),  # noqa: B008
) -> SessionResponse:
    """Load an uploaded PDF into the session (415 for non-PDF content)."""
    data = file.file.read()
    session.load(data, filename=file.filename or "upload.pdf", content_type=file.content_type)
    return SessionResponse.from_snapshot(session.snapshot())
