"""Download endpoints returning files as attachments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from bookscribe.export import ExportFile
from bookscribe.session import EditorSession

from ..deps import get_session
from .schemas import PdfExportRequest, TextExportRequest

router = APIRouter(prefix="/sessions/{session_id}/export", tags=["export"])


def _attachment(exported: ExportFile) -> Response:
    headers = {"Content-Disposition": exported.content_disposition()}
    return Response(content=exported.content, media_type=exported.media_type, headers=headers)


@router.post("/pdf")
def export_pdf(body: PdfExportRequest, session: EditorSession = Depends(get_session)) -> Response:  # noqa: B008
    """Assemble the selected pages, in selection order, into ``<filename>.pdf``."""
    return _attachment(session.create_pdf(body.filename))


@router.post("/text")
def export_text(body: TextExportRequest, session: EditorSession = Depends(get_session)) -> Response:  # noqa: B008
    """Download the extracted text, or the summary when ``summary`` is set."""
    return _attachment(session.save_text(body.filename, use_summary=body.summary))
