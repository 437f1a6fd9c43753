"""FastAPI application exposing the page-selection and export pipeline.

A browser front end creates a session, uploads a PDF, adjusts the selection,
then triggers extraction and downloads. Domain errors are rendered as
``{"detail": ..., "kind": ...}`` with a status code per error kind.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookscribe import __version__
from bookscribe.config import ToolConfig, load_config
from bookscribe.errors import (
    AssemblyError,
    BookscribeError,
    ExportError,
    ExtractionError,
    NoDocumentLoaded,
    OperationInProgress,
    SelectionInvalid,
    SessionNotFound,
    TextUnavailable,
    UploadRejected,
)
from bookscribe.logging_setup import setup_logging
from bookscribe.session import SessionStore

from .routes.documents import router as documents_router
from .routes.export import router as export_router
from .routes.selection import router as selection_router
from .routes.sessions import router as sessions_router
from .routes.text import router as text_router

STATUS_BY_ERROR: dict[type[BookscribeError], int] = {
    UploadRejected: 415,
    ExtractionError: 422,
    AssemblyError: 422,
    SelectionInvalid: 400,
    ExportError: 400,
    NoDocumentLoaded: 409,
    OperationInProgress: 409,
    TextUnavailable: 409,
    SessionNotFound: 404,
}

logger = logging.getLogger(__name__)


def _status_for(exc: BookscribeError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]  # type: ignore[index]
    return 400


async def _domain_error_handler(request: Request, exc: BookscribeError) -> JSONResponse:
    status = _status_for(exc)
    logger.info("request_failed path=%s kind=%s status=%s detail=%s", request.url.path, exc.kind, status, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc), "kind": exc.kind})


def create_app(config: ToolConfig | None = None) -> FastAPI:
    """Build the API with its own in-memory :class:`SessionStore`."""
    cfg = config or load_config()
    setup_logging(cfg.log_dir)
    application = FastAPI(title="BookScribe PDF Extractor API", version=__version__)
    application.state.store = SessionStore(cfg)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )
    application.add_exception_handler(BookscribeError, _domain_error_handler)  # type: ignore[arg-type]

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    application.include_router(sessions_router)
    application.include_router(documents_router)
    application.include_router(selection_router)
    application.include_router(text_router)
    application.include_router(export_router)
    return application


app = create_app()
