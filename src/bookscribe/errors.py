"""Domain exceptions surfaced to API clients and the CLI.

Every error carries a short ``kind`` string so front ends can show a transient
notification without parsing messages.
"""

from __future__ import annotations

__all__ = [
    "BookscribeError",
    "UploadRejected",
    "ExtractionError",
    "SelectionInvalid",
    "AssemblyError",
    "ExportError",
    "NoDocumentLoaded",
    "OperationInProgress",
    "SessionNotFound",
    "TextUnavailable",
]


class BookscribeError(Exception):
    """Base class for all user-facing failures."""

    kind = "Error"


class UploadRejected(BookscribeError):
    """Uploaded file is not a PDF."""

    kind = "UploadRejected"


class ExtractionError(BookscribeError):
    """Document bytes could not be parsed for text extraction or OCR."""

    kind = "ExtractionFailed"


class SelectionInvalid(BookscribeError):
    """Requested page selection is malformed or out of range."""

    kind = "SelectionInvalid"


class AssemblyError(BookscribeError):
    """A new document could not be assembled from the selection."""

    kind = "AssemblyFailed"


class ExportError(BookscribeError):
    """Nothing to export or the filename stem is unusable."""

    kind = "ExportFailed"


class NoDocumentLoaded(BookscribeError):
    kind = "NoDocumentLoaded"


class OperationInProgress(BookscribeError):
    """Another operation already holds the session."""

    kind = "OperationInProgress"


class SessionNotFound(BookscribeError):
    kind = "SessionNotFound"


class TextUnavailable(BookscribeError):
    """No extracted text (or summary) exists yet."""

    kind = "TextUnavailable"
