"""Placeholder summariser.

PLACEHOLDER: keeps the first three sentences of the text. A real summary
would come from a language-model backend.
"""

from __future__ import annotations

from bookscribe.errors import TextUnavailable

SENTENCES = 3


def summarize(text: str, sentences: int = SENTENCES) -> str:
    """Return the first ``sentences`` period-delimited pieces of ``text``."""
    if not text.strip():
        raise TextUnavailable("Please extract text first")
    return ".".join(text.split(".")[:sentences]) + "."
