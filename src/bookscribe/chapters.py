"""Simulated chapter lookup.

PLACEHOLDER: this does not analyse the document. Chapter numbers come from a
fixed table and titles are matched with naive substring checks, falling back
to a pseudo-random three-page window. A real implementation would detect
chapter headings in the document text.
"""

from __future__ import annotations

import random

from bookscribe.errors import SelectionInvalid

__all__ = ["SIMULATED_CHAPTERS", "lookup_chapter_pages"]

SIMULATED_CHAPTERS: dict[int, list[int]] = {
    1: [1, 2, 3, 4, 5],
    2: [6, 7, 8, 9, 10],
    3: [11, 12, 13, 14, 15],
    4: [16, 17, 18, 19, 20],
}

# Used when the page count is unknown.
_FALLBACK_LAST_PAGE = 20
_FALLBACK_RANDOM_SPAN = 15
_WINDOW = 3


def lookup_chapter_pages(
    page_count: int | None,
    number: int | None = None,
    title: str | None = None,
    rng: random.Random | None = None,
) -> list[int]:
    """Return the (simulated) pages of a chapter.

    ``number`` wins over ``title`` when both are given.

    Raises:
        SelectionInvalid: Neither argument given, unknown chapter number, or
            no page could be guessed.
    """
    title = (title or "").strip()
    if number is None and not title:
        raise SelectionInvalid("Please enter either chapter title or number")

    if number is not None:
        pages = list(SIMULATED_CHAPTERS.get(number, []))
        if not pages:
            raise SelectionInvalid(f"Chapter {number} not found in the document")
        return pages

    lowered = title.lower()
    if "introduction" in lowered:
        return [1, 2, 3]
    if "conclusion" in lowered:
        last = page_count or _FALLBACK_LAST_PAGE
        return [last - 2, last - 1, last]

    rng = rng or random.Random()
    start = rng.randint(1, page_count or _FALLBACK_RANDOM_SPAN)
    pages = [start + i for i in range(_WINDOW) if page_count and start + i <= page_count]
    if not pages:
        raise SelectionInvalid("Could not detect chapter pages")
    return pages
