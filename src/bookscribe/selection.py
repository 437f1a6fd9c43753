"""Selected pages for the current document."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bookscribe.errors import SelectionInvalid

__all__ = ["PageSelection", "parse_page_spec"]

logger = logging.getLogger(__name__)


class PageSelection:
    """Duplicate-free page numbers bound to a document's page count.

    Insertion order is preserved because assembly copies pages in the order
    they were chosen. Every mutation validates first and only then replaces
    state, so a rejected request leaves the selection untouched.
    """

    def __init__(self, page_count: int) -> None:
        if page_count < 0:
            raise ValueError("page_count must be >= 0")
        self._page_count = page_count
        self._pages: dict[int, None] = {}

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def pages(self) -> list[int]:
        return list(self._pages)

    def __contains__(self, page: object) -> bool:
        return page in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def __bool__(self) -> bool:
        return bool(self._pages)

    def __repr__(self) -> str:
        return f"PageSelection(page_count={self._page_count}, pages={self.pages})"

    def _in_range(self, page: int) -> bool:
        return 1 <= page <= self._page_count

    def toggle(self, page: int) -> bool:
        """Add ``page`` if absent, remove it otherwise.

        Returns:
            True when the page is selected after the call.
        """
        if not self._in_range(page):
            raise SelectionInvalid(f"Page {page} is outside 1..{self._page_count}")
        if page in self._pages:
            del self._pages[page]
            return False
        self._pages[page] = None
        return True

    def set_range(self, start: int, end: int) -> list[int]:
        """Replace the selection with ``start..end`` inclusive."""
        if start < 1 or end > self._page_count:
            raise SelectionInvalid(f"Page range must be between 1 and {self._page_count}")
        if start > end:
            raise SelectionInvalid("Start page must be less than or equal to end page")
        self._pages = dict.fromkeys(range(start, end + 1))
        return self.pages

    def set_explicit(self, pages: Iterable[int]) -> list[int]:
        """Replace the selection with ``pages``.

        Out-of-range entries are dropped and duplicates collapse to their
        first occurrence. Nothing usable left is an error.
        """
        requested = list(pages)
        kept = [p for p in dict.fromkeys(requested) if self._in_range(p)]
        if not kept:
            raise SelectionInvalid("Could not select any of the requested pages")
        dropped = [p for p in requested if not self._in_range(p)]
        if dropped:
            logger.info("selection_pages_dropped pages=%s page_count=%s", dropped, self._page_count)
        self._pages = dict.fromkeys(kept)
        return self.pages


def parse_page_spec(spec: str) -> list[int]:
    """Parse ``"1-3,7,5"`` into ``[1, 2, 3, 7, 5]`` keeping the given order.

    Raises:
        SelectionInvalid: On malformed parts or reversed ranges.
    """
    out: list[int] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                start, end = int(start_s), int(end_s)
                if start > end:
                    raise SelectionInvalid(f"Reversed page range: {part}")
                out.extend(range(start, end + 1))
            else:
                out.append(int(part))
        except ValueError as exc:
            raise SelectionInvalid(f"Invalid page spec: {part!r}") from exc
    return out
