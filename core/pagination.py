# core/pagination.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

WINDOW_SIZE = 5


@dataclass(frozen=True)
class PageWindow:
    """Which page buttons to render around the current page (0-based)."""
    pages: List[int]
    current_page: int
    total_pages: int

    @property
    def show_first(self) -> bool:
        return self.pages[0] > 0

    @property
    def leading_ellipsis(self) -> bool:
        return self.pages[0] > 1

    @property
    def show_last(self) -> bool:
        return self.pages[-1] < self.total_pages - 1

    @property
    def trailing_ellipsis(self) -> bool:
        return self.pages[-1] < self.total_pages - 2

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1


def page_window(current_page: int, total_pages: int) -> Optional[PageWindow]:
    """
    Up to five page indices centered on current_page, clamped to
    [0, total_pages-1]. Near either boundary the window is shifted rather
    than shrunk. Returns None when there is nothing to paginate.
    """
    if total_pages <= 1:
        return None

    if total_pages <= WINDOW_SIZE:
        # everything fits
        start, end = 0, total_pages - 1
    else:
        half = WINDOW_SIZE // 2
        start = max(0, current_page - half)
        end = min(total_pages - 1, current_page + half)
        if end - start + 1 < WINDOW_SIZE:
            if start == 0:
                end = min(WINDOW_SIZE - 1, total_pages - 1)
            elif end == total_pages - 1:
                start = max(0, total_pages - WINDOW_SIZE)

    return PageWindow(
        pages=list(range(start, end + 1)),
        current_page=current_page,
        total_pages=total_pages,
    )


def range_summary(current_page: int, size: int, total_items: int) -> Tuple[int, int, int]:
    """1-based (first, last, total) for "Showing X to Y of Z results"."""
    if total_items <= 0 or size <= 0:
        return 0, 0, 0
    start = current_page * size + 1
    end = min((current_page + 1) * size, total_items)
    return start, end, total_items
