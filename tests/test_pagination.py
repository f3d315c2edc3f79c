"""Page window and range summary tests."""

from __future__ import annotations

import pytest

from core.pagination import page_window, range_summary


@pytest.mark.parametrize("total_pages", [0, 1])
def test_window_hidden_for_single_page(total_pages: int) -> None:
    assert page_window(0, total_pages) is None


@pytest.mark.parametrize("total_pages", [2, 3, 4, 5])
def test_small_page_counts_show_every_page(total_pages: int) -> None:
    for current in range(total_pages):
        window = page_window(current, total_pages)
        assert window.pages == list(range(total_pages))
        assert not window.show_first
        assert not window.show_last


@pytest.mark.parametrize("total_pages", [6, 7, 10, 50])
def test_extremes_keep_five_pages(total_pages: int) -> None:
    first = page_window(0, total_pages)
    last = page_window(total_pages - 1, total_pages)
    assert len(first.pages) == 5 and 0 in first.pages
    assert len(last.pages) == 5 and total_pages - 1 in last.pages


def test_first_page_of_ten() -> None:
    window = page_window(0, 10)
    assert window.pages == [0, 1, 2, 3, 4]
    assert not window.show_first
    assert not window.leading_ellipsis
    assert window.trailing_ellipsis
    assert window.show_last
    assert not window.has_previous
    assert window.has_next


def test_last_page_of_ten() -> None:
    window = page_window(9, 10)
    assert window.pages == [5, 6, 7, 8, 9]
    assert window.show_first
    assert window.leading_ellipsis
    assert not window.show_last
    assert not window.trailing_ellipsis
    assert window.has_previous
    assert not window.has_next


def test_middle_page_is_centered() -> None:
    window = page_window(5, 10)
    assert window.pages == [3, 4, 5, 6, 7]
    assert window.show_first and window.leading_ellipsis
    assert window.show_last and window.trailing_ellipsis


def test_near_boundary_shows_jump_without_ellipsis() -> None:
    # window starts at 1: jump to page 0 is needed, but nothing is skipped
    window = page_window(3, 10)
    assert window.pages == [1, 2, 3, 4, 5]
    assert window.show_first
    assert not window.leading_ellipsis

    window = page_window(6, 10)
    assert window.pages == [4, 5, 6, 7, 8]
    assert window.show_last
    assert not window.trailing_ellipsis


def test_second_page_shifts_to_start() -> None:
    assert page_window(1, 8).pages == [0, 1, 2, 3, 4]
    assert page_window(6, 8).pages == [3, 4, 5, 6, 7]


@pytest.mark.parametrize("total_pages", range(2, 30))
def test_flags_follow_first_and_last_index(total_pages: int) -> None:
    for current in range(total_pages):
        window = page_window(current, total_pages)
        assert current in window.pages
        assert len(window.pages) == min(5, total_pages)
        assert window.show_first == (window.pages[0] > 0)
        assert window.leading_ellipsis == (window.pages[0] > 1)
        assert window.show_last == (window.pages[-1] < total_pages - 1)
        assert window.trailing_ellipsis == (window.pages[-1] < total_pages - 2)


def test_range_summary() -> None:
    assert range_summary(0, 10, 23) == (1, 10, 23)
    assert range_summary(2, 10, 23) == (21, 23, 23)
    assert range_summary(0, 10, 0) == (0, 0, 0)
