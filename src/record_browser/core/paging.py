"""Page-index arithmetic shared by the store, the ledger and the paginator.

The core always uses 1-based page indices. The paginator widget reports
0-based row offsets (the index of the first row on the page), so conversion
happens here and nowhere else.
"""

from __future__ import annotations

import math


FIRST_PAGE = 1


def _require_page_size(page_size: int) -> None:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")


def _require_page(page_index: int) -> None:
    if page_index < FIRST_PAGE:
        raise ValueError(f"Page indices start at {FIRST_PAGE}, got {page_index}")


def page_from_offset(first: int, page_size: int) -> int:
    """
    Convert a 0-based paginator row offset to a 1-based page index.

    Offsets that do not fall on a page boundary map to the page containing
    that row.
    """
    _require_page_size(page_size)
    if first < 0:
        raise ValueError(f"Row offset must be non-negative, got {first}")
    return first // page_size + FIRST_PAGE


def offset_from_page(page_index: int, page_size: int) -> int:
    """Convert a 1-based page index to the paginator's 0-based row offset."""
    _require_page_size(page_size)
    _require_page(page_index)
    return (page_index - FIRST_PAGE) * page_size


def page_count(total_count: int, page_size: int) -> int:
    """Number of pages needed to hold ``total_count`` records."""
    _require_page_size(page_size)
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def records_on_page(page_index: int, total_count: int, page_size: int) -> int:
    """How many records page ``page_index`` holds when the source has ``total_count``."""
    _require_page(page_index)
    before = offset_from_page(page_index, page_size)
    return max(0, min(page_size, total_count - before))


def bulk_count_on_page(bulk_target: int, page_index: int, page_size: int) -> int:
    """
    Number of leading records on ``page_index`` covered by a bulk target.

    ``remaining = bulk_target - page_size * (page_index - 1)`` clamped to
    ``[0, page_size]``.
    """
    _require_page(page_index)
    if bulk_target <= 0:
        return 0
    remaining = bulk_target - offset_from_page(page_index, page_size)
    return max(0, min(remaining, page_size))
