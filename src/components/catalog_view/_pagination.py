"""
Pagination stage - fixed-size windows over the filtered collection.

There is always at least one page, so "Page 1 of 1" is valid for an empty
collection. Out-of-range indexes are clamped, never rejected.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import Record


def page_count(filtered_count: int, page_size: int) -> int:
    """ceil(filtered_count / page_size), minimum 1."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(filtered_count / page_size))


def clamp_page_index(index: int, pages: int) -> int:
    return min(max(index, 0), max(pages - 1, 0))


def page_bounds(page_index: int, page_size: int, filtered_count: int) -> tuple[int, int]:
    """Half-open [start, end) offsets of a page."""
    start = page_index * page_size
    end = min(filtered_count, start + page_size)
    return min(start, filtered_count), end


def page_slice(records: Sequence[Record], page_index: int, page_size: int) -> tuple[Record, ...]:
    start, end = page_bounds(page_index, page_size, len(records))
    return tuple(records[start:end])


def can_go_next(page_index: int, pages: int) -> bool:
    return page_index < pages - 1


def can_go_previous(page_index: int) -> bool:
    return page_index > 0
