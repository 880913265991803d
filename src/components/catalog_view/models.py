"""
Catalog view component - Data models.

Column definitions, view state and the structured view handed to renderers.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Record = Mapping[str, Any]
Formatter = Callable[[Any], Any]

# --- Errors ---


class DuplicateColumnError(ValueError):
    """Raised when a column key is registered twice on one column model."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Column '{key}' is already defined")
        self.key = key


# --- Column Models ---


@dataclass(frozen=True)
class ColumnDefinition:
    """Maps one record field to a display value."""

    key: str
    header: str
    formatter: Formatter


# --- View State ---


@dataclass
class ViewState:
    """
    Mutable view position.

    Only the engine mutates it; callers read it for display.
    """

    global_filter_text: str = ""
    categorical_filter_value: str | None = None
    page_index: int = 0
    page_size: int = 10


# --- Input Models ---


@dataclass(frozen=True)
class QueryViewInput:
    """Input for a one-shot view evaluation."""

    global_filter_text: str = ""
    categorical_filter_value: str | None = None
    page_index: int = 0
    page_size: int | None = None


# --- Output Models ---


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination metadata for the current view."""

    page_index: int
    page_count: int
    page_size: int
    can_go_next: bool
    can_go_previous: bool


@dataclass(frozen=True)
class ViewOutput:
    """Projected page plus everything a renderer needs to draw it."""

    keys: tuple[str, ...]
    headers: tuple[str, ...]
    rows: tuple[dict[str, Any], ...]
    pagination: PaginationMeta
    categories: tuple[str, ...]
    filtered_count: int
    total_count: int
    is_loaded: bool
