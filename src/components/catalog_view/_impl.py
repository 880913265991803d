"""
TableViewEngine - Filtered, paginated, column-projected record view.

Drives the column model, filter stage and pagination stage for a single UI
context. All operations are synchronous and never block.

Key behaviors:
- The source may be absent (loading or failed fetch); that behaves exactly
  like an empty collection
- Replacing the source, or changing either filter, recomputes the filtered
  collection from scratch
- Changing a filter resets the page index to 0; replacing the source or the
  page size re-clamps it
- Pagination requests outside [0, page_count - 1] are clamped
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from src.rules.models import CatalogRules

from . import _filter, _pagination
from ._columns import ColumnModel, build_product_columns
from .models import PaginationMeta, Record, ViewOutput, ViewState

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_FIELD = "products"
DEFAULT_CATEGORICAL_FIELD = "category"


def extract_records(payload: Any, field: str = DEFAULT_COLLECTION_FIELD) -> list[Record]:
    """
    Pull the record list out of a deserialized snapshot.

    A missing payload, a missing field or a non-list field all yield [].
    Non-mapping entries are dropped.
    """
    if not isinstance(payload, Mapping):
        return []
    items = payload.get(field)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


class TableViewEngine:
    """View engine over one record collection."""

    def __init__(
        self,
        columns: ColumnModel,
        categorical_field: str = DEFAULT_CATEGORICAL_FIELD,
        page_size: int = 10,
        state: ViewState | None = None,
    ) -> None:
        self.columns = columns
        self.categorical_field = categorical_field
        self.state = state or ViewState(page_size=page_size)
        if self.state.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.state.page_size}")
        self._source: tuple[Record, ...] | None = None
        self._filtered: tuple[Record, ...] = ()

    # --- Source ---

    @property
    def is_loaded(self) -> bool:
        return self._source is not None

    @property
    def source(self) -> tuple[Record, ...]:
        return self._source or ()

    def set_source(self, records: Sequence[Record] | None) -> None:
        """Replace the whole collection. None means no data (loading/failed)."""
        self._source = None if records is None else tuple(records)
        self._recompute()
        self._clamp()
        logger.debug(
            "Source replaced: %d records, %d after filters",
            len(self.source),
            len(self._filtered),
        )

    def load_snapshot(self, payload: Any, field: str = DEFAULT_COLLECTION_FIELD) -> None:
        self.set_source(extract_records(payload, field))

    # --- Filter Stage ---

    @property
    def filtered_records(self) -> tuple[Record, ...]:
        return self._filtered

    def set_global_filter(self, text: str | None) -> None:
        self.state.global_filter_text = text or ""
        self._recompute()
        self.state.page_index = 0

    def set_categorical_filter(self, value: str | None) -> None:
        self.state.categorical_filter_value = value or None
        self._recompute()
        self.state.page_index = 0

    def distinct_categories(self) -> tuple[str, ...]:
        """Categories of the unfiltered source, for filter options."""
        return _filter.distinct_categories(self.source, self.categorical_field)

    # --- Pagination Stage ---

    @property
    def page_count(self) -> int:
        return _pagination.page_count(len(self._filtered), self.state.page_size)

    @property
    def can_go_next(self) -> bool:
        return _pagination.can_go_next(self.state.page_index, self.page_count)

    @property
    def can_go_previous(self) -> bool:
        return _pagination.can_go_previous(self.state.page_index)

    def set_page_index(self, index: int) -> None:
        self.state.page_index = _pagination.clamp_page_index(index, self.page_count)

    def next_page(self) -> None:
        if self.can_go_next:
            self.state.page_index += 1

    def previous_page(self) -> None:
        if self.can_go_previous:
            self.state.page_index -= 1

    def first_page(self) -> None:
        self.state.page_index = 0

    def last_page(self) -> None:
        self.state.page_index = self.page_count - 1

    def set_page_size(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"page_size must be positive, got {size}")
        self.state.page_size = size
        self._clamp()

    def current_page_records(self) -> tuple[Record, ...]:
        return _pagination.page_slice(
            self._filtered, self.state.page_index, self.state.page_size
        )

    # --- Column Model ---

    @property
    def headers(self) -> tuple[str, ...]:
        return self.columns.headers

    def current_page_rows(self) -> tuple[dict[str, Any], ...]:
        return tuple(self.columns.project(record) for record in self.current_page_records())

    def pagination(self) -> PaginationMeta:
        return PaginationMeta(
            page_index=self.state.page_index,
            page_count=self.page_count,
            page_size=self.state.page_size,
            can_go_next=self.can_go_next,
            can_go_previous=self.can_go_previous,
        )

    def view(self) -> ViewOutput:
        """Everything a renderer needs for the current state."""
        return ViewOutput(
            keys=self.columns.keys,
            headers=self.headers,
            rows=self.current_page_rows(),
            pagination=self.pagination(),
            categories=self.distinct_categories(),
            filtered_count=len(self._filtered),
            total_count=len(self.source),
            is_loaded=self.is_loaded,
        )

    # --- Internals ---

    def _recompute(self) -> None:
        self._filtered = _filter.apply_filters(
            self.source, self.columns, self.state, self.categorical_field
        )

    def _clamp(self) -> None:
        self.state.page_index = _pagination.clamp_page_index(
            self.state.page_index, self.page_count
        )


def create_table_view_engine(rules: CatalogRules) -> TableViewEngine:
    """Factory wiring the product column model and view rules."""
    return TableViewEngine(
        columns=build_product_columns(rules.formatting),
        categorical_field=rules.view.categorical_field,
        page_size=rules.view.page_size,
    )
