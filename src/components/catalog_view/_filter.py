"""
Filter stage - global text search and exact category match.

Both predicates are ANDed; the categorical check runs first since it is a
single field comparison. Survivors keep their source order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ._columns import ColumnModel
from .models import Record, ViewState


def _field(record: Record, name: str) -> Any:
    if not isinstance(record, Mapping):
        return None
    return record.get(name)


def _display_texts(value: Any) -> Iterable[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def matches_global(record: Record, columns: ColumnModel, text: str) -> bool:
    """True if any projected display value contains `text`, ignoring case."""
    if not text:
        return True
    needle = text.casefold()
    for value in columns.project(record).values():
        if any(needle in candidate.casefold() for candidate in _display_texts(value)):
            return True
    return False


def matches_category(record: Record, field: str, value: str | None) -> bool:
    """True if the categorical field equals `value` exactly; unset matches all."""
    if not value:
        return True
    return _field(record, field) == value


def apply_filters(
    records: Sequence[Record],
    columns: ColumnModel,
    state: ViewState,
    categorical_field: str,
) -> tuple[Record, ...]:
    """Records passing both predicates, in source order."""
    return tuple(
        record
        for record in records
        if matches_category(record, categorical_field, state.categorical_filter_value)
        and matches_global(record, columns, state.global_filter_text)
    )


def distinct_categories(records: Iterable[Record], field: str) -> tuple[str, ...]:
    """Unique string values of `field`, first-seen order. Other values are skipped."""
    seen: dict[str, None] = {}
    for record in records:
        value = _field(record, field)
        if not isinstance(value, str):
            continue
        seen.setdefault(value, None)
    return tuple(seen)
