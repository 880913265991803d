"""
Catalog view component - Filtered, paginated product listing.

Shell Layer - wires rules into the engine and runs one-shot queries.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.rules.models import CatalogRules

from ._impl import TableViewEngine, create_table_view_engine, extract_records
from .models import QueryViewInput, Record, ViewOutput
from .ports import RecordSourcePort

# --- Shell Layer Functions ---


def run_load(source: RecordSourcePort, rules: CatalogRules) -> list[Record]:
    """Fetch a snapshot and extract its records."""
    payload = source.fetch_snapshot()
    return extract_records(payload, rules.view.collection_field)


def run_query(
    input_data: QueryViewInput,
    records: Sequence[Record] | None,
    rules: CatalogRules,
) -> ViewOutput:
    """
    Evaluate a view for one request.

    Applies the filters first and the page position last, the same order a
    user drives the interactive view, so filter resets do not discard the
    requested page.
    """
    engine = create_table_view_engine(rules)
    if input_data.page_size is not None:
        engine.set_page_size(input_data.page_size)
    engine.set_source(records)
    engine.set_categorical_filter(input_data.categorical_filter_value)
    engine.set_global_filter(input_data.global_filter_text)
    engine.set_page_index(input_data.page_index)
    return engine.view()


def run_engine(rules: CatalogRules, records: Sequence[Record] | None = None) -> TableViewEngine:
    """Create an interactive engine, optionally seeded with records."""
    engine = create_table_view_engine(rules)
    if records is not None:
        engine.set_source(records)
    return engine
