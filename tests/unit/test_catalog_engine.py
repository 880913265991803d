"""
TableViewEngine tests.

Exercises the engine end to end: source replacement, filter resets, page
navigation and the structured view output.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from src.components.catalog_view import (
    ColumnModel,
    TableViewEngine,
    ViewState,
    build_product_columns,
    create_table_view_engine,
    extract_records,
)
from src.rules.models import CatalogRules


@pytest.fixture
def engine(products: list[dict[str, Any]]) -> TableViewEngine:
    engine = TableViewEngine(build_product_columns(), page_size=10)
    engine.set_source(products)
    return engine


# --- Construction ---


class TestConstruction:
    """Test engine defaults."""

    def test_default_state(self) -> None:
        engine = TableViewEngine(build_product_columns())

        assert engine.state == ViewState(
            global_filter_text="",
            categorical_filter_value=None,
            page_index=0,
            page_size=10,
        )

    def test_invalid_page_size(self) -> None:
        with pytest.raises(ValueError):
            TableViewEngine(build_product_columns(), page_size=0)

    def test_invalid_page_size_in_state(self) -> None:
        """A supplied state is validated like the page_size argument."""
        with pytest.raises(ValueError):
            TableViewEngine(build_product_columns(), state=ViewState(page_size=0))

    def test_supplied_state_is_used(self) -> None:
        state = ViewState(page_size=4)
        engine = TableViewEngine(build_product_columns(), state=state)

        assert engine.state is state
        assert engine.state.page_size == 4

    def test_from_rules(self, rules: CatalogRules) -> None:
        engine = create_table_view_engine(rules)

        assert engine.state.page_size == rules.view.page_size
        assert engine.categorical_field == rules.view.categorical_field
        assert len(engine.headers) == 22


# --- Source Handling ---


class TestSource:
    """Test absent and replaced sources."""

    def test_absent_source_is_empty(self) -> None:
        engine = TableViewEngine(build_product_columns())

        assert engine.is_loaded is False
        assert engine.filtered_records == ()
        assert engine.page_count == 1
        assert engine.current_page_records() == ()
        assert engine.distinct_categories() == ()

    def test_replacement_reclamps(
        self,
        engine: TableViewEngine,
        product_factory: Callable[..., dict[str, Any]],
    ) -> None:
        """A smaller snapshot pulls the page index back into range."""
        engine.set_page_index(2)

        engine.set_source([product_factory(i) for i in range(1, 6)])

        assert engine.state.page_index == 0
        assert len(engine.current_page_records()) == 5

    def test_replacement_keeps_valid_page(
        self,
        engine: TableViewEngine,
        product_factory: Callable[..., dict[str, Any]],
    ) -> None:
        engine.set_page_index(1)

        engine.set_source([product_factory(i) for i in range(1, 31)])

        assert engine.state.page_index == 1

    def test_replacement_reapplies_filters(
        self,
        engine: TableViewEngine,
        product_factory: Callable[..., dict[str, Any]],
    ) -> None:
        engine.set_categorical_filter("furniture")
        assert engine.filtered_records == ()

        engine.set_source([product_factory(1, category="furniture")])

        assert len(engine.filtered_records) == 1

    def test_failed_fetch_drops_stale_records(self, engine: TableViewEngine) -> None:
        """Going back to no source exposes no records, not old ones."""
        engine.set_source(None)

        assert engine.current_page_records() == ()
        assert engine.view().total_count == 0
        assert engine.view().is_loaded is False

    def test_load_snapshot(self, product_payload: dict[str, Any]) -> None:
        engine = TableViewEngine(build_product_columns())
        engine.load_snapshot(product_payload)

        assert len(engine.source) == 25

    def test_load_snapshot_without_products(self) -> None:
        engine = TableViewEngine(build_product_columns())
        engine.load_snapshot({"total": 0})

        assert engine.is_loaded is True
        assert engine.source == ()


class TestExtractRecords:
    """Test snapshot unpacking."""

    def test_missing_field(self) -> None:
        assert extract_records({}) == []

    def test_not_a_mapping(self) -> None:
        assert extract_records(None) == []
        assert extract_records([1, 2]) == []

    def test_field_not_a_list(self) -> None:
        assert extract_records({"products": "oops"}) == []

    def test_drops_non_mapping_items(self) -> None:
        assert extract_records({"items": [{"id": 1}, 2, None]}, "items") == [{"id": 1}]


# --- Filters ---


class TestFilters:
    """Test filter operations on the engine."""

    def test_global_filter_resets_page(self, engine: TableViewEngine) -> None:
        engine.set_page_index(2)

        engine.set_global_filter("product")

        assert engine.state.page_index == 0
        assert engine.state.global_filter_text == "product"

    def test_categorical_filter_resets_page(self, engine: TableViewEngine) -> None:
        engine.set_page_index(1)

        engine.set_categorical_filter("beauty")

        assert engine.state.page_index == 0
        assert len(engine.filtered_records) == 13

    def test_global_filter_narrows(self, engine: TableViewEngine) -> None:
        engine.set_global_filter("sku-0007")

        assert [r["id"] for r in engine.filtered_records] == [7]

    def test_clear_filters_restores_source(self, engine: TableViewEngine) -> None:
        engine.set_global_filter("sku-0007")
        engine.set_categorical_filter("beauty")

        engine.set_global_filter("")
        engine.set_categorical_filter("")

        assert engine.filtered_records == engine.source
        assert engine.state.categorical_filter_value is None

    def test_failing_formatter_does_not_escape_filter(self) -> None:
        """A formatter error during search falls back instead of raising."""
        columns = ColumnModel(fallback="?")
        columns.define("images", "Images", lambda value: value[0])
        engine = TableViewEngine(columns)
        engine.set_source([{"images": []}, {"images": ["x.png"]}])

        engine.set_global_filter("x")

        assert engine.filtered_records == ({"images": ["x.png"]},)
        assert engine.current_page_rows() == ({"images": "x.png"},)

    def test_unmatched_category(self, engine: TableViewEngine) -> None:
        """Zero matches: empty page, one page, no error."""
        engine.set_categorical_filter("laptops")

        assert engine.filtered_records == ()
        assert engine.page_count == 1
        assert engine.current_page_records() == ()
        assert engine.can_go_next is False
        assert engine.can_go_previous is False

    def test_categories_ignore_filters(self, engine: TableViewEngine) -> None:
        engine.set_categorical_filter("beauty")

        assert engine.distinct_categories() == ("beauty", "groceries")


# --- Pagination ---


class TestPagination:
    """Test page navigation on the engine."""

    def test_twenty_five_records(self, engine: TableViewEngine) -> None:
        assert engine.page_count == 3

        engine.set_page_index(2)

        assert len(engine.current_page_records()) == 5
        assert engine.can_go_next is False
        assert engine.can_go_previous is True

    def test_set_page_index_clamps(self, engine: TableViewEngine) -> None:
        engine.set_page_index(99)
        assert engine.state.page_index == 2

        engine.set_page_index(-1)
        assert engine.state.page_index == 0

    def test_next_at_last_page_is_noop(self, engine: TableViewEngine) -> None:
        engine.set_page_index(2)
        engine.next_page()
        assert engine.state.page_index == 2

    def test_previous_at_first_page_is_noop(self, engine: TableViewEngine) -> None:
        engine.previous_page()
        assert engine.state.page_index == 0

    def test_next_and_previous(self, engine: TableViewEngine) -> None:
        engine.next_page()
        engine.next_page()
        engine.previous_page()

        assert engine.state.page_index == 1
        assert [r["id"] for r in engine.current_page_records()] == list(range(11, 21))

    def test_first_and_last(self, engine: TableViewEngine) -> None:
        engine.last_page()
        assert engine.state.page_index == 2

        engine.first_page()
        assert engine.state.page_index == 0

    def test_page_size_change_reclamps(self, engine: TableViewEngine) -> None:
        engine.set_page_index(2)

        engine.set_page_size(25)

        assert engine.page_count == 1
        assert engine.state.page_index == 0

    def test_invalid_page_size_rejected(self, engine: TableViewEngine) -> None:
        with pytest.raises(ValueError):
            engine.set_page_size(0)
        assert engine.state.page_size == 10


# --- View Output ---


class TestView:
    """Test the structured output handed to renderers."""

    def test_view(self, engine: TableViewEngine) -> None:
        engine.set_page_index(1)

        view = engine.view()

        assert view.headers[0] == "ID"
        assert view.keys == engine.columns.keys
        assert len(view.rows) == 10
        assert view.rows[0]["id"] == 11
        assert view.rows[0]["price"] == "$20.99"
        assert view.pagination.page_index == 1
        assert view.pagination.page_count == 3
        assert view.pagination.can_go_next is True
        assert view.pagination.can_go_previous is True
        assert view.categories == ("beauty", "groceries")
        assert view.filtered_count == 25
        assert view.total_count == 25
        assert view.is_loaded is True

    def test_rows_follow_column_order(self, engine: TableViewEngine) -> None:
        row = engine.current_page_rows()[0]
        assert tuple(row) == engine.columns.keys
