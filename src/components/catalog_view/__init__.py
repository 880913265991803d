"""
Catalog view component - Filtered, paginated, column-projected record view.
"""

from ._columns import (
    ColumnModel,
    build_product_columns,
    currency_formatter,
    format_image_ref,
    format_image_refs,
    format_tags,
    quantity_formatter,
    rating_formatter,
    ratio_formatter,
    reviews_formatter,
    summary_formatter,
    text_formatter,
)
from ._filter import apply_filters, distinct_categories, matches_category, matches_global
from ._impl import TableViewEngine, create_table_view_engine, extract_records
from ._pagination import page_count
from .component import run_engine, run_load, run_query
from .models import (
    ColumnDefinition,
    DuplicateColumnError,
    PaginationMeta,
    QueryViewInput,
    ViewOutput,
    ViewState,
)
from .ports import RecordSourcePort, RendererPort

__all__ = [
    # Entry points
    "run_engine",
    "run_load",
    "run_query",
    # Engine
    "TableViewEngine",
    "create_table_view_engine",
    "extract_records",
    # Column model
    "ColumnModel",
    "build_product_columns",
    "currency_formatter",
    "format_image_ref",
    "format_image_refs",
    "format_tags",
    "quantity_formatter",
    "rating_formatter",
    "ratio_formatter",
    "reviews_formatter",
    "summary_formatter",
    "text_formatter",
    # Filter / pagination stages
    "apply_filters",
    "distinct_categories",
    "matches_category",
    "matches_global",
    "page_count",
    # Models
    "ColumnDefinition",
    "DuplicateColumnError",
    "PaginationMeta",
    "QueryViewInput",
    "ViewOutput",
    "ViewState",
    # Ports
    "RecordSourcePort",
    "RendererPort",
]
