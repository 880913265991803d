"""
Column model and display formatters.

A column model is an ordered registry of column definitions. Projecting a
record applies every column's formatter to the matching field and yields one
display value per column, left to right.

Key behaviors:
- Column keys are unique; a second define() with the same key fails at setup
- Formatters are pure and total: missing, null or malformed input resolves to
  a fallback token instead of an exception
- Image references are passed through; loading them is the renderer's job
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from src.rules.models import FormattingRules

from .models import ColumnDefinition, DuplicateColumnError, Formatter, Record

logger = logging.getLogger(__name__)

DEFAULT_FORMATTING = FormattingRules()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sub_value(value: Mapping[str, Any], name: str, missing: str) -> Any:
    """Nested field, with `missing` for an absent or null entry."""
    sub = value.get(name)
    return missing if sub is None else sub


# --- Formatter Factories ---


def text_formatter(missing: str = "N/A") -> Formatter:
    """Plain value; None becomes the missing token."""

    def fmt(value: Any) -> Any:
        return missing if value is None else value

    return fmt


def currency_formatter(symbol: str = "$", missing: str = "N/A") -> Formatter:
    """Two decimals with a currency prefix, e.g. ``$9.99``."""

    def fmt(value: Any) -> str:
        if not _is_number(value):
            return missing
        return f"{symbol}{value:.2f}"

    return fmt


def ratio_formatter(missing: str = "N/A") -> Formatter:
    """Two decimals, no symbol."""

    def fmt(value: Any) -> str:
        if not _is_number(value):
            return missing
        return f"{value:.2f}"

    return fmt


def rating_formatter(scale: int = 5, missing: str = "N/A") -> Formatter:
    """``<value> / <scale>``."""

    def fmt(value: Any) -> str:
        if not _is_number(value):
            return missing
        return f"{value} / {scale}"

    return fmt


def quantity_formatter(out_of_stock: str = "Out of Stock", missing: str = "N/A") -> Formatter:
    """Raw number while positive, otherwise the out-of-stock marker."""

    def fmt(value: Any) -> Any:
        if not _is_number(value):
            return missing
        return value if value > 0 else out_of_stock

    return fmt


def format_tags(value: Any) -> str:
    if not isinstance(value, (list, tuple)):
        return ""
    return ", ".join(str(tag) for tag in value if tag is not None)


def reviews_formatter(missing: str = "N/A") -> Formatter:
    """One multi-line block per review, blocks separated by a blank line."""

    def fmt(value: Any) -> str:
        if not isinstance(value, (list, tuple)):
            return ""
        blocks = []
        for review in value:
            if not isinstance(review, Mapping):
                continue
            blocks.append(
                "\n".join(
                    [
                        f"rating: {_sub_value(review, 'rating', missing)},",
                        f"comment: {_sub_value(review, 'comment', missing)},",
                        f"date: {_sub_value(review, 'date', missing)},",
                        f"reviewerName: {_sub_value(review, 'reviewerName', missing)},",
                        f"reviewerEmail: {_sub_value(review, 'reviewerEmail', missing)}",
                    ]
                )
            )
        return "\n\n".join(blocks)

    return fmt


def summary_formatter(
    labels: Iterable[tuple[str, str]],
    missing: str = "N/A",
    absent: str = "N/A",
) -> Formatter:
    """
    Summarize a nested mapping as ``Label: value, Label: value``.

    `labels` pairs each sub-field with its display label. A missing or null
    sub-field shows `missing`; a missing object shows `absent`.
    """
    pairs = tuple(labels)

    def fmt(value: Any) -> str:
        if not isinstance(value, Mapping):
            return absent
        parts = []
        for field_name, label in pairs:
            parts.append(f"{label}: {_sub_value(value, field_name, missing)}")
        return ", ".join(parts)

    return fmt


def format_image_ref(value: Any) -> str:
    return value if isinstance(value, str) else ""


def format_image_refs(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(image for image in value if isinstance(image, str))


# --- Column Model ---


class ColumnModel:
    """Ordered, key-unique set of column definitions."""

    def __init__(
        self,
        columns: Iterable[ColumnDefinition] = (),
        fallback: str = "N/A",
    ) -> None:
        self._columns: dict[str, ColumnDefinition] = {}
        self.fallback = fallback
        for column in columns:
            self.define(column.key, column.header, column.formatter)

    def define(
        self,
        key: str,
        header: str,
        formatter: Formatter | None = None,
    ) -> ColumnDefinition:
        """Register a column. Raises DuplicateColumnError if `key` exists."""
        if key in self._columns:
            raise DuplicateColumnError(key)
        column = ColumnDefinition(
            key=key,
            header=header,
            formatter=formatter or text_formatter(self.fallback),
        )
        self._columns[key] = column
        return column

    def project(self, record: Record) -> dict[str, Any]:
        """Apply every formatter to its field of `record`."""
        source: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
        cells: dict[str, Any] = {}
        for key, column in self._columns.items():
            try:
                cells[key] = column.formatter(source.get(key))
            except (TypeError, ValueError, LookupError, AttributeError, ArithmeticError):
                logger.warning("Formatter for column %r failed; using fallback", key)
                cells[key] = self.fallback
        return cells

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._columns)

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(column.header for column in self._columns.values())

    def __iter__(self) -> Iterator[ColumnDefinition]:
        return iter(self._columns.values())

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, key: object) -> bool:
        return key in self._columns


# --- Product Columns ---


def build_product_columns(formatting: FormattingRules = DEFAULT_FORMATTING) -> ColumnModel:
    """Column model for the product listing."""
    na = formatting.missing_value
    text = text_formatter(na)

    model = ColumnModel(fallback=na)
    model.define("id", "ID", text)
    model.define("title", "Product Name", text)
    model.define("description", "Description", text)
    model.define("category", "Category", text)
    model.define("price", "Price", currency_formatter(formatting.currency_symbol, na))
    model.define("discountPercentage", "Discount Percentage", ratio_formatter(na))
    model.define("rating", "Rating", rating_formatter(formatting.rating_scale, na))
    model.define("stock", "Stock", quantity_formatter(formatting.out_of_stock, na))
    model.define("tags", "Tags", format_tags)
    model.define("brand", "Brand", text)
    model.define("sku", "Sku", text)
    model.define("weight", "Weight", text)
    model.define(
        "dimensions",
        "Dimension",
        summary_formatter(
            [("width", "Width"), ("height", "Height"), ("depth", "Depth")],
            missing=na,
            absent=formatting.no_dimensions,
        ),
    )
    model.define("warrantyInformation", "Warranty", text)
    model.define("shippingInformation", "Shipping", text)
    model.define("availabilityStatus", "Availability", text)
    model.define("reviews", "Reviews", reviews_formatter(na))
    model.define("returnPolicy", "Return Policy", text)
    model.define("minimumOrderQuantity", "Min Order Qty", text)
    model.define(
        "meta",
        "Meta Information",
        summary_formatter(
            [
                ("createdAt", "Created At"),
                ("updatedAt", "Updated At"),
                ("barcode", "Barcode"),
                ("qrCode", "QR Code"),
            ],
            missing=na,
            absent=formatting.no_meta,
        ),
    )
    model.define("images", "Images", format_image_refs)
    model.define("thumbnail", "Thumbnail", format_image_ref)
    return model
