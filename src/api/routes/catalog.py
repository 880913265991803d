"""Catalog endpoints exposing the filtered, paginated product view."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.adapters.product_source import SourceFetchError
from src.api.deps import get_product_source, get_rules
from src.api.schemas import CatalogViewResponse, CategoriesResponse
from src.components.catalog_view import (
    QueryViewInput,
    RecordSourcePort,
    distinct_categories,
    run_load,
    run_query,
)
from src.components.catalog_view.models import Record
from src.rules.models import CatalogRules

logger = logging.getLogger(__name__)

router = APIRouter()


def _load(source: RecordSourcePort, rules: CatalogRules) -> list[Record]:
    try:
        return run_load(source, rules)
    except SourceFetchError as e:
        logger.warning("Product snapshot unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e


@router.get("/products", response_model=CatalogViewResponse)
def get_products(
    q: str = "",
    category: str | None = None,
    page: int = 0,
    page_size: int | None = Query(default=None, gt=0),
    source: RecordSourcePort = Depends(get_product_source),
    rules: CatalogRules = Depends(get_rules),
) -> CatalogViewResponse:
    """
    Get one page of the product listing.

    - q: case-insensitive text searched across every displayed column
    - category: exact category match
    - page: zero-based page index, clamped into range
    - page_size: rows per page (defaults to the rules file)
    """
    records = _load(source, rules)
    view = run_query(
        QueryViewInput(
            global_filter_text=q,
            categorical_filter_value=category,
            page_index=page,
            page_size=page_size,
        ),
        records,
        rules,
    )
    return CatalogViewResponse.from_view(view)


@router.get("/categories", response_model=CategoriesResponse)
def get_categories(
    source: RecordSourcePort = Depends(get_product_source),
    rules: CatalogRules = Depends(get_rules),
) -> CategoriesResponse:
    """Distinct categories of the unfiltered listing, first-seen order."""
    records = _load(source, rules)
    return CategoriesResponse(
        categories=list(distinct_categories(records, rules.view.categorical_field))
    )
