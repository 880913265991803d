from typing import Any

from pydantic import BaseModel

from src.components.catalog_view import ViewOutput


class PaginationModel(BaseModel):
    page_index: int
    page_count: int
    page_size: int
    can_go_next: bool
    can_go_previous: bool


class CatalogViewResponse(BaseModel):
    keys: list[str]
    headers: list[str]
    rows: list[dict[str, Any]]
    pagination: PaginationModel
    categories: list[str]
    filtered_count: int
    total_count: int

    @classmethod
    def from_view(cls, view: ViewOutput) -> "CatalogViewResponse":
        return cls(
            keys=list(view.keys),
            headers=list(view.headers),
            rows=[dict(row) for row in view.rows],
            pagination=PaginationModel(
                page_index=view.pagination.page_index,
                page_count=view.pagination.page_count,
                page_size=view.pagination.page_size,
                can_go_next=view.pagination.can_go_next,
                can_go_previous=view.pagination.can_go_previous,
            ),
            categories=list(view.categories),
            filtered_count=view.filtered_count,
            total_count=view.total_count,
        )


class CategoriesResponse(BaseModel):
    categories: list[str]
