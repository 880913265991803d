from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from src.rules.loader import load_rules
from src.rules.models import CatalogRules

PROJECT_ROOT = Path(__file__).parent.parent


def make_product(index: int, **overrides: Any) -> dict[str, Any]:
    """Product record shaped like the upstream listing payload."""
    product: dict[str, Any] = {
        "id": index,
        "title": f"Product {index}",
        "description": f"Description of product {index}",
        "category": "beauty" if index % 2 else "groceries",
        "price": 9.99 + index,
        "discountPercentage": 7.17,
        "rating": 4.94,
        "stock": index,
        "tags": ["beauty", "mascara"],
        "brand": "Essence",
        "sku": f"SKU-{index:04d}",
        "weight": 2,
        "dimensions": {"width": 23.17, "height": 14.43, "depth": 28.01},
        "warrantyInformation": "1 month warranty",
        "shippingInformation": "Ships in 1 month",
        "availabilityStatus": "Low Stock",
        "reviews": [
            {
                "rating": 2,
                "comment": "Very unhappy with my purchase!",
                "date": "2024-05-23T08:56:21.618Z",
                "reviewerName": "John Doe",
                "reviewerEmail": "john.doe@x.dummyjson.com",
            }
        ],
        "returnPolicy": "30 days return policy",
        "minimumOrderQuantity": 24,
        "meta": {
            "createdAt": "2024-05-23T08:56:21.618Z",
            "updatedAt": "2024-05-23T08:56:21.618Z",
            "barcode": "9164035109868",
            "qrCode": "https://assets.dummyjson.com/public/qr-code.png",
        },
        "images": [f"https://cdn.dummyjson.com/products/{index}/1.png"],
        "thumbnail": f"https://cdn.dummyjson.com/products/{index}/thumbnail.png",
    }
    product.update(overrides)
    return product


@pytest.fixture
def rules() -> CatalogRules:
    """Rules loaded from the real rules.yaml at the project root."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def products() -> list[dict[str, Any]]:
    """25 products, alternating beauty/groceries, id 1..25."""
    return [make_product(i) for i in range(1, 26)]


@pytest.fixture
def product_payload(products: list[dict[str, Any]]) -> dict[str, Any]:
    return {"products": products, "total": len(products), "skip": 0, "limit": 30}


@pytest.fixture
def product_factory() -> Callable[..., dict[str, Any]]:
    return make_product
