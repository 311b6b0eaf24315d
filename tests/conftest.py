"""Shared fixtures: raw records and a small enriched catalog."""

from collections.abc import Callable
from typing import Any

import pytest

from sunbeam.catalog.enrichment import enrich
from sunbeam.catalog.models import EnrichedProduct, RawProduct
from sunbeam.catalog.repository import CatalogRepository


def build_raw_record(**overrides: Any) -> dict[str, Any]:
    """Build a raw product record in snapshot (camelCase) shape."""
    product_id = overrides.pop("id", 1)
    record = {
        "id": product_id,
        "title": f"Product {product_id}",
        "handle": f"product-{product_id}",
        "description": "",
        "vendor": "Estate Finds",
        "productType": "",
        "tags": [],
        "price": 100.0,
        "compareAtPrice": None,
        "images": [
            {
                "original": f"https://cdn.example.com/{product_id}.jpg",
                "local": f"images/product-{product_id}/1.jpg",
                "width": 800,
                "height": 600,
            }
        ],
        "variants": [
            {
                "id": product_id * 100,
                "title": "Default Title",
                "price": overrides.get("price", 100.0),
                "sku": f"SKU-{product_id}",
                "available": True,
                "options": {},
            }
        ],
        "options": [{"name": "Title", "values": ["Default Title"]}],
    }
    record.update(overrides)
    return record


@pytest.fixture
def raw_record() -> Callable[..., dict[str, Any]]:
    """Factory for raw product records."""
    return build_raw_record


@pytest.fixture
def make_product() -> Callable[..., EnrichedProduct]:
    """Factory for enriched products built from raw record overrides."""

    def _make(**overrides: Any) -> EnrichedProduct:
        return enrich(RawProduct.model_validate(build_raw_record(**overrides)))

    return _make


@pytest.fixture
def catalog(make_product: Callable[..., EnrichedProduct]) -> list[EnrichedProduct]:
    """Five enriched products in ingestion order.

    walnut-frame-sofa     Sofas        Living Room  Vintage      1200  84x36x30
    velvet-sofa           Sofas        Living Room  Modern        900  72x35x31
    leather-daybed-sofa   Sofas        Bedroom      Mid Century   900  -
    oak-writing-desk      Desks        Office       Industrial    450  48x24x29
    brass-floor-lamp      Floor Lamps  Living Room  Modern        150  14 dia.
    """
    return [
        make_product(
            id=1,
            title="Walnut Frame Sofa",
            handle="walnut-frame-sofa",
            vendor="Sunbeam Vintage",
            productType="Sofas & Loveseats",
            tags=["Living Room", "Sofas"],
            price=1200.0,
            compareAtPrice=1500.0,
            description=(
                "Mid century walnut sofa.\n"
                'Dimensions: 84"W, 36"D, 30"H. SH: 17"\n'
                "CONDITION\nExcellent"
            ),
        ),
        make_product(
            id=2,
            title="Velvet Sofa",
            handle="velvet-sofa",
            vendor="Modern",
            productType="Sofas & Couches",
            tags=["Living Room"],
            price=900.0,
            description='Plush velvet upholstery. 72" W x 35" D x 31" H. In good condition.',
        ),
        make_product(
            id=3,
            title="Leather Daybed Sofa",
            handle="leather-daybed-sofa",
            productType="Sofas",
            tags=["Bedroom", "Mid-Century Modern"],
            price=900.0,
            description="Cognac leather, sold as found. 1960's.",
        ),
        make_product(
            id=4,
            title="Oak Writing Desk",
            handle="oak-writing-desk",
            productType="Desks",
            tags=["Office", "Industrial"],
            price=450.0,
            description='Solid oak desk from the 70s. 48"W, 24"D, 29"H.',
        ),
        make_product(
            id=5,
            title="Brass Floor Lamp",
            handle="brass-floor-lamp",
            productType="Floor Lamps",
            tags=["Living Room", "Modern"],
            price=150.0,
            description='Brass and glass floor lamp. 14" Diameter, 60" tall.',
        ),
    ]


@pytest.fixture
def repository(catalog: list[EnrichedProduct]) -> CatalogRepository:
    """Repository over the sample catalog."""
    return CatalogRepository(catalog)
