"""Pydantic models for the product catalog.

Defines the raw storefront record, the enriched record derived from it,
and the closed vocabularies (rooms, styles, conditions, eras) used by the
enrichment extractors.

Models are frozen: a catalog snapshot is built once and only read afterwards.
Field names are snake_case in Python and camelCase on the wire, matching the
JSON snapshot layout.
"""

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    field_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base model with camelCase aliases and immutability."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================================================
# Vocabularies
# ============================================================================


class Room(str, Enum):
    """Rooms a piece is tagged for."""

    LIVING_ROOM = "Living Room"
    BEDROOM = "Bedroom"
    DINING_ROOM = "Dining Room"
    OFFICE = "Office"
    ENTRYWAY = "Entryway"
    BATHROOM = "Bathroom"
    OUTDOOR = "Outdoor"


class Style(str, Enum):
    """Design style classification."""

    VINTAGE = "Vintage"
    MODERN = "Modern"
    MID_CENTURY = "Mid Century"
    CONTEMPORARY = "Contemporary"
    ART_DECO = "Art Deco"
    BOHEMIAN = "Bohemian"
    INDUSTRIAL = "Industrial"
    MINIMALIST = "Minimalist"


class Condition(str, Enum):
    """Condition grade parsed from the description."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    AS_FOUND = "As-Found"


class Era(str, Enum):
    """Decade of manufacture."""

    FORTIES = "1940s"
    FIFTIES = "1950s"
    SIXTIES = "1960s"
    SEVENTIES = "1970s"
    EIGHTIES = "1980s"
    NINETIES = "1990s"
    TWO_THOUSANDS = "2000s"
    TWENTY_TENS = "2010s"
    CONTEMPORARY = "Contemporary"


class Size(str, Enum):
    """Size class based on the largest dimension."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "Extra Large"


class SortOption(str, Enum):
    """Catalog orderings.

    NEWEST keeps ingestion order, which is newest first upstream.
    """

    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NAME = "name"


# ============================================================================
# Raw Product
# ============================================================================


class ProductImage(CatalogModel):
    """Product image reference."""

    original: str
    local: str = ""
    width: int = 0
    height: int = 0


class ProductVariant(CatalogModel):
    """Purchasable variant of a product.

    Attributes:
        id: Variant identifier.
        title: Variant title (e.g., "Default Title").
        price: Variant price in dollars.
        sku: Stock Keeping Unit.
        available: Whether the variant can still be bought.
        options: Option selections keyed by option name (at most 3).
    """

    id: int
    title: str = ""
    price: float = 0.0
    sku: str | None = ""
    available: bool = True
    options: dict[str, str] = Field(default_factory=dict)


class ProductOption(CatalogModel):
    """Option definition (e.g., "Color" with its allowed values)."""

    name: str
    values: tuple[str, ...] = ()


class RawProduct(CatalogModel):
    """Product record as received from the storefront.

    Attributes:
        id: Stable numeric identifier.
        title: Product title.
        handle: URL-safe slug, unique within a catalog.
        description: Plain-text description (HTML already flattened).
        vendor: Vendor name.
        product_type: Free-text product type label.
        tags: Free-text tags in storefront order.
        price: Price of the first variant (0 without variants).
        compare_at_price: Optional "was" price.
        images: Ordered images.
        variants: Ordered variants.
        options: Option definitions.
    """

    id: int
    title: str
    handle: str = Field(min_length=1)
    description: str = ""
    vendor: str = ""
    product_type: str = ""
    tags: tuple[str, ...] = ()
    price: float = 0.0
    compare_at_price: float | None = None
    images: tuple[ProductImage, ...] = ()
    variants: tuple[ProductVariant, ...] = ()
    options: tuple[ProductOption, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _derive_price(cls, data: Any) -> Any:
        """Fill in price from the first variant when the record has none."""
        if isinstance(data, dict) and data.get("price") is None:
            variants = data.get("variants") or []
            first = variants[0] if variants else None
            if isinstance(first, dict):
                price = first.get("price", 0)
            elif isinstance(first, ProductVariant):
                price = first.price
            else:
                price = 0
            data = {**data, "price": price}
        return data


# ============================================================================
# Enriched Product
# ============================================================================


class Dimensions(CatalogModel):
    """Measurements in inches. Any subset may be known."""

    width: float | None = None
    depth: float | None = None
    height: float | None = None
    seat_height: float | None = None
    diameter: float | None = None

    def get(self, axis: str) -> float | None:
        """Get a measurement by field name."""
        return getattr(self, axis, None)

    def is_empty(self) -> bool:
        """Check whether no measurement is known."""
        return all(value is None for value in self.model_dump().values())


class EnrichedProduct(RawProduct):
    """Raw product plus attributes derived from its text.

    Attributes:
        normalized_category: Canonical category label.
        rooms: Rooms from the tag list.
        style: Single style classification.
        condition: Condition grade.
        era: Decade of manufacture.
        materials: Capitalized materials, no duplicates.
        dimensions: Parsed measurements.
        is_sold: No variant is available any more.
        is_on_sale: Compare-at price is above the price.
    """

    normalized_category: str
    rooms: tuple[Room, ...] = ()
    style: Style | None = None
    condition: Condition | None = None
    era: Era | None = None
    materials: tuple[str, ...] = ()
    dimensions: Dimensions | None = None
    is_sold: bool = False
    is_on_sale: bool = False

    @field_serializer("dimensions")
    def _serialize_dimensions(
        self, dimensions: Dimensions | None, info: SerializationInfo
    ) -> dict[str, float] | None:
        # Unknown measurements are omitted rather than written as null
        if dimensions is None:
            return None
        return dimensions.model_dump(by_alias=bool(info.by_alias), exclude_none=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON snapshot representation.

        Returns:
            Dictionary with camelCase keys.
        """
        return self.model_dump(mode="json", by_alias=True)
