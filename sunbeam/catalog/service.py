"""Catalog filtering, sorting and facets.

Filtering combines facets with AND; several values selected within one
facet combine with OR. Sorting runs after filtering and is stable, so
products with equal sort keys keep their catalog order.

Facet options are always derived from the full catalog rather than the
filtered view, so a facet menu never loses choices as the user narrows
the result list, and never offers a choice that matches nothing.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sunbeam.catalog.extractors import size_from_dimensions
from sunbeam.catalog.models import EnrichedProduct, Room, Size, SortOption, Style
from sunbeam.catalog.repository import CatalogRepository, product_matches_query
from sunbeam.domain.exceptions import InvalidFilterError

DIMENSION_AXES = ("width", "depth", "height")


@dataclass(frozen=True)
class DimensionRange:
    """Half-open size bucket [min, max) in inches.

    Attributes:
        key: Stable identifier used in filters (e.g., "24-36").
        label: Display label.
        min: Inclusive lower bound.
        max: Exclusive upper bound, None for unbounded.
    """

    key: str
    label: str
    min: float
    max: float | None = None

    def contains(self, value: float | None) -> bool:
        """Check whether a measurement falls in this bucket."""
        if value is None:
            return False
        return value >= self.min and (self.max is None or value < self.max)


DIMENSION_RANGES = (
    DimensionRange("0-24", 'Under 24"', 0, 24),
    DimensionRange("24-36", '24" - 36"', 24, 36),
    DimensionRange("36-48", '36" - 48"', 36, 48),
    DimensionRange("48-60", '48" - 60"', 48, 60),
    DimensionRange("60-72", '60" - 72"', 60, 72),
    DimensionRange("72+", '72" and up', 72, None),
)
DIMENSION_RANGES_BY_KEY = {r.key: r for r in DIMENSION_RANGES}


@dataclass(frozen=True)
class PriceRange:
    """Price bounds of a catalog, in whole dollars."""

    min: int
    max: int


# Bounds reported for an empty catalog
DEFAULT_PRICE_RANGE = PriceRange(min=0, max=10000)


def _as_tuple(values: Iterable, convert, field_name: str) -> tuple:
    try:
        return tuple(convert(v) for v in values or ())
    except (ValueError, KeyError) as e:
        raise InvalidFilterError(field_name, values, str(e)) from e


def _bucket(key: str) -> DimensionRange:
    return DIMENSION_RANGES_BY_KEY[key]


@dataclass(frozen=True)
class ProductFilter:
    """Declarative filter and sort options.

    Empty or None selections and None bounds do not constrain anything.
    Rooms, styles and dimension buckets are validated on construction.

    Attributes:
        categories: Match any, against canonical category or product type.
        rooms: Match any room of the product.
        styles: Match the product's style.
        widths: Width bucket keys (see DIMENSION_RANGES).
        depths: Depth bucket keys.
        heights: Height bucket keys.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
        query: Substring search text.
        sort_by: Result ordering.
    """

    categories: tuple[str, ...] = ()
    rooms: tuple[Room, ...] = ()
    styles: tuple[Style, ...] = ()
    widths: tuple[str, ...] = ()
    depths: tuple[str, ...] = ()
    heights: tuple[str, ...] = ()
    min_price: float | None = None
    max_price: float | None = None
    query: str | None = None
    sort_by: SortOption = SortOption.NEWEST

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "categories", tuple(self.categories or ()))
        object.__setattr__(self, "rooms", _as_tuple(self.rooms, Room, "rooms"))
        object.__setattr__(self, "styles", _as_tuple(self.styles, Style, "styles"))
        for axis_field in ("widths", "depths", "heights"):
            keys = _as_tuple(getattr(self, axis_field), lambda k: _bucket(k).key, axis_field)
            object.__setattr__(self, axis_field, keys)
        try:
            object.__setattr__(self, "sort_by", SortOption(self.sort_by))
        except ValueError as e:
            raise InvalidFilterError("sort_by", self.sort_by, str(e)) from e

    def buckets_for(self, axis: str) -> tuple[DimensionRange, ...]:
        """Get the selected buckets for "width", "depth" or "height"."""
        return tuple(_bucket(key) for key in getattr(self, f"{axis}s"))


# ============================================================================
# Filtering and sorting
# ============================================================================


def _matches(product: EnrichedProduct, filters: ProductFilter, categories: set[str]) -> bool:
    if categories and not (
        product.normalized_category.lower() in categories
        or product.product_type.lower() in categories
    ):
        return False

    if filters.rooms and not set(product.rooms) & set(filters.rooms):
        return False

    if filters.styles and product.style not in filters.styles:
        return False

    for axis in DIMENSION_AXES:
        buckets = filters.buckets_for(axis)
        if buckets:
            value = product.dimensions.get(axis) if product.dimensions else None
            if not any(bucket.contains(value) for bucket in buckets):
                return False

    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:
        return False

    if filters.query and filters.query.strip():
        if not product_matches_query(product, filters.query):
            return False

    return True


def sort_products(products: Iterable[EnrichedProduct], sort_by: SortOption) -> list[EnrichedProduct]:
    """Sort products stably.

    Args:
        products: Products in catalog order.
        sort_by: Ordering.

    Returns:
        New sorted list.
    """
    if sort_by == SortOption.PRICE_LOW:
        return sorted(products, key=lambda p: p.price)
    if sort_by == SortOption.PRICE_HIGH:
        # reverse=True keeps equal prices in their original order
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_by == SortOption.NAME:
        return sorted(products, key=lambda p: p.title.casefold())
    return list(products)


def apply_filters(products: Sequence[EnrichedProduct], filters: ProductFilter) -> list[EnrichedProduct]:
    """Filter then sort a catalog.

    Args:
        products: Full catalog in ingestion order.
        filters: Filter and sort options.

    Returns:
        New list with the matching products in the requested order.
    """
    categories = {c.lower() for c in filters.categories}
    matched = [p for p in products if _matches(p, filters, categories)]
    return sort_products(matched, filters.sort_by)


# ============================================================================
# Facets
# ============================================================================


def available_categories(products: Iterable[EnrichedProduct]) -> list[str]:
    """Get the sorted canonical categories present in a catalog."""
    return sorted({p.normalized_category for p in products})


def available_rooms(products: Iterable[EnrichedProduct]) -> list[Room]:
    """Get the rooms present in a catalog, in vocabulary order."""
    present = {room for p in products for room in p.rooms}
    return [room for room in Room if room in present]


def available_styles(products: Iterable[EnrichedProduct]) -> list[Style]:
    """Get the styles present in a catalog, in vocabulary order."""
    present = {p.style for p in products if p.style is not None}
    return [style for style in Style if style in present]


def available_sizes(products: Iterable[EnrichedProduct]) -> list[Size]:
    """Get the size classes present in a catalog, in vocabulary order."""
    present = {size_from_dimensions(p.dimensions) for p in products}
    return [size for size in Size if size in present]


def available_dimension_ranges(products: Iterable[EnrichedProduct]) -> dict[str, list[DimensionRange]]:
    """Get the buckets holding at least one product, per axis.

    Args:
        products: Full catalog.

    Returns:
        Mapping of "width", "depth" and "height" to non-empty buckets.
    """
    values: dict[str, list[float]] = {axis: [] for axis in DIMENSION_AXES}
    for product in products:
        if product.dimensions is None:
            continue
        for axis in DIMENSION_AXES:
            value = product.dimensions.get(axis)
            if value is not None:
                values[axis].append(value)

    return {
        axis: [r for r in DIMENSION_RANGES if any(r.contains(v) for v in axis_values)]
        for axis, axis_values in values.items()
    }


def price_range(products: Sequence[EnrichedProduct]) -> PriceRange:
    """Get whole-dollar price bounds of a catalog.

    An empty catalog reports DEFAULT_PRICE_RANGE.
    """
    if not products:
        return DEFAULT_PRICE_RANGE
    prices = [p.price for p in products]
    return PriceRange(min=math.floor(min(prices)), max=math.ceil(max(prices)))


def has_active_filters(filters: ProductFilter, bounds: PriceRange) -> bool:
    """Check whether a filter narrows or reorders the catalog.

    Price bounds equal to the catalog's own bounds do not count.
    """
    return bool(
        filters.categories
        or filters.rooms
        or filters.styles
        or filters.widths
        or filters.depths
        or filters.heights
        or (filters.query and filters.query.strip())
        or (filters.min_price is not None and filters.min_price > bounds.min)
        or (filters.max_price is not None and filters.max_price < bounds.max)
        or filters.sort_by != SortOption.NEWEST
    )


def format_price(amount: float) -> str:
    """Format a dollar amount, e.g. 1234.5 -> "$1,234.50"."""
    return f"${amount:,.2f}"


# ============================================================================
# Service
# ============================================================================


@dataclass
class CatalogFacets:
    """Facet options derived from the full catalog."""

    categories: list[str] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    styles: list[Style] = field(default_factory=list)
    sizes: list[Size] = field(default_factory=list)
    dimension_ranges: dict[str, list[DimensionRange]] = field(default_factory=dict)
    price_range: PriceRange = DEFAULT_PRICE_RANGE


class CatalogService:
    """Service for catalog browsing.

    Combines repository access with filtering and facet derivation.

    Example usage:
        service = CatalogService(CatalogRepository.from_file(path))
        products = service.list_products(
            ProductFilter(categories=("Sofas",), sort_by=SortOption.PRICE_LOW)
        )
        facets = service.get_facets()
    """

    def __init__(self, repository: CatalogRepository) -> None:
        """Initialize service with a catalog repository.

        Args:
            repository: Catalog repository.
        """
        self.repository = repository

    def list_products(self, filters: ProductFilter | None = None) -> list[EnrichedProduct]:
        """Get the filtered and sorted view of the catalog.

        Args:
            filters: Filter parameters (None for the whole catalog).

        Returns:
            Matching products.
        """
        return apply_filters(self.repository.get_all(), filters or ProductFilter())

    def get_product(self, handle: str) -> EnrichedProduct | None:
        """Get product by handle."""
        return self.repository.get_by_handle(handle)

    def search(self, query: str | None, limit: int | None = None) -> list[EnrichedProduct]:
        """Search products, optionally truncating the result."""
        results = self.repository.search(query)
        return results if limit is None else results[:limit]

    def get_related(self, product: EnrichedProduct, limit: int = 4) -> list[EnrichedProduct]:
        """Get products related to a product."""
        return self.repository.get_related(product, limit)

    def get_facets(self) -> CatalogFacets:
        """Derive facet options from the full catalog.

        Returns:
            Facet options.
        """
        products = self.repository.get_all()
        return CatalogFacets(
            categories=available_categories(products),
            rooms=available_rooms(products),
            styles=available_styles(products),
            sizes=available_sizes(products),
            dimension_ranges=available_dimension_ranges(products),
            price_range=price_range(products),
        )
