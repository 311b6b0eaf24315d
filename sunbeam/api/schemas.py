"""API schemas for the catalog API.

Pydantic models for response serialization. Products are returned in the
same camelCase shape as the enriched snapshot.
"""

from pydantic import BaseModel, Field

from sunbeam.catalog.models import EnrichedProduct, Room, Size, Style
from sunbeam.catalog.service import CatalogFacets, DimensionRange


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


class HealthResponse(BaseModel):
    """Liveness status."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness status with catalog size."""

    status: str
    product_count: int
    vendor_count: int


# ============================================================================
# Product Schemas
# ============================================================================


class ProductListResponse(BaseModel):
    """Filtered product list."""

    items: list[EnrichedProduct] = Field(..., description="Matching products")
    total: int = Field(..., description="Number of matching products")


class DimensionRangeSchema(BaseModel):
    """Size bucket offered as a filter option."""

    key: str
    label: str
    min: float
    max: float | None = None

    @classmethod
    def from_range(cls, dimension_range: DimensionRange) -> "DimensionRangeSchema":
        """Create from a DimensionRange."""
        return cls(
            key=dimension_range.key,
            label=dimension_range.label,
            min=dimension_range.min,
            max=dimension_range.max,
        )


class PriceRangeSchema(BaseModel):
    """Catalog price bounds."""

    min: int
    max: int


class FacetsResponse(BaseModel):
    """Facet options derived from the full catalog."""

    categories: list[str]
    rooms: list[Room]
    styles: list[Style]
    sizes: list[Size]
    dimension_ranges: dict[str, list[DimensionRangeSchema]]
    price_range: PriceRangeSchema

    @classmethod
    def from_facets(cls, facets: CatalogFacets) -> "FacetsResponse":
        """Create from CatalogFacets."""
        return cls(
            categories=facets.categories,
            rooms=facets.rooms,
            styles=facets.styles,
            sizes=facets.sizes,
            dimension_ranges={
                axis: [DimensionRangeSchema.from_range(r) for r in ranges]
                for axis, ranges in facets.dimension_ranges.items()
            },
            price_range=PriceRangeSchema(
                min=facets.price_range.min,
                max=facets.price_range.max,
            ),
        )
