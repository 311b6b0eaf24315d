"""Product Catalog.

Enriches raw storefront products with attributes extracted from their
text, and serves the enriched catalog through lookup, search and
faceted filtering.
"""

from sunbeam.catalog.enrichment import EnrichmentReport, enrich, enrich_all, enrich_batch
from sunbeam.catalog.models import (
    Condition,
    Dimensions,
    EnrichedProduct,
    Era,
    RawProduct,
    Room,
    Size,
    SortOption,
    Style,
)
from sunbeam.catalog.repository import CatalogRepository
from sunbeam.catalog.service import (
    CatalogFacets,
    CatalogService,
    DimensionRange,
    PriceRange,
    ProductFilter,
    apply_filters,
)
from sunbeam.catalog.taxonomy import normalize_category

__all__ = [
    # Models
    "Condition",
    "Dimensions",
    "EnrichedProduct",
    "Era",
    "RawProduct",
    "Room",
    "Size",
    "SortOption",
    "Style",
    # Taxonomy
    "normalize_category",
    # Enrichment
    "EnrichmentReport",
    "enrich",
    "enrich_all",
    "enrich_batch",
    # Repository
    "CatalogRepository",
    # Service
    "CatalogFacets",
    "CatalogService",
    "DimensionRange",
    "PriceRange",
    "ProductFilter",
    "apply_filters",
]
