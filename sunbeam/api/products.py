"""Product API endpoints.

Read-only browsing of the enriched catalog: filtered listing, facets,
search, lookup by handle and related products.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from sunbeam.api.schemas import ErrorResponse, FacetsResponse, ProductListResponse
from sunbeam.catalog.models import EnrichedProduct
from sunbeam.catalog.query_params import filter_from_query
from sunbeam.catalog.repository import CatalogRepository
from sunbeam.catalog.service import CatalogService
from sunbeam.domain.exceptions import ProductNotFoundError

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(request: Request) -> CatalogService:
    """Get catalog service over the application's catalog."""
    repository: CatalogRepository = request.app.state.catalog
    return CatalogService(repository)


def get_product_or_404(handle: str, service: CatalogService) -> EnrichedProduct:
    """Look up a product, raising ProductNotFoundError when absent."""
    product = service.get_product(handle)
    if product is None:
        raise ProductNotFoundError(handle)
    return product


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductListResponse,
    responses={422: {"model": ErrorResponse}},
    summary="List products",
    description=(
        "Filter and sort the catalog. Accepts categories, rooms, styles, "
        "width, depth, height (comma-separated), minPrice, maxPrice, q and sort."
    ),
)
async def list_products(
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductListResponse:
    """List products matching the query-string filter.

    Raises:
        InvalidFilterError: If a filter value is not recognized.
    """
    filters = filter_from_query(request.query_params)
    items = service.list_products(filters)
    return ProductListResponse(items=items, total=len(items))


@router.get("/facets", response_model=FacetsResponse, summary="Get facet options")
async def get_facets(
    service: Annotated[CatalogService, Depends(get_service)],
) -> FacetsResponse:
    """Get the filter options available in the full catalog."""
    return FacetsResponse.from_facets(service.get_facets())


@router.get("/search", response_model=ProductListResponse, summary="Search products")
async def search_products(
    service: Annotated[CatalogService, Depends(get_service)],
    q: Annotated[str, Query(description="Search text")] = "",
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> ProductListResponse:
    """Search title, description, tags, materials, category and vendor."""
    items = service.search(q, limit=limit)
    return ProductListResponse(items=items, total=len(items))


@router.get(
    "/{handle}",
    response_model=EnrichedProduct,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    handle: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> EnrichedProduct:
    """Get a product by handle.

    Raises:
        ProductNotFoundError: If no product has the handle.
    """
    return get_product_or_404(handle, service)


@router.get(
    "/{handle}/related",
    response_model=ProductListResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get related products",
)
async def get_related_products(
    handle: str,
    service: Annotated[CatalogService, Depends(get_service)],
    limit: Annotated[int, Query(ge=1, le=24)] = 4,
) -> ProductListResponse:
    """Get products sharing category, product type, a tag or style."""
    product = get_product_or_404(handle, service)
    items = service.get_related(product, limit)
    return ProductListResponse(items=items, total=len(items))
