"""Health check endpoints.

``/health`` answers as long as the process is up; ``/ready`` reports
whether a catalog is being served and how large it is.
"""

from fastapi import APIRouter, Request

from sunbeam.api.schemas import HealthResponse, ReadinessResponse
from sunbeam.catalog.repository import CatalogRepository

SERVICE_NAME = "sunbeam-catalog"

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report liveness with the service name and version."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=request.app.state.settings.api_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Report the size of the catalog snapshot being served.

    Returns:
        Readiness status, product count and vendor count.
    """
    catalog: CatalogRepository = request.app.state.catalog
    return ReadinessResponse(
        status="ready",
        product_count=len(catalog),
        vendor_count=len(catalog.unique_vendors()),
    )
