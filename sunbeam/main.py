"""Sunbeam catalog API main application module.

This module builds the FastAPI application, wires the catalog repository
into request handling and configures middleware and error handlers.

Run with:
    uvicorn sunbeam.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sunbeam.api.health import router as health_router
from sunbeam.api.middleware import setup_middleware
from sunbeam.api.products import router as products_router
from sunbeam.catalog.repository import CatalogRepository
from sunbeam.domain.exceptions import (
    DomainError,
    InvalidFilterError,
    ProductNotFoundError,
)
from sunbeam.infrastructure.config import Settings, get_settings
from sunbeam.infrastructure.log_config import configure_logging

logger = structlog.get_logger()

_ERROR_STATUS = {
    ProductNotFoundError: 404,
    InvalidFilterError: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Loads the catalog snapshot unless a repository was injected.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting Sunbeam catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    if getattr(app.state, "catalog", None) is None:
        app.state.catalog = CatalogRepository.from_file(settings.catalog_path)

    logger.info("Catalog ready", product_count=len(app.state.catalog))

    yield

    logger.info("Shutting down Sunbeam catalog API")


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render domain errors in the standard error format."""
    status_code = next(
        (code for error_type, code in _ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def create_app(
    repository: CatalogRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        repository: Catalog to serve. Loaded from settings.catalog_path at
            startup when omitted.
        settings: Application settings (read from the environment when omitted).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Sunbeam Catalog API",
        description="Enriched vintage furniture catalog",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.catalog = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    setup_middleware(app)

    app.add_exception_handler(DomainError, domain_error_handler)

    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router)
    return app


app = create_app()
