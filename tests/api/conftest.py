"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from sunbeam.catalog.repository import CatalogRepository
from sunbeam.infrastructure.config import Settings
from sunbeam.main import create_app


@pytest.fixture
def settings() -> Settings:
    """Create settings with console logging."""
    return Settings(log_json=False, api_version="9.9.9")


@pytest.fixture
def client(repository: CatalogRepository, settings: Settings) -> TestClient:
    """Create test client serving the sample catalog."""
    return TestClient(create_app(repository=repository, settings=settings))


@pytest.fixture
def empty_client(settings: Settings) -> TestClient:
    """Create test client serving an empty catalog."""
    return TestClient(create_app(repository=CatalogRepository(), settings=settings))
