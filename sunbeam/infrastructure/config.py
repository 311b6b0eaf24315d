"""Application configuration.

Loads settings from environment variables (prefixed ``SUNBEAM_``) with
sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Storefront
    storefront_url: str = "https://sunbeamvintage.com"
    page_size: int = Field(default=250, ge=1, le=250)
    page_delay_seconds: float = Field(default=0.5, ge=0)
    fetch_retries: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = Field(default=1.0, ge=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Snapshots
    raw_catalog_path: Path = Path("data/products.json")
    catalog_path: Path = Path("data/products-enhanced.json")

    model_config = SettingsConfigDict(
        env_prefix="SUNBEAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
