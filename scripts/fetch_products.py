#!/usr/bin/env python3
"""Fetch raw products script.

Downloads the storefront's product listing and writes the raw product
snapshot consumed by enrich_catalog.py.

Usage:
    python scripts/fetch_products.py
    python scripts/fetch_products.py --max-products 50
    python scripts/fetch_products.py --output data/products.json
"""

import argparse
import asyncio
from pathlib import Path

import structlog

from sunbeam.catalog.repository import write_json_array
from sunbeam.infrastructure.config import get_settings
from sunbeam.infrastructure.log_config import configure_logging
from sunbeam.infrastructure.storefront_client import StorefrontClient

logger = structlog.get_logger()


async def main() -> None:
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings)

    parser = argparse.ArgumentParser(description="Fetch raw products from the storefront")
    parser.add_argument(
        "--max-products",
        type=int,
        default=None,
        help="Stop after this many products (default: all)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.raw_catalog_path,
        help=f"Raw snapshot path (default: {settings.raw_catalog_path})",
    )
    args = parser.parse_args()

    client = StorefrontClient.from_settings(settings)
    try:
        records = await client.fetch_raw_records(args.max_products)
    finally:
        await client.close()

    write_json_array(args.output, records)

    image_count = sum(len(r["images"]) for r in records)
    print("=" * 60)
    print(f"Products saved to: {args.output}")
    print(f"Total products: {len(records)}")
    print(f"Total images (CDN URLs): {image_count}")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
