#!/usr/bin/env python3
"""Enrich catalog script.

Reads the raw product snapshot, derives rooms, style, condition, era,
materials and dimensions for every product, writes the enriched
snapshot and prints coverage statistics.

Usage:
    python scripts/enrich_catalog.py
    python scripts/enrich_catalog.py --input data/products.json --output data/products-enhanced.json
"""

import argparse
import sys
from pathlib import Path

from sunbeam.catalog.enrichment import coverage_stats, enrich_file
from sunbeam.domain.exceptions import CatalogLoadError
from sunbeam.infrastructure.config import get_settings
from sunbeam.infrastructure.log_config import configure_logging


def _percent(count: int, total: int) -> str:
    return f"{round(count / total * 100)}%" if total else "0%"


def main() -> int:
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings)

    parser = argparse.ArgumentParser(description="Enrich the raw product snapshot")
    parser.add_argument("--input", type=Path, default=settings.raw_catalog_path)
    parser.add_argument("--output", type=Path, default=settings.catalog_path)
    args = parser.parse_args()

    try:
        report = enrich_file(args.input, args.output)
    except CatalogLoadError as e:
        print(f"  ✗ Error: {e.message}", file=sys.stderr)
        return 1

    stats = coverage_stats(report.products)
    total = stats["total"]

    print("=" * 60)
    print("Transformation Statistics")
    print("=" * 60)
    print(f"  Total products: {total}")
    print(f"  Skipped (malformed): {len(report.failures)}")
    for key, label in (
        ("with_rooms", "With rooms extracted"),
        ("with_style", "With style classified"),
        ("with_condition", "With condition parsed"),
        ("with_era", "With era identified"),
        ("with_materials", "With materials extracted"),
        ("with_dimensions", "With dimensions parsed"),
    ):
        print(f"  {label}: {stats[key]} ({_percent(stats[key], total)})")

    print()
    print(f"Normalized Categories ({len(stats['categories'])}):")
    for category in stats["categories"]:
        print(f"  - {category}")

    print()
    print(f"Enhanced products written to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
