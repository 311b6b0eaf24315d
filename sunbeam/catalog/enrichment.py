"""Catalog enrichment pipeline.

Turns raw storefront records into enriched products by running the
text extractors and the category normalizer over each record.

Enrichment of a single record is a pure function. Batches isolate
failures per record: a structurally invalid record is logged, reported
and left out, and every other record is still enriched.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from sunbeam.catalog.extractors import (
    extract_condition,
    extract_dimensions,
    extract_era,
    extract_materials,
    extract_rooms,
    extract_style,
)
from sunbeam.catalog.models import EnrichedProduct, RawProduct
from sunbeam.catalog.repository import read_json_array, write_json_array
from sunbeam.catalog.taxonomy import normalize_category
from sunbeam.domain.exceptions import MalformedProductError

logger = structlog.get_logger()


@dataclass
class EnrichmentReport:
    """Outcome of enriching a batch.

    Attributes:
        products: Enriched products, in input order.
        failures: Records left out because they were malformed.
    """

    products: list[EnrichedProduct] = field(default_factory=list)
    failures: list[MalformedProductError] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of input records."""
        return len(self.products) + len(self.failures)


def enrich(raw: RawProduct) -> EnrichedProduct:
    """Derive the enriched attributes of a raw product.

    Args:
        raw: Validated raw product.

    Returns:
        Enriched product.
    """
    return EnrichedProduct(
        **raw.model_dump(include=set(RawProduct.model_fields)),
        normalized_category=normalize_category(raw.product_type),
        rooms=extract_rooms(raw.tags),
        style=extract_style(raw.vendor, raw.tags),
        condition=extract_condition(raw.description),
        era=extract_era(raw.description, raw.tags),
        materials=extract_materials(raw.description),
        dimensions=extract_dimensions(raw.description),
        is_sold=bool(raw.variants) and not any(v.available for v in raw.variants),
        is_on_sale=raw.compare_at_price is not None and raw.compare_at_price > raw.price,
    )


def parse_raw_product(record: Mapping[str, Any] | RawProduct, index: int | None = None) -> RawProduct:
    """Validate a raw record.

    Args:
        record: Decoded JSON record or an existing RawProduct.
        index: Position in the batch, used in the error.

    Returns:
        RawProduct.

    Raises:
        MalformedProductError: If the record lacks required fields or has
            wrongly typed ones.
    """
    if isinstance(record, RawProduct):
        return record
    if not isinstance(record, Mapping):
        raise MalformedProductError(index, None, f"expected an object, got {type(record).__name__}")

    try:
        return RawProduct.model_validate(record)
    except ValidationError as e:
        handle = record.get("handle") if isinstance(record.get("handle"), str) else None
        reason = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}"
            for error in e.errors()
        )
        raise MalformedProductError(index, handle, reason) from e


def enrich_record(record: Mapping[str, Any] | RawProduct, index: int | None = None) -> EnrichedProduct:
    """Validate and enrich one record.

    Raises:
        MalformedProductError: If the record is structurally invalid.
    """
    return enrich(parse_raw_product(record, index))


def enrich_batch(records: Iterable[Mapping[str, Any] | RawProduct]) -> EnrichmentReport:
    """Enrich a batch of records, isolating malformed ones.

    Args:
        records: Raw records in storefront order.

    Returns:
        Report with enriched products in input order and the failures.
    """
    report = EnrichmentReport()
    for index, record in enumerate(records):
        try:
            report.products.append(enrich_record(record, index))
        except MalformedProductError as e:
            logger.warning(
                "Skipping malformed product",
                index=index,
                handle=e.details.get("handle"),
                reason=e.details.get("reason"),
            )
            report.failures.append(e)

    logger.info(
        "Enrichment complete",
        total=report.total,
        enriched=len(report.products),
        skipped=len(report.failures),
    )
    return report


def enrich_all(records: Iterable[Mapping[str, Any] | RawProduct]) -> list[EnrichedProduct]:
    """Enrich a batch, returning only the enriched products.

    For structurally valid input the result has one product per record,
    in the same order.
    """
    return enrich_batch(records).products


def coverage_stats(products: list[EnrichedProduct]) -> dict[str, Any]:
    """Summarize how many products each extractor classified.

    Args:
        products: Enriched products.

    Returns:
        Counts per derived attribute and the sorted canonical categories.
    """
    return {
        "total": len(products),
        "with_rooms": sum(1 for p in products if p.rooms),
        "with_style": sum(1 for p in products if p.style is not None),
        "with_condition": sum(1 for p in products if p.condition is not None),
        "with_era": sum(1 for p in products if p.era is not None),
        "with_materials": sum(1 for p in products if p.materials),
        "with_dimensions": sum(1 for p in products if p.dimensions is not None),
        "categories": sorted({p.normalized_category for p in products}),
    }


def enrich_file(raw_path: str | Path, output_path: str | Path) -> EnrichmentReport:
    """Enrich a raw snapshot file into an enriched snapshot file.

    Args:
        raw_path: JSON array of raw records.
        output_path: Destination for the enriched JSON array.

    Returns:
        Enrichment report.
    """
    records = read_json_array(raw_path)
    logger.info("Read raw products", path=str(raw_path), count=len(records))

    report = enrich_batch(records)
    write_json_array(output_path, [p.to_dict() for p in report.products])
    logger.info("Wrote enriched products", path=str(output_path), count=len(report.products))
    return report

