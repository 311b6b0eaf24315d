"""In-memory catalog repository.

Holds the enriched catalog for the lifetime of the process and answers
lookups, searches and related-item queries. The catalog is an immutable
snapshot: re-ingestion builds a complete new snapshot and swaps it in
with a single assignment, so readers see either the old or the new
catalog, never a mix.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from sunbeam.catalog.models import EnrichedProduct
from sunbeam.domain.exceptions import CatalogLoadError

logger = structlog.get_logger()


# ============================================================================
# Snapshot I/O
# ============================================================================


def read_json_array(path: str | Path) -> list[Any]:
    """Read a JSON document that must be an array.

    Args:
        path: File path.

    Returns:
        Decoded array.

    Raises:
        CatalogLoadError: If the file is missing, not JSON, or not an array.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(str(path), "file not found") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(str(path), f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, list):
        raise CatalogLoadError(str(path), f"expected a JSON array, got {type(data).__name__}")
    return data


def write_json_array(path: str | Path, items: list[Any]) -> None:
    """Write items as an indented UTF-8 JSON array.

    The file is written next to its destination and renamed into place.

    Args:
        path: Destination path.
        items: JSON-serializable items.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    tmp_path.replace(path)


# ============================================================================
# Matching
# ============================================================================


def product_matches_query(product: EnrichedProduct, query: str) -> bool:
    """Check whether any searchable field contains the query.

    Searches title, description, tags, materials, canonical category,
    product type and vendor, case-insensitively.

    Args:
        product: Product to test.
        query: Non-empty search text.

    Returns:
        True on a substring match in any field.
    """
    needle = query.lower()
    fields = (
        product.title,
        product.description,
        product.normalized_category,
        product.product_type,
        product.vendor,
        *product.tags,
        *product.materials,
    )
    return any(needle in value.lower() for value in fields if value)


def is_related(candidate: EnrichedProduct, product: EnrichedProduct) -> bool:
    """Check whether a candidate counts as related to a product.

    Related means same canonical category, same product type, a shared
    tag, or the same style.
    """
    if candidate.id == product.id:
        return False
    if candidate.normalized_category == product.normalized_category:
        return True
    if candidate.product_type and candidate.product_type == product.product_type:
        return True
    if set(candidate.tags) & set(product.tags):
        return True
    return product.style is not None and candidate.style == product.style


# ============================================================================
# Repository
# ============================================================================


class CatalogSnapshot:
    """Immutable catalog contents with a handle index.

    Handles must be unique; a repeated handle keeps its first product
    and the later duplicates are dropped.
    """

    def __init__(self, products: Iterable[EnrichedProduct] = ()) -> None:
        items: list[EnrichedProduct] = []
        by_handle: dict[str, EnrichedProduct] = {}
        for product in products:
            if product.handle in by_handle:
                logger.warning(
                    "Dropping product with duplicate handle",
                    handle=product.handle,
                    product_id=product.id,
                )
                continue
            by_handle[product.handle] = product
            items.append(product)

        self.products: tuple[EnrichedProduct, ...] = tuple(items)
        self.by_handle: dict[str, EnrichedProduct] = by_handle


class CatalogRepository:
    """Read-only access to the enriched catalog.

    Example usage:
        repo = CatalogRepository.from_file("data/products-enhanced.json")
        product = repo.get_by_handle("walnut-credenza")
        if product is not None:
            related = repo.get_related(product, limit=4)
    """

    def __init__(self, products: Iterable[EnrichedProduct] = ()) -> None:
        """Initialize repository with a catalog.

        Args:
            products: Enriched products in ingestion order (newest first).
        """
        self._snapshot = CatalogSnapshot(products)

    @classmethod
    def from_file(cls, path: str | Path) -> "CatalogRepository":
        """Create a repository from an enriched snapshot file."""
        repository = cls()
        repository.load(path)
        return repository

    def __len__(self) -> int:
        return len(self._snapshot.products)

    # ------------------------------------------------------------------
    # Snapshot lifecycle
    # ------------------------------------------------------------------

    def replace(self, products: Iterable[EnrichedProduct]) -> None:
        """Swap in a new catalog.

        The new snapshot is fully built before it becomes visible.

        Args:
            products: Enriched products in ingestion order.
        """
        snapshot = CatalogSnapshot(products)
        self._snapshot = snapshot
        logger.info("Catalog replaced", product_count=len(snapshot.products))

    def load(self, path: str | Path) -> None:
        """Load an enriched snapshot file and swap it in.

        Args:
            path: JSON array of enriched products.

        Raises:
            CatalogLoadError: If the file or any record in it is invalid.
        """
        records = read_json_array(path)
        products = []
        for index, record in enumerate(records):
            try:
                products.append(EnrichedProduct.model_validate(record))
            except ValidationError as e:
                raise CatalogLoadError(
                    str(path), f"record #{index} is not an enriched product ({e.error_count()} errors)"
                ) from e
        self.replace(products)
        logger.info("Catalog loaded", path=str(path))

    def save(self, path: str | Path) -> None:
        """Write the current catalog as an enriched snapshot file."""
        write_json_array(path, [p.to_dict() for p in self._snapshot.products])
        logger.info("Catalog saved", path=str(path), product_count=len(self))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> list[EnrichedProduct]:
        """Get all products in ingestion order.

        Returns:
            List of all products.
        """
        return list(self._snapshot.products)

    def get_by_handle(self, handle: str) -> EnrichedProduct | None:
        """Get product by handle.

        Args:
            handle: Product handle.

        Returns:
            Product if found, None otherwise.
        """
        return self._snapshot.by_handle.get(handle)

    def search(self, query: str | None) -> list[EnrichedProduct]:
        """Search products by substring (case-insensitive).

        A blank query matches nothing. Other queries are matched as given,
        surrounding whitespace included.

        Args:
            query: Search text.

        Returns:
            Matching products in catalog order.
        """
        if not query or not query.strip():
            return []
        return [p for p in self._snapshot.products if product_matches_query(p, query)]

    def get_related(self, product: EnrichedProduct, limit: int = 4) -> list[EnrichedProduct]:
        """Get products related to a product.

        Args:
            product: Reference product (excluded from the result).
            limit: Maximum results.

        Returns:
            The first related products in catalog order.
        """
        if limit <= 0:
            return []

        related = []
        for candidate in self._snapshot.products:
            if is_related(candidate, product):
                related.append(candidate)
                if len(related) >= limit:
                    break
        return related

    def get_by_category(self, category: str) -> list[EnrichedProduct]:
        """Get products whose product type or a tag equals the category.

        Args:
            category: Category name (case-insensitive).

        Returns:
            Matching products.
        """
        wanted = category.lower()
        return [
            p
            for p in self._snapshot.products
            if p.product_type.lower() == wanted
            or p.normalized_category.lower() == wanted
            or any(tag.lower() == wanted for tag in p.tags)
        ]

    def get_by_vendor(self, vendor: str) -> list[EnrichedProduct]:
        """Get products from a vendor (case-insensitive)."""
        wanted = vendor.lower()
        return [p for p in self._snapshot.products if p.vendor.lower() == wanted]

    def unique_categories(self) -> list[str]:
        """Get sorted product types present in the catalog."""
        return sorted({p.product_type for p in self._snapshot.products if p.product_type})

    def unique_vendors(self) -> list[str]:
        """Get sorted vendors present in the catalog."""
        return sorted({p.vendor for p in self._snapshot.products if p.vendor})
