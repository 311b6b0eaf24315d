"""Domain exceptions.

Errors raised for structurally invalid input: malformed records,
unreadable snapshots, unparseable filter values, and upstream failures.
A description that fails to match an extraction pattern is never an
error; extractors return None or an empty result instead.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Catalog Errors
# ============================================================================


class MalformedProductError(DomainError):
    """Raised when a raw record does not have the product shape."""

    error_code = "MALFORMED_PRODUCT"

    def __init__(self, index: int | None, handle: str | None, reason: str) -> None:
        """Initialize malformed product error.

        Args:
            index: Position of the record in its batch, if known.
            handle: Record handle, if it had one.
            reason: Validation failure summary.
        """
        where = f"#{index}" if index is not None else "record"
        if handle:
            where = f"{where} ({handle})"
        super().__init__(
            f"Malformed product {where}: {reason}",
            details={"index": index, "handle": handle, "reason": reason},
        )


class ProductNotFoundError(DomainError):
    """Raised at the HTTP boundary when a handle is unknown."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, handle: str) -> None:
        """Initialize product not found error.

        Args:
            handle: Requested handle.
        """
        super().__init__(
            f"Product '{handle}' not found",
            details={"handle": handle},
        )


class CatalogLoadError(DomainError):
    """Raised when a catalog snapshot cannot be read."""

    error_code = "CATALOG_LOAD_ERROR"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Cannot load catalog from {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InvalidFilterError(DomainError):
    """Raised when a filter parameter has an unusable value."""

    error_code = "INVALID_FILTER"

    def __init__(self, field: str, value: Any, reason: str = "Unsupported value") -> None:
        """Initialize invalid filter error.

        Args:
            field: Filter parameter name.
            value: Offending value.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid value {value!r} for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


# ============================================================================
# Upstream Errors
# ============================================================================


class StorefrontError(DomainError):
    """Raised when the storefront cannot be fetched after retries."""

    error_code = "STOREFRONT_ERROR"

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(
            f"[{url}] {message}",
            details={"url": url, "status_code": status_code},
        )
