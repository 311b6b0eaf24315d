"""Storefront HTTP client.

Fetches the raw product listing from a Shopify storefront's public
``/products.json`` endpoint page by page, and maps Shopify product
records to the raw product shape consumed by the enrichment pipeline.
"""

import asyncio
import html
import re
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse

import httpx
import structlog

from sunbeam.domain.exceptions import StorefrontError
from sunbeam.infrastructure.config import Settings

logger = structlog.get_logger()


# ============================================================================
# Record Mapping
# ============================================================================

_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_PARAGRAPH_END = re.compile(r"</p>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_BLANK_LINES = re.compile(r"\n{3,}")
_IMAGE_SIZE_SUFFIX = re.compile(r"(_\d+x\d+|_small|_medium|_large|_grande)")


def html_to_text(body_html: str | None) -> str:
    """Flatten product HTML to plain text.

    Line breaks and paragraph ends become newlines, tags are dropped and
    entities decoded. Runs of blank lines collapse to one.

    Args:
        body_html: Product body HTML.

    Returns:
        Plain text.
    """
    if not body_html:
        return ""
    text = _BREAK.sub("\n", body_html)
    text = _PARAGRAPH_END.sub("\n\n", text)
    text = _TAG.sub("", text)
    text = html.unescape(text).replace("\xa0", " ")
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def high_res_image_url(url: str) -> str:
    """Strip Shopify size suffixes to get the original image."""
    return _IMAGE_SIZE_SUFFIX.sub("", url)


def _parse_price(value: Any) -> float | None:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Unparseable price", value=value)
        return None


def _tags(value: Any) -> list[str]:
    # Older storefronts return tags as one comma-separated string
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return list(value or [])


def to_raw_record(data: dict[str, Any]) -> dict[str, Any]:
    """Map a Shopify product record to the raw product JSON shape.

    Price and compare-at price come from the first variant. Variant
    option1..option3 are keyed by the matching option definition names.
    The result is not validated here; the enrichment pipeline validates
    and isolates malformed records.

    Args:
        data: Shopify product JSON.

    Returns:
        Raw product record with camelCase keys.
    """
    handle = data.get("handle", "")
    options = data.get("options") or []

    images = []
    for position, image in enumerate(data.get("images") or [], start=1):
        original = high_res_image_url(image.get("src", ""))
        extension = PurePosixPath(urlparse(original).path).suffix or ".jpg"
        images.append({
            "original": original,
            "local": f"images/{handle}/{position}{extension}",
            "width": image.get("width") or 0,
            "height": image.get("height") or 0,
        })

    variants = []
    for variant in data.get("variants") or []:
        selections = {}
        for slot, option in enumerate(options[:3], start=1):
            value = variant.get(f"option{slot}")
            if value:
                selections[option.get("name", f"Option {slot}")] = value
        variants.append({
            "id": variant.get("id"),
            "title": variant.get("title", ""),
            "price": _parse_price(variant.get("price")) or 0.0,
            "sku": variant.get("sku") or "",
            "available": variant.get("available", True),
            "options": selections,
        })

    first_variant = (data.get("variants") or [{}])[0]
    return {
        "id": data.get("id"),
        "title": data.get("title"),
        "handle": handle,
        "description": html_to_text(data.get("body_html")),
        "vendor": data.get("vendor") or "",
        "productType": data.get("product_type") or "",
        "tags": _tags(data.get("tags")),
        "price": _parse_price(first_variant.get("price")) or 0.0,
        "compareAtPrice": _parse_price(first_variant.get("compare_at_price")),
        "images": images,
        "variants": variants,
        "options": [
            {"name": option.get("name", ""), "values": option.get("values") or []}
            for option in options
        ],
    }


# ============================================================================
# Storefront Client
# ============================================================================


class StorefrontClient:
    """HTTP client for a storefront's paginated product listing.

    Pages are requested until an empty or short page. Each page is
    retried a bounded number of times with linearly growing backoff,
    and a fixed delay separates consecutive pages.

    Example usage:
        client = StorefrontClient.from_settings(settings)
        try:
            products = await client.fetch_all()
        finally:
            await client.close()
    """

    def __init__(
        self,
        base_url: str,
        page_size: int = 250,
        page_delay: float = 0.5,
        retries: int = 3,
        backoff: float = 1.0,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize storefront client.

        Args:
            base_url: Storefront base URL.
            page_size: Products per page.
            page_delay: Seconds to wait between pages.
            retries: Attempts per page before giving up.
            backoff: Backoff unit; attempt n waits n * backoff seconds.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.page_delay = page_delay
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorefrontClient":
        """Create a client configured from settings."""
        return cls(
            base_url=settings.storefront_url,
            page_size=settings.page_size,
            page_delay=settings.page_delay_seconds,
            retries=settings.fetch_retries,
            backoff=settings.retry_backoff_seconds,
            timeout=settings.request_timeout_seconds,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_page(self, page: int) -> list[dict[str, Any]]:
        """Fetch one page of Shopify product records.

        Args:
            page: Page number (1-based).

        Returns:
            Product records on the page.

        Raises:
            StorefrontError: If every attempt fails.
        """
        client = await self._get_client()
        params = {"limit": self.page_size, "page": page}
        last_error = "no attempt made"
        status_code = None

        for attempt in range(1, self.retries + 1):
            try:
                response = await client.get("/products.json", params=params)
                response.raise_for_status()
                return list(response.json().get("products") or [])
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                last_error = f"HTTP {status_code}"
            except (httpx.RequestError, ValueError) as e:
                status_code = None
                last_error = str(e) or type(e).__name__

            if attempt < self.retries:
                logger.warning(
                    "Retrying storefront page",
                    page=page,
                    attempt=attempt,
                    error=last_error,
                )
                await asyncio.sleep(self.backoff * attempt)

        raise StorefrontError(
            f"{self.base_url}/products.json?page={page}",
            f"Failed after {self.retries} attempts: {last_error}",
            status_code=status_code,
        )

    async def fetch_all(self, max_products: int | None = None) -> list[dict[str, Any]]:
        """Fetch every page of the listing.

        Args:
            max_products: Optional cap on the number of products.

        Returns:
            Product records in page order.
        """
        products: list[dict[str, Any]] = []
        page = 1

        while True:
            batch = await self.fetch_page(page)
            if not batch:
                break

            products.extend(batch)
            logger.info("Fetched storefront page", page=page, total=len(products))

            if len(batch) < self.page_size:
                break
            if max_products is not None and len(products) >= max_products:
                break

            page += 1
            await asyncio.sleep(self.page_delay)

        if max_products is not None:
            products = products[:max_products]
        return products

    async def fetch_raw_records(self, max_products: int | None = None) -> list[dict[str, Any]]:
        """Fetch the listing and map it to raw product records."""
        return [to_raw_record(record) for record in await self.fetch_all(max_products)]
