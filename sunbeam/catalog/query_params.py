"""Query-string encoding of ProductFilter.

Maps filter state to and from URL query parameters so browse pages
can be linked and bookmarked:

    ?categories=Sofas,Desks&rooms=Living%20Room&width=24-36,36-48
     &minPrice=100&maxPrice=900&sort=price-low&q=walnut

Parameters holding defaults are omitted when encoding.
"""

from collections.abc import Mapping

from sunbeam.catalog.models import SortOption
from sunbeam.catalog.service import ProductFilter
from sunbeam.domain.exceptions import InvalidFilterError

_LIST_PARAMS = {
    "categories": "categories",
    "rooms": "rooms",
    "styles": "styles",
    "width": "widths",
    "depth": "depths",
    "height": "heights",
}


def _split(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _list_param(params: Mapping[str, str], name: str) -> tuple[str, ...]:
    # Repeated parameters (?rooms=A&rooms=B) are merged with comma lists
    raw = params.getlist(name) if hasattr(params, "getlist") else [params.get(name)]
    return tuple(part for value in raw if value for part in _split(value))


def _parse_price(name: str, value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        price = float(value)
    except ValueError as e:
        raise InvalidFilterError(name, value, "Not a number") from e
    if price < 0:
        raise InvalidFilterError(name, value, "Price must not be negative")
    return price


def filter_from_query(params: Mapping[str, str]) -> ProductFilter:
    """Build a filter from query parameters.

    Args:
        params: Query parameters (unknown names are ignored). List
            parameters take comma-separated values and may be repeated
            when params has a getlist method, as starlette QueryParams do.

    Returns:
        ProductFilter.

    Raises:
        InvalidFilterError: If a value is not a known room, style, bucket,
            sort option or number.
    """
    values: dict = {}
    for name, attr in _LIST_PARAMS.items():
        selected = _list_param(params, name)
        if selected:
            values[attr] = selected

    values["min_price"] = _parse_price("minPrice", params.get("minPrice"))
    values["max_price"] = _parse_price("maxPrice", params.get("maxPrice"))

    query = params.get("q")
    if query and query.strip():
        values["query"] = query

    sort = params.get("sort")
    if sort:
        try:
            values["sort_by"] = SortOption(sort)
        except ValueError as e:
            raise InvalidFilterError("sort", sort) from e

    return ProductFilter(**values)


def _format_price(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def filter_to_query(filters: ProductFilter) -> dict[str, str]:
    """Encode a filter as query parameters.

    Args:
        filters: Filter to encode.

    Returns:
        Parameters for the non-default parts of the filter.
    """
    params: dict[str, str] = {}
    for name, attr in _LIST_PARAMS.items():
        selected = getattr(filters, attr)
        if selected:
            params[name] = ",".join(str(getattr(v, "value", v)) for v in selected)

    if filters.min_price is not None:
        params["minPrice"] = _format_price(filters.min_price)
    if filters.max_price is not None:
        params["maxPrice"] = _format_price(filters.max_price)
    if filters.query and filters.query.strip():
        params["q"] = filters.query
    if filters.sort_by != SortOption.NEWEST:
        params["sort"] = filters.sort_by.value
    return params
