"""Tests for query-string filter encoding."""

import pytest
from starlette.datastructures import QueryParams

from sunbeam.catalog.models import Room, SortOption, Style
from sunbeam.catalog.query_params import filter_from_query, filter_to_query
from sunbeam.catalog.service import ProductFilter
from sunbeam.domain.exceptions import InvalidFilterError


class TestFilterFromQuery:
    """Tests for decoding query parameters."""

    def test_full_query(self) -> None:
        """Every supported parameter is decoded."""
        filters = filter_from_query({
            "categories": "Sofas, Desks",
            "rooms": "Living Room,Office",
            "styles": "Mid Century",
            "width": "24-36,36-48",
            "depth": "0-24",
            "height": "72+",
            "minPrice": "100",
            "maxPrice": "899.99",
            "q": "walnut",
            "sort": "price-high",
        })
        assert filters.categories == ("Sofas", "Desks")
        assert filters.rooms == (Room.LIVING_ROOM, Room.OFFICE)
        assert filters.styles == (Style.MID_CENTURY,)
        assert filters.widths == ("24-36", "36-48")
        assert filters.depths == ("0-24",)
        assert filters.heights == ("72+",)
        assert filters.min_price == 100.0
        assert filters.max_price == 899.99
        assert filters.query == "walnut"
        assert filters.sort_by == SortOption.PRICE_HIGH

    def test_repeated_parameters_are_merged(self) -> None:
        """Repeated list parameters add to comma-separated ones."""
        params = QueryParams("rooms=Bedroom&rooms=Office,Dining%20Room&width=72%2B&q=walnut")
        filters = filter_from_query(params)
        assert filters.rooms == (Room.BEDROOM, Room.OFFICE, Room.DINING_ROOM)
        assert filters.widths == ("72+",)
        assert filters.query == "walnut"

    def test_query_text_is_kept_as_given(self) -> None:
        """Non-blank search text keeps its surrounding whitespace."""
        filters = filter_from_query({"q": " oak"})
        assert filters.query == " oak"
        assert filter_to_query(filters) == {"q": " oak"}

    def test_empty_query(self) -> None:
        """No parameters give the default filter."""
        assert filter_from_query({}) == ProductFilter()

    def test_blank_values_are_ignored(self) -> None:
        """Blank parameters do not constrain anything."""
        filters = filter_from_query({"categories": "", "minPrice": " ", "q": "  ", "sort": ""})
        assert filters == ProductFilter()

    def test_unknown_parameters_are_ignored(self) -> None:
        """Parameters outside the filter vocabulary are ignored."""
        assert filter_from_query({"utm_source": "newsletter"}) == ProductFilter()

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"minPrice": "cheap"}, "minPrice"),
            ({"maxPrice": "-5"}, "maxPrice"),
            ({"sort": "popular"}, "sort"),
            ({"rooms": "Garage"}, "rooms"),
            ({"height": "100-200"}, "heights"),
        ],
    )
    def test_invalid_values(self, params: dict[str, str], field: str) -> None:
        """Unusable values raise InvalidFilterError naming the parameter."""
        with pytest.raises(InvalidFilterError) as exc_info:
            filter_from_query(params)
        assert exc_info.value.details["field"] == field


class TestFilterToQuery:
    """Tests for encoding filters as query parameters."""

    def test_default_filter_is_empty(self) -> None:
        """Defaults are omitted."""
        assert filter_to_query(ProductFilter()) == {}

    def test_encodes_selections(self) -> None:
        """Selections are comma-joined labels."""
        filters = ProductFilter(
            rooms=[Room.LIVING_ROOM, Room.BEDROOM],
            widths=["72+"],
            min_price=100,
            max_price=899.5,
            sort_by=SortOption.NAME,
        )
        assert filter_to_query(filters) == {
            "rooms": "Living Room,Bedroom",
            "width": "72+",
            "minPrice": "100",
            "maxPrice": "899.5",
            "sort": "name",
        }

    def test_decodes_what_it_encodes(self) -> None:
        """Encoded filters decode to an equal filter."""
        filters = ProductFilter(
            categories=["Sofas"],
            styles=[Style.ART_DECO],
            depths=["24-36"],
            query="brass",
            sort_by=SortOption.PRICE_LOW,
        )
        assert filter_from_query(filter_to_query(filters)) == filters
