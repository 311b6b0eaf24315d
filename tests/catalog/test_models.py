"""Tests for catalog models and their JSON shape."""

from collections.abc import Callable

import pytest
from pydantic import ValidationError

from sunbeam.catalog.models import Dimensions, EnrichedProduct, RawProduct


class TestEnrichedProductSerialization:
    """Tests for the enriched snapshot representation."""

    def test_camel_case_keys(self, catalog: list[EnrichedProduct]) -> None:
        """Snapshot keys are camelCase."""
        data = catalog[0].to_dict()
        assert data["productType"] == "Sofas & Loveseats"
        assert data["compareAtPrice"] == 1500.0
        assert data["normalizedCategory"] == "Sofas"
        assert data["isOnSale"] is True
        assert "product_type" not in data

    def test_enums_as_labels(self, catalog: list[EnrichedProduct]) -> None:
        """Vocabulary values are written as their display labels."""
        data = catalog[2].to_dict()
        assert data["rooms"] == ["Bedroom"]
        assert data["style"] == "Mid Century"
        assert data["condition"] == "As-Found"
        assert data["era"] == "1960s"

    def test_unknown_scalars_are_null(self, catalog: list[EnrichedProduct]) -> None:
        """Unknown scalar attributes are written as null."""
        data = catalog[2].to_dict()
        assert data["dimensions"] is None
        assert data["compareAtPrice"] is None
        assert catalog[3].to_dict()["condition"] is None

    def test_unknown_measurements_are_omitted(self, catalog: list[EnrichedProduct]) -> None:
        """Only known measurements appear in the dimensions object."""
        assert catalog[0].to_dict()["dimensions"] == {
            "width": 84.0,
            "depth": 36.0,
            "height": 30.0,
            "seatHeight": 17.0,
        }
        assert catalog[4].to_dict()["dimensions"] == {"diameter": 14.0}

    def test_snapshot_round_trip(self, catalog: list[EnrichedProduct]) -> None:
        """A snapshot record validates back into an equal product."""
        for product in catalog:
            assert EnrichedProduct.model_validate(product.to_dict()) == product

    def test_products_are_frozen(self, catalog: list[EnrichedProduct]) -> None:
        """Catalog records cannot be mutated."""
        with pytest.raises(ValidationError):
            catalog[0].price = 1.0  # type: ignore[misc]


class TestRawProduct:
    """Tests for raw record validation."""

    def test_snake_case_names_accepted(self) -> None:
        """Records can be built with Python field names."""
        raw = RawProduct(id=1, title="Lamp", handle="lamp", product_type="Floor Lamps")
        assert raw.product_type == "Floor Lamps"

    def test_empty_handle_rejected(self, raw_record: Callable[..., dict]) -> None:
        """A handle must not be empty."""
        with pytest.raises(ValidationError):
            RawProduct.model_validate(raw_record(handle=""))


class TestDimensions:
    """Tests for the dimensions model."""

    def test_get_by_axis(self) -> None:
        """Measurements are accessible by field name."""
        dimensions = Dimensions(width=30, diameter=12)
        assert dimensions.get("width") == 30
        assert dimensions.get("height") is None
        assert dimensions.get("unknown") is None

    def test_is_empty(self) -> None:
        """Dimensions with nothing known are empty."""
        assert Dimensions().is_empty()
        assert not Dimensions(seat_height=18).is_empty()
