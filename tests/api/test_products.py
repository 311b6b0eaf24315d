"""Tests for product API endpoints."""

from fastapi.testclient import TestClient


def handles(response) -> list[str]:
    return [item["handle"] for item in response.json()["items"]]


class TestListProducts:
    """Tests for GET /products."""

    def test_whole_catalog(self, client: TestClient) -> None:
        """Without filters the whole catalog is listed newest first."""
        response = client.get("/products")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert data["items"][0]["handle"] == "walnut-frame-sofa"

    def test_items_use_snapshot_shape(self, client: TestClient) -> None:
        """Products are returned with camelCase keys."""
        item = client.get("/products").json()["items"][0]
        assert item["normalizedCategory"] == "Sofas"
        assert item["compareAtPrice"] == 1500.0
        assert item["dimensions"]["seatHeight"] == 17.0
        assert item["isOnSale"] is True

    def test_filters_and_sort(self, client: TestClient) -> None:
        """Query parameters filter and sort the list."""
        response = client.get(
            "/products",
            params={"categories": "Sofas", "rooms": "Living Room", "sort": "price-low"},
        )
        assert response.status_code == 200
        assert handles(response) == ["velvet-sofa", "walnut-frame-sofa"]

    def test_dimension_and_price_filters(self, client: TestClient) -> None:
        """Bucket and price parameters combine with AND."""
        response = client.get("/products", params={"width": "48-60,72+", "maxPrice": "900"})
        assert handles(response) == ["velvet-sofa", "oak-writing-desk"]

    def test_repeated_list_parameters(self, client: TestClient) -> None:
        """Repeating a list parameter selects every given value."""
        response = client.get("/products?categories=Sofas&rooms=Bedroom&rooms=Office")
        assert response.status_code == 200
        assert handles(response) == ["leather-daybed-sofa"]

    def test_search_parameter(self, client: TestClient) -> None:
        """The q parameter narrows by search text."""
        response = client.get("/products", params={"q": "brass"})
        assert handles(response) == ["brass-floor-lamp"]

    def test_invalid_filter(self, client: TestClient) -> None:
        """Unknown filter values are rejected with 422."""
        response = client.get("/products", params={"rooms": "Garage"})
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "INVALID_FILTER"
        assert data["details"]["field"] == "rooms"

    def test_invalid_price(self, client: TestClient) -> None:
        """Non-numeric prices are rejected with 422."""
        response = client.get("/products", params={"minPrice": "cheap"})
        assert response.status_code == 422
        assert response.json()["details"]["field"] == "minPrice"

    def test_invalid_sort(self, client: TestClient) -> None:
        """Unknown sort options are rejected with 422."""
        response = client.get("/products", params={"sort": "popular"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_FILTER"


class TestFacets:
    """Tests for GET /products/facets."""

    def test_facets(self, client: TestClient) -> None:
        """Facets describe the whole catalog."""
        response = client.get("/products/facets", params={"categories": "Desks"})
        assert response.status_code == 200
        data = response.json()
        assert data["categories"] == ["Desks", "Floor Lamps", "Sofas"]
        assert data["rooms"] == ["Living Room", "Bedroom", "Office"]
        assert data["styles"] == ["Vintage", "Modern", "Mid Century", "Industrial"]
        assert data["sizes"] == ["Small", "Large", "Extra Large"]
        assert [r["key"] for r in data["dimension_ranges"]["width"]] == ["48-60", "72+"]
        assert data["dimension_ranges"]["width"][1]["max"] is None
        assert data["price_range"] == {"min": 150, "max": 1200}

    def test_empty_catalog(self, empty_client: TestClient) -> None:
        """An empty catalog has no options and default price bounds."""
        data = empty_client.get("/products/facets").json()
        assert data["categories"] == []
        assert data["price_range"] == {"min": 0, "max": 10000}


class TestSearch:
    """Tests for GET /products/search."""

    def test_search(self, client: TestClient) -> None:
        """Search is case-insensitive."""
        response = client.get("/products/search", params={"q": "SOFA"})
        assert response.status_code == 200
        assert handles(response) == ["walnut-frame-sofa", "velvet-sofa", "leather-daybed-sofa"]

    def test_limit(self, client: TestClient) -> None:
        """Results can be capped."""
        response = client.get("/products/search", params={"q": "sofa", "limit": 1})
        assert response.json()["total"] == 1

    def test_blank_query(self, client: TestClient) -> None:
        """A blank query finds nothing."""
        response = client.get("/products/search")
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}


class TestGetProduct:
    """Tests for GET /products/{handle}."""

    def test_get_product(self, client: TestClient) -> None:
        """Products are looked up by handle."""
        response = client.get("/products/leather-daybed-sofa")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 3
        assert data["style"] == "Mid Century"
        assert data["condition"] == "As-Found"
        assert data["era"] == "1960s"
        assert data["dimensions"] is None

    def test_not_found(self, client: TestClient) -> None:
        """Unknown handles give 404 in the standard error format."""
        response = client.get("/products/no-such-thing")
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "PRODUCT_NOT_FOUND"
        assert data["details"] == {"handle": "no-such-thing"}


class TestRelatedProducts:
    """Tests for GET /products/{handle}/related."""

    def test_related(self, client: TestClient) -> None:
        """Related products exclude the product itself."""
        response = client.get("/products/walnut-frame-sofa/related")
        assert response.status_code == 200
        assert handles(response) == ["velvet-sofa", "leather-daybed-sofa", "brass-floor-lamp"]

    def test_related_limit(self, client: TestClient) -> None:
        """The limit parameter caps the result."""
        response = client.get("/products/walnut-frame-sofa/related", params={"limit": 1})
        assert handles(response) == ["velvet-sofa"]

    def test_related_unknown_product(self, client: TestClient) -> None:
        """Related products of an unknown handle give 404."""
        response = client.get("/products/no-such-thing/related")
        assert response.status_code == 404
