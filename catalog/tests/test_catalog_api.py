import pytest
from catalog.tests.factories import ProductFactory
from django.db import DatabaseError
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_products_list_default_page_shape():
    products = [ProductFactory(price_cents=100 * (i + 1)) for i in range(12)]
    client = APIClient()

    resp = client.get("/api/products")
    assert resp.status_code == 200
    assert resp.data["page"] == 1
    assert resp.data["limit"] == 10
    assert resp.data["total"] == 12
    assert resp.data["pages"] == 2
    assert [p["id"] for p in resp.data["data"]] == [p.id for p in products[:10]]
    assert set(resp.data["data"][0].keys()) == {
        "id",
        "name",
        "description",
        "price_cents",
        "image_url",
        "created_at",
        "updated_at",
    }


@pytest.mark.django_db
def test_products_second_page_and_out_of_range_page():
    products = [ProductFactory() for _ in range(12)]
    client = APIClient()

    resp = client.get("/api/products?page=2")
    assert [p["id"] for p in resp.data["data"]] == [p.id for p in products[10:]]

    resp_far = client.get("/api/products?page=99")
    assert resp_far.status_code == 200
    assert resp_far.data["data"] == []
    assert resp_far.data["total"] == 12
    assert resp_far.data["page"] == 99


@pytest.mark.django_db
@pytest.mark.parametrize(
    "query,expected_page,expected_limit",
    [
        ("page=0&limit=0", 1, 1),
        ("page=-3&limit=500", 1, 50),
        ("page=abc&limit=xyz", 1, 10),
        ("limit=3", 1, 3),
    ],
)
def test_products_page_and_limit_are_clamped(query, expected_page, expected_limit):
    ProductFactory.create_batch(3)
    resp = APIClient().get(f"/api/products?{query}")
    assert resp.status_code == 200
    assert resp.data["page"] == expected_page
    assert resp.data["limit"] == expected_limit


@pytest.mark.django_db
def test_products_empty_catalog_reports_one_page():
    resp = APIClient().get("/api/products")
    assert resp.data == {"page": 1, "limit": 10, "total": 0, "pages": 1, "data": []}


@pytest.mark.django_db
def test_products_search_matches_name_or_description_case_insensitively():
    mic = ProductFactory(name="Condenser Microphone", description="Vocals")
    cable = ProductFactory(name="HDMI Cable", description="Fits any MICROPHONE stand")
    ProductFactory(name="Headphones", description="Closed back")

    resp = APIClient().get("/api/products?q=microphone")
    assert {p["id"] for p in resp.data["data"]} == {mic.id, cable.id}
    assert resp.data["total"] == 2


@pytest.mark.django_db
def test_products_price_bounds_are_inclusive():
    cheap = ProductFactory(price_cents=500)
    mid = ProductFactory(price_cents=1000)
    ProductFactory(price_cents=1500)

    resp = APIClient().get("/api/products?min=500&max=1000")
    assert [p["id"] for p in resp.data["data"]] == [cheap.id, mid.id]


@pytest.mark.django_db
def test_products_invalid_price_bound_is_rejected():
    resp = APIClient().get("/api/products?min=cheap")
    assert resp.status_code == 400
    assert resp.data["kind"] == "invalid_argument"
    assert "min" in resp.data["errors"]


@pytest.mark.django_db
def test_product_detail_and_not_found():
    product = ProductFactory(name="Studio Monitor Speakers", price_cents=29999)
    client = APIClient()

    resp = client.get(f"/api/products/{product.id}")
    assert resp.status_code == 200
    assert resp.data["name"] == "Studio Monitor Speakers"
    assert resp.data["price_cents"] == 29999

    missing = client.get(f"/api/products/{product.id + 1000}")
    assert missing.status_code == 404
    assert missing.data == {"kind": "not_found", "detail": "product not found"}


@pytest.mark.django_db
@pytest.mark.parametrize("product_id", ["abc", "0", "-3", "1.5", "99999999999999999999"])
def test_product_detail_with_malformed_id_is_invalid_argument(product_id):
    resp = APIClient().get(f"/api/products/{product_id}")
    assert resp.status_code == 400
    assert resp.data == {"kind": "invalid_argument", "detail": "invalid id"}


@pytest.mark.django_db
def test_products_storage_failure_uses_fetch_message(monkeypatch):
    def boom():
        raise DatabaseError("connection refused")

    monkeypatch.setattr("catalog.selectors.list_products", boom)
    resp = APIClient().get("/api/products")
    assert resp.status_code == 500
    assert resp.data == {"kind": "internal", "detail": "failed to fetch products"}
