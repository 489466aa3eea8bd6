import pytest
from orders.tests.factories import OrderFactory, OrderItemFactory
from catalog.models import Product
from catalog.tests.factories import ProductFactory
from django.db import DatabaseError
from rest_framework.test import APIClient
from users.tests.factories import AdminFactory, UserFactory


@pytest.fixture
def admin_client():
    client = APIClient()
    client.force_authenticate(user=AdminFactory())
    return client


@pytest.mark.django_db
def test_admin_can_create_update_and_delete_product(admin_client):
    resp = admin_client.post(
        "/api/products",
        {"name": "Mixer", "description": "8 channel", "price_cents": 45000, "image_url": ""},
        format="json",
    )
    assert resp.status_code == 201
    product_id = resp.data["id"]

    resp_patch = admin_client.patch(f"/api/products/{product_id}", {"price_cents": 40000}, format="json")
    assert resp_patch.status_code == 200
    assert resp_patch.data["price_cents"] == 40000
    assert resp_patch.data["name"] == "Mixer"

    resp_delete = admin_client.delete(f"/api/products/{product_id}")
    assert resp_delete.status_code == 204
    assert not Product.objects.filter(pk=product_id).exists()


@pytest.mark.django_db
def test_create_product_rejects_negative_price(admin_client):
    resp = admin_client.post("/api/products", {"name": "Broken", "price_cents": -1}, format="json")
    assert resp.status_code == 400
    assert resp.data["kind"] == "invalid_argument"
    assert "price_cents" in resp.data["errors"]


@pytest.mark.django_db
def test_create_product_requires_name_and_price(admin_client):
    resp = admin_client.post("/api/products", {}, format="json")
    assert resp.status_code == 400
    assert {"name", "price_cents"} <= set(resp.data["errors"].keys())


@pytest.mark.django_db
def test_update_missing_product_is_not_found(admin_client):
    resp = admin_client.patch("/api/products/999999", {"price_cents": 1}, format="json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_non_admin_cannot_write_products():
    product = ProductFactory()
    client = APIClient()
    client.force_authenticate(user=UserFactory())

    assert client.post("/api/products", {"name": "X", "price_cents": 1}, format="json").status_code == 403
    resp = client.patch(f"/api/products/{product.id}", {"price_cents": 1}, format="json")
    assert resp.status_code == 403
    assert resp.data["kind"] == "permission_denied"
    assert client.delete(f"/api/products/{product.id}").status_code == 403


@pytest.mark.django_db
def test_anonymous_cannot_write_products():
    resp = APIClient().post("/api/products", {"name": "X", "price_cents": 1}, format="json")
    assert resp.status_code == 401
    assert resp.data["kind"] == "unauthenticated"


@pytest.mark.django_db
def test_delete_product_referenced_by_order_conflicts(admin_client):
    product = ProductFactory()
    OrderItemFactory(order=OrderFactory(), product=product)

    resp = admin_client.delete(f"/api/products/{product.id}")
    assert resp.status_code == 409
    assert resp.data["kind"] == "failed_precondition"
    assert Product.objects.filter(pk=product.id).exists()


@pytest.mark.django_db
def test_admin_write_with_malformed_id_is_invalid_argument(admin_client):
    resp = admin_client.patch("/api/products/abc", {"price_cents": 1}, format="json")
    assert resp.status_code == 400
    assert resp.data == {"kind": "invalid_argument", "detail": "invalid id"}

    resp = admin_client.delete("/api/products/abc")
    assert resp.status_code == 400


@pytest.mark.django_db
@pytest.mark.parametrize(
    "method,path,body,message",
    [
        ("post", "/api/products", {"name": "Mixer", "price_cents": 100}, "failed to create product"),
        ("patch", "/api/products/{id}", {"price_cents": 200}, "failed to update product"),
        ("delete", "/api/products/{id}", None, "failed to delete product"),
    ],
)
def test_admin_storage_failures_use_action_messages(admin_client, monkeypatch, method, path, body, message):
    def boom(*args, **kwargs):
        raise DatabaseError("disk full")

    product = ProductFactory()
    monkeypatch.setattr(Product, "save", boom)
    monkeypatch.setattr(Product, "delete", boom)

    resp = getattr(admin_client, method)(path.format(id=product.id), body, format="json")
    assert resp.status_code == 500
    assert resp.data == {"kind": "internal", "detail": message}
