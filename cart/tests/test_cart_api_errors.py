import pytest
from catalog.tests.factories import ProductFactory
from django.db import DatabaseError
from rest_framework.test import APIClient
from users.tests.factories import UserFactory


@pytest.fixture
def client():
    c = APIClient()
    c.force_authenticate(user=UserFactory())
    return c


@pytest.mark.django_db
def test_add_item_unknown_product_is_404(client):
    resp = client.post("/api/cart/items", {"productId": 424242, "quantity": 1}, format="json")
    assert resp.status_code == 404
    assert resp.data == {"kind": "not_found", "detail": "product not found"}


@pytest.mark.django_db
@pytest.mark.parametrize(
    "body,field",
    [
        ({"productId": 1, "quantity": 0}, "quantity"),
        ({"productId": 1, "quantity": -2}, "quantity"),
        ({"productId": 1, "quantity": 1.5}, "quantity"),
        ({"productId": 1}, "quantity"),
        ({"productId": "abc", "quantity": 1}, "productId"),
        ({"productId": 0, "quantity": 1}, "productId"),
        ({"productId": 1, "quantity": "2"}, "quantity"),
        ({"productId": 1, "quantity": 3.0}, "quantity"),
        ({"productId": 1, "quantity": True}, "quantity"),
        ({"productId": "1", "quantity": 1}, "productId"),
        ({"product_id": 1, "quantity": 1}, "productId"),
    ],
)
def test_add_item_validation(client, body, field):
    resp = client.post("/api/cart/items", body, format="json")
    assert resp.status_code == 400
    assert resp.data["kind"] == "invalid_argument"
    assert field in resp.data["errors"]


@pytest.mark.django_db
def test_update_item_not_in_cart_is_404(client):
    product = ProductFactory()
    resp = client.patch(f"/api/cart/items/{product.id}", {"quantity": 2}, format="json")
    assert resp.status_code == 404
    assert resp.data == {"kind": "not_found", "detail": "item not in cart"}


@pytest.mark.django_db
@pytest.mark.parametrize("product_id", ["abc", "0", "-1", "1.5"])
def test_invalid_product_id_in_path_is_400(client, product_id):
    resp_patch = client.patch(f"/api/cart/items/{product_id}", {"quantity": 2}, format="json")
    assert resp_patch.status_code == 400
    assert resp_patch.data == {"kind": "invalid_argument", "detail": "invalid product id"}

    resp_delete = client.delete(f"/api/cart/items/{product_id}")
    assert resp_delete.status_code == 400


@pytest.mark.django_db
def test_update_item_invalid_quantity_is_400(client):
    product = ProductFactory()
    client.post("/api/cart/items", {"productId": product.id, "quantity": 1}, format="json")
    resp = client.patch(f"/api/cart/items/{product.id}", {"quantity": 0}, format="json")
    assert resp.status_code == 400
    assert "quantity" in resp.data["errors"]


@pytest.mark.django_db
@pytest.mark.parametrize("quantity", ["3", 3.0, False])
def test_update_item_rejects_non_integer_json_quantity(client, quantity):
    product = ProductFactory()
    client.post("/api/cart/items", {"productId": product.id, "quantity": 1}, format="json")
    resp = client.patch(f"/api/cart/items/{product.id}", {"quantity": quantity}, format="json")
    assert resp.status_code == 400
    assert resp.data["errors"]["quantity"] == ["A valid integer is required."]


@pytest.mark.django_db
def test_remove_item_not_in_cart_is_404(client):
    resp = client.delete("/api/cart/items/77")
    assert resp.status_code == 404
    assert resp.data["detail"] == "item not in cart"


@pytest.mark.django_db
def test_storage_failure_returns_generic_message(client, monkeypatch):
    def boom(**kwargs):
        raise DatabaseError("connection reset by peer")

    monkeypatch.setattr("cart.views.get_active_cart_for_user", boom)
    resp = client.get("/api/cart")
    assert resp.status_code == 500
    assert resp.data == {"kind": "internal", "detail": "failed to fetch cart"}


@pytest.mark.django_db
def test_storage_failure_on_add_uses_add_message(client, monkeypatch):
    def boom(**kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr("cart.views.set_item", boom)
    product = ProductFactory()
    resp = client.post("/api/cart/items", {"productId": product.id, "quantity": 1}, format="json")
    assert resp.status_code == 500
    assert resp.data == {"kind": "internal", "detail": "failed to add item"}
