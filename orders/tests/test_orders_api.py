import pytest
from cart.services import set_item
from catalog.tests.factories import ProductFactory
from django.db import DatabaseError
from orders.models import Order
from orders.services import place_order
from rest_framework.test import APIClient
from users.tests.factories import UserFactory


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.mark.django_db
def test_place_order_endpoint(client, user):
    p1 = ProductFactory(price_cents=500)
    p2 = ProductFactory(price_cents=300)
    client.post("/api/cart/items", {"productId": p1.id, "quantity": 2}, format="json")
    client.post("/api/cart/items", {"productId": p2.id, "quantity": 1}, format="json")

    resp = client.post("/api/orders", format="json")
    assert resp.status_code == 201
    order = resp.data["order"]
    assert set(order.keys()) == {"id", "user_id", "total_cents", "status", "created_at"}
    assert order["total_cents"] == 1300
    assert order["status"] == "pending"
    assert order["user_id"] == user.id

    cart = client.get("/api/cart")
    assert cart.data["items"] == []


@pytest.mark.django_db
def test_place_order_empty_cart(client):
    resp = client.post("/api/orders", format="json")
    assert resp.status_code == 400
    assert resp.data == {"kind": "failed_precondition", "detail": "cart is empty"}
    assert not Order.objects.exists()


@pytest.mark.django_db
def test_place_order_storage_failure_is_generic(client, monkeypatch):
    product = ProductFactory()
    client.post("/api/cart/items", {"productId": product.id, "quantity": 1}, format="json")

    def failing_create(*args, **kwargs):
        raise DatabaseError("relation orders does not exist")

    monkeypatch.setattr(Order.objects, "create", failing_create)
    resp = client.post("/api/orders", format="json")
    assert resp.status_code == 500
    assert resp.data == {"kind": "internal", "detail": "failed to place order"}


@pytest.mark.django_db
def test_list_orders_newest_first_with_items(client, user):
    a = ProductFactory(name="A", price_cents=100)
    b = ProductFactory(name="B", price_cents=200)

    set_item(user=user, product_id=b.id, quantity=1)
    set_item(user=user, product_id=a.id, quantity=3)
    client.post("/api/orders", format="json")
    set_item(user=user, product_id=a.id, quantity=1)
    client.post("/api/orders", format="json")

    resp = client.get("/api/orders")
    assert resp.status_code == 200
    assert len(resp.data) == 2
    first, second = resp.data
    assert first["id"] > second["id"]
    assert first["total_cents"] == 100
    assert second["total_cents"] == 500
    assert [i["product_id"] for i in second["items"]] == [a.id, b.id]
    assert second["items"][0] == {
        "order_id": second["id"],
        "product_id": a.id,
        "unit_price_cents": 100,
        "quantity": 3,
        "name": "A",
        "image_url": a.image_url,
    }


@pytest.mark.django_db
def test_list_orders_empty(client):
    resp = client.get("/api/orders")
    assert resp.status_code == 200
    assert resp.data == []


@pytest.mark.django_db
def test_orders_are_scoped_to_owner(client):
    other = UserFactory()
    product = ProductFactory()
    set_item(user=other, product_id=product.id, quantity=1)
    foreign = place_order(user=other)

    assert client.get("/api/orders").data == []
    resp = client.get(f"/api/orders/{foreign.id}")
    assert resp.status_code == 404
    assert resp.data == {"kind": "not_found", "detail": "order not found"}


@pytest.mark.django_db
def test_order_detail(client, user):
    product = ProductFactory(price_cents=250)
    set_item(user=user, product_id=product.id, quantity=4)
    placed = client.post("/api/orders", format="json").data["order"]

    resp = client.get(f"/api/orders/{placed['id']}")
    assert resp.status_code == 200
    assert resp.data["total_cents"] == 1000
    assert resp.data["items"][0]["unit_price_cents"] == 250


@pytest.mark.django_db
@pytest.mark.parametrize("method", ["get", "post"])
def test_orders_require_authentication(method):
    resp = getattr(APIClient(), method)("/api/orders")
    assert resp.status_code == 401


@pytest.mark.django_db
@pytest.mark.parametrize("order_id", ["abc", "0", "12x"])
def test_order_detail_with_malformed_id_is_invalid_argument(client, order_id):
    resp = client.get(f"/api/orders/{order_id}")
    assert resp.status_code == 400
    assert resp.data == {"kind": "invalid_argument", "detail": "invalid id"}
