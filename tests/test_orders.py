import asyncio

from sqlalchemy import func
from sqlalchemy.future import select

from pizzeria.db import async_session
from pizzeria.models.customer.customer import Customer
from pizzeria.models.customer.order import OrderItemTopping


def _order(**overrides):
    payload = {
        "customerName": "Ada",
        "customerPhone": "555-0100",
        "customerAddress": "1 Main St",
        "orderType": "delivery",
        "orderItems": [
            {"menuItemId": None, "name": "Margherita", "price": 12.5, "quantity": 2, "size": "Large", "toppings": ["Olives"]},
            {"name": "Garlic Bread", "price": 4.0, "quantity": 1},
        ],
        "totalAmount": 32.0,
        "specialInstructions": "Ring twice",
    }
    payload.update(overrides)
    return payload


def _count(model):
    async def _run():
        async with async_session() as db:
            return (await db.execute(select(func.count()).select_from(model))).scalar_one()

    return asyncio.run(_run())


def test_create_order_round_trip(client):
    response = client.post("/api/orders", json=_order())

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["status"] == "pending"
    assert body["customerName"] == "Ada"
    assert body["totalAmount"] == 32.0
    assert body["orderItems"][0]["toppings"] == ["Olives"]
    assert body["orderItems"][0]["size"] == "Large"
    assert body["orderItems"][1]["toppings"] == []
    assert "createdAt" in body

    fetched = client.get(f"/api/orders/{body['id']}").json()
    assert fetched == body


def test_same_phone_updates_customer_instead_of_duplicating(client):
    client.post("/api/orders", json=_order())
    second = client.post(
        "/api/orders", json=_order(customerName="Ada Lovelace", customerAddress="2 New Rd")
    ).json()

    assert _count(Customer) == 1
    assert second["customerName"] == "Ada Lovelace"
    assert second["customerAddress"] == "2 New Rd"


def test_new_phone_creates_one_customer(client):
    client.post("/api/orders", json=_order())
    client.post("/api/orders", json=_order(customerPhone="555-0199"))

    assert _count(Customer) == 2


def test_total_is_computed_when_omitted(client):
    payload = _order()
    del payload["totalAmount"]

    body = client.post("/api/orders", json=payload).json()

    # 12.5 * 2 + 4.0 + 3.00 delivery
    assert body["totalAmount"] == 32.0


def test_delivery_requires_address(client):
    response = client.post("/api/orders", json=_order(customerAddress=None))
    assert response.status_code == 400

    response = client.post("/api/orders", json=_order(customerAddress=None, orderType="takeaway"))
    assert response.status_code == 201


def test_order_needs_items(client):
    assert client.post("/api/orders", json=_order(orderItems=[])).status_code == 400


def test_status_update_any_transition(client):
    order = client.post("/api/orders", json=_order()).json()

    for status in ("cancelled", "preparing", "completed"):
        response = client.patch(f"/api/orders/{order['id']}/status", json={"status": status})
        assert response.status_code == 200
        assert response.json()["status"] == status


def test_invalid_status_is_rejected_and_unchanged(client):
    order = client.post("/api/orders", json=_order()).json()

    response = client.patch(f"/api/orders/{order['id']}/status", json={"status": "shipped"})

    assert response.status_code == 400
    assert client.get(f"/api/orders/{order['id']}").json()["status"] == "pending"


def test_status_update_unknown_order(client):
    assert client.patch("/api/orders/999/status", json={"status": "ready"}).status_code == 404


def test_list_orders_filtered_by_status(client):
    first = client.post("/api/orders", json=_order()).json()
    client.post("/api/orders", json=_order(customerPhone="555-0101"))
    client.patch(f"/api/orders/{first['id']}/status", json={"status": "ready"})

    ready = client.get("/api/orders", params={"status": "ready"}).json()

    assert [o["id"] for o in ready] == [first["id"]]
    assert len(client.get("/api/orders").json()) == 2
    assert client.get("/api/orders", params={"status": "lost"}).status_code == 400


def test_delete_order_cascades_to_items(client):
    order = client.post("/api/orders", json=_order()).json()

    assert client.delete(f"/api/orders/{order['id']}").status_code == 200
    assert client.get(f"/api/orders/{order['id']}").status_code == 404
    assert _count(OrderItemTopping) == 0
    assert _count(Customer) == 1
