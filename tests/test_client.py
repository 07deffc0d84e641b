import asyncio
import json
from datetime import date, timedelta

import httpx
import pytest

from pizzeria.client import ApiError, PizzeriaClient
from pizzeria.client.fallback import default_fallback
from pizzeria.main import app

BASE = "http://pizzeria.test/api"

MENU_ROW = {
    "id": 7,
    "name": "Quattro Formaggi",
    "description": "Four cheeses",
    "price": 13.0,
    "category": "Classics",
    "image": None,
    "popular": True,
    "discount": None,
    "availableSizes": ["Medium"],
    "availableToppings": [],
}


def _offline(request):
    raise httpx.ConnectError("connection refused", request=request)


def _run(coro):
    return asyncio.run(coro)


def _client(handler, **kwargs):
    return PizzeriaClient(base_url=BASE, transport=httpx.MockTransport(handler), **kwargs)


def test_reads_fall_back_when_api_unreachable():
    fallback = default_fallback()

    async def scenario():
        async with _client(_offline, fallback=fallback) as api:
            return await api.get_menu_items(), await api.get_published_feedback(), await api.get_menu_categories()

    items, feedback, categories = _run(scenario())

    assert [m.id for m in items] == [m.id for m in fallback["menu_items"]]
    assert all(f.is_published for f in feedback)
    assert categories == sorted({m.category for m in fallback["menu_items"]})


def test_server_errors_propagate_instead_of_falling_back():
    def handler(request):
        return httpx.Response(500, json={"detail": "Internal server error"})

    async def scenario():
        async with _client(handler) as api:
            await api.get_menu_items()

    with pytest.raises(ApiError) as exc:
        _run(scenario())
    assert exc.value.status_code == 500


def test_not_found_propagates():
    def handler(request):
        return httpx.Response(404, json={"detail": "Menu item not found"})

    async def scenario():
        async with _client(handler) as api:
            await api.get_menu_item_by_id(99)

    with pytest.raises(ApiError) as exc:
        _run(scenario())
    assert exc.value.detail == "Menu item not found"


def test_writes_do_not_fall_back():
    async def scenario():
        async with _client(_offline) as api:
            await api.add_feedback({"name": "A", "email": "a@example.com", "rating": 4, "message": "ok"})

    with pytest.raises(httpx.TransportError):
        _run(scenario())


def test_active_offers_filtered_client_side():
    today = date(2024, 6, 15)
    rows = [
        {"id": 1, "title": "Now", "discount": 10, "startDate": "2024-06-01", "endDate": "2024-06-30", "isActive": True},
        {"id": 2, "title": "Off", "discount": 10, "startDate": "2024-06-01", "endDate": "2024-06-30", "isActive": False},
        {"id": 3, "title": "Past", "discount": 10, "startDate": "2024-05-01", "endDate": "2024-05-31", "isActive": True},
        {"id": 4, "title": "Future", "discount": 10, "startDate": "2024-07-01", "endDate": "2024-07-31", "isActive": True},
        {"id": 5, "title": "Edge", "discount": 0, "startDate": "2024-06-15", "endDate": "2024-06-15", "isActive": True},
    ]

    async def scenario():
        async with _client(lambda request: httpx.Response(200, json=rows)) as api:
            return await api.get_active_offers(today=today)

    assert [o.id for o in _run(scenario())] == [1, 5]


def test_fallback_offers_are_running_today():
    async def scenario():
        async with _client(_offline) as api:
            return await api.get_active_offers()

    assert len(_run(scenario())) == 2


def test_cache_updated_synchronously_on_mutations():
    calls = []

    def handler(request):
        calls.append((request.method, request.url.path))
        if request.method == "GET":
            return httpx.Response(200, json=[MENU_ROW])
        if request.method == "PUT":
            return httpx.Response(200, json={**MENU_ROW, "price": 14.0})
        if request.method == "POST":
            return httpx.Response(201, json={**MENU_ROW, "id": 8, "name": "Marinara"})
        return httpx.Response(200, json={"message": "Menu item deleted successfully"})

    async def scenario():
        async with _client(handler) as api:
            await api.get_menu_items()
            await api.update_menu_item(7, {"price": 14.0})
            await api.add_menu_item({"name": "Marinara", "price": 9.0, "category": "Classics"})
            after_writes = await api.get_menu_items(use_cache=True)
            await api.delete_menu_item(7)
            after_delete = await api.get_menu_items(use_cache=True)
            return after_writes, after_delete

    after_writes, after_delete = _run(scenario())

    assert [(m.id, m.price) for m in after_writes] == [(7, 14.0), (8, 13.0)]
    assert [m.id for m in after_delete] == [8]
    # Cached reads never went back to the server
    assert [c for c in calls if c[0] == "GET"] == [("GET", "/api/menu-items")]


def test_multipart_body_when_image_attached():
    seen = {}

    def handler(request):
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content
        return httpx.Response(201, json=MENU_ROW)

    async def scenario():
        async with _client(handler) as api:
            await api.add_menu_item(
                {"name": "Quattro Formaggi", "price": 13.0, "category": "Classics", "availableSizes": ["Medium"]},
                image=("q.png", b"\x89PNG", "image/png"),
            )

    _run(scenario())

    assert seen["content_type"].startswith("multipart/form-data")
    assert b'["Medium"]' in seen["body"]
    assert b'filename="q.png"' in seen["body"]


def test_json_body_without_image():
    seen = {}

    def handler(request):
        seen["content_type"] = request.headers["content-type"]
        seen["payload"] = json.loads(request.content)
        return httpx.Response(201, json=MENU_ROW)

    async def scenario():
        async with _client(handler) as api:
            await api.add_menu_item({"name": "Quattro Formaggi", "price": 13.0, "category": "Classics"})

    _run(scenario())

    assert seen["content_type"] == "application/json"
    assert seen["payload"]["availableSizes"] == []
    assert "image" not in seen["payload"]


def test_end_to_end_against_app(db_reset):
    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with PizzeriaClient(base_url="http://testserver/api", transport=transport) as api:
            item = await api.add_menu_item(
                {"name": "Test Pizza", "price": 9.5, "category": "Classics", "availableSizes": ["Small", "Large"]}
            )
            today = date.today()
            await api.add_offer(
                {
                    "title": "Launch",
                    "discount": 20,
                    "menuItemIds": [item.id],
                    "startDate": today - timedelta(days=1),
                    "endDate": today + timedelta(days=1),
                }
            )
            order = await api.add_order(
                {
                    "customerName": "Ada",
                    "customerPhone": "555-0100",
                    "orderType": "takeaway",
                    "orderItems": [{"menuItemId": item.id, "name": item.name, "price": 9.5, "quantity": 1}],
                }
            )
            with pytest.raises(ApiError) as exc:
                await api.update_order_status(order.id, "teleported")
            updated = await api.update_order_status(order.id, "ready")
            admin = await api.login("admin", "admin123")
            return item, await api.get_active_offers(), exc.value, updated, admin

    item, active, error, updated, admin = _run(scenario())

    assert item.available_sizes == ["Small", "Large"]
    assert active[0].applies_to(item.id)
    assert error.status_code == 400
    assert updated.status.value == "ready"
    assert admin.username == "admin"
