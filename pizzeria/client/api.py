"""
Async data-access layer over the HTTP API.

Reads fall back to the bundled dataset when the server cannot be reached
(`httpx.TransportError`); error responses from a reachable server raise
`ApiError` so callers can show them. Writes never fall back.
"""
import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel

from pizzeria.client.cache import ClientCache
from pizzeria.client.fallback import default_fallback
from pizzeria.schemas.feedback import ContactMessageCreate, FeedbackCreate, FeedbackRead
from pizzeria.schemas.menu_item import MenuItemCreate, MenuItemRead, MenuItemUpdate
from pizzeria.schemas.offer import OfferCreate, OfferRead, OfferUpdate
from pizzeria.schemas.order import OrderCreate, OrderRead, OrderStatus
from pizzeria.schemas.user import AdminUserRead, LoginRequest

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"

MENU_ITEMS = "menu_items"
OFFERS = "offers"
FEEDBACK = "feedback"
ORDERS = "orders"


class ApiError(Exception):
    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


def _as_payload(data: Union[BaseModel, Dict[str, Any]], model, partial: bool = False) -> Dict[str, Any]:
    if not isinstance(data, BaseModel):
        data = model.model_validate(data)
    return data.model_dump(by_alias=True, mode="json", exclude_unset=partial, exclude_none=not partial)


def _form_fields(payload: Dict[str, Any]) -> Dict[str, str]:
    """Multipart carries strings only: arrays go JSON-encoded, booleans lowercase."""
    fields = {}
    for key, value in payload.items():
        if value is None:
            fields[key] = "null"
        elif isinstance(value, (list, dict)):
            fields[key] = json.dumps(value)
        elif isinstance(value, bool):
            fields[key] = "true" if value else "false"
        else:
            fields[key] = str(value)
    return fields


def _body(payload: Dict[str, Any], image=None) -> Dict[str, Any]:
    if image is None:
        return {"json": payload}
    return {"data": _form_fields(payload), "files": {"image": image}}


class PizzeriaClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        fallback: Optional[Dict[str, list]] = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self.cache = ClientCache()
        self.fallback = fallback if fallback is not None else default_fallback()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # --- plumbing -------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._http.request(method, url, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, detail)
        return response.json()

    async def _read_list(self, resource: str, url: str, model, params=None, use_cache: bool = False) -> list:
        if use_cache and self.cache.is_loaded(resource):
            return self.cache.all(resource)
        try:
            data = await self._request("GET", url, params=params)
        except httpx.TransportError as e:
            log.warning("API unreachable (%s), serving fallback %s", e, resource)
            items = list(self.fallback.get(resource, []))
            self.cache.set_all(resource, items, loaded=False)
            return items
        items = [model.model_validate(row) for row in data]
        if params is None:
            self.cache.set_all(resource, items)
        return items

    # --- menu items -----------------------------------------------------

    async def get_menu_items(self, use_cache: bool = False) -> List[MenuItemRead]:
        return await self._read_list(MENU_ITEMS, "/menu-items", MenuItemRead, use_cache=use_cache)

    async def get_menu_item_by_id(self, item_id: int) -> Optional[MenuItemRead]:
        try:
            data = await self._request("GET", f"/menu-items/{item_id}")
        except httpx.TransportError as e:
            log.warning("API unreachable (%s), looking up menu item %s offline", e, item_id)
            cached = self.cache.get(MENU_ITEMS, item_id)
            if cached:
                return cached
            return next((m for m in self.fallback.get(MENU_ITEMS, []) if m.id == item_id), None)
        item = MenuItemRead.model_validate(data)
        self.cache.put(MENU_ITEMS, item)
        return item

    async def get_menu_items_by_category(self, category: str) -> List[MenuItemRead]:
        return [m for m in await self.get_menu_items(use_cache=True) if m.category == category]

    async def get_popular_menu_items(self) -> List[MenuItemRead]:
        return [m for m in await self.get_menu_items(use_cache=True) if m.popular]

    async def get_menu_categories(self) -> List[str]:
        try:
            data = await self._request("GET", "/categories")
        except httpx.TransportError:
            return sorted({m.category for m in self.fallback.get(MENU_ITEMS, []) if m.category})
        return [row["name"] for row in data]

    async def add_menu_item(self, item: Union[MenuItemCreate, dict], image=None) -> MenuItemRead:
        payload = _as_payload(item, MenuItemCreate)
        created = MenuItemRead.model_validate(await self._request("POST", "/menu-items", **_body(payload, image)))
        self.cache.put(MENU_ITEMS, created)
        return created

    async def update_menu_item(self, item_id: int, updates: Union[MenuItemUpdate, dict], image=None) -> MenuItemRead:
        payload = _as_payload(updates, MenuItemUpdate, partial=True)
        updated = MenuItemRead.model_validate(
            await self._request("PUT", f"/menu-items/{item_id}", **_body(payload, image))
        )
        self.cache.put(MENU_ITEMS, updated)
        return updated

    async def delete_menu_item(self, item_id: int) -> None:
        await self._request("DELETE", f"/menu-items/{item_id}")
        self.cache.remove(MENU_ITEMS, item_id)
        # The server drops offer links with the item
        for offer in self.cache.all(OFFERS):
            if item_id in offer.menu_item_ids:
                offer.menu_item_ids = [i for i in offer.menu_item_ids if i != item_id]

    # --- offers ---------------------------------------------------------

    async def get_offers(self, use_cache: bool = False) -> List[OfferRead]:
        return await self._read_list(OFFERS, "/offers", OfferRead, use_cache=use_cache)

    async def get_active_offers(self, today: Optional[date] = None) -> List[OfferRead]:
        return [o for o in await self.get_offers(use_cache=True) if o.is_current(today)]

    async def add_offer(self, offer: Union[OfferCreate, dict], image=None) -> OfferRead:
        payload = _as_payload(offer, OfferCreate)
        created = OfferRead.model_validate(await self._request("POST", "/offers", **_body(payload, image)))
        self.cache.put(OFFERS, created)
        return created

    async def update_offer(self, offer_id: int, updates: Union[OfferUpdate, dict], image=None) -> OfferRead:
        payload = _as_payload(updates, OfferUpdate, partial=True)
        updated = OfferRead.model_validate(await self._request("PUT", f"/offers/{offer_id}", **_body(payload, image)))
        self.cache.put(OFFERS, updated)
        return updated

    async def delete_offer(self, offer_id: int) -> None:
        await self._request("DELETE", f"/offers/{offer_id}")
        self.cache.remove(OFFERS, offer_id)

    # --- feedback -------------------------------------------------------

    async def get_feedback(self, use_cache: bool = False) -> List[FeedbackRead]:
        return await self._read_list(FEEDBACK, "/feedback", FeedbackRead, use_cache=use_cache)

    async def get_published_feedback(self) -> List[FeedbackRead]:
        try:
            data = await self._request("GET", "/feedback/published")
        except httpx.TransportError:
            return [f for f in self.fallback.get(FEEDBACK, []) if f.is_published]
        return [FeedbackRead.model_validate(row) for row in data]

    async def add_feedback(self, feedback: Union[FeedbackCreate, dict]) -> FeedbackRead:
        payload = _as_payload(feedback, FeedbackCreate)
        created = FeedbackRead.model_validate(await self._request("POST", "/feedback", json=payload))
        self.cache.put(FEEDBACK, created)
        return created

    async def update_feedback_publication(self, feedback_id: int, is_published: bool) -> FeedbackRead:
        updated = FeedbackRead.model_validate(
            await self._request("PATCH", f"/feedback/{feedback_id}/publish", json={"isPublished": is_published})
        )
        self.cache.put(FEEDBACK, updated)
        return updated

    async def delete_feedback(self, feedback_id: int) -> None:
        await self._request("DELETE", f"/feedback/{feedback_id}")
        self.cache.remove(FEEDBACK, feedback_id)

    # --- orders ---------------------------------------------------------

    async def get_orders(self, use_cache: bool = False) -> List[OrderRead]:
        return await self._read_list(ORDERS, "/orders", OrderRead, use_cache=use_cache)

    async def add_order(self, order: Union[OrderCreate, dict]) -> OrderRead:
        payload = _as_payload(order, OrderCreate)
        created = OrderRead.model_validate(await self._request("POST", "/orders", json=payload))
        self.cache.put(ORDERS, created)
        return created

    async def update_order_status(self, order_id: int, status: Union[OrderStatus, str]) -> OrderRead:
        # Unknown values are left for the server to reject (400)
        value = status.value if isinstance(status, OrderStatus) else str(status)
        updated = OrderRead.model_validate(
            await self._request("PATCH", f"/orders/{order_id}/status", json={"status": value})
        )
        self.cache.put(ORDERS, updated)
        return updated

    # --- misc -----------------------------------------------------------

    async def send_contact_message(self, message: Union[ContactMessageCreate, dict]) -> Dict[str, Any]:
        payload = _as_payload(message, ContactMessageCreate)
        return await self._request("POST", "/contact", json=payload)

    async def login(self, username: str, password: str) -> AdminUserRead:
        payload = LoginRequest(username=username, password=password).model_dump()
        return AdminUserRead.model_validate(await self._request("POST", "/auth/login", json=payload))

    async def get_upload_directory_info(self) -> Dict[str, Any]:
        return await self._request("GET", "/upload-path")

    async def get_diagnostic_info(self) -> Dict[str, Any]:
        return await self._request("GET", "/diagnostic")
