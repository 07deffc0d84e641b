from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from pizzeria.schemas.base import CamelModel


class OrderStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    preparing = "preparing"
    ready = "ready"
    delivered = "delivered"
    completed = "completed"
    cancelled = "cancelled"


class OrderType(str, Enum):
    delivery = "delivery"
    takeaway = "takeaway"


# ---------- Order Item ----------
class OrderItemCreate(CamelModel):
    menu_item_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    size: Optional[str] = None
    toppings: List[str] = []


class OrderItemRead(CamelModel):
    menu_item_id: Optional[int] = None
    name: str
    price: float
    quantity: int
    size: Optional[str] = None
    toppings: List[str] = []

    @field_validator("toppings", mode="before")
    @classmethod
    def topping_names(cls, v):
        return [getattr(t, "name", t) for t in (v or [])]


# ---------- Order ----------
class OrderCreate(CamelModel):
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    customer_address: Optional[str] = None
    order_type: OrderType
    order_items: List[OrderItemCreate] = Field(..., min_length=1)
    total_amount: Optional[float] = Field(None, ge=0)
    special_instructions: Optional[str] = None

    @field_validator("customer_name", "customer_phone")
    @classmethod
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def address_for_delivery(self):
        if self.order_type == OrderType.delivery and not (self.customer_address or "").strip():
            raise ValueError("customerAddress is required for delivery orders")
        return self


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderRead(CamelModel):
    id: int
    customer_name: str
    customer_phone: str
    customer_address: Optional[str] = None
    order_type: OrderType
    order_items: List[OrderItemRead] = []
    total_amount: float
    status: OrderStatus
    special_instructions: Optional[str] = None
    created_at: datetime
