from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from pizzeria.schemas.menu_item import MenuItemRead
from pizzeria.schemas.order import OrderCreate, OrderItemCreate
from pizzeria.services.pricing import delivery_fee, line_total, order_subtotal, unit_price


@dataclass
class CartLine:
    menu_item_id: int
    name: str
    price: Decimal  # unit price with size, toppings and discount applied
    quantity: int = 1
    size: Optional[str] = None
    toppings: Tuple[str, ...] = ()

    @property
    def key(self) -> tuple:
        # Same item with the same configuration is one line
        return (self.menu_item_id, self.size, tuple(sorted(self.toppings)))

    @property
    def total(self) -> Decimal:
        return line_total(self.price, self.quantity)


@dataclass
class Cart:
    lines: List[CartLine] = field(default_factory=list)

    def add(self, line: CartLine) -> CartLine:
        if line.quantity < 1:
            raise ValueError("quantity must be at least 1")
        for existing in self.lines:
            if existing.key == line.key:
                existing.quantity += line.quantity
                return existing
        self.lines.append(line)
        return line

    def add_menu_item(
        self,
        item: MenuItemRead,
        size: Optional[str] = None,
        toppings=(),
        quantity: int = 1,
    ) -> CartLine:
        toppings = tuple(toppings)
        return self.add(
            CartLine(
                menu_item_id=item.id,
                name=item.name,
                price=unit_price(item.price, size, toppings, item.discount),
                quantity=quantity,
                size=size,
                toppings=toppings,
            )
        )

    def remove(self, menu_item_id: int) -> None:
        """Drop every line for this menu item"""
        self.lines = [line for line in self.lines if line.menu_item_id != menu_item_id]

    def remove_line(self, key: tuple) -> None:
        self.lines = [line for line in self.lines if line.key != key]

    def update_quantity(self, key: tuple, quantity: int) -> None:
        if quantity <= 0:
            self.remove_line(key)
            return
        for line in self.lines:
            if line.key == key:
                line.quantity = quantity

    def clear(self) -> None:
        self.lines = []

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def subtotal(self) -> Decimal:
        return order_subtotal(self.lines)

    def total(self, order_type: str = "takeaway") -> Decimal:
        return self.subtotal() + delivery_fee(order_type)

    def to_order(
        self,
        customer_name: str,
        customer_phone: str,
        order_type: str,
        customer_address: Optional[str] = None,
        special_instructions: Optional[str] = None,
    ) -> OrderCreate:
        if not self.lines:
            raise ValueError("cart is empty")
        return OrderCreate(
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_address=customer_address if order_type == "delivery" else None,
            order_type=order_type,
            order_items=[
                OrderItemCreate(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    price=float(line.price),
                    quantity=line.quantity,
                    size=line.size,
                    toppings=list(line.toppings),
                )
                for line in self.lines
            ],
            total_amount=float(self.total(order_type)),
            special_instructions=special_instructions or None,
        )
