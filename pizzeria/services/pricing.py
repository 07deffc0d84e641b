# pizzeria/services/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from pizzeria.core.constants import DELIVERY_FEE, SIZE_PRICE_ADJUSTMENTS, TOPPING_PRICE

CENT = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def size_adjustment(size: Optional[str]) -> Decimal:
    if not size:
        return Decimal("0.00")
    return SIZE_PRICE_ADJUSTMENTS.get(size, Decimal("0.00"))


def unit_price(
    base_price,
    size: Optional[str] = None,
    toppings: Iterable[str] = (),
    discount: Optional[int] = None,
) -> Decimal:
    """
    Base price + size adjustment + per-topping surcharge, then the item's
    percentage discount. Medium (or no size) is the base price.
    """
    price = Decimal(str(base_price)) + size_adjustment(size) + TOPPING_PRICE * len(list(toppings))
    if discount:
        price = price * (Decimal(100) - Decimal(discount)) / Decimal(100)
    return max(_money(price), Decimal("0.00"))


def line_total(price, quantity: int) -> Decimal:
    return _money(Decimal(str(price)) * quantity)


def order_subtotal(lines) -> Decimal:
    """`lines` yields objects with `price` and `quantity`."""
    return _money(sum((Decimal(str(line.price)) * line.quantity for line in lines), Decimal("0")))


def delivery_fee(order_type: str) -> Decimal:
    return DELIVERY_FEE if order_type == "delivery" else Decimal("0.00")


def order_total(lines, order_type: str) -> Decimal:
    return _money(order_subtotal(lines) + delivery_fee(order_type))
