import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from pizzeria.db import transaction
from pizzeria.models.customer.customer import Customer
from pizzeria.models.customer.order import Order, OrderItem, OrderItemTopping
from pizzeria.schemas.order import OrderCreate
from pizzeria.services.pricing import order_total

log = logging.getLogger(__name__)


def _with_details(query):
    return query.options(
        selectinload(Order.customer),
        selectinload(Order.items).selectinload(OrderItem.toppings),
    )


async def get_customer_by_phone(db: AsyncSession, phone: str):
    result = await db.execute(select(Customer).where(Customer.phone == phone))
    return result.scalar_one_or_none()


async def upsert_customer(db: AsyncSession, name: str, phone: str, address: Optional[str] = None) -> Customer:
    """
    Phone number is the natural key: an existing customer gets their name (and
    address, when one is given) refreshed, otherwise a new row is inserted.
    Does not commit.
    """
    customer = await get_customer_by_phone(db, phone)
    if customer:
        customer.name = name
        if address:
            customer.address = address
        log.info("customer id=%s matched by phone, details refreshed", customer.id)
    else:
        customer = Customer(name=name, phone=phone, address=address)
        db.add(customer)
    await db.flush()
    return customer


async def get_orders(db: AsyncSession, status: Optional[str] = None):
    query = _with_details(select(Order))
    if status:
        query = query.where(Order.status == status)
    result = await db.execute(query.order_by(Order.created_at.desc(), Order.id.desc()))
    return result.scalars().all()


async def get_order(db: AsyncSession, order_id: int):
    result = await db.execute(
        _with_details(select(Order).where(Order.id == order_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_order(db: AsyncSession, data: OrderCreate):
    """Upsert the customer, then write the order, its items and their toppings in one transaction"""
    async with transaction(db):
        customer = await upsert_customer(
            db,
            name=data.customer_name,
            phone=data.customer_phone,
            address=data.customer_address,
        )

        total = data.total_amount
        if total is None:
            total = order_total(data.order_items, data.order_type.value)

        order = Order(
            customer=customer,
            order_type=data.order_type.value,
            total_amount=total,
            status="pending",
            special_instructions=data.special_instructions,
        )
        for line in data.order_items:
            order.items.append(
                OrderItem(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    size=line.size,
                    toppings=[OrderItemTopping(name=t) for t in line.toppings],
                )
            )
        db.add(order)
        await db.flush()
        order_id = order.id

    log.info("created order id=%s customer_id=%s items=%d", order_id, customer.id, len(data.order_items))
    return await get_order(db, order_id)


async def update_order_status(db: AsyncSession, order_id: int, status: str):
    # No transition table: any status may follow any other
    async with transaction(db):
        order = await get_order(db, order_id)
        if not order:
            return None
        previous = order.status
        order.status = status

    log.info("order id=%s status %s -> %s", order_id, previous, status)
    return await get_order(db, order_id)


async def delete_order(db: AsyncSession, order_id: int):
    async with transaction(db):
        order = await get_order(db, order_id)
        if not order:
            return None
        await db.delete(order)

    log.info("deleted order id=%s", order_id)
    return order
