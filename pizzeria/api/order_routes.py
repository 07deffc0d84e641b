from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from pizzeria.crud import order
from pizzeria.db import get_db
from pizzeria.schemas.order import OrderCreate, OrderRead, OrderStatus, OrderStatusUpdate

router = APIRouter()


@router.get("", response_model=List[OrderRead])
async def list_orders(status: Optional[OrderStatus] = None, db: AsyncSession = Depends(get_db)):
    """All orders, newest first, optionally filtered by status"""
    return await order.get_orders(db, status=status.value if status else None)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    result = await order.get_order(db, order_id)
    if not result:
        raise HTTPException(status_code=404, detail="Order not found")
    return result


@router.post("", response_model=OrderRead, status_code=201)
async def create_order(data: OrderCreate, db: AsyncSession = Depends(get_db)):
    """Checkout: upsert the customer by phone and store the order"""
    return await order.create_order(db, data)


@router.patch("/{order_id}/status", response_model=OrderRead)
async def update_order_status(order_id: int, update: OrderStatusUpdate, db: AsyncSession = Depends(get_db)):
    result = await order.update_order_status(db, order_id, update.status.value)
    if not result:
        raise HTTPException(status_code=404, detail="Order not found")
    return result


@router.delete("/{order_id}")
async def delete_order(order_id: int, db: AsyncSession = Depends(get_db)):
    result = await order.delete_order(db, order_id)
    if not result:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"message": "Order deleted successfully", "id": order_id}
