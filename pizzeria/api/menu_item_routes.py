from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from pizzeria.crud import menu_item
from pizzeria.db import get_db
from pizzeria.schemas.menu_item import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemRead,
    PriceQuoteRequest,
    PriceQuote,
)
from pizzeria.services.pricing import line_total, unit_price
from pizzeria.utils.forms import ParsedPayload, payload_parser
from pizzeria.utils.uploads import remove_image, save_image

router = APIRouter()

MENU_ITEM_ARRAY_FIELDS = ("availableSizes", "availableToppings", "available_sizes", "available_toppings")

parse_menu_item_create = payload_parser(MenuItemCreate, MENU_ITEM_ARRAY_FIELDS)
parse_menu_item_update = payload_parser(MenuItemUpdate, MENU_ITEM_ARRAY_FIELDS)


@router.get("", response_model=List[MenuItemRead])
async def list_menu_items(
    category: Optional[str] = None,
    popular: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
):
    """Get all menu items, optionally filtered by category and popular flag"""
    return await menu_item.get_menu_items(db, category=category, popular=popular)


@router.get("/{item_id}", response_model=MenuItemRead)
async def get_menu_item(item_id: int, db: AsyncSession = Depends(get_db)):
    item = await menu_item.get_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.post("/{item_id}/quote", response_model=PriceQuote)
async def quote_menu_item(item_id: int, quote: PriceQuoteRequest, db: AsyncSession = Depends(get_db)):
    """Price of one configured item (size + toppings, discount applied)"""
    item = await menu_item.get_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")

    if quote.size and item.available_sizes and quote.size not in item.available_sizes:
        raise HTTPException(status_code=400, detail=f"Size '{quote.size}' is not available for this item")
    unavailable = [t for t in quote.toppings if t not in item.available_toppings]
    if unavailable:
        raise HTTPException(status_code=400, detail=f"Toppings not available for this item: {unavailable}")

    price = unit_price(item.price, quote.size, quote.toppings, item.discount)
    return PriceQuote(
        menu_item_id=item.id,
        size=quote.size,
        toppings=quote.toppings,
        unit_price=float(price),
        quantity=quote.quantity,
        line_total=float(line_total(price, quote.quantity)),
    )


@router.post("", response_model=MenuItemRead, status_code=201)
async def create_menu_item(
    parsed: ParsedPayload = Depends(parse_menu_item_create),
    db: AsyncSession = Depends(get_db),
):
    """Create a menu item from multipart (with optional `image` file) or JSON"""
    data = parsed.payload
    new_image = None
    if parsed.upload:
        new_image = await save_image(parsed.upload, fieldname="image")
        data.image = new_image

    try:
        return await menu_item.create_menu_item(db, data)
    except Exception:
        remove_image(new_image)
        raise


@router.put("/{item_id}", response_model=MenuItemRead)
async def update_menu_item(
    item_id: int,
    parsed: ParsedPayload = Depends(parse_menu_item_update),
    db: AsyncSession = Depends(get_db),
):
    data = parsed.payload
    if not await menu_item.get_menu_item(db, item_id):
        raise HTTPException(status_code=404, detail="Menu item not found")

    new_image = None
    if parsed.upload:
        new_image = await save_image(parsed.upload, fieldname="image")
        data.image = new_image

    try:
        item, previous_image = await menu_item.update_menu_item(db, item_id, data)
    except Exception:
        remove_image(new_image)
        raise

    if not item:
        remove_image(new_image)
        raise HTTPException(status_code=404, detail="Menu item not found")

    # Replaced image: drop the old file once the new row is committed
    if previous_image and previous_image != item.image:
        remove_image(previous_image)
    return item


@router.delete("/{item_id}")
async def delete_menu_item(item_id: int, db: AsyncSession = Depends(get_db)):
    item = await menu_item.delete_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    remove_image(item.image)
    return {"message": "Menu item deleted successfully", "id": item_id}
