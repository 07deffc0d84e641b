import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from pizzeria.crud.category import get_or_create_category, resolve_sizes, resolve_toppings
from pizzeria.db import transaction
from pizzeria.models.menu.category import Category
from pizzeria.models.menu.menu_item import MenuItem
from pizzeria.schemas.menu_item import MenuItemCreate, MenuItemUpdate

log = logging.getLogger(__name__)

# Columns that an explicit null in an update must not clear
REQUIRED_FIELDS = {"name", "price", "popular"}


def _with_associations(query):
    return query.options(
        selectinload(MenuItem.category),
        selectinload(MenuItem.sizes),
        selectinload(MenuItem.toppings),
        selectinload(MenuItem.offers),
    )


async def get_menu_items(db: AsyncSession, category: Optional[str] = None, popular: Optional[bool] = None):
    """Get all menu items, optionally filtered by category name and/or popular flag"""
    query = _with_associations(select(MenuItem))

    if category:
        query = query.join(MenuItem.category).where(Category.name == category)
    if popular is not None:
        query = query.where(MenuItem.popular == popular)

    result = await db.execute(query.order_by(MenuItem.id))
    return result.scalars().all()


async def get_menu_item(db: AsyncSession, item_id: int):
    """Get a specific menu item with its category, sizes and toppings"""
    result = await db.execute(
        _with_associations(select(MenuItem).where(MenuItem.id == item_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_menu_item(db: AsyncSession, data: MenuItemCreate):
    """Create a menu item, its category (if new) and its size/topping links in one transaction"""
    async with transaction(db):
        category = await get_or_create_category(db, data.category)
        sizes = await resolve_sizes(db, data.available_sizes)
        toppings = await resolve_toppings(db, data.available_toppings)

        item = MenuItem(
            name=data.name,
            description=data.description,
            price=data.price,
            category=category,
            image=data.image,
            popular=data.popular,
            discount=data.discount,
            sizes=sizes,
            toppings=toppings,
            offers=[],
        )
        db.add(item)
        await db.flush()
        item_id = item.id

    log.info("created menu item id=%s name=%r", item_id, data.name)
    return await get_menu_item(db, item_id)


async def update_menu_item(db: AsyncSession, item_id: int, updates: MenuItemUpdate):
    """
    Update a menu item. Size/topping links are replaced as a whole set when
    provided. Returns `(item, previous_image)` or `(None, None)` when missing.
    """
    async with transaction(db):
        item = await get_menu_item(db, item_id)
        if not item:
            return None, None

        previous_image = item.image
        update_data = updates.model_dump(exclude_unset=True, exclude={"category", "available_sizes", "available_toppings"})
        for key, value in update_data.items():
            if value is None and key in REQUIRED_FIELDS:
                continue
            setattr(item, key, value)

        if updates.category is not None:
            item.category = await get_or_create_category(db, updates.category)
        if updates.available_sizes is not None:
            item.sizes = await resolve_sizes(db, updates.available_sizes)
        if updates.available_toppings is not None:
            item.toppings = await resolve_toppings(db, updates.available_toppings)

    log.info("updated menu item id=%s fields=%s", item_id, sorted(updates.model_dump(exclude_unset=True)))
    return await get_menu_item(db, item_id), previous_image


async def delete_menu_item(db: AsyncSession, item_id: int):
    """
    Delete a menu item. Its size/topping links and any offer links go with it;
    the offers themselves are untouched. Returns the deleted item or None.
    """
    async with transaction(db):
        item = await get_menu_item(db, item_id)
        if not item:
            return None
        await db.delete(item)

    log.info("deleted menu item id=%s", item_id)
    return item
