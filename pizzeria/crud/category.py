import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from pizzeria.models.menu.category import Category
from pizzeria.models.menu.menu_item import Size, Topping

log = logging.getLogger(__name__)


async def list_categories(db: AsyncSession):
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()


async def get_category_by_name(db: AsyncSession, name: str):
    result = await db.execute(select(Category).where(Category.name == name))
    return result.scalar_one_or_none()


async def get_or_create_category(db: AsyncSession, name: str) -> Category:
    """
    Look the category up by name, inserting it when missing. Does not commit;
    the caller owns the transaction. Concurrent creation of the same new name
    is only guarded by the unique constraint on `categories.name`.
    """
    name = name.strip()
    category = await get_category_by_name(db, name)
    if category:
        return category

    category = Category(name=name)
    db.add(category)
    await db.flush()
    log.info("created category %r id=%s", name, category.id)
    return category


async def _get_or_create_named(db: AsyncSession, model, names):
    """Resolve lookup rows (sizes/toppings) by name, creating unknown ones."""
    names = list(names or [])
    if not names:
        return []

    result = await db.execute(select(model).where(model.name.in_(names)))
    existing = {row.name: row for row in result.scalars().all()}

    rows = []
    for name in names:
        row = existing.get(name)
        if row is None:
            row = model(name=name)
            db.add(row)
            existing[name] = row
        rows.append(row)

    await db.flush()
    return rows


async def resolve_sizes(db: AsyncSession, names):
    return await _get_or_create_named(db, Size, names)


async def resolve_toppings(db: AsyncSession, names):
    return await _get_or_create_named(db, Topping, names)


async def seed_reference_data(db: AsyncSession, sizes, toppings) -> None:
    """Insert the default size/topping rows when missing. Keeps the given order."""
    for model, names in ((Size, sizes), (Topping, toppings)):
        result = await db.execute(select(model.name))
        have = {row[0] for row in result.all()}
        for name in names:
            if name not in have:
                db.add(model(name=name))
        await db.flush()
    await db.commit()
