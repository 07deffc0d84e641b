# scripts/init_db.py
import asyncio

from pizzeria.core.constants import DEFAULT_SIZES, DEFAULT_TOPPINGS
from pizzeria.crud.category import seed_reference_data
from pizzeria.db import async_session, create_db_and_tables


async def create_tables():
    await create_db_and_tables()
    print("✅ All missing tables created.")

    async with async_session() as db:
        await seed_reference_data(db, DEFAULT_SIZES, DEFAULT_TOPPINGS)
    print("✅ Sizes and toppings seeded.")


if __name__ == "__main__":
    asyncio.run(create_tables())
