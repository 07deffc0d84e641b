from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from pizzeria.crud import category
from pizzeria.db import get_db, transaction
from pizzeria.schemas.menu_item import CategoryCreate, CategoryRead

router = APIRouter()


@router.get("", response_model=List[CategoryRead])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category.list_categories(db)


@router.post("", response_model=CategoryRead)
async def upsert_category(data: CategoryCreate, db: AsyncSession = Depends(get_db)):
    """Return the category with this name, creating it if needed"""
    async with transaction(db):
        result = await category.get_or_create_category(db, data.name)
    return result
