import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from pizzeria.db import transaction
from pizzeria.models.menu.menu_item import MenuItem
from pizzeria.models.offer import Offer
from pizzeria.schemas.offer import OfferCreate, OfferUpdate

log = logging.getLogger(__name__)

# Columns that an explicit null in an update must not clear
REQUIRED_FIELDS = {"title", "discount", "start_date", "end_date", "is_active"}


class UnknownMenuItemsError(ValueError):
    def __init__(self, missing: List[int]):
        self.missing = missing
        super().__init__(f"Unknown menu item ids: {missing}")


async def _resolve_menu_items(db: AsyncSession, ids: List[int]) -> List[MenuItem]:
    ids = list(dict.fromkeys(ids or []))
    if not ids:
        return []
    result = await db.execute(select(MenuItem).where(MenuItem.id.in_(ids)))
    found = {m.id: m for m in result.scalars().all()}
    missing = [i for i in ids if i not in found]
    if missing:
        raise UnknownMenuItemsError(missing)
    return [found[i] for i in ids]


async def get_offers(db: AsyncSession):
    result = await db.execute(
        select(Offer).options(selectinload(Offer.menu_items)).order_by(Offer.start_date.desc(), Offer.id)
    )
    return result.scalars().all()


async def get_active_offers(db: AsyncSession, today: Optional[date] = None):
    """Offers flagged active whose [start_date, end_date] contains today"""
    today = today or date.today()
    result = await db.execute(
        select(Offer)
        .where(Offer.is_active == True, Offer.start_date <= today, Offer.end_date >= today)
        .options(selectinload(Offer.menu_items))
        .order_by(Offer.end_date, Offer.id)
    )
    return result.scalars().all()


async def get_offer(db: AsyncSession, offer_id: int):
    result = await db.execute(
        select(Offer)
        .where(Offer.id == offer_id)
        .options(selectinload(Offer.menu_items))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_offer(db: AsyncSession, data: OfferCreate):
    async with transaction(db):
        offer = Offer(
            title=data.title,
            description=data.description,
            image_url=data.image_url,
            discount=data.discount,
            start_date=data.start_date,
            end_date=data.end_date,
            is_active=data.is_active,
            menu_items=await _resolve_menu_items(db, data.menu_item_ids),
        )
        db.add(offer)
        await db.flush()
        offer_id = offer.id

    log.info("created offer id=%s title=%r", offer_id, data.title)
    return await get_offer(db, offer_id)


async def update_offer(db: AsyncSession, offer_id: int, updates: OfferUpdate):
    """Returns `(offer, previous_image_url)` or `(None, None)` when missing."""
    async with transaction(db):
        offer = await get_offer(db, offer_id)
        if not offer:
            return None, None

        start = updates.start_date or offer.start_date
        end = updates.end_date or offer.end_date
        if start > end:
            raise ValueError("startDate must be on or before endDate")

        previous_image = offer.image_url
        update_data = updates.model_dump(exclude_unset=True, exclude={"menu_item_ids"})
        for key, value in update_data.items():
            if value is None and key in REQUIRED_FIELDS:
                continue
            setattr(offer, key, value)

        if updates.menu_item_ids is not None:
            offer.menu_items = await _resolve_menu_items(db, updates.menu_item_ids)

    log.info("updated offer id=%s", offer_id)
    return await get_offer(db, offer_id), previous_image


async def delete_offer(db: AsyncSession, offer_id: int):
    async with transaction(db):
        offer = await get_offer(db, offer_id)
        if not offer:
            return None
        await db.delete(offer)

    log.info("deleted offer id=%s", offer_id)
    return offer
