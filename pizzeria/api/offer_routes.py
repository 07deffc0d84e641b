from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from pizzeria.crud import offer
from pizzeria.db import get_db
from pizzeria.schemas.offer import OfferCreate, OfferUpdate, OfferRead
from pizzeria.utils.forms import ParsedPayload, payload_parser
from pizzeria.utils.uploads import remove_image, save_image

router = APIRouter()

OFFER_ARRAY_FIELDS = ("menuItemIds", "menu_item_ids")

parse_offer_create = payload_parser(OfferCreate, OFFER_ARRAY_FIELDS)
parse_offer_update = payload_parser(OfferUpdate, OFFER_ARRAY_FIELDS)


@router.get("", response_model=List[OfferRead])
async def list_offers(db: AsyncSession = Depends(get_db)):
    return await offer.get_offers(db)


@router.get("/active", response_model=List[OfferRead])
async def list_active_offers(db: AsyncSession = Depends(get_db)):
    """Offers flagged active and running today"""
    return await offer.get_active_offers(db)


@router.get("/{offer_id}", response_model=OfferRead)
async def get_offer(offer_id: int, db: AsyncSession = Depends(get_db)):
    result = await offer.get_offer(db, offer_id)
    if not result:
        raise HTTPException(status_code=404, detail="Offer not found")
    return result


@router.post("", response_model=OfferRead, status_code=201)
async def create_offer(
    parsed: ParsedPayload = Depends(parse_offer_create),
    db: AsyncSession = Depends(get_db),
):
    data = parsed.payload
    new_image = None
    if parsed.upload:
        new_image = await save_image(parsed.upload, fieldname="image")
        data.image_url = new_image

    try:
        return await offer.create_offer(db, data)
    except ValueError as e:
        remove_image(new_image)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        remove_image(new_image)
        raise


@router.put("/{offer_id}", response_model=OfferRead)
async def update_offer(
    offer_id: int,
    parsed: ParsedPayload = Depends(parse_offer_update),
    db: AsyncSession = Depends(get_db),
):
    data = parsed.payload
    if not await offer.get_offer(db, offer_id):
        raise HTTPException(status_code=404, detail="Offer not found")

    new_image = None
    if parsed.upload:
        new_image = await save_image(parsed.upload, fieldname="image")
        data.image_url = new_image

    try:
        result, previous_image = await offer.update_offer(db, offer_id, data)
    except ValueError as e:
        remove_image(new_image)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        remove_image(new_image)
        raise

    if not result:
        remove_image(new_image)
        raise HTTPException(status_code=404, detail="Offer not found")

    if previous_image and previous_image != result.image_url:
        remove_image(previous_image)
    return result


@router.delete("/{offer_id}")
async def delete_offer(offer_id: int, db: AsyncSession = Depends(get_db)):
    result = await offer.delete_offer(db, offer_id)
    if not result:
        raise HTTPException(status_code=404, detail="Offer not found")
    remove_image(result.image_url)
    return {"message": "Offer deleted successfully", "id": offer_id}
