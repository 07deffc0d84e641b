from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pizzeria.crud import feedback
from pizzeria.db import get_db
from pizzeria.schemas.feedback import ContactMessageCreate

router = APIRouter()


# Write-only: messages are read from the database, not over the API
@router.post("", status_code=201)
async def send_contact_message(data: ContactMessageCreate, db: AsyncSession = Depends(get_db)):
    message = await feedback.create_contact_message(db, data)
    return {"message": "Message sent successfully", "id": message.id}
