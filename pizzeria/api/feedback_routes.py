from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from pizzeria.crud import feedback
from pizzeria.db import get_db
from pizzeria.schemas.feedback import FeedbackCreate, FeedbackPublish, FeedbackRead

router = APIRouter()


@router.get("", response_model=List[FeedbackRead])
async def list_feedback(published: Optional[bool] = None, db: AsyncSession = Depends(get_db)):
    return await feedback.get_feedback_list(db, published=published)


# Declared before /{feedback_id} so "published" is not read as an id
@router.get("/published", response_model=List[FeedbackRead])
async def list_published_feedback(db: AsyncSession = Depends(get_db)):
    """Only moderated feedback is shown on the public site"""
    return await feedback.get_feedback_list(db, published=True)


@router.get("/{feedback_id}", response_model=FeedbackRead)
async def get_feedback(feedback_id: int, db: AsyncSession = Depends(get_db)):
    result = await feedback.get_feedback(db, feedback_id)
    if not result:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return result


@router.post("", response_model=FeedbackRead, status_code=201)
async def create_feedback(data: FeedbackCreate, db: AsyncSession = Depends(get_db)):
    return await feedback.create_feedback(db, data)


@router.patch("/{feedback_id}/publish", response_model=FeedbackRead)
async def publish_feedback(feedback_id: int, update: FeedbackPublish, db: AsyncSession = Depends(get_db)):
    result = await feedback.set_feedback_published(db, feedback_id, update.is_published)
    if not result:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return result


@router.delete("/{feedback_id}")
async def delete_feedback(feedback_id: int, db: AsyncSession = Depends(get_db)):
    result = await feedback.delete_feedback(db, feedback_id)
    if not result:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return {"message": "Feedback deleted successfully", "id": feedback_id}
