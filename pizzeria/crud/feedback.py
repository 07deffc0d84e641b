import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from pizzeria.models.feedback import Feedback, ContactMessage
from pizzeria.schemas.feedback import FeedbackCreate, ContactMessageCreate

log = logging.getLogger(__name__)


async def create_feedback(db: AsyncSession, data: FeedbackCreate):
    """New feedback always starts unpublished"""
    feedback = Feedback(
        name=data.name,
        email=data.email,
        rating=data.rating,
        message=data.message,
        is_published=False,
    )
    db.add(feedback)
    await db.commit()
    await db.refresh(feedback)
    log.info("feedback id=%s received (rating=%s)", feedback.id, feedback.rating)
    return feedback


async def get_feedback_list(db: AsyncSession, published: Optional[bool] = None):
    query = select(Feedback)
    if published is not None:
        query = query.where(Feedback.is_published == published)
    result = await db.execute(query.order_by(Feedback.created_at.desc(), Feedback.id.desc()))
    return result.scalars().all()


async def get_feedback(db: AsyncSession, feedback_id: int):
    result = await db.execute(select(Feedback).where(Feedback.id == feedback_id))
    return result.scalar_one_or_none()


async def set_feedback_published(db: AsyncSession, feedback_id: int, is_published: bool):
    feedback = await get_feedback(db, feedback_id)
    if not feedback:
        return None
    feedback.is_published = is_published
    await db.commit()
    await db.refresh(feedback)
    log.info("feedback id=%s published=%s", feedback_id, is_published)
    return feedback


async def delete_feedback(db: AsyncSession, feedback_id: int):
    feedback = await get_feedback(db, feedback_id)
    if feedback:
        await db.delete(feedback)
        await db.commit()
        log.info("deleted feedback id=%s", feedback_id)
    return feedback


async def create_contact_message(db: AsyncSession, data: ContactMessageCreate):
    message = ContactMessage(
        name=data.name,
        email=data.email,
        subject=data.subject,
        message=data.message,
    )
    db.add(message)
    await db.commit()
    await db.refresh(message)
    log.info("contact message id=%s from %s", message.id, message.email)
    return message
