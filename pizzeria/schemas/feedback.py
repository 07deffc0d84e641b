from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from pizzeria.schemas.base import CamelModel


class FeedbackCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    rating: int = Field(..., ge=1, le=5)
    message: str = Field(..., min_length=1)


class FeedbackPublish(CamelModel):
    is_published: bool


class FeedbackRead(CamelModel):
    id: int
    name: str
    email: str
    rating: int
    message: str
    is_published: bool
    created_at: datetime


class ContactMessageCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    subject: Optional[str] = None
    message: str = Field(..., min_length=1)
