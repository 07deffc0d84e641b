from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from datetime import date

from pizzeria.schemas.base import CamelModel


def _date_part(v):
    # Accept full ISO timestamps from date pickers ("2026-10-01T00:00:00.000Z")
    if isinstance(v, str) and len(v) > 10 and v[10] == "T":
        return v[:10]
    return v


def _strip_title(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("title must not be blank")
    return v


def _check_dates(start, end):
    if start is not None and end is not None and start > end:
        raise ValueError("startDate must be on or before endDate")


class OfferCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    image_url: Optional[str] = None
    discount: int = Field(0, ge=0, le=100)
    menu_item_ids: List[int] = []
    start_date: date
    end_date: date
    is_active: bool = True

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def iso_date(cls, v):
        return _date_part(v)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return _strip_title(v)

    @model_validator(mode="after")
    def dates_in_order(self):
        _check_dates(self.start_date, self.end_date)
        return self


class OfferUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None
    discount: Optional[int] = Field(None, ge=0, le=100)
    menu_item_ids: Optional[List[int]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def iso_date(cls, v):
        return _date_part(v)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return _strip_title(v)

    @model_validator(mode="after")
    def dates_in_order(self):
        _check_dates(self.start_date, self.end_date)
        return self


class OfferRead(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    discount: int = 0
    menu_item_ids: List[int] = []
    start_date: date
    end_date: date
    is_active: bool

    def is_current(self, today: Optional[date] = None) -> bool:
        """Active flag set and today within [start_date, end_date]."""
        today = today or date.today()
        return self.is_active and self.start_date <= today <= self.end_date

    def applies_to(self, menu_item_id: int) -> bool:
        return not self.menu_item_ids or menu_item_id in self.menu_item_ids
