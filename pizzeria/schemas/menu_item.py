from pydantic import Field, field_validator
from typing import Optional, List

from pizzeria.schemas.base import CamelModel


def _clean_names(values):
    if values is None:
        return values
    seen = []
    for v in values:
        name = str(v).strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def _strip_required(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# ---------- Category ----------
class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Category name is required")
        return v


class CategoryRead(CamelModel):
    id: int
    name: str


# ---------- Menu Item ----------
class MenuItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: float = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    image: Optional[str] = None
    popular: bool = False
    discount: Optional[int] = Field(None, ge=0, le=100)
    available_sizes: List[str] = []
    available_toppings: List[str] = []

    @field_validator("available_sizes", "available_toppings")
    @classmethod
    def clean_names(cls, v):
        return _clean_names(v)

    @field_validator("name", "category")
    @classmethod
    def strip_required(cls, v):
        return _strip_required(v)


class MenuItemUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    image: Optional[str] = None
    popular: Optional[bool] = None
    discount: Optional[int] = Field(None, ge=0, le=100)
    available_sizes: Optional[List[str]] = None
    available_toppings: Optional[List[str]] = None

    @field_validator("available_sizes", "available_toppings")
    @classmethod
    def clean_names(cls, v):
        return _clean_names(v)

    @field_validator("name", "category")
    @classmethod
    def strip_required(cls, v):
        return _strip_required(v)


class MenuItemRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    category: Optional[str] = None
    image: Optional[str] = None
    popular: bool = False
    discount: Optional[int] = None
    available_sizes: List[str] = []
    available_toppings: List[str] = []

    @field_validator("category", mode="before")
    @classmethod
    def category_name(cls, v):
        # ORM rows carry a Category object, clients send the bare name
        return getattr(v, "name", v)


class PriceQuoteRequest(CamelModel):
    size: Optional[str] = None
    toppings: List[str] = []
    quantity: int = Field(1, ge=1)


class PriceQuote(CamelModel):
    menu_item_id: int
    size: Optional[str] = None
    toppings: List[str] = []
    unit_price: float
    quantity: int
    line_total: float
