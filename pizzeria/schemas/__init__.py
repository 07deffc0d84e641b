from .base import CamelModel

from .menu_item import (
    CategoryCreate,
    CategoryRead,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemRead,
    PriceQuoteRequest,
    PriceQuote,
)

from .offer import (
    OfferCreate,
    OfferUpdate,
    OfferRead,
)

from .order import (
    OrderStatus,
    OrderType,
    OrderItemCreate,
    OrderItemRead,
    OrderCreate,
    OrderStatusUpdate,
    OrderRead,
)

from .feedback import (
    FeedbackCreate,
    FeedbackPublish,
    FeedbackRead,
    ContactMessageCreate,
)

from .user import (
    LoginRequest,
    AdminUserRead,
)

__all__ = [
    "CamelModel",
    # Menu
    "CategoryCreate",
    "CategoryRead",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemRead",
    "PriceQuoteRequest",
    "PriceQuote",
    # Offers
    "OfferCreate",
    "OfferUpdate",
    "OfferRead",
    # Orders
    "OrderStatus",
    "OrderType",
    "OrderItemCreate",
    "OrderItemRead",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderRead",
    # Feedback / contact
    "FeedbackCreate",
    "FeedbackPublish",
    "FeedbackRead",
    "ContactMessageCreate",
    # Auth
    "LoginRequest",
    "AdminUserRead",
]
