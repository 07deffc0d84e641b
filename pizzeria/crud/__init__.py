from . import category
from . import menu_item
from . import offer
from . import order
from . import feedback
from . import admin_user

__all__ = [
    "category",
    "menu_item",
    "offer",
    "order",
    "feedback",
    "admin_user",
]
