from .api import ApiError, PizzeriaClient
from .cache import ClientCache
from .cart import Cart, CartLine
from .fallback import default_fallback

__all__ = [
    "ApiError",
    "PizzeriaClient",
    "ClientCache",
    "Cart",
    "CartLine",
    "default_fallback",
]
