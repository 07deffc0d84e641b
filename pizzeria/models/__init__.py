from .base import Base
from .menu.category import Category
from .menu.menu_item import MenuItem, Size, Topping, menu_item_sizes, menu_item_toppings
from .offer import Offer, offer_menu_items
from .customer.customer import Customer
from .customer.order import Order, OrderItem, OrderItemTopping
from .feedback import Feedback, ContactMessage
from .user import AdminUser
