"""Bundled sample records served when the API cannot be reached."""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from pizzeria.schemas.feedback import FeedbackRead
from pizzeria.schemas.menu_item import MenuItemRead
from pizzeria.schemas.offer import OfferRead

PLACEHOLDER_IMAGE = "/placeholder.svg"

ALL_SIZES = ["Small", "Medium", "Large", "Family"]
CLASSIC_TOPPINGS = ["Extra Cheese", "Mushrooms", "Olives", "Onions", "Pepperoni"]

MENU_ITEMS = [
    MenuItemRead(
        id=1,
        name="Margherita",
        description="Tomato sauce, mozzarella and fresh basil.",
        price=10.99,
        category="Classic Pizzas",
        image=PLACEHOLDER_IMAGE,
        popular=True,
        available_sizes=ALL_SIZES,
        available_toppings=CLASSIC_TOPPINGS,
    ),
    MenuItemRead(
        id=2,
        name="Pepperoni",
        description="Tomato sauce, mozzarella and a generous layer of pepperoni.",
        price=12.99,
        category="Classic Pizzas",
        image=PLACEHOLDER_IMAGE,
        popular=True,
        available_sizes=ALL_SIZES,
        available_toppings=CLASSIC_TOPPINGS,
    ),
    MenuItemRead(
        id=3,
        name="BBQ Chicken",
        description="BBQ sauce, grilled chicken, red onion and coriander.",
        price=14.49,
        category="Specialty Pizzas",
        image=PLACEHOLDER_IMAGE,
        discount=10,
        available_sizes=ALL_SIZES,
        available_toppings=["Bell Peppers", "Jalapenos", "Pineapple"],
    ),
    MenuItemRead(
        id=4,
        name="Garlic Bread",
        description="Toasted bread with garlic butter and herbs.",
        price=4.99,
        category="Sides",
        image=PLACEHOLDER_IMAGE,
    ),
    MenuItemRead(
        id=5,
        name="Tiramisu",
        description="Coffee-soaked ladyfingers with mascarpone cream.",
        price=6.49,
        category="Desserts",
        image=PLACEHOLDER_IMAGE,
    ),
]

FEEDBACK = [
    FeedbackRead(
        id=1,
        name="Maria",
        email="maria@example.com",
        rating=5,
        message="Best margherita in town, delivered hot.",
        is_published=True,
        created_at=datetime(2024, 5, 2, 18, 30),
    ),
    FeedbackRead(
        id=2,
        name="Tom",
        email="tom@example.com",
        rating=4,
        message="Great crust, delivery took a little long.",
        is_published=True,
        created_at=datetime(2024, 5, 9, 20, 5),
    ),
]


def sample_offers(today: Optional[date] = None) -> List[OfferRead]:
    # Dated around `today` so the offline demo always shows running deals
    today = today or date.today()
    return [
        OfferRead(
            id=1,
            title="Two-for-Tuesday",
            description="Buy one classic pizza, get the second one free.",
            image_url=PLACEHOLDER_IMAGE,
            discount=0,
            menu_item_ids=[1, 2],
            start_date=today - timedelta(days=7),
            end_date=today + timedelta(days=30),
            is_active=True,
        ),
        OfferRead(
            id=2,
            title="Specialty Weekend",
            description="15% off every specialty pizza.",
            image_url=PLACEHOLDER_IMAGE,
            discount=15,
            menu_item_ids=[3],
            start_date=today,
            end_date=today + timedelta(days=14),
            is_active=True,
        ),
    ]


def default_fallback(today: Optional[date] = None) -> Dict[str, list]:
    return {
        "menu_items": list(MENU_ITEMS),
        "offers": sample_offers(today),
        "feedback": list(FEEDBACK),
        "orders": [],
    }
