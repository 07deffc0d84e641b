from decimal import Decimal

# 🧾 Order lifecycle values accepted by PATCH /api/orders/{id}/status
ORDER_STATUSES = (
    "pending",
    "confirmed",
    "preparing",
    "ready",
    "delivered",
    "completed",
    "cancelled",
)

ORDER_TYPES = ("delivery", "takeaway")

# 📁 Uploads
ALLOWED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif"}
UPLOAD_URL_PREFIX = "/uploads/"
PLACEHOLDER_MARKER = "placeholder"

# 🍕 Reference data seeded on startup (order matters for sizes)
DEFAULT_SIZES = ["Small", "Medium", "Large", "Family"]
DEFAULT_TOPPINGS = [
    "Extra Cheese",
    "Mushrooms",
    "Pepperoni",
    "Onions",
    "Bell Peppers",
    "Olives",
    "Jalapenos",
    "Pineapple",
]

# 💲 Storefront pricing: Medium is the base price
SIZE_PRICE_ADJUSTMENTS = {
    "Small": Decimal("-2.00"),
    "Medium": Decimal("0.00"),
    "Large": Decimal("3.00"),
    "Family": Decimal("6.00"),
}
TOPPING_PRICE = Decimal("1.50")
DELIVERY_FEE = Decimal("3.00")
