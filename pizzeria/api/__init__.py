from fastapi import APIRouter
from . import menu_item_routes
from . import category_routes
from . import offer_routes
from . import order_routes
from . import feedback_routes
from . import contact_routes
from . import auth_routes
from . import diagnostic_routes

# Every JSON endpoint lives under /api
router = APIRouter(prefix="/api")

router.include_router(menu_item_routes.router, prefix="/menu-items", tags=["Menu Items"])
router.include_router(category_routes.router, prefix="/categories", tags=["Categories"])
router.include_router(offer_routes.router, prefix="/offers", tags=["Offers"])
router.include_router(order_routes.router, prefix="/orders", tags=["Orders"])
router.include_router(feedback_routes.router, prefix="/feedback", tags=["Feedback"])
router.include_router(contact_routes.router, prefix="/contact", tags=["Contact"])
router.include_router(auth_routes.router, prefix="/auth", tags=["Auth"])
router.include_router(diagnostic_routes.router, tags=["Diagnostics"])

__all__ = ["router"]
