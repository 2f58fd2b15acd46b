"""API v1 routes aggregation"""

from fastapi import APIRouter

from .auth.router import router as auth_router
from .stores.router import router as stores_router
from .categories.router import router as categories_router
from .products.router import router as products_router
from .cart.router import router as cart_router
from .orders.router import router as orders_router
from .payments.router import router as payments_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(stores_router, prefix="/stores", tags=["Stores"])
api_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(products_router, prefix="/products", tags=["Products"])
api_router.include_router(cart_router, prefix="/cart", tags=["Cart"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
api_router.include_router(payments_router, prefix="/payments", tags=["Payments"])

router = api_router

__all__ = ["api_router", "router"]
