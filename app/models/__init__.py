"""Models package initialization"""

from .base import Base
from .user import User, UserRole
from .store import Store
from .category import Category
from .product import Product, PRODUCT_UNITS
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderStatus, PaymentStatus, OrderStatusHistory
from .payment import PaymentAttempt

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Store",
    "Category",
    "Product",
    "PRODUCT_UNITS",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "OrderStatusHistory",
    "PaymentAttempt",
]
