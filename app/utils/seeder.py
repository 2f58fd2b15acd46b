"""
Sample data seeder
Creates demo users, stores, categories and products
"""

from decimal import Decimal
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.database import get_db_context, init_db, drop_db
from app.core.security import SecurityUtils
from app.models import User, UserRole, Store, Category, Product
from app.utils.helpers import generate_slug

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"

USERS = [
    {"name": "Admin User", "email": "admin@example.com", "phone": "555-123-4567", "role": UserRole.ADMIN},
    {"name": "Test User", "email": "user@example.com", "phone": "555-987-6543", "role": UserRole.CUSTOMER},
    {"name": "Shopper User", "email": "shopper@example.com", "phone": "555-456-7890", "role": UserRole.SHOPPER},
]

STORES = [
    {
        "name": "Fresh Grocery",
        "description": "Your local grocery store with fresh produce and essentials.",
        "address": {"street": "100 Market St", "city": "San Francisco", "state": "CA", "zipCode": "94105"},
        "phone": "415-555-1234",
        "email": "info@freshgrocery.com",
        "delivery_fee": Decimal("3.99"),
        "minimum_order": Decimal("10.00"),
    },
    {
        "name": "Organic Market",
        "description": "Specializing in organic and locally sourced products.",
        "address": {"street": "200 Organic Ave", "city": "Berkeley", "state": "CA", "zipCode": "94704"},
        "phone": "510-555-5678",
        "email": "info@organicmarket.com",
        "delivery_fee": Decimal("4.99"),
        "minimum_order": Decimal("15.00"),
    },
    {
        "name": "Quick Mart",
        "description": "Fast delivery of everyday essentials and groceries.",
        "address": {"street": "300 Quick St", "city": "Oakland", "state": "CA", "zipCode": "94612"},
        "phone": "510-555-9012",
        "email": "info@quickmart.com",
        "delivery_fee": Decimal("2.99"),
        "minimum_order": Decimal("5.00"),
    },
]

CATEGORIES = [
    {"name": "Fresh Produce", "description": "Fresh fruits and vegetables delivered daily"},
    {"name": "Meat & Seafood", "description": "Premium cuts and fresh seafood"},
    {"name": "Dairy & Eggs", "description": "Milk, cheese, yogurt, and farm-fresh eggs"},
    {"name": "Bakery", "description": "Freshly baked bread, pastries, and desserts"},
    {"name": "Pantry Staples", "description": "Pasta, rice, sauces, and canned goods"},
]

# (name, category, price, sale price, unit, stock, brand)
PRODUCTS = [
    ("Organic Bananas", "Fresh Produce", "0.69", None, "lb", 200, None),
    ("Hass Avocados", "Fresh Produce", "1.99", "1.49", "each", 120, None),
    ("Baby Spinach", "Fresh Produce", "3.99", None, "oz", 60, "Earthbound Farm"),
    ("Chicken Breast", "Meat & Seafood", "6.99", None, "lb", 40, None),
    ("Atlantic Salmon Fillet", "Meat & Seafood", "12.99", "10.99", "lb", 25, None),
    ("Whole Milk", "Dairy & Eggs", "4.29", None, "each", 80, "Horizon"),
    ("Large Brown Eggs", "Dairy & Eggs", "5.49", None, "each", 90, "Vital Farms"),
    ("Sourdough Loaf", "Bakery", "6.50", None, "each", 30, None),
    ("Spaghetti", "Pantry Staples", "1.79", None, "each", 150, "Barilla"),
    ("Jasmine Rice", "Pantry Staples", "8.99", "7.49", "kg", 70, None),
]

async def seed_users(db: AsyncSession) -> list:
    users = []
    for data in USERS:
        user = User(password_hash=SecurityUtils.hash_password(DEFAULT_PASSWORD), **data)
        db.add(user)
        users.append(user)
    await db.flush()
    logger.info(f"Seeded {len(users)} users")
    return users

async def seed_stores(db: AsyncSession) -> list:
    stores = [Store(**data) for data in STORES]
    db.add_all(stores)
    await db.flush()
    logger.info(f"Seeded {len(stores)} stores")
    return stores

async def seed_categories(db: AsyncSession) -> dict:
    categories = {}
    for data in CATEGORIES:
        category = Category(slug=generate_slug(data["name"]), **data)
        db.add(category)
        categories[data["name"]] = category
    await db.flush()
    logger.info(f"Seeded {len(categories)} categories")
    return categories

async def seed_products(db: AsyncSession, stores: list, categories: dict) -> int:
    """Every store carries the full product list"""
    count = 0
    for store in stores:
        for name, category, price, sale_price, unit, stock, brand in PRODUCTS:
            db.add(Product(
                name=name,
                brand=brand,
                store_id=store.id,
                category_id=categories[category].id,
                price=Decimal(price),
                sale_price=Decimal(sale_price) if sale_price else None,
                on_sale=sale_price is not None,
                unit=unit,
                stock=stock,
                images=[],
            ))
            count += 1
    await db.flush()
    logger.info(f"Seeded {count} products")
    return count

async def seed_database(reset: bool = False) -> bool:
    """
    Load the sample data

    Args:
        reset: Drop and recreate all tables first

    Returns:
        False when data already exists and nothing was seeded
    """
    if reset:
        await drop_db()
    await init_db()

    async with get_db_context() as db:
        existing = await db.scalar(select(func.count()).select_from(User))
        if existing and not reset:
            logger.info("Database already has users, skipping seed")
            return False

        await seed_users(db)
        stores = await seed_stores(db)
        categories = await seed_categories(db)
        await seed_products(db, stores, categories)

    logger.info(f"Sample data loaded, every user's password is {DEFAULT_PASSWORD}")
    return True
