"""
Category CRUD operations
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List
import uuid

from app.models import Category
from app.core.exceptions import BadRequestException, DuplicateResourceException
from app.utils.helpers import generate_slug
from .schemas import CategoryCreate


async def get_category_by_id(db: AsyncSession, category_id: uuid.UUID) -> Optional[Category]:
    """Get category by ID"""
    return await db.get(Category, category_id)


async def get_category_by_slug(db: AsyncSession, slug: str) -> Optional[Category]:
    """Get category by slug"""
    result = await db.execute(select(Category).where(Category.slug == slug))
    return result.scalar_one_or_none()


async def get_categories(
    db: AsyncSession,
    parent_id: Optional[uuid.UUID] = None
) -> List[Category]:
    """Get active categories, optionally only the children of one parent"""
    stmt = select(Category).where(Category.is_active == True)

    if parent_id is not None:
        stmt = stmt.where(Category.parent_id == parent_id)

    result = await db.execute(stmt.order_by(Category.name))
    return list(result.scalars().all())


async def create_category(db: AsyncSession, category_data: CategoryCreate) -> Category:
    """Create a category; the slug is derived from the name when not given"""
    slug = category_data.slug or generate_slug(category_data.name)

    if await get_category_by_slug(db, slug):
        raise DuplicateResourceException(f"Category with slug '{slug}' already exists")

    if category_data.parent_id and not await get_category_by_id(db, category_data.parent_id):
        raise BadRequestException("Parent category not found")

    category = Category(
        name=category_data.name,
        slug=slug,
        description=category_data.description,
        image=category_data.image,
        parent_id=category_data.parent_id,
    )
    db.add(category)
    await db.flush()
    return category
