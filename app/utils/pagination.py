"""
Pagination utilities
"""

from pydantic import BaseModel, Field
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

class PaginationParams(BaseModel):
    """Pagination parameters"""
    page: int = Field(1, ge=1, description="Page number")
    limit: int = Field(10, ge=1, le=100, description="Page size")

    @property
    def offset(self) -> int:
        """Calculate offset"""
        return (self.page - 1) * self.limit

async def paginate(
    db: AsyncSession,
    query: Select,
    params: PaginationParams
) -> dict:
    """
    Paginate query results

    Args:
        db: Database session
        query: SQLAlchemy query
        params: Page number and size

    Returns:
        Dictionary with the page of items and the pagination block
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = await db.scalar(count_query) or 0

    pages = (total + params.limit - 1) // params.limit

    result = await db.execute(query.offset(params.offset).limit(params.limit))
    items = result.scalars().unique().all()

    return {
        "items": items,
        "pagination": {
            "total": total,
            "page": params.page,
            "limit": params.limit,
            "pages": pages,
        },
    }
