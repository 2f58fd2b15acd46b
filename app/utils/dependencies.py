"""
Common dependencies for FastAPI
"""

from fastapi import Query

from app.core.config import settings
from .pagination import PaginationParams

def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size")
) -> PaginationParams:
    """Get pagination parameters from query"""
    return PaginationParams(page=page, limit=limit)
