"""Categories API router"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from app.core.database import get_db
from app.models import User
from app.api.v1.auth.dependencies import require_admin
from . import crud
from .schemas import CategoryCreate, CategoryResponse

router = APIRouter()

@router.get("/", response_model=List[CategoryResponse], summary="List categories")
async def list_categories(
    parent: Optional[uuid.UUID] = Query(None, description="Only children of this category"),
    db: AsyncSession = Depends(get_db)
):
    return await crud.get_categories(db, parent_id=parent)

@router.post(
    "/",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    description="Admin only"
)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return await crud.create_category(db, payload)
