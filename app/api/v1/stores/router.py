"""Stores API router"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
import logging
import uuid

from app.core.database import get_db
from app.core.exceptions import NotFoundException
from app.models import Store, User
from app.api.v1.auth.dependencies import require_admin
from .schemas import StoreCreate, StoreResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/", response_model=List[StoreResponse], summary="List active stores")
async def list_stores(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Store).where(Store.is_active == True).order_by(Store.name)
    )
    return result.scalars().all()

@router.get("/{store_id}", response_model=StoreResponse, summary="Get store")
async def get_store(store_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    store = await db.get(Store, store_id)
    if not store or not store.is_active:
        raise NotFoundException("Store not found")
    return store

@router.post(
    "/",
    response_model=StoreResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create store",
    description="Admin only"
)
async def create_store(
    payload: StoreCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    store = Store(
        name=payload.name,
        description=payload.description,
        logo=payload.logo,
        address=payload.address.model_dump(by_alias=True) if payload.address else None,
        phone=payload.phone,
        email=payload.email,
        delivery_fee=payload.delivery_fee,
        minimum_order=payload.minimum_order,
    )
    db.add(store)
    await db.flush()

    logger.info(f"Store {store.id} created by {admin.id}")
    return store
