"""Products API router"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from decimal import Decimal
import uuid

from app.core.database import get_db
from app.models import User
from app.api.v1.auth.dependencies import require_admin
from app.utils.dependencies import get_pagination_params
from app.utils.pagination import PaginationParams
from .schemas import ProductCreate, ProductUpdate, ProductResponse, ProductListResponse, ProductFilters
from .services import ProductService

router = APIRouter()

@router.get("/", response_model=ProductListResponse, summary="List products")
async def get_products(
    store: Optional[uuid.UUID] = Query(None, description="Store filter"),
    category: Optional[uuid.UUID] = Query(None, description="Category filter"),
    search: Optional[str] = Query(None, max_length=100, description="Search in name, description and brand"),
    on_sale: Optional[bool] = Query(None, alias="onSale", description="Only products on sale"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    pagination: PaginationParams = Depends(get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    filters = ProductFilters(
        store=store,
        category=category,
        search=search,
        on_sale=on_sale,
        min_price=min_price,
        max_price=max_price,
    )
    service = ProductService(db)
    return await service.list_products(filters, pagination)

@router.get("/{product_id}", response_model=ProductResponse, summary="Get product")
async def get_product(product_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    service = ProductService(db)
    return await service.get_product(product_id)

@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    description="Admin only"
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    service = ProductService(db)
    return await service.create_product(payload)

@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update product",
    description="Admin only. Setting stock restocks or corrects the level."
)
async def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    service = ProductService(db)
    return await service.update_product(product_id, payload)
