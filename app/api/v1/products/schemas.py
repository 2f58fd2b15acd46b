"""
Product schemas for request/response validation
"""

from pydantic import Field, field_validator
from typing import Optional, List, Literal
from decimal import Decimal
import uuid

from app.schemas.base import BaseSchema, Money, PaginationMeta

ProductUnit = Literal["each", "lb", "oz", "kg", "g", "l", "ml"]

class ProductCreate(BaseSchema):
    """Admin request to list a product"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    brand: Optional[str] = Field(None, max_length=100)
    store_id: uuid.UUID = Field(..., alias="store")
    category_id: Optional[uuid.UUID] = Field(None, alias="category")
    price: Money = Field(..., ge=0)
    sale_price: Optional[Money] = Field(None, ge=0)
    on_sale: bool = False
    stock: int = Field(0, ge=0)
    unit: ProductUnit = "each"
    images: List[str] = Field(default_factory=list)

class ProductUpdate(BaseSchema):
    """Partial product update; stock changes go through inventory"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    brand: Optional[str] = Field(None, max_length=100)
    category_id: Optional[uuid.UUID] = Field(None, alias="category")
    price: Optional[Money] = Field(None, ge=0)
    sale_price: Optional[Money] = Field(None, ge=0)
    on_sale: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)
    unit: Optional[ProductUnit] = None
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("price")
    @classmethod
    def price_not_null(cls, v):
        if v is None:
            raise ValueError("Price cannot be null")
        return v

class ProductResponse(BaseSchema):
    """Product as returned to clients"""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    brand: Optional[str] = None
    store_id: uuid.UUID = Field(..., serialization_alias="store")
    category_id: Optional[uuid.UUID] = Field(None, serialization_alias="category")
    price: Money
    sale_price: Optional[Money] = None
    on_sale: bool
    effective_price: Money
    stock: int
    unit: str
    images: List[str] = Field(default_factory=list)
    is_active: bool

    @field_validator("images", mode="before")
    @classmethod
    def images_default(cls, v):
        return v or []

class ProductListResponse(BaseSchema):
    products: List[ProductResponse]
    pagination: PaginationMeta

class ProductFilters(BaseSchema):
    """Query filters for product listing"""
    store: Optional[uuid.UUID] = None
    category: Optional[uuid.UUID] = None
    search: Optional[str] = None
    on_sale: Optional[bool] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
