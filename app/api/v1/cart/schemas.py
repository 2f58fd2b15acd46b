"""
Cart schemas for request/response validation
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
import uuid

from app.schemas.base import BaseSchema, Money

class CartLineInput(BaseSchema):
    """Line of a full cart submission"""
    product: uuid.UUID
    quantity: int = Field(..., ge=1)
    notes: Optional[str] = Field(None, max_length=500)

class CartCreate(BaseSchema):
    """Create or replace the cart for a store"""
    store: uuid.UUID
    items: List[CartLineInput] = Field(..., min_length=1)

class CartItemAdd(BaseSchema):
    """Schema for adding an item to the cart"""
    product_id: uuid.UUID
    quantity: int = Field(1, ge=1)
    notes: Optional[str] = Field(None, max_length=500)

class CartItemUpdate(BaseSchema):
    """Schema for updating a cart item"""
    quantity: int = Field(..., ge=1)
    notes: Optional[str] = Field(None, max_length=500)

class CartCheckout(BaseSchema):
    """Fees applied when preparing the cart for checkout"""
    delivery_fee: Money = Field(..., ge=0)
    service_fee: Money = Field(..., ge=0)
    tip: Money = Field(Decimal("0"), ge=0)
    store: Optional[uuid.UUID] = None

class CartProductSummary(BaseSchema):
    """Product fields shown next to a cart line"""
    id: uuid.UUID
    name: str
    images: List[str] = Field(default_factory=list)
    price: Money
    sale_price: Optional[Money] = None
    on_sale: bool
    stock: int
    unit: str

    @field_validator("images", mode="before")
    @classmethod
    def images_default(cls, v):
        return v or []

class CartItemResponse(BaseSchema):
    """Schema for cart item response"""
    id: uuid.UUID
    product: Optional[CartProductSummary] = None
    product_id: uuid.UUID
    quantity: int
    price: Money
    notes: Optional[str] = None

class CartResponse(BaseSchema):
    """Schema for complete cart response"""
    id: uuid.UUID
    user_id: uuid.UUID = Field(..., serialization_alias="user")
    store_id: uuid.UUID = Field(..., serialization_alias="store")
    items: List[CartItemResponse]

    subtotal: Money
    tax: Money
    delivery_fee: Money
    service_fee: Money
    tip: Money
    total: Money

    is_active: bool
    created_at: datetime
    updated_at: datetime
