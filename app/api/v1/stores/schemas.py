"""
Store schemas for request/response validation
"""

from pydantic import EmailStr, Field
from typing import Optional
from decimal import Decimal
import uuid

from app.schemas.base import BaseSchema, Address, Money

class StoreCreate(BaseSchema):
    """Admin request to open a store"""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    logo: Optional[str] = None
    address: Optional[Address] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    delivery_fee: Money = Field(Decimal("0"), ge=0)
    minimum_order: Money = Field(Decimal("0"), ge=0)

class StoreResponse(BaseSchema):
    """Store as returned to clients"""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    address: Optional[Address] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    delivery_fee: Money
    minimum_order: Money
    is_active: bool
