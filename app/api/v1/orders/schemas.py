"""
Order schemas for request/response validation
"""

from pydantic import Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime
import uuid

from app.models.order import OrderStatus, PaymentStatus
from app.schemas.base import BaseSchema, Money, Address, PaginationMeta

class PaymentDetails(BaseSchema):
    card_type: Optional[str] = Field(None, max_length=30)
    last_four_digits: Optional[str] = Field(None, pattern=r"^\d{4}$")

class PaymentMethod(BaseSchema):
    """How the customer pays"""
    type: Literal["card", "paypal", "chapa"]
    details: Optional[PaymentDetails] = None

class OrderCreate(BaseSchema):
    """Schema for checking out a cart"""
    cart_id: uuid.UUID
    payment_method: PaymentMethod
    payment_id: Optional[str] = Field(None, max_length=200)
    delivery_address: Address
    delivery_instructions: Optional[str] = Field(None, max_length=1000)

    @field_validator("delivery_address")
    @classmethod
    def address_parts_present(cls, v):
        for part in ("street", "city", "state", "zip_code"):
            if not getattr(v, part).strip():
                raise ValueError(f"Delivery address {part} is required")
        return v

class OrderStatusUpdate(BaseSchema):
    status: OrderStatus
    note: Optional[str] = Field(None, max_length=500)

class ShopperAssignment(BaseSchema):
    shopper_id: uuid.UUID

class DeliveryTimeUpdate(BaseSchema):
    delivery_time: datetime

class PaymentStatusUpdate(BaseSchema):
    payment_status: PaymentStatus

class OrderItemResponse(BaseSchema):
    product_id: uuid.UUID = Field(..., serialization_alias="product")
    name: str
    quantity: int
    price: Money
    notes: Optional[str] = None

class StatusHistoryResponse(BaseSchema):
    status: OrderStatus
    timestamp: datetime
    note: Optional[str] = None

class OrderResponse(BaseSchema):
    """Schema for order response"""
    id: uuid.UUID
    order_number: str
    user_id: Optional[uuid.UUID] = Field(None, serialization_alias="user")
    store_id: uuid.UUID = Field(..., serialization_alias="store")
    shopper_id: Optional[uuid.UUID] = Field(None, serialization_alias="shopper")
    items: List[OrderItemResponse]

    subtotal: Money
    tax: Money
    delivery_fee: Money
    service_fee: Money
    tip: Money
    total: Money

    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    payment_id: Optional[str] = None
    payment_provider: Optional[str] = None
    payment_reference: Optional[str] = None
    paid_at: Optional[datetime] = None

    delivery_address: Address
    delivery_instructions: Optional[str] = None
    delivery_time: Optional[datetime] = None

    status_history: List[StatusHistoryResponse]
    created_at: datetime
    updated_at: datetime

class OrderListResponse(BaseSchema):
    orders: List[OrderResponse]
    pagination: PaginationMeta
