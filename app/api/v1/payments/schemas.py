"""
Payment schemas for request/response validation
"""

from pydantic import EmailStr, Field
from typing import Optional, List, Any, Dict
import enum
import uuid

from app.models.order import OrderStatus, PaymentStatus
from app.schemas.base import BaseSchema, Money

class PaymentProvider(str, enum.Enum):
    STRIPE = "stripe"
    CHAPA = "chapa"

class PaymentInitialize(BaseSchema):
    """Start paying for an order"""
    order_id: uuid.UUID
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=20)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)

class PaymentInitializeResponse(BaseSchema):
    order_id: uuid.UUID
    provider: PaymentProvider
    reference: str
    checkout_url: Optional[str] = None
    client_secret: Optional[str] = None

class PaymentVerifyResponse(BaseSchema):
    order_id: uuid.UUID
    reference: str
    status: str
    amount: Optional[Money] = None
    payment_status: PaymentStatus
    order_status: OrderStatus

class PaymentMethodResponse(BaseSchema):
    id: str
    name: str
    type: str
    provider: PaymentProvider
    description: str
    supported: bool = True

class BankListResponse(BaseSchema):
    banks: List[Dict[str, Any]]
