"""
Payment API routes
"""

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.models import User
from app.schemas.base import MessageResponse
from app.api.v1.auth.dependencies import get_current_user
from .gateways import ChapaGateway, StripeGateway, PaymentGateway, get_chapa_gateway, get_stripe_gateway
from .schemas import (
    PaymentProvider,
    PaymentInitialize,
    PaymentInitializeResponse,
    PaymentVerifyResponse,
    PaymentMethodResponse,
    BankListResponse
)
from .services import PaymentService
from .webhooks import parse_chapa_webhook, parse_stripe_webhook

router = APIRouter()

def get_gateway(
    provider: PaymentProvider,
    stripe_gateway: StripeGateway = Depends(get_stripe_gateway),
    chapa_gateway: ChapaGateway = Depends(get_chapa_gateway)
) -> PaymentGateway:
    """Gateway for the provider named in the path"""
    if provider == PaymentProvider.STRIPE:
        return stripe_gateway
    return chapa_gateway

@router.get(
    "/methods",
    response_model=List[PaymentMethodResponse],
    summary="Get payment methods",
    description="Get available payment methods"
)
async def get_payment_methods():
    return PaymentService.get_payment_methods()

@router.get(
    "/chapa/banks",
    response_model=BankListResponse,
    summary="List Chapa banks"
)
async def get_chapa_banks(gateway: ChapaGateway = Depends(get_chapa_gateway)):
    return BankListResponse(banks=await gateway.list_banks())

@router.post(
    "/stripe/webhook",
    response_model=MessageResponse,
    summary="Stripe webhook"
)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    db: AsyncSession = Depends(get_db)
):
    payload = await request.body()
    event = parse_stripe_webhook(payload, stripe_signature, settings.STRIPE_WEBHOOK_SECRET)

    service = PaymentService(db)
    await service.handle_webhook(event)
    return MessageResponse(message="Webhook processed successfully")

@router.post(
    "/chapa/webhook",
    response_model=MessageResponse,
    summary="Chapa webhook"
)
async def chapa_webhook(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    payload = await request.body()
    event = parse_chapa_webhook(payload, request.headers, settings.CHAPA_WEBHOOK_SECRET)

    service = PaymentService(db)
    await service.handle_webhook(event)
    return MessageResponse(message="Webhook processed successfully")

@router.post(
    "/{provider}/initialize",
    response_model=PaymentInitializeResponse,
    summary="Initialize payment",
    description="Open a payment for an order with Stripe or Chapa"
)
async def initialize_payment(
    provider: PaymentProvider,
    payload: PaymentInitialize,
    gateway: PaymentGateway = Depends(get_gateway),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = PaymentService(db, gateway)
    return await service.initialize_payment(current_user, provider, payload)

@router.get(
    "/{provider}/verify/{reference}",
    response_model=PaymentVerifyResponse,
    summary="Verify payment",
    description="Check the payment with the provider and update the order"
)
async def verify_payment(
    provider: PaymentProvider,
    reference: str,
    gateway: PaymentGateway = Depends(get_gateway),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = PaymentService(db, gateway)
    return await service.verify_payment(current_user, provider, reference)
