"""
Payment gateway adapters
Stripe through its SDK, Chapa through its REST API
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

import httpx
import stripe

from app.core.config import settings
from app.core.exceptions import PaymentGatewayException
from app.utils.helpers import generate_tx_ref, round_money, to_minor_units

logger = logging.getLogger(__name__)

PAYMENT_SUCCESS = "success"
PAYMENT_FAILED = "failed"
PAYMENT_PENDING = "pending"

@dataclass
class PaymentCustomer:
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None

@dataclass
class InitializedPayment:
    reference: str
    checkout_url: Optional[str] = None
    client_secret: Optional[str] = None

@dataclass
class VerifiedPayment:
    status: str
    amount: Optional[Decimal]
    reference: str

class PaymentGateway(ABC):
    """Provider-neutral payment interface"""

    name: str

    @abstractmethod
    async def initialize_payment(
        self,
        amount: Decimal,
        currency: str,
        customer: PaymentCustomer,
        callback_url: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> InitializedPayment:
        """Open a payment with the provider"""

    @abstractmethod
    async def verify_payment(self, reference: str) -> VerifiedPayment:
        """Ask the provider for the outcome of a payment"""

class StripeGateway(PaymentGateway):
    """Stripe PaymentIntents"""

    name = "stripe"

    STATUS_MAP = {
        "succeeded": PAYMENT_SUCCESS,
        "canceled": PAYMENT_FAILED,
    }

    def __init__(self, secret_key: Optional[str] = None):
        self.secret_key = secret_key or settings.STRIPE_SECRET_KEY

    def _ensure_configured(self) -> None:
        if not self.secret_key:
            logger.error("Stripe call attempted without STRIPE_SECRET_KEY")
            raise PaymentGatewayException("Payment provider is not configured")
        stripe.api_key = self.secret_key

    async def initialize_payment(
        self,
        amount: Decimal,
        currency: str,
        customer: PaymentCustomer,
        callback_url: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> InitializedPayment:
        """
        Create a PaymentIntent

        Args:
            amount: Amount in major units; Stripe is sent cents
            currency: Currency code
            customer: Payer details, the email becomes the receipt address
            callback_url: Unused by PaymentIntents, kept for the interface
            metadata: Attached to the intent

        Returns:
            Intent id as reference plus the client secret
        """
        self._ensure_configured()
        try:
            intent = await stripe.PaymentIntent.create_async(
                amount=to_minor_units(amount),
                currency=currency.lower(),
                receipt_email=customer.email,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe error creating payment intent: {e}")
            raise PaymentGatewayException()

        return InitializedPayment(reference=intent.id, client_secret=intent.client_secret)

    async def verify_payment(self, reference: str) -> VerifiedPayment:
        """Retrieve a PaymentIntent and map its status"""
        self._ensure_configured()
        try:
            intent = await stripe.PaymentIntent.retrieve_async(reference)
        except stripe.StripeError as e:
            logger.error(f"Stripe error retrieving payment intent {reference}: {e}")
            raise PaymentGatewayException()

        status = self.STATUS_MAP.get(intent.status, PAYMENT_PENDING)
        if intent.status == "requires_payment_method" and getattr(intent, "last_payment_error", None):
            status = PAYMENT_FAILED

        return VerifiedPayment(
            status=status,
            amount=round_money(Decimal(intent.amount) / 100),
            reference=intent.id,
        )

class ChapaGateway(PaymentGateway):
    """Chapa hosted checkout"""

    name = "chapa"

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.secret_key = secret_key or settings.CHAPA_SECRET_KEY
        self.base_url = (base_url or settings.CHAPA_BASE_URL).rstrip("/")
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        if not self.secret_key:
            logger.error("Chapa call attempted without CHAPA_SECRET_KEY")
            raise PaymentGatewayException("Payment provider is not configured")
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = self._headers()
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=settings.CHAPA_TIMEOUT,
                transport=self.transport
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Chapa {method} {path} returned {e.response.status_code}: {e.response.text}")
            raise PaymentGatewayException()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Chapa {method} {path} failed: {e}")
            raise PaymentGatewayException()

    async def initialize_payment(
        self,
        amount: Decimal,
        currency: str,
        customer: PaymentCustomer,
        callback_url: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> InitializedPayment:
        """
        Start a hosted checkout

        Args:
            amount: Amount in major units
            currency: Currency code, ETB by default
            customer: Payer details
            callback_url: Chapa posts the result here
            metadata: return_url and customization, if any

        Returns:
            Generated tx_ref as reference plus the checkout URL
        """
        metadata = metadata or {}
        tx_ref = generate_tx_ref()

        payload = {
            "amount": str(round_money(amount)),
            "currency": currency,
            "email": customer.email,
            "first_name": customer.first_name,
            "last_name": customer.last_name,
            "tx_ref": tx_ref,
            "callback_url": callback_url,
        }
        if customer.phone_number:
            payload["phone_number"] = customer.phone_number
        if metadata.get("return_url"):
            payload["return_url"] = metadata["return_url"]
        if metadata.get("customization"):
            payload["customization"] = metadata["customization"]

        body = await self._request("POST", "/transaction/initialize", json=payload)

        checkout_url = (body.get("data") or {}).get("checkout_url")
        if not checkout_url:
            logger.error(f"Chapa initialize for {tx_ref} returned no checkout_url: {body}")
            raise PaymentGatewayException()

        return InitializedPayment(reference=tx_ref, checkout_url=checkout_url)

    async def verify_payment(self, reference: str) -> VerifiedPayment:
        """Verify a transaction by its tx_ref"""
        body = await self._request("GET", f"/transaction/verify/{reference}")
        data = body.get("data") or {}

        raw_status = str(data.get("status", "")).lower()
        if raw_status == "success":
            status = PAYMENT_SUCCESS
        elif raw_status in ("failed", "cancelled"):
            status = PAYMENT_FAILED
        else:
            status = PAYMENT_PENDING

        amount = data.get("amount")
        return VerifiedPayment(
            status=status,
            amount=round_money(amount) if amount is not None else None,
            reference=data.get("tx_ref") or reference,
        )

    async def list_banks(self) -> List[Dict[str, Any]]:
        """Banks and wallets supported for transfers"""
        body = await self._request("GET", "/banks")
        return body.get("data") or []

def get_stripe_gateway() -> StripeGateway:
    return StripeGateway()

def get_chapa_gateway() -> ChapaGateway:
    return ChapaGateway()
