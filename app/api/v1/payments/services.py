"""
Payment service layer
Couples provider payment outcomes to orders
"""

from typing import List, Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
import logging

from app.models import Order, OrderStatus, PaymentAttempt, PaymentStatus, User
from app.models.base import utcnow
from app.core.config import settings
from app.core.exceptions import NotFoundException, BadRequestException, ForbiddenException
from app.api.v1.orders.services import OrderService
from .gateways import (
    PaymentGateway,
    PaymentCustomer,
    PAYMENT_SUCCESS,
    PAYMENT_FAILED
)
from .schemas import PaymentInitialize, PaymentProvider
from .webhooks import WebhookEvent

logger = logging.getLogger(__name__)

PAYMENT_METHODS = [
    {
        "id": "stripe_card",
        "name": "Credit/Debit Card",
        "type": "card",
        "provider": PaymentProvider.STRIPE,
        "description": "Pay with Visa, Mastercard or American Express",
    },
    {
        "id": "chapa_card",
        "name": "Card via Chapa",
        "type": "card",
        "provider": PaymentProvider.CHAPA,
        "description": "Pay with a local or international card through Chapa",
    },
    {
        "id": "chapa_mobile",
        "name": "Mobile Money",
        "type": "mobile_money",
        "provider": PaymentProvider.CHAPA,
        "description": "Pay with telebirr, M-Pesa or CBE Birr",
    },
    {
        "id": "chapa_bank",
        "name": "Bank Transfer",
        "type": "bank_transfer",
        "provider": PaymentProvider.CHAPA,
        "description": "Pay directly from an Ethiopian bank account",
    },
]

# Payment statuses provider outcomes can no longer change
SETTLED_PAYMENT_STATUSES = (PaymentStatus.PAID, PaymentStatus.REFUNDED)

class PaymentService:
    """Payment service for processing transactions"""

    def __init__(self, db: AsyncSession, gateway: Optional[PaymentGateway] = None):
        self.db = db
        self.gateway = gateway
        self.orders = OrderService(db)

    @staticmethod
    def get_payment_methods() -> List[Dict[str, Any]]:
        return PAYMENT_METHODS

    async def find_attempt(self, provider: str, reference: str) -> PaymentAttempt:
        """
        Payment attempt holding a provider transaction reference

        Every reference ever opened for an order stays resolvable, so a
        customer who pays through an older checkout link is still credited.

        Raises:
            NotFoundException: No order carries the reference
        """
        result = await self.db.execute(
            select(PaymentAttempt).where(
                and_(
                    PaymentAttempt.reference == reference,
                    PaymentAttempt.provider == provider
                )
            )
        )
        attempt = result.scalar_one_or_none()
        if not attempt:
            logger.warning(f"No order found for {provider} reference {reference}")
            raise NotFoundException("Order not found")
        return attempt

    async def initialize_payment(
        self,
        user: User,
        provider: PaymentProvider,
        data: PaymentInitialize
    ) -> Dict[str, Any]:
        """
        Open a payment with the provider and remember its reference

        Args:
            user: Order owner (or an admin)
            provider: Gateway to use
            data: Order and payer details

        Returns:
            Reference and checkout data for the client

        Raises:
            NotFoundException: If order not found
            ForbiddenException: Caller cannot see the order
            BadRequestException: Order already paid or cancelled
        """
        order = await self.orders.get_order(data.order_id)
        if not self.orders.can_view(order, user):
            raise ForbiddenException("Not authorized")

        if order.payment_status in SETTLED_PAYMENT_STATUSES:
            raise BadRequestException("Order already paid")
        if order.status == OrderStatus.CANCELLED:
            raise BadRequestException("Order is cancelled")

        if provider == PaymentProvider.STRIPE:
            currency = data.currency or settings.STRIPE_CURRENCY
        else:
            currency = data.currency or settings.CHAPA_CURRENCY

        customer = PaymentCustomer(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
        )
        initialized = await self.gateway.initialize_payment(
            amount=order.total,
            currency=currency,
            customer=customer,
            callback_url=f"{settings.BACKEND_URL}/api/v1/payments/{provider.value}/webhook",
            metadata={
                "order_id": str(order.id),
                "order_number": order.order_number,
                "return_url": f"{settings.FRONTEND_URL}/orders/success?orderId={order.id}",
            },
        )

        self.db.add(
            PaymentAttempt(
                order_id=order.id,
                provider=provider.value,
                reference=initialized.reference,
                amount=order.total,
                currency=currency,
            )
        )
        # The order points at its latest attempt
        order.payment_provider = provider.value
        order.payment_reference = initialized.reference
        await self.db.flush()

        logger.info(f"{provider.value} payment {initialized.reference} opened for order {order.order_number}")
        return {
            "order_id": order.id,
            "provider": provider,
            "reference": initialized.reference,
            "checkout_url": initialized.checkout_url,
            "client_secret": initialized.client_secret,
        }

    async def verify_payment(
        self,
        user: User,
        provider: PaymentProvider,
        reference: str
    ) -> Dict[str, Any]:
        """
        Ask the provider for the outcome and apply it to the order

        Raises:
            NotFoundException: No order for the reference
            ForbiddenException: Caller cannot see the order
        """
        attempt = await self.find_attempt(provider.value, reference)
        order = await self.orders.get_order(attempt.order_id)
        if not self.orders.can_view(order, user):
            raise ForbiddenException("Not authorized")

        verified = await self.gateway.verify_payment(reference)
        self.apply_payment_result(order, verified.status, attempt)
        await self.db.flush()

        return {
            "order_id": order.id,
            "reference": verified.reference,
            "status": verified.status,
            "amount": verified.amount,
            "payment_status": order.payment_status,
            "order_status": order.status,
        }

    def apply_payment_result(
        self,
        order: Order,
        outcome: Optional[str],
        attempt: Optional[PaymentAttempt] = None
    ) -> bool:
        """
        Reflect a payment outcome on the order

        Success marks it paid and moves a pending order to processing.
        Failure marks it failed and cancels it when the order can still be
        cancelled. Once paid or refunded, provider outcomes no longer touch
        the order, and a failure of a superseded attempt is ignored.
        Repeating an outcome the order already carries changes nothing.
        Stock is never touched.

        Returns:
            True if the order changed
        """
        if attempt is not None:
            if outcome == PAYMENT_SUCCESS:
                attempt.status = PaymentStatus.PAID
            elif outcome == PAYMENT_FAILED:
                attempt.status = PaymentStatus.FAILED

        if outcome not in (PAYMENT_SUCCESS, PAYMENT_FAILED):
            return False

        if order.payment_status in SETTLED_PAYMENT_STATUSES:
            logger.info(
                f"Order {order.order_number} already {order.payment_status.value}, "
                f"payment outcome {outcome} ignored"
            )
            return False

        if outcome == PAYMENT_SUCCESS:
            order.payment_status = PaymentStatus.PAID
            order.paid_at = utcnow()
            if order.status == OrderStatus.PENDING:
                order.status = OrderStatus.PROCESSING
            order.record_status(order.status, "Payment received")

            logger.info(f"Order {order.order_number} paid")
            return True

        if order.payment_status == PaymentStatus.FAILED:
            return False
        if attempt is not None and attempt.reference != order.payment_reference:
            logger.info(
                f"Failure of superseded {attempt.provider} payment {attempt.reference} "
                f"ignored for order {order.order_number}"
            )
            return False

        order.payment_status = PaymentStatus.FAILED
        if self.orders.state_machine.is_cancellable(order.status) or not settings.ENFORCE_STATUS_TRANSITIONS:
            order.status = OrderStatus.CANCELLED
        order.record_status(order.status, "Payment failed")

        logger.info(f"Order {order.order_number} payment failed")
        return True

    async def handle_webhook(self, event: WebhookEvent) -> Order:
        """
        Apply a verified webhook to its order

        Raises:
            NotFoundException: No order for the reference
        """
        logger.info(f"{event.provider} webhook {event.event_type} received for {event.reference}")

        attempt = await self.find_attempt(event.provider, event.reference)
        order = await self.orders.get_order(attempt.order_id)

        if not self.apply_payment_result(order, event.outcome, attempt):
            logger.info(f"{event.provider} webhook {event.event_type} for {event.reference} left order unchanged")
        await self.db.flush()

        return order
