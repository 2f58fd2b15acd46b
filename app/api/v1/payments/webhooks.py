"""
Payment webhook parsing and signature checks
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
import hashlib
import hmac
import json
import logging

import stripe

from app.core.exceptions import BadRequestException, InvalidWebhookSignatureException
from .gateways import PAYMENT_SUCCESS, PAYMENT_FAILED

logger = logging.getLogger(__name__)

CHAPA_SIGNATURE_HEADERS = ("chapa-signature", "x-chapa-signature")

STRIPE_EVENT_OUTCOMES = {
    "payment_intent.succeeded": PAYMENT_SUCCESS,
    "payment_intent.payment_failed": PAYMENT_FAILED,
}

@dataclass
class WebhookEvent:
    """Provider-neutral view of a webhook: which payment, what happened"""
    provider: str
    reference: str
    outcome: Optional[str]
    event_type: str

def _load_json(payload: bytes) -> Dict[str, Any]:
    try:
        data = json.loads(payload)
    except (ValueError, UnicodeDecodeError):
        raise BadRequestException("Invalid webhook payload")
    if not isinstance(data, dict):
        raise BadRequestException("Invalid webhook payload")
    return data

def verify_chapa_signature(payload: bytes, headers: Mapping[str, str], secret: str) -> None:
    """
    Check the HMAC-SHA256 of the raw body against the Chapa signature header

    Raises:
        InvalidWebhookSignatureException: Header missing or digest mismatch
    """
    expected = hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()

    for header in CHAPA_SIGNATURE_HEADERS:
        signature = headers.get(header)
        if signature and hmac.compare_digest(expected, signature.strip()):
            return

    logger.warning("Rejected Chapa webhook with missing or invalid signature")
    raise InvalidWebhookSignatureException()

def parse_chapa_webhook(
    payload: bytes,
    headers: Mapping[str, str],
    secret: Optional[str]
) -> WebhookEvent:
    """
    Verify (when a secret is configured) and parse a Chapa webhook

    Raises:
        InvalidWebhookSignatureException: Bad signature
        BadRequestException: Body is not JSON or lacks tx_ref/status
    """
    if secret:
        verify_chapa_signature(payload, headers, secret)

    data = _load_json(payload)
    tx_ref = data.get("tx_ref")
    status = data.get("status")

    if not tx_ref or not status:
        raise BadRequestException("Invalid webhook payload")

    status = str(status).lower()
    if status == "success":
        outcome = PAYMENT_SUCCESS
    elif status in ("failed", "cancelled"):
        outcome = PAYMENT_FAILED
    else:
        outcome = None

    return WebhookEvent(provider="chapa", reference=str(tx_ref), outcome=outcome, event_type=status)

def parse_stripe_webhook(
    payload: bytes,
    signature: Optional[str],
    secret: Optional[str]
) -> WebhookEvent:
    """
    Verify (when a secret is configured) and parse a Stripe webhook

    Raises:
        InvalidWebhookSignatureException: Bad or missing Stripe-Signature
        BadRequestException: Body is not a Stripe event
    """
    if secret:
        if not signature:
            logger.warning("Rejected Stripe webhook without signature")
            raise InvalidWebhookSignatureException()
        try:
            stripe.Webhook.construct_event(payload, signature, secret)
        except stripe.SignatureVerificationError:
            logger.warning("Rejected Stripe webhook with invalid signature")
            raise InvalidWebhookSignatureException()
        except ValueError:
            raise BadRequestException("Invalid webhook payload")

    data = _load_json(payload)

    event_type = data.get("type")
    intent = (data.get("data") or {}).get("object") or {}
    reference = intent.get("id")

    if not event_type or not reference:
        raise BadRequestException("Invalid webhook payload")

    return WebhookEvent(
        provider="stripe",
        reference=str(reference),
        outcome=STRIPE_EVENT_OUTCOMES.get(event_type),
        event_type=event_type,
    )
