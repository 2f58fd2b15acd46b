"""
Helper utilities
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
import secrets
import time

import slugify as python_slugify

CENTS = Decimal("0.01")

def generate_slug(text: str) -> str:
    """
    Generate URL-friendly slug from text

    Args:
        text: Input text

    Returns:
        Slug
    """
    return python_slugify.slugify(text)

def round_money(amount) -> Decimal:
    """
    Round an amount to two decimals, half-up

    Args:
        amount: Decimal, int, float or numeric string

    Returns:
        Quantized Decimal
    """
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)

def to_minor_units(amount: Decimal) -> int:
    """Convert an amount to cents for providers that charge in minor units"""
    return int((round_money(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))

def generate_order_number(now: datetime = None) -> str:
    """
    Generate a candidate order number

    Format: ORD-YYMMDD-XXXX with the UTC date and a random 4-digit suffix.
    Uniqueness is checked by the caller.
    """
    now = now or datetime.now(timezone.utc)
    suffix = secrets.randbelow(10000)
    return f"ORD-{now:%y%m%d}-{suffix:04d}"

def generate_tx_ref(prefix: str = "ADDISCART") -> str:
    """Generate a payment transaction reference: PREFIX-{ms}-{random}"""
    millis = int(time.time() * 1000)
    return f"{prefix}-{millis}-{secrets.randbelow(1000000):06d}"
