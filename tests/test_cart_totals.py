"""Unit tests for cart total calculation."""

from decimal import Decimal

from app.api.v1.cart.services import CartService
from app.models import Cart, CartItem


def make_cart(lines, **fees):
    return Cart(
        items=[CartItem(price=Decimal(price), quantity=quantity) for price, quantity in lines],
        **fees,
    )


def test_subtotal_tax_and_total():
    cart = CartService.calculate_totals(make_cart([("2.50", 2), ("3.50", 1)]))

    assert cart.subtotal == Decimal("8.50")
    assert cart.tax == Decimal("0.68")
    assert cart.total == Decimal("9.18")


def test_fees_and_tip_are_added_untaxed():
    cart = make_cart(
        [("10.00", 1)],
        delivery_fee=Decimal("3.99"),
        service_fee=Decimal("1.50"),
        tip=Decimal("2"),
    )

    CartService.calculate_totals(cart)

    assert cart.tax == Decimal("0.80")
    assert cart.total == Decimal("18.29")


def test_tax_rounds_half_up():
    cart = CartService.calculate_totals(make_cart([("1.00", 1)]), tax_rate=Decimal("0.125"))

    assert cart.tax == Decimal("0.13")
    assert cart.total == Decimal("1.13")


def test_custom_tax_rate():
    cart = CartService.calculate_totals(make_cart([("100.00", 1)]), tax_rate=Decimal("0.15"))

    assert cart.tax == Decimal("15.00")
    assert cart.total == Decimal("115.00")


def test_empty_cart_is_zero():
    cart = CartService.calculate_totals(make_cart([]))

    assert cart.subtotal == Decimal("0.00")
    assert cart.total == Decimal("0.00")
