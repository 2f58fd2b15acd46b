"""Checkout race for the last unit, driven through the service layer."""

import pytest

from app.api.v1.cart.services import CartService
from app.api.v1.cart.schemas import CartLineInput
from app.api.v1.inventory.services import InventoryService
from app.api.v1.orders.schemas import OrderCreate
from app.api.v1.orders.services import OrderService
from app.core.database import AsyncSessionLocal, get_db_context
from app.core.exceptions import InsufficientStockException
from app.models import Order, Product, User
from conftest import run

ADDRESS = {"street": "Bole Road 12", "city": "Addis Ababa", "state": "AA", "zip_code": "1000"}


async def open_cart(user_id, store_id, product_id):
    async with get_db_context() as db:
        cart = await CartService(db).create_or_replace_cart(
            user_id, store_id, [CartLineInput(product=product_id, quantity=1)]
        )
        return cart.id


def checkout_payload(cart_id):
    return OrderCreate(cart_id=cart_id, payment_method={"type": "card"}, delivery_address=ADDRESS)


def test_stale_reader_loses_the_last_unit(seed):
    async def scenario():
        alice_cart = await open_cart(seed.alice_id, seed.store_id, seed.saffron_id)
        bob_cart = await open_cart(seed.bob_id, seed.store_id, seed.saffron_id)

        async with AsyncSessionLocal() as late:
            # Bob's session has already seen one unit in stock
            assert (await late.get(Product, seed.saffron_id)).stock == 1

            async with AsyncSessionLocal() as early:
                alice = await early.get(User, seed.alice_id)
                await OrderService(early).create_order(alice, checkout_payload(alice_cart))
                await early.commit()

            bob = await late.get(User, seed.bob_id)
            with pytest.raises(InsufficientStockException) as excinfo:
                await OrderService(late).create_order(bob, checkout_payload(bob_cart))
            await late.rollback()

        async with get_db_context() as db:
            stock = (await db.get(Product, seed.saffron_id)).stock
            orders = (await db.execute(Order.__table__.select())).all()

        return excinfo.value, stock, orders

    error, stock, orders = run(scenario())

    assert error.detail == "Not enough stock for product Saffron. Available: 0"
    assert stock == 0
    assert len(orders) == 1


def test_decrement_refuses_when_short(seed):
    async def scenario():
        async with get_db_context() as db:
            inventory = InventoryService(db)
            taken = await inventory.decrement_stock(seed.milk_id, 3)
            refused = await inventory.decrement_stock(seed.milk_id, 3)
            inactive = await inventory.decrement_stock(seed.retired_id, 1)
            return taken, refused, inactive

    taken, refused, inactive = run(scenario())

    assert taken is True
    assert refused is False
    assert inactive is False


def test_order_number_gives_up_after_repeated_collisions(seed, monkeypatch):
    monkeypatch.setattr("app.api.v1.orders.services.generate_order_number", lambda: "ORD-260101-0001")

    async def scenario():
        cart_id = await open_cart(seed.alice_id, seed.store_id, seed.apples_id)
        async with get_db_context() as db:
            alice = await db.get(User, seed.alice_id)
            await OrderService(db).create_order(alice, checkout_payload(cart_id))

        async with get_db_context() as db:
            return await OrderService(db).generate_order_number()

    with pytest.raises(RuntimeError):
        run(scenario())
