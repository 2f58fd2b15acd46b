"""Pytest fixtures for the Addiscart API tests."""

import asyncio
import os
import tempfile
from decimal import Decimal
from types import SimpleNamespace

import pytest

_db_dir = tempfile.mkdtemp(prefix="addiscart-tests-")

# Settings are read once at import time, so the environment goes first
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-addiscart"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ALLOWED_HOSTS"] = '["*"]'
os.environ["ENFORCE_STATUS_TRANSITIONS"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.core.database import drop_db, init_db, get_db_context  # noqa: E402
from app.core.security import SecurityUtils  # noqa: E402
from app.models import User, UserRole, Store, Product  # noqa: E402

PASSWORD = "password123"
PASSWORD_HASH = SecurityUtils.hash_password(PASSWORD)

DELIVERY_ADDRESS = {
    "street": "Bole Road 12",
    "city": "Addis Ababa",
    "state": "AA",
    "zipCode": "1000",
}


def run(coro):
    """Run a coroutine to completion from a sync test."""
    return asyncio.run(coro)


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def token_for(user_id, role):
    return SecurityUtils.create_access_token({"sub": str(user_id), "role": role.value})


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""

    async def _reset():
        await drop_db()
        await init_db()

    run(_reset())
    yield


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def seed():
    """Users of every role, two stores and a handful of products."""

    async def _seed():
        async with get_db_context() as db:
            admin = User(name="Admin User", email="admin@example.com", password_hash=PASSWORD_HASH, role=UserRole.ADMIN)
            alice = User(name="Alice", email="alice@example.com", password_hash=PASSWORD_HASH, role=UserRole.CUSTOMER)
            bob = User(name="Bob", email="bob@example.com", password_hash=PASSWORD_HASH, role=UserRole.CUSTOMER)
            shopper = User(name="Shopper User", email="shopper@example.com", password_hash=PASSWORD_HASH, role=UserRole.SHOPPER)
            other_shopper = User(name="Second Shopper", email="shopper2@example.com", password_hash=PASSWORD_HASH, role=UserRole.SHOPPER)

            store = Store(name="Fresh Grocery", delivery_fee=Decimal("3.99"), minimum_order=Decimal("10.00"))
            other_store = Store(name="Organic Market", delivery_fee=Decimal("4.99"), minimum_order=Decimal("15.00"))

            db.add_all([admin, alice, bob, shopper, other_shopper, store, other_store])
            await db.flush()

            apples = Product(name="Apples", store_id=store.id, price=Decimal("2.50"), stock=10, unit="lb")
            milk = Product(
                name="Milk",
                store_id=store.id,
                price=Decimal("4.00"),
                sale_price=Decimal("3.50"),
                on_sale=True,
                stock=5,
            )
            saffron = Product(name="Saffron", store_id=store.id, price=Decimal("9.99"), stock=1, unit="g")
            retired = Product(name="Retired Bread", store_id=store.id, price=Decimal("1.00"), stock=50, is_active=False)
            kale = Product(name="Kale", store_id=other_store.id, price=Decimal("3.00"), stock=20)

            db.add_all([apples, milk, saffron, retired, kale])
            await db.flush()

            return SimpleNamespace(
                admin_id=admin.id,
                alice_id=alice.id,
                bob_id=bob.id,
                shopper_id=shopper.id,
                other_shopper_id=other_shopper.id,
                store_id=store.id,
                other_store_id=other_store.id,
                apples_id=apples.id,
                milk_id=milk.id,
                saffron_id=saffron.id,
                retired_id=retired.id,
                kale_id=kale.id,
            )

    data = run(_seed())
    data.admin = auth(token_for(data.admin_id, UserRole.ADMIN))
    data.alice = auth(token_for(data.alice_id, UserRole.CUSTOMER))
    data.bob = auth(token_for(data.bob_id, UserRole.CUSTOMER))
    data.shopper = auth(token_for(data.shopper_id, UserRole.SHOPPER))
    data.other_shopper = auth(token_for(data.other_shopper_id, UserRole.SHOPPER))
    return data


def create_cart(client, headers, store_id, items):
    """POST /cart and return the cart body; items are (product_id, quantity) pairs."""
    response = client.post(
        "/api/v1/cart/",
        json={
            "store": str(store_id),
            "items": [{"product": str(product_id), "quantity": quantity} for product_id, quantity in items],
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


def place_order(client, headers, cart_id, payment_type="card"):
    """POST /orders for a cart and return the raw response."""
    return client.post(
        "/api/v1/orders/",
        json={
            "cartId": cart_id,
            "paymentMethod": {"type": payment_type, "details": {"cardType": "visa", "lastFourDigits": "4242"}},
            "deliveryAddress": DELIVERY_ADDRESS,
            "deliveryInstructions": "Leave at the <b>gate</b>",
        },
        headers=headers,
    )


@pytest.fixture()
def order(client, seed):
    """A pending order by Alice: 2 apples and 1 milk."""
    cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.milk_id, 1)])
    response = place_order(client, seed.alice, cart["id"])
    assert response.status_code == 201, response.text
    return response.json()
