"""Unit tests for the order status state machine."""

import pytest

from app.api.v1.orders.state_machine import OrderStateMachine
from app.models import OrderStatus


@pytest.fixture()
def machine():
    return OrderStateMachine()


@pytest.mark.parametrize(
    "current,new",
    [
        (OrderStatus.PENDING, OrderStatus.PROCESSING),
        (OrderStatus.PROCESSING, OrderStatus.SHOPPING),
        (OrderStatus.SHOPPING, OrderStatus.OUT_FOR_DELIVERY),
        (OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED),
        (OrderStatus.PENDING, OrderStatus.DELIVERED),
        (OrderStatus.SHOPPING, OrderStatus.CANCELLED),
    ],
)
def test_forward_moves_and_cancellation_allowed(machine, current, new):
    assert machine.can_transition(current, new)


@pytest.mark.parametrize(
    "current,new",
    [
        (OrderStatus.PROCESSING, OrderStatus.PENDING),
        (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
        (OrderStatus.PENDING, OrderStatus.PENDING),
    ],
)
def test_backward_and_terminal_moves_refused(machine, current, new):
    assert not machine.can_transition(current, new)


def test_cancellable_until_delivered(machine):
    assert machine.is_cancellable(OrderStatus.PENDING)
    assert machine.is_cancellable(OrderStatus.OUT_FOR_DELIVERY)
    assert not machine.is_cancellable(OrderStatus.DELIVERED)
    assert not machine.is_cancellable(OrderStatus.CANCELLED)
