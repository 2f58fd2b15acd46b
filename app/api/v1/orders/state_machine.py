"""
Order state machine for managing order status transitions
"""

from typing import Dict, Set
from app.models.order import OrderStatus

# Fulfilment stages in the order they happen
FULFILMENT_SEQUENCE = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHOPPING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]

class OrderStateMachine:
    """
    Manages valid order status transitions

    An order may move to any later fulfilment stage, or be cancelled from
    any stage before delivery. Delivered and cancelled are terminal.
    """

    def __init__(self):
        self.transitions: Dict[OrderStatus, Set[OrderStatus]] = {}

        for index, status in enumerate(FULFILMENT_SEQUENCE):
            later = set(FULFILMENT_SEQUENCE[index + 1:])
            if status != OrderStatus.DELIVERED:
                later.add(OrderStatus.CANCELLED)
            self.transitions[status] = later

        self.transitions[OrderStatus.CANCELLED] = set()

    def can_transition(
        self,
        current_status: OrderStatus,
        new_status: OrderStatus
    ) -> bool:
        """
        Check if transition is valid

        Args:
            current_status: Current order status
            new_status: Desired new status

        Returns:
            True if transition is allowed
        """
        return new_status in self.transitions.get(current_status, set())

    def is_cancellable(self, status: OrderStatus) -> bool:
        return OrderStatus.CANCELLED in self.transitions.get(status, set())
