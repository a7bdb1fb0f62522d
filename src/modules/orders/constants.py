"""Order domain constants.

Status set and the transition table of the order state machine.  Only the
listed transitions are legal; nothing leaves CANCELLED.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PROCESSING = "PROCESSING", "Processing"
    SHIPPED = "SHIPPED", "Shipped"
    CANCELLED = "CANCELLED", "Cancelled"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.CANCELLED},
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.CANCELLED}

# Orders may only be soft-deleted from these states.
DELETABLE_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.CANCELLED}

# Items can only be added while the order is still pending.
MODIFIABLE_STATES: set[str] = {OrderStatus.PENDING}

PENDING_ORDERS_LIMIT = 100


def can_transition(current: str, target: str) -> bool:
    return target in VALID_TRANSITIONS.get(current, set())
