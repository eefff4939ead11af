"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items. Totals are
computed once by ``Order.create()`` and stored; they are never
recomputed from the items afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from oms.domain.exceptions import ValidationError
from oms.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @staticmethod
    def parse(value: str | OrderStatus) -> OrderStatus:
        """Accept either an enum member or its (case-insensitive) value."""
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid status '{value}'. Allowed values: {allowed}"
            ) from None


@dataclass
class OrderItem:
    """Captures the price snapshot of a product at order-creation time.

    ``name`` is display-only: it is joined from the product service
    response when the order is created and is never persisted.
    """

    product_id: str
    quantity: Quantity
    price: Money  # locked at order-creation time
    name: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders — it computes the
    frozen totals.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without recomputing.
    """

    id: str | None
    total_amount: Money
    total_items: int
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    paid: bool = False
    paid_at: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(items: list[OrderItem]) -> Order:
        """Create a new PENDING order and compute its totals."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        total_amount = Money.zero()
        total_items = 0
        for item in items:
            total_amount = total_amount + item.line_total
            total_items += item.quantity.value

        now = _utcnow()
        return Order(
            id=None,
            total_amount=total_amount,
            total_items=total_items,
            items=list(items),
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> bool:
        """Move the order to *new_status*.

        Any transition is accepted.  Returns False (and changes nothing)
        when the order is already in *new_status*.
        """
        if new_status == self.status:
            return False

        now = _utcnow()
        self.status = new_status
        self.updated_at = now
        if new_status == OrderStatus.PAID and not self.paid:
            self.paid = True
            self.paid_at = now
        return True
