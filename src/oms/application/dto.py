"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from oms.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the caller asked for (product id + quantity).

    ``price`` is only honoured when no product validator is configured.
    """

    product_id: str
    quantity: int
    price: str | Decimal | None = None


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    quantity: int
    price: str  # decimal string, e.g. "10.00"
    name: str | None = None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: str
    total_amount: str
    total_items: int
    status: str
    paid: bool
    paid_at: str | None
    created_at: str
    updated_at: str
    items: list[OrderItemDTO]


@dataclass(frozen=True)
class PageMeta:
    total: int
    page: int
    last_page: int


@dataclass(frozen=True)
class OrderPageDTO:
    """Output: one page of orders plus pagination metadata."""

    data: list[OrderDTO]
    meta: PageMeta


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        total_amount=str(order.total_amount),
        total_items=order.total_items,
        status=order.status.value,
        paid=order.paid,
        paid_at=order.paid_at.isoformat() if order.paid_at else None,
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                quantity=item.quantity.value,
                price=str(item.price),
                name=item.name,
            )
            for item in order.items
        ],
    )
