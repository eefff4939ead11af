"""Application service: Show Order use case (query)."""

from __future__ import annotations

from oms.application.dto import OrderDTO, order_to_dto
from oms.domain.exceptions import NotFoundError
from oms.domain.model.order import Order
from oms.domain.repository.order_repository import OrderRepository


def find_order(order_repo: OrderRepository, order_id: str) -> Order:
    """Load an order or raise NotFoundError."""
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise NotFoundError(f"Order with id {order_id} not found")
    return order


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        return order_to_dto(find_order(self._order_repo, order_id))
