"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from oms.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order and its items in one atomic write.

        Assigns ``order.id``.  Either the order and every item are
        stored, or nothing is.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def count(self, status: OrderStatus | None = None) -> int:
        """Count orders, optionally only those with *status*."""

    @abstractmethod
    def list_page(
        self,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        """Return up to *limit* orders after skipping *offset*, in insertion order."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist the status fields of an existing order."""
