"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
import os
import tempfile
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from oms.domain.exceptions import NotFoundError
from oms.domain.model.order import Order, OrderItem, OrderStatus
from oms.domain.model.value_objects import Money, Quantity
from oms.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):
    """Stores every order, items included, as one JSON array.

    Writes replace the whole file atomically, so an order and its items
    land together or not at all.  Read-modify-write cycles hold a
    thread lock plus an OS-level lock on ``<file>.lock``, so concurrent
    writers in other threads or other processes never overwrite each
    other's orders.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(f"{file_path}.lock")
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        with self._locked():
            orders = self._load_raw()
            order_id = order.id or str(uuid.uuid4())
            raw = self._to_raw(order)
            raw["id"] = order_id
            orders.append(raw)
            self._persist_raw(orders)
        order.id = order_id

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def count(self, status: OrderStatus | None = None) -> int:
        return len(self._matching(status))

    def list_page(
        self,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        matching = self._matching(status)
        return [self._to_domain(raw) for raw in matching[offset:offset + limit]]

    def update_status(self, order: Order) -> None:
        with self._locked():
            orders = self._load_raw()
            for raw in orders:
                if raw["id"] == order.id:
                    raw["status"] = order.status.value
                    raw["paid"] = order.paid
                    raw["paid_at"] = order.paid_at.isoformat() if order.paid_at else None
                    raw["updated_at"] = order.updated_at.isoformat()
                    break
            else:
                raise NotFoundError(f"Order with id {order.id} not found")
            self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    def _matching(self, status: OrderStatus | None) -> list[dict]:
        orders = self._load_raw()
        if status is None:
            return orders
        return [raw for raw in orders if raw["status"] == status.value]

    @staticmethod
    def _to_raw(order: Order) -> dict:
        # Item names are display-only and never stored.
        return {
            "id": order.id,
            "total_amount": str(order.total_amount.amount),
            "total_items": order.total_items,
            "status": order.status.value,
            "paid": order.paid,
            "paid_at": order.paid_at.isoformat() if order.paid_at else None,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "price": str(item.price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                price=Money(Decimal(i["price"])),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            total_amount=Money(Decimal(raw["total_amount"])),
            total_items=raw["total_items"],
            items=items,
            status=OrderStatus(raw["status"]),
            paid=raw.get("paid", False),
            paid_at=datetime.fromisoformat(raw["paid_at"]) if raw.get("paid_at") else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=".orders-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(orders, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock, self._file_lock:
            yield

    def _ensure_file(self) -> None:
        with self._locked():
            if not self._file_path.exists():
                self._file_path.write_text("[]", encoding="utf-8")
