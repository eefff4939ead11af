"""Application service: List Orders use case (query)."""

from __future__ import annotations

import math

from oms.application.dto import OrderPageDTO, PageMeta, order_to_dto
from oms.domain.exceptions import ValidationError
from oms.domain.model.order import OrderStatus
from oms.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        status: str | OrderStatus | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> OrderPageDTO:
        """Return one page of orders, optionally filtered by status.

        Pages past the end are not an error; they simply come back empty.
        """
        if page < 1:
            raise ValidationError("Page must be a positive integer")
        if limit < 1:
            raise ValidationError("Limit must be a positive integer")

        status_filter = OrderStatus.parse(status) if status is not None else None

        total = self._order_repo.count(status_filter)
        orders = self._order_repo.list_page(
            status=status_filter,
            offset=(page - 1) * limit,
            limit=limit,
        )

        return OrderPageDTO(
            data=[order_to_dto(order) for order in orders],
            meta=PageMeta(
                total=total,
                page=page,
                last_page=math.ceil(total / limit),
            ),
        )
