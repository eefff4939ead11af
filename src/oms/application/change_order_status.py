"""Application service: Change Order Status use case.

Any status may follow any other; legal transitions are not enforced.
Moving an order to the status it already has is a no-op and performs
no write.
"""

from __future__ import annotations

import structlog

from oms.application.dto import OrderDTO, order_to_dto
from oms.application.show_order import find_order
from oms.domain.model.order import OrderStatus
from oms.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class ChangeOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, status: str | OrderStatus) -> OrderDTO:
        new_status = OrderStatus.parse(status)
        order = find_order(self._order_repo, order_id)

        previous = order.status
        if not order.change_status(new_status):
            logger.debug("Order status unchanged", order_id=order_id, status=previous.value)
            return order_to_dto(order)

        self._order_repo.update_status(order)
        logger.info(
            "Order status changed",
            order_id=order_id,
            from_status=previous.value,
            to_status=new_status.value,
        )
        return order_to_dto(order)
