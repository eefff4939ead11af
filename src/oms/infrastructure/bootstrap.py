"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions, and every dependency is
passed in explicitly from here.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from oms.application.change_order_status import ChangeOrderStatusHandler
from oms.application.create_order import CreateOrderHandler
from oms.application.list_orders import ListOrdersHandler
from oms.application.show_order import ShowOrderHandler
from oms.domain.repository.product_validator import ProductValidator
from oms.infrastructure.config import Settings
from oms.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from oms.infrastructure.product_service.http_product_validator import (
    HttpProductValidator,
)
from oms.infrastructure.product_service.json_product_catalog import (
    JsonProductCatalog,
)


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.orders_file)


def product_validator(settings: Settings) -> ProductValidator | None:
    """Pick the product validator for the configured deployment profile."""
    if not settings.validate_products:
        return None
    if settings.product_service_url:
        return HttpProductValidator(
            settings.product_service_url,
            timeout=settings.product_service_timeout,
        )
    return JsonProductCatalog(settings.products_file)


@contextmanager
def create_order_handler(settings: Settings) -> Iterator[CreateOrderHandler]:
    """Yield a create handler; the HTTP product client is closed on exit."""
    validator = product_validator(settings)
    try:
        yield CreateOrderHandler(
            order_repo=order_repository(settings),
            product_validator=validator,
        )
    finally:
        if isinstance(validator, HttpProductValidator):
            validator.close()


def list_orders_handler(settings: Settings) -> ListOrdersHandler:
    return ListOrdersHandler(order_repo=order_repository(settings))


def show_order_handler(settings: Settings) -> ShowOrderHandler:
    return ShowOrderHandler(order_repo=order_repository(settings))


def change_order_status_handler(settings: Settings) -> ChangeOrderStatusHandler:
    return ChangeOrderStatusHandler(order_repo=order_repository(settings))
