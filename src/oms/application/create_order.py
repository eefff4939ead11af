"""Application service: Create Order use case.

Orchestrates the flow between the product service and the order
repository.  Validation always completes before the single write, so a
failed create leaves nothing behind.
"""

from __future__ import annotations

import structlog

from oms.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from oms.domain.exceptions import ProductServiceError, ValidationError
from oms.domain.model.order import Order, OrderItem
from oms.domain.model.product import Product
from oms.domain.model.value_objects import Money, Quantity
from oms.domain.repository.order_repository import OrderRepository
from oms.domain.repository.product_validator import ProductValidator

logger = structlog.get_logger(__name__)


class CreateOrderHandler:
    """Create orders, optionally pricing them through a product validator.

    With a validator, prices and names come from the product service and
    any caller-supplied price is ignored.  Without one, every item must
    carry its own price.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_validator: ProductValidator | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_validator = product_validator

    def handle(self, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Resolve the distinct product ids through the validator.
        2. Build OrderItems with the *current* prices (snapshot).
        3. Let the Order aggregate compute the frozen totals.
        4. Persist in one write and return a DTO with item names.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        if self._product_validator is not None:
            products = self._validate_products(item_specs)
            line_items = [self._priced_item(spec, products) for spec in item_specs]
        else:
            line_items = [self._caller_priced_item(spec) for spec in item_specs]

        order = Order.create(items=line_items)
        self._order_repo.add(order)

        logger.info(
            "Order created",
            order_id=order.id,
            total_amount=str(order.total_amount),
            total_items=order.total_items,
        )
        return order_to_dto(order)

    # --- Helpers --------------------------------------------------------------

    def _validate_products(self, item_specs: list[OrderItemSpec]) -> dict[str, Product]:
        # dict.fromkeys keeps first-seen order while deduplicating
        product_ids = list(dict.fromkeys(spec.product_id for spec in item_specs))

        try:
            products = self._product_validator.validate(product_ids)  # type: ignore[union-attr]
        except ProductServiceError as exc:
            logger.warning(
                "Product validation failed",
                product_ids=product_ids,
                error=str(exc),
            )
            raise ValidationError(str(exc)) from exc

        return {product.id: product for product in products}

    @staticmethod
    def _priced_item(spec: OrderItemSpec, products: dict[str, Product]) -> OrderItem:
        product = products.get(spec.product_id)
        if product is None:
            logger.warning("Unknown product in order", product_id=spec.product_id)
            raise ValidationError(f"Product not found: '{spec.product_id}'")

        return OrderItem(
            product_id=product.id,
            quantity=Quantity(spec.quantity),
            price=product.price,  # <-- price snapshot
            name=product.name,
        )

    @staticmethod
    def _caller_priced_item(spec: OrderItemSpec) -> OrderItem:
        if spec.price is None:
            raise ValidationError(
                f"Price is required for product '{spec.product_id}' "
                f"when product validation is disabled"
            )
        return OrderItem(
            product_id=spec.product_id,
            quantity=Quantity(spec.quantity),
            price=Money.of(spec.price),
        )
