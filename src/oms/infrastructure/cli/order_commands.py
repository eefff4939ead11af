"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json
from dataclasses import asdict

import click

from oms.application.dto import OrderDTO, OrderItemSpec, OrderPageDTO
from oms.domain.exceptions import DomainException
from oms.domain.model.order import OrderStatus
from oms.infrastructure import bootstrap
from oms.infrastructure.config import Settings

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _fail(exc: DomainException) -> click.ClickException:
    """Translate a domain error into a CLI error tagged with its status class."""
    return click.ClickException(f"[{exc.status_code}] {exc}")


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'p1:2,p2:1' (or 'p1:2:9.99') into an OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = [p.strip() for p in entry.split(":")]
        if len(parts) not in (2, 3) or not parts[0]:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Quantity[:Price]'."
            )
        product_id, qty_str = parts[0], parts[1]
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        price = parts[2] if len(parts) == 3 else None
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty, price=price))
    return specs


def _echo_json(dto: OrderDTO | OrderPageDTO) -> None:
    click.echo(json.dumps(asdict(dto), indent=2))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at}")
    if dto.paid_at:
        click.echo(f"Paid:     {dto.paid_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Name':<16} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<24} {item.name or '':<16} {item.quantity:>5} {item.price:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Items':<24} {dto.total_items:>22}")
    click.echo(f"  {'Order Total':<24} {dto.total_amount:>33}")


@click.command("create")
@click.option(
    "--items",
    required=True,
    help="Items as 'ProductId:Qty,ProductId:Qty'. Append ':Price' when validation is off.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def order_create(settings: Settings, items: str, as_json: bool) -> None:
    """Create a new order."""
    specs = _parse_items(items)
    try:
        with bootstrap.create_order_handler(settings) as handler:
            dto = handler.handle(specs)
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        _echo_json(dto)
        return
    click.echo(f"Order {dto.id} created")
    _display_order(dto)


@click.command("list")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Only orders with this status.")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def order_list(
    settings: Settings,
    status: str | None,
    page: int,
    limit: int,
    as_json: bool,
) -> None:
    """List orders page by page."""
    handler = bootstrap.list_orders_handler(settings)

    try:
        result = handler.handle(status=status, page=page, limit=limit)
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        _echo_json(result)
        return

    meta = result.meta
    click.echo(f"Page {meta.page} of {meta.last_page}  ({meta.total} orders)")
    if not result.data:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Status':<10} {'Items':>6} {'Total':>12}")
    click.echo("-" * 69)
    for dto in result.data:
        click.echo(
            f"{dto.id:<38} {dto.status:<10} {dto.total_items:>6} {dto.total_amount:>12}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def order_show(settings: Settings, order_id: str, as_json: bool) -> None:
    """Show details of an existing order."""
    handler = bootstrap.show_order_handler(settings)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        _echo_json(dto)
        return
    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", required=True, type=STATUS_CHOICE, help="New status.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
@click.pass_obj
def order_status(settings: Settings, order_id: str, status: str, as_json: bool) -> None:
    """Change the status of an order."""
    handler = bootstrap.change_order_status_handler(settings)

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        _echo_json(dto)
        return
    click.echo(f"Order {dto.id} is now {dto.status}.")
