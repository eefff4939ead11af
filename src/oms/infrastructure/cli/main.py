import click

from oms.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from oms.infrastructure.config import ConfigurationError, Settings
from oms.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """OMS — Order Management Service"""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))

    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
