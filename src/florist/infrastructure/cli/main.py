from pathlib import Path

import click

from florist.domain.exceptions import DomainException
from florist.infrastructure.cli.bouquet_commands import (
    bouquet_add,
    bouquet_list,
    bouquet_update,
    collection_list,
)
from florist.infrastructure.cli.customer_commands import customer_add, customer_find
from florist.infrastructure.cli.order_commands import (
    order_advance,
    order_create,
    order_delete,
    order_deliver,
    order_list,
    order_show,
    order_stats,
    order_update,
)
from florist.infrastructure.cli.quote_commands import quote_delivery, quote_discount
from florist.infrastructure.config import load_settings
from florist.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (defaults to $FLORIST_CONFIG or ./florist.yaml).",
)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, log_level: str | None) -> None:
    """Florist: bouquet order administration"""
    try:
        settings = load_settings(config_file)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if log_level:
        settings.log_level = log_level.upper()
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def customer() -> None:
    """Manage the customer directory."""


@cli.group()
def bouquet() -> None:
    """Manage the bouquet catalog."""


@cli.group()
def collection() -> None:
    """Browse bouquet collections."""


@cli.group()
def quote() -> None:
    """Price delivery and bulk orders."""


# Register subcommands
order.add_command(order_advance)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_update)
customer.add_command(customer_add)
customer.add_command(customer_find)
bouquet.add_command(bouquet_add)
bouquet.add_command(bouquet_list)
bouquet.add_command(bouquet_update)
collection.add_command(collection_list)
quote.add_command(quote_delivery)
quote.add_command(quote_discount)
