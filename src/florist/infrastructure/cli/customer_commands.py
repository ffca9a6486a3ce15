"""CLI commands for the customer directory."""

from __future__ import annotations

import click

from florist.application.create_customer import CreateCustomerHandler
from florist.application.find_customers import FindCustomersHandler
from florist.domain.exceptions import DomainException
from florist.infrastructure.bootstrap import customer_repository
from florist.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Buyer name.")
@click.option("--phone", required=True, help="Phone number; an existing number is updated.")
@click.option("--address", required=True, help="Default delivery address.")
@click.pass_obj
def customer_add(settings: Settings, name: str, phone: str, address: str) -> None:
    """Add a customer, or refresh the one with this phone number."""
    handler = CreateCustomerHandler(customer_repo=customer_repository(settings))

    try:
        customer = handler.handle(buyer_name=name, phone_number=phone, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.buyer_name}' saved")


@click.command("find")
@click.argument("query", required=False, default="")
@click.option("--limit", type=int, default=None, help="Maximum results.")
@click.pass_obj
def customer_find(settings: Settings, query: str, limit: int | None) -> None:
    """Search customers by name or phone number."""
    customers = FindCustomersHandler(customer_repo=customer_repository(settings)).handle(
        query, limit
    )

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Phone':<16} Address")
    click.echo("-" * 72)
    for c in customers:
        click.echo(f"{c.id:<6} {c.buyer_name[:24]:<24} {c.phone_number:<16} {c.address}")
