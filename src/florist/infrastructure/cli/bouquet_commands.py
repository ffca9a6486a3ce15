"""CLI commands for the bouquet catalog and its collections.

Listings go through the reference-data cache, like the storefront reads.
"""

from __future__ import annotations

import asyncio

import click

from florist.application.add_bouquet import AddBouquetHandler
from florist.application.update_bouquet import UpdateBouquetHandler
from florist.domain.exceptions import DomainException
from florist.infrastructure.bootstrap import bouquet_repository, reference_data
from florist.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Bouquet name.")
@click.option("--price", required=True, help="Price in rupiah (e.g. 150000).")
@click.option("--collection", default=None, help="Collection name.")
@click.pass_obj
def bouquet_add(settings: Settings, name: str, price: str, collection: str | None) -> None:
    """Add a new bouquet to the catalog."""
    handler = AddBouquetHandler(
        bouquet_repo=bouquet_repository(settings),
        reference_data=reference_data(settings),
    )

    try:
        bouquet = handler.handle(name=name, price=price, collection=collection)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Bouquet #{bouquet.id} '{bouquet.name}' added at {bouquet.price}")


@click.command("list")
@click.pass_obj
def bouquet_list(settings: Settings) -> None:
    """List all bouquets in the catalog."""
    bouquets = asyncio.run(reference_data(settings).bouquets())

    if not bouquets:
        click.echo("No bouquets found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Collection':<18} {'Price':>14}")
    click.echo("-" * 69)
    for b in bouquets:
        click.echo(f"{b.id:<6} {b.name[:28]:<28} {(b.collection or '-')[:18]:<18} {str(b.price):>14}")


@click.command("update")
@click.option("--id", "bouquet_id", required=True, help="Bouquet ID.")
@click.option("--price", required=True, help="New price in rupiah.")
@click.pass_obj
def bouquet_update(settings: Settings, bouquet_id: str, price: str) -> None:
    """Update a bouquet's price. Existing orders keep their price."""
    handler = UpdateBouquetHandler(
        bouquet_repo=bouquet_repository(settings),
        reference_data=reference_data(settings),
    )

    try:
        handler.handle(bouquet_id=bouquet_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Bouquet #{bouquet_id} price updated to {price}")


@click.command("list")
@click.pass_obj
def collection_list(settings: Settings) -> None:
    """List collection names."""
    names = asyncio.run(reference_data(settings).collection_names())

    if not names:
        click.echo("No collections found.")
        return

    for name in names:
        click.echo(name)
