"""CLI commands for delivery and bulk-discount quotes."""

from __future__ import annotations

import click

from florist.application.quote import DeliveryQuoteHandler, DiscountQuoteHandler
from florist.domain.exceptions import DomainException
from florist.infrastructure.bootstrap import bouquet_repository
from florist.infrastructure.config import Settings


@click.command("delivery")
@click.option("--lat", "latitude", required=True, type=float, help="Destination latitude.")
@click.option("--lng", "longitude", required=True, type=float, help="Destination longitude.")
@click.pass_obj
def quote_delivery(settings: Settings, latitude: float, longitude: float) -> None:
    """Quote the delivery fee from the shop to a point."""
    handler = DeliveryQuoteHandler(store_location=settings.store.coordinates())

    try:
        quote = handler.handle(latitude, longitude)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    result = quote.result
    distance = f"{result.distance_km} km" if result.distance_km is not None else "-"
    click.echo(f"Distance: {distance}")
    click.echo(f"Zone:     {result.zone_label}")
    click.echo(f"Fee:      {result.formatted_price}")
    click.echo(f"ETA:      {result.estimated_time}")
    if quote.same_day:
        click.echo("Same-day delivery available.")


@click.command("discount")
@click.option("--bouquet", "bouquet_id", required=True, help="Bouquet ID.")
@click.option("--quantity", required=True, type=int, help="Number of bouquets.")
@click.pass_obj
def quote_discount(settings: Settings, bouquet_id: str, quantity: int) -> None:
    """Quote the bulk discount for ordering several of one bouquet."""
    handler = DiscountQuoteHandler(bouquet_repo=bouquet_repository(settings))

    try:
        quote = handler.handle(bouquet_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    result = quote.result
    click.echo(f"{quote.bouquet_name} x {quote.quantity}  ({result.tier.label})")
    click.echo(f"  {'Harga normal':<16} {str(result.original_price):>16}")
    click.echo(f"  {'Diskon ' + str(result.discount_percentage) + '%':<16} {str(result.discount_amount):>16}")
    click.echo(f"  {'Total':<16} {str(result.final_price):>16}")
    if quote.message:
        click.echo(quote.message)
