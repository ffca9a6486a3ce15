"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from florist.application.advance_order import AdvanceOrderHandler
from florist.application.create_order import CreateOrderHandler
from florist.application.delete_order import DeleteOrderHandler
from florist.application.dto import CreateOrderCommand, OrderDTO
from florist.application.list_orders import ListOrdersHandler
from florist.application.mark_delivered import MarkDeliveredHandler
from florist.application.order_stats import OrderStatsHandler
from florist.application.show_order import ShowOrderHandler
from florist.application.update_order import UpdateOrderHandler
from florist.domain.exceptions import DomainException
from florist.domain.model.order import OrderPatch, OrderStatus
from florist.domain.model.payment import PaymentMethod, PaymentStatus
from florist.domain.service.order_reporting import SortKey
from florist.infrastructure.bootstrap import (
    bouquet_repository,
    customer_repository,
    order_repository,
    submit_guard,
)
from florist.infrastructure.config import Settings

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus])
_PAYMENT_STATUS_CHOICE = click.Choice([s.value for s in PaymentStatus])
_METHOD_CHOICE = click.Choice([m.value for m in PaymentMethod if m.value])
_SORT_CHOICE = click.Choice([k.value for k in SortKey])


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.order_status}, payment={dto.payment_status})")
    customer = f"  [customer #{dto.customer_id}]" if dto.customer_id else ""
    click.echo(f"Buyer:    {dto.buyer_name} ({dto.phone_number}){customer}")
    click.echo(f"Address:  {dto.address}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.delivery_at:
        overdue = "  OVERDUE" if dto.overdue else ""
        click.echo(f"Deliver:  {dto.delivery_at}{overdue}")
    if dto.payment_method:
        click.echo(f"Method:   {dto.payment_method}")
    click.echo()
    click.echo(f"  {dto.bouquet_name:<28} {dto.bouquet_price:>16}")
    click.echo(f"  {'Ongkir':<28} {dto.delivery_price:>16}")
    click.echo(f"  {'-'*45}")
    click.echo(f"  {'Total':<28} {dto.total:>16}")
    click.echo(f"  {'DP':<28} {dto.down_payment_amount:>16}")
    click.echo(f"  {'Pelunasan':<28} {dto.additional_payment:>16}")
    click.echo(f"  {'Sisa':<28} {dto.remaining:>16}")

    if dto.activity:
        click.echo()
        click.echo("Activity:")
        for entry in dto.activity:
            click.echo(f"  {entry.at}  {entry.message}")


@click.command("create")
@click.option("--bouquet", "bouquet_id", required=True, help="Bouquet ID.")
@click.option("--customer", "customer_id", default=None, help="Link an existing customer ID.")
@click.option("--name", "buyer_name", default="", help="Buyer name (without --customer).")
@click.option("--phone", "phone_number", default="", help="Buyer phone number.")
@click.option("--address", default="", help="Delivery address.")
@click.option("--status", "order_status", type=_STATUS_CHOICE, default=None)
@click.option("--method", "payment_method", type=_METHOD_CHOICE, default=None)
@click.option("--dp", "down_payment_amount", type=int, default=None, help="Down payment.")
@click.option("--additional", "additional_payment", type=int, default=None)
@click.option(
    "--delivery-price", type=int, default=None, help="Manual delivery fee; wins over --lat/--lng."
)
@click.option("--delivery-at", default=None, help="ISO-8601 delivery time, e.g. 2026-02-14T10:00.")
@click.option("--lat", "destination_lat", type=float, default=None, help="Destination latitude.")
@click.option("--lng", "destination_lng", type=float, default=None, help="Destination longitude.")
@click.pass_obj
def order_create(settings: Settings, **options) -> None:
    """Create a new bouquet order."""
    handler = CreateOrderHandler(
        order_repo=order_repository(settings),
        bouquet_repo=bouquet_repository(settings),
        customer_repo=customer_repository(settings),
        store_location=settings.store.coordinates(),
    )

    try:
        dto = handler.handle(CreateOrderCommand(**options))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(settings))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--query", "-q", default="", help="Match buyer name, phone or bouquet.")
@click.option("--status", "order_status", type=_STATUS_CHOICE, default=None)
@click.option("--payment", "payment_status", type=_PAYMENT_STATUS_CHOICE, default=None)
@click.option("--sort", "sort_by", type=_SORT_CHOICE, default=SortKey.DATE.value)
@click.option("--asc", is_flag=True, help="Sort ascending instead of descending.")
@click.option("--limit", type=int, default=None, help="How many recent orders to scan (1-500).")
@click.pass_obj
def order_list(
    settings: Settings,
    query: str,
    order_status: str | None,
    payment_status: str | None,
    sort_by: str,
    asc: bool,
    limit: int | None,
) -> None:
    """List recent orders."""
    handler = ListOrdersHandler(order_repo=order_repository(settings))
    orders = handler.handle(
        query=query,
        order_status=OrderStatus(order_status) if order_status else None,
        payment_status=PaymentStatus(payment_status) if payment_status else None,
        sort_by=SortKey(sort_by),
        descending=not asc,
        limit=limit,
    )

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'ID':<5} {'Buyer':<20} {'Bouquet':<20} {'Status':<17} {'Payment':<8} {'Total':>14}"
    )
    click.echo("-" * 89)
    for o in orders:
        flag = " !" if o.overdue else ""
        click.echo(
            f"{o.id:<5} {o.buyer_name[:20]:<20} {o.bouquet_name[:20]:<20} "
            f"{o.order_status:<17} {o.payment_status:<8} {o.total:>14}{flag}"
        )


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--customer", "customer_id", default=None, help="Link a customer ID.")
@click.option("--unlink-customer", is_flag=True, help="Detach the linked customer.")
@click.option("--name", "buyer_name", default=None)
@click.option("--phone", "phone_number", default=None)
@click.option("--address", default=None)
@click.option("--status", "order_status", type=_STATUS_CHOICE, default=None)
@click.option("--method", "payment_method", type=_METHOD_CHOICE, default=None)
@click.option("--dp", "down_payment_amount", type=int, default=None)
@click.option("--additional", "additional_payment", type=int, default=None)
@click.option("--delivery-price", type=int, default=None)
@click.option("--delivery-at", default=None, help="ISO-8601 delivery time.")
@click.option("--clear-delivery-at", is_flag=True, help="Remove the delivery time.")
@click.option(
    "--preset",
    type=_PAYMENT_STATUS_CHOICE,
    default=None,
    help="Fill in payment amounts for this payment status.",
)
@click.pass_obj
def order_update(
    settings: Settings,
    order_id: int,
    unlink_customer: bool,
    clear_delivery_at: bool,
    preset: str | None,
    **fields,
) -> None:
    """Edit an existing order; only the given fields change."""
    raw = {name: value for name, value in fields.items() if value is not None}
    if unlink_customer:
        raw["customer_id"] = None
    if clear_delivery_at:
        raw["delivery_at"] = None
    if not raw and preset is None:
        raise click.UsageError("Nothing to update.")

    handler = UpdateOrderHandler(
        order_repo=order_repository(settings),
        customer_repo=customer_repository(settings),
        guard=submit_guard(),
    )

    try:
        dto = handler.handle(
            order_id,
            OrderPatch.from_dict(raw),
            preset=PaymentStatus(preset) if preset else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} updated (status={dto.order_status}, payment={dto.payment_status})")


@click.command("advance")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to advance.")
@click.pass_obj
def order_advance(settings: Settings, order_id: int) -> None:
    """Move an order one step along the status flow."""
    handler = AdvanceOrderHandler(order_repo=order_repository(settings), guard=submit_guard())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {dto.order_status}.")


@click.command("deliver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to mark delivered.")
@click.pass_obj
def order_deliver(settings: Settings, order_id: int) -> None:
    """Mark an order as delivered, skipping any remaining steps."""
    handler = MarkDeliveredHandler(order_repo=order_repository(settings), guard=submit_guard())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} marked as delivered.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.confirmation_option(prompt="Delete this order permanently?")
@click.pass_obj
def order_delete(settings: Settings, order_id: int) -> None:
    """Delete an order permanently."""
    handler = DeleteOrderHandler(order_repo=order_repository(settings), guard=submit_guard())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")


@click.command("stats")
@click.pass_obj
def order_stats(settings: Settings) -> None:
    """Summarize recent orders by status and payment."""
    stats = OrderStatsHandler(order_repo=order_repository(settings)).handle()

    click.echo(f"Orders:   {stats.total}  (overdue: {stats.overdue})")
    click.echo()
    for status in OrderStatus:
        click.echo(f"  {status.label:<18} {stats.by_status.get(status.value, 0):>5}")
    click.echo()
    for status in PaymentStatus:
        click.echo(f"  {status.value:<18} {stats.by_payment.get(status.value, 0):>5}")
    click.echo()
    click.echo(f"Revenue:  {stats.total_revenue}")
    click.echo(f"Paid:     {stats.paid_revenue}")
    click.echo(f"Pending:  {stats.pending_revenue}")
