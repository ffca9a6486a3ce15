"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from florist.domain.model.order import Order

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class CreateOrderCommand:
    """Input: what the admin or storefront submitted for a new order.

    Either ``customer_id`` or the three buyer fields identify the buyer.
    ``delivery_price`` wins over the destination coordinates when both are
    given.
    """

    bouquet_id: str
    customer_id: str | None = None
    buyer_name: str = ""
    phone_number: str = ""
    address: str = ""
    order_status: str | None = None
    payment_method: str | None = None
    down_payment_amount: int | None = None
    additional_payment: int | None = None
    delivery_price: int | None = None
    delivery_at: str | None = None
    destination_lat: float | None = None
    destination_lng: float | None = None


@dataclass(frozen=True)
class ActivityDTO:
    at: str
    kind: str
    message: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    buyer_name: str
    phone_number: str
    address: str
    customer_id: str | None
    bouquet_name: str
    bouquet_price: str  # formatted, e.g. "Rp 100.000"
    order_status: str
    payment_status: str
    payment_method: str
    down_payment_amount: str
    additional_payment: str
    delivery_price: str
    total: str
    paid: str
    remaining: str
    delivery_at: str | None
    overdue: bool
    created_at: str
    activity: list[ActivityDTO]


def _format_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def order_to_dto(order: Order, now: datetime | None = None) -> OrderDTO:
    payment = order.payment
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        buyer_name=order.buyer.buyer_name,
        phone_number=order.buyer.phone_number,
        address=order.buyer.address,
        customer_id=order.customer_id,
        bouquet_name=order.bouquet_name,
        bouquet_price=str(order.bouquet_price),
        order_status=order.order_status.value,
        payment_status=payment.status.value,
        payment_method=order.payment_method.value,
        down_payment_amount=str(order.down_payment_amount),
        additional_payment=str(order.additional_payment),
        delivery_price=str(order.delivery_price),
        total=str(payment.total),
        paid=str(payment.paid),
        remaining=str(payment.remaining),
        delivery_at=_format_time(order.delivery_at) if order.delivery_at else None,
        overdue=order.is_overdue(now),
        created_at=_format_time(order.created_at),
        activity=[
            ActivityDTO(at=_format_time(entry.at), kind=entry.kind.value, message=entry.message)
            for entry in order.activity
        ],
    )
