"""Domain service: order list filtering, sorting and statistics.

Everything here reads the derived properties of each Order, so a stale
payment status stored somewhere else can never leak into the numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from florist.domain.model.order import STATUS_FLOW, Order, OrderStatus
from florist.domain.model.payment import PaymentStatus
from florist.domain.model.value_objects import Money


class SortKey(Enum):
    DATE = "date"
    NAME = "name"
    AMOUNT = "amount"
    STATUS = "status"


@dataclass(frozen=True)
class OrderStats:
    total: int
    by_status: dict[OrderStatus, int]
    by_payment: dict[PaymentStatus, int]
    overdue: int
    total_revenue: Money
    paid_revenue: Money
    pending_revenue: Money


def calculate_order_stats(orders: list[Order], now: datetime | None = None) -> OrderStats:
    by_status = {status: 0 for status in OrderStatus}
    by_payment = {status: 0 for status in PaymentStatus}
    total_revenue = Money.zero()
    paid_revenue = Money.zero()
    pending_revenue = Money.zero()
    overdue = 0

    for order in orders:
        breakdown = order.payment
        by_status[order.order_status] += 1
        by_payment[breakdown.status] += 1
        total_revenue = total_revenue + breakdown.total
        paid_revenue = paid_revenue + breakdown.paid
        pending_revenue = pending_revenue + breakdown.remaining
        if order.is_overdue(now):
            overdue += 1

    return OrderStats(
        total=len(orders),
        by_status=by_status,
        by_payment=by_payment,
        overdue=overdue,
        total_revenue=total_revenue,
        paid_revenue=paid_revenue,
        pending_revenue=pending_revenue,
    )


def matches_query(order: Order, query: str) -> bool:
    """Case-insensitive match on buyer name, phone number or bouquet name."""
    q = query.strip().lower()
    if not q:
        return True
    return (
        q in order.buyer.buyer_name.lower()
        or q in order.buyer.phone_number.lower()
        or q in order.bouquet_name.lower()
    )


def filter_and_sort_orders(
    orders: list[Order],
    query: str = "",
    order_status: OrderStatus | None = None,
    payment_status: PaymentStatus | None = None,
    sort_by: SortKey = SortKey.DATE,
    descending: bool = True,
) -> list[Order]:
    result = [o for o in orders if matches_query(o, query)]
    if order_status is not None:
        result = [o for o in result if o.order_status is order_status]
    if payment_status is not None:
        result = [o for o in result if o.payment_status is payment_status]

    if sort_by is SortKey.NAME:
        key = lambda o: o.buyer.buyer_name.lower()  # noqa: E731
    elif sort_by is SortKey.AMOUNT:
        key = lambda o: o.total.amount  # noqa: E731
    elif sort_by is SortKey.STATUS:
        key = lambda o: STATUS_FLOW.index(o.order_status)  # noqa: E731
    else:
        key = lambda o: o.created_at  # noqa: E731

    return sorted(result, key=key, reverse=descending)
