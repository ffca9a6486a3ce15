"""Application service: Order Statistics use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from florist.domain.repository.order_repository import OrderRepository
from florist.domain.service.order_reporting import calculate_order_stats


@dataclass(frozen=True)
class OrderStatsDTO:
    total: int
    by_status: dict[str, int]
    by_payment: dict[str, int]
    overdue: int
    total_revenue: str
    paid_revenue: str
    pending_revenue: str


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> OrderStatsDTO:
        stats = calculate_order_stats(self._order_repo.list_all())
        return OrderStatsDTO(
            total=stats.total,
            by_status={status.value: count for status, count in stats.by_status.items()},
            by_payment={status.value: count for status, count in stats.by_payment.items()},
            overdue=stats.overdue,
            total_revenue=str(stats.total_revenue),
            paid_revenue=str(stats.paid_revenue),
            pending_revenue=str(stats.pending_revenue),
        )
