"""Application service: List Orders use case (query).

Filters and sorts every order in the domain service, then cuts the result
to the page size, which is clamped to 1..500.
"""

from __future__ import annotations

from florist.application.dto import OrderDTO, order_to_dto
from florist.domain.model.order import OrderStatus
from florist.domain.model.payment import PaymentStatus
from florist.domain.repository.order_repository import OrderRepository
from florist.domain.service.order_reporting import SortKey, filter_and_sort_orders

DEFAULT_LIMIT = 100
MAX_LIMIT = 500


def clamp_limit(limit: int | None, default: int = DEFAULT_LIMIT) -> int:
    if limit is None:
        return default
    return min(max(limit, 1), MAX_LIMIT)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        query: str = "",
        order_status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
        sort_by: SortKey = SortKey.DATE,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[OrderDTO]:
        selected = filter_and_sort_orders(
            self._order_repo.list_all(),
            query=query,
            order_status=order_status,
            payment_status=payment_status,
            sort_by=sort_by,
            descending=descending,
        )
        return [order_to_dto(order) for order in selected[: clamp_limit(limit)]]
