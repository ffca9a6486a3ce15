"""Application service: Advance Order use case.

Guided progression: moves an order one step along the fulfillment flow.
A delivered order is left as is.
"""

from __future__ import annotations

import logging

from florist.application.dto import OrderDTO, order_to_dto
from florist.application.submit_guard import SubmitGuard
from florist.domain.exceptions import EntityNotFoundError
from florist.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AdvanceOrderHandler:

    def __init__(self, order_repo: OrderRepository, guard: SubmitGuard) -> None:
        self._order_repo = order_repo
        self._guard = guard

    def handle(self, order_id: int) -> OrderDTO:
        with self._guard.submitting(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            before = order.order_status
            order.advance_status()
            if order.order_status is not before:
                self._order_repo.save(order)
                logger.info(
                    "Order #%s advanced: %s -> %s",
                    order_id,
                    before.value,
                    order.order_status.value,
                )
        return order_to_dto(order)
