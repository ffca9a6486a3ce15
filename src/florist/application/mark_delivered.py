"""Application service: Mark Delivered use case.

Manual override for admin corrections.  Jumps straight to ``delivered``
without walking the intermediate steps; the activity log records it as a
manual change.
"""

from __future__ import annotations

import logging

from florist.application.dto import OrderDTO, order_to_dto
from florist.application.submit_guard import SubmitGuard
from florist.domain.exceptions import EntityNotFoundError
from florist.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class MarkDeliveredHandler:

    def __init__(self, order_repo: OrderRepository, guard: SubmitGuard) -> None:
        self._order_repo = order_repo
        self._guard = guard

    def handle(self, order_id: int) -> OrderDTO:
        with self._guard.submitting(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            if not order.order_status.is_terminal:
                previous = order.order_status
                order.mark_delivered()
                self._order_repo.save(order)
                logger.info("Order #%s manually marked delivered (was %s)", order_id, previous.value)
        return order_to_dto(order)
