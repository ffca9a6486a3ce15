"""Application service: Delete Order use case.

Hard delete, no undo.  The activity log goes with the order.  Refused while
another submit for the same order is still running.
"""

from __future__ import annotations

import logging

from florist.application.submit_guard import SubmitGuard
from florist.domain.exceptions import EntityNotFoundError
from florist.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository, guard: SubmitGuard) -> None:
        self._order_repo = order_repo
        self._guard = guard

    def handle(self, order_id: int) -> None:
        with self._guard.submitting(order_id):
            if not self._order_repo.delete(order_id):
                raise EntityNotFoundError(f"Order #{order_id} not found")
        logger.info("Deleted order #%s", order_id)
