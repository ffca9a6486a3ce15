"""Application service: Update Order use case.

Applies a partial patch to an existing order.  Derived values (total,
payment status) are recomputed by the aggregate; the patch can never set
them directly.  Submits are guarded per order id against double submission.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from florist.application.dto import OrderDTO, order_to_dto
from florist.application.submit_guard import SubmitGuard
from florist.domain.exceptions import EntityNotFoundError
from florist.domain.model.customer import Customer
from florist.domain.model.order import UNSET, Order, OrderPatch
from florist.domain.model.payment import PaymentStatus, apply_payment_preset
from florist.domain.repository.customer_repository import CustomerRepository
from florist.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        guard: SubmitGuard,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._guard = guard

    def handle(
        self,
        order_id: int,
        patch: OrderPatch,
        preset: PaymentStatus | None = None,
    ) -> OrderDTO:
        """Apply ``patch``; ``preset`` fills in suggested payment amounts first."""
        with self._guard.submitting(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            if preset is not None:
                patch = _with_payment_preset(order, patch, preset)
            entries = order.apply_patch(patch, customer=self._linked_customer(patch))
            self._order_repo.save(order)

        logger.info(
            "Updated order #%s: %s",
            order_id,
            "; ".join(entry.message for entry in entries),
        )
        return order_to_dto(order)

    def _linked_customer(self, patch: OrderPatch) -> Customer | None:
        if patch.customer_id is UNSET or not patch.customer_id:
            return None
        customer = self._customer_repo.get_by_id(patch.customer_id)  # type: ignore[arg-type]
        if customer is None:
            raise EntityNotFoundError(f"Customer not found: '{patch.customer_id}'")
        return customer


def _with_payment_preset(order: Order, patch: OrderPatch, preset: PaymentStatus) -> OrderPatch:
    def pick(value, current):
        return current if value is UNSET else value

    delivery_price = pick(patch.delivery_price, order.delivery_price)
    down_payment, additional = apply_payment_preset(
        preset,
        order.bouquet_price + delivery_price,
        pick(patch.down_payment_amount, order.down_payment_amount),
        pick(patch.additional_payment, order.additional_payment),
    )
    return replace(patch, down_payment_amount=down_payment, additional_payment=additional)
