"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (Customer and
Bouquet lookup + Order creation) and the only place a price snapshot is
taken.
"""

from __future__ import annotations

import logging

from florist.application.dto import CreateOrderCommand, OrderDTO, order_to_dto
from florist.domain.exceptions import EntityNotFoundError, ValidationError
from florist.domain.model.customer import BuyerSnapshot
from florist.domain.model.delivery import calculate_delivery_price
from florist.domain.model.order import (
    Order,
    OrderStatus,
    parse_delivery_at,
    parse_order_status,
    parse_payment_method,
)
from florist.domain.model.value_objects import Coordinates, Money
from florist.domain.repository.catalog_repository import BouquetRepository
from florist.domain.repository.customer_repository import CustomerRepository
from florist.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        bouquet_repo: BouquetRepository,
        customer_repo: CustomerRepository,
        store_location: Coordinates,
    ) -> None:
        self._order_repo = order_repo
        self._bouquet_repo = bouquet_repo
        self._customer_repo = customer_repo
        self._store_location = store_location

    def handle(self, command: CreateOrderCommand) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Resolve the buyer: linked customer snapshot or inline fields.
        2. Resolve the bouquet and take its *current* price (snapshot).
        3. Work out the delivery price (manual, by distance, or none).
        4. Let the Order aggregate validate and log its creation.
        5. Persist and return a DTO.
        """
        buyer = self._resolve_buyer(command)

        bouquet = self._bouquet_repo.get_by_id(command.bouquet_id)
        if bouquet is None:
            raise EntityNotFoundError(f"Bouquet not found: '{command.bouquet_id}'")

        destination = self._destination(command)
        order = Order.create(
            buyer=buyer,
            bouquet=bouquet,  # <-- price snapshot
            customer_id=command.customer_id or None,
            order_status=(
                parse_order_status(command.order_status)
                if command.order_status
                else OrderStatus.INQUIRING
            ),
            payment_method=parse_payment_method(command.payment_method),
            down_payment_amount=Money.clamped(command.down_payment_amount),
            additional_payment=Money.clamped(command.additional_payment),
            delivery_price=self._delivery_price(command, destination),
            delivery_at=parse_delivery_at(command.delivery_at),
            destination=destination,
        )
        self._order_repo.save(order)
        logger.info(
            "Created order #%s for %s (%s, total %s)",
            order.id,
            order.buyer.buyer_name,
            order.bouquet_name,
            order.total,
        )
        return order_to_dto(order)

    # --- Helpers --------------------------------------------------------------

    def _resolve_buyer(self, command: CreateOrderCommand) -> BuyerSnapshot:
        if command.customer_id:
            customer = self._customer_repo.get_by_id(command.customer_id)
            if customer is None:
                raise EntityNotFoundError(f"Customer not found: '{command.customer_id}'")
            return customer.snapshot()
        return BuyerSnapshot.of(command.buyer_name, command.phone_number, command.address)

    @staticmethod
    def _destination(command: CreateOrderCommand) -> Coordinates | None:
        if command.destination_lat is None and command.destination_lng is None:
            return None
        if command.destination_lat is None or command.destination_lng is None:
            raise ValidationError("Destination needs both latitude and longitude")
        return Coordinates.of(command.destination_lat, command.destination_lng)

    def _delivery_price(
        self, command: CreateOrderCommand, destination: Coordinates | None
    ) -> Money:
        if command.delivery_price is not None:
            return Money.clamped(command.delivery_price)
        if destination is None:
            return Money.zero()

        quote = calculate_delivery_price(self._store_location, destination)
        if not quote.is_deliverable:
            raise ValidationError(
                "Delivery to this destination cannot be priced automatically "
                f"({quote.estimated_time}); enter a delivery price manually"
            )
        return quote.price  # type: ignore[return-value]
