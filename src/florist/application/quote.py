"""Application services: delivery and bulk-discount quotes (queries)."""

from __future__ import annotations

from dataclasses import dataclass

from florist.domain.exceptions import EntityNotFoundError
from florist.domain.model.delivery import (
    DeliveryPriceResult,
    haversine_km,
    is_same_day_delivery,
    price_for_distance,
)
from florist.domain.model.discount import (
    BulkDiscountResult,
    bulk_discount_message,
    calculate_bulk_discount,
)
from florist.domain.model.value_objects import Coordinates
from florist.domain.repository.catalog_repository import BouquetRepository


@dataclass(frozen=True)
class DeliveryQuoteDTO:
    result: DeliveryPriceResult
    same_day: bool


class DeliveryQuoteHandler:

    def __init__(self, store_location: Coordinates) -> None:
        self._store_location = store_location

    def handle(self, latitude: float, longitude: float) -> DeliveryQuoteDTO:
        distance = haversine_km(self._store_location, Coordinates.of(latitude, longitude))
        return DeliveryQuoteDTO(
            result=price_for_distance(distance),
            same_day=is_same_day_delivery(distance),
        )


@dataclass(frozen=True)
class DiscountQuoteDTO:
    bouquet_name: str
    quantity: int
    result: BulkDiscountResult
    message: str | None


class DiscountQuoteHandler:

    def __init__(self, bouquet_repo: BouquetRepository) -> None:
        self._bouquet_repo = bouquet_repo

    def handle(self, bouquet_id: str, quantity: int) -> DiscountQuoteDTO:
        bouquet = self._bouquet_repo.get_by_id(bouquet_id)
        if bouquet is None:
            raise EntityNotFoundError(f"Bouquet with ID '{bouquet_id}' not found")
        return DiscountQuoteDTO(
            bouquet_name=bouquet.name,
            quantity=quantity,
            result=calculate_bulk_discount(bouquet.price, quantity),
            message=bulk_discount_message(quantity),
        )
