"""Application service: Update Bouquet use case."""

from __future__ import annotations

import logging

from florist.application.reference_data import ReferenceDataService
from florist.domain.exceptions import EntityNotFoundError
from florist.domain.model.value_objects import Money
from florist.domain.repository.catalog_repository import BouquetRepository

logger = logging.getLogger(__name__)


class UpdateBouquetHandler:

    def __init__(
        self,
        bouquet_repo: BouquetRepository,
        reference_data: ReferenceDataService,
    ) -> None:
        self._bouquet_repo = bouquet_repo
        self._reference_data = reference_data

    def handle(self, bouquet_id: str, new_price: str) -> None:
        """Update a bouquet's catalog price.

        This does NOT affect any existing orders: they captured a
        price snapshot at creation time.  The cached catalog is invalidated.
        """
        bouquet = self._bouquet_repo.get_by_id(bouquet_id)
        if bouquet is None:
            raise EntityNotFoundError(f"Bouquet with ID '{bouquet_id}' not found")

        bouquet.update_price(Money.of(new_price))
        self._bouquet_repo.save(bouquet)
        self._reference_data.catalog_changed()
        logger.info("Bouquet #%s price set to %s", bouquet_id, bouquet.price)
