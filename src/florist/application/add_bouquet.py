"""Application service: Add Bouquet use case."""

from __future__ import annotations

from florist.application.reference_data import ReferenceDataService
from florist.domain.exceptions import ValidationError
from florist.domain.model.catalog import Bouquet
from florist.domain.model.value_objects import Money
from florist.domain.repository.catalog_repository import BouquetRepository


class AddBouquetHandler:

    def __init__(
        self,
        bouquet_repo: BouquetRepository,
        reference_data: ReferenceDataService,
    ) -> None:
        self._bouquet_repo = bouquet_repo
        self._reference_data = reference_data

    def handle(self, name: str, price: str, collection: str | None = None) -> Bouquet:
        """Add a new bouquet to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Bouquet name is required")

        all_bouquets = self._bouquet_repo.list_all()
        if any(b.name.lower() == name.strip().lower() for b in all_bouquets):
            raise ValidationError(f"Bouquet '{name}' already exists")

        # Auto-assign ID based on existing bouquets
        numeric_ids = [int(b.id) for b in all_bouquets if b.id.isdigit()]
        next_id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        price_value = Money.of(price)
        if price_value.amount <= 0:
            raise ValidationError("Bouquet price must be greater than zero")

        bouquet = Bouquet(
            id=next_id,
            name=name.strip(),
            price=price_value,
            collection=collection.strip() if collection else None,
        )
        self._bouquet_repo.save(bouquet)
        self._reference_data.catalog_changed()
        return bouquet
