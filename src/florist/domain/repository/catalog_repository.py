"""Abstract repositories for the catalog (bouquets and collections).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from florist.domain.model.catalog import Bouquet, Collection


class BouquetRepository(ABC):

    @abstractmethod
    def get_by_id(self, bouquet_id: str) -> Bouquet | None:
        """Return a bouquet by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Bouquet]:
        """Return every bouquet in the catalog."""

    @abstractmethod
    def save(self, bouquet: Bouquet) -> None:
        """Persist a new or updated bouquet."""


class CollectionRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Collection]:
        """Return every collection."""
