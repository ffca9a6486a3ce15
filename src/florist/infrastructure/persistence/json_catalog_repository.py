"""JSON-file-backed implementations of the catalog repositories."""

from __future__ import annotations

from pathlib import Path

from florist.domain.model.catalog import Bouquet, Collection
from florist.domain.model.value_objects import Money
from florist.domain.repository.catalog_repository import (
    BouquetRepository,
    CollectionRepository,
)
from florist.infrastructure.persistence.json_file import JsonFile


class JsonBouquetRepository(BouquetRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- BouquetRepository interface ------------------------------------------

    def get_by_id(self, bouquet_id: str) -> Bouquet | None:
        return self._load().get(bouquet_id)

    def list_all(self) -> list[Bouquet]:
        return list(self._load().values())

    def save(self, bouquet: Bouquet) -> None:
        bouquets = self._load()
        bouquets[bouquet.id] = bouquet
        self._persist(bouquets)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Bouquet]:
        return {
            item["id"]: Bouquet(
                id=item["id"],
                name=item["name"],
                price=Money.clamped(item["price"]),
                collection=item.get("collection"),
            )
            for item in self._file.load()
        }

    def _persist(self, bouquets: dict[str, Bouquet]) -> None:
        self._file.persist(
            [
                {
                    "id": b.id,
                    "name": b.name,
                    "price": b.price.amount,
                    "collection": b.collection,
                }
                for b in bouquets.values()
            ]
        )


class JsonCollectionRepository(CollectionRepository):
    """Collections are maintained by hand in the JSON file."""

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def list_all(self) -> list[Collection]:
        return [Collection(id=str(item["id"]), name=item["name"]) for item in self._file.load()]
