"""Application service: catalog reference data served through the cache.

Bouquet listings and collection names are read far more often than they
change, so they go through a ReferenceCache.  Order creation does NOT
use this: the price snapshot always comes straight from the repository.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TypeVar

from florist.domain.model.catalog import Bouquet
from florist.domain.repository.catalog_repository import (
    BouquetRepository,
    CollectionRepository,
)

T = TypeVar("T")

BOUQUETS_KEY = "bouquets"
COLLECTIONS_KEY = "collections"


class ReferenceCache(ABC):
    """Keyed cache for slow-changing reference data."""

    @abstractmethod
    async def get(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[T]],
        cancel: asyncio.Event | None = None,
    ) -> T:
        """Return the value for ``key``, calling ``fetcher`` on a miss."""

    @abstractmethod
    def invalidate(self, key: str) -> None:
        """Drop ``key`` so the next read fetches fresh data."""


class ReferenceDataService:

    def __init__(
        self,
        cache: ReferenceCache,
        bouquet_repo: BouquetRepository,
        collection_repo: CollectionRepository,
    ) -> None:
        self._cache = cache
        self._bouquet_repo = bouquet_repo
        self._collection_repo = collection_repo

    async def bouquets(self, cancel: asyncio.Event | None = None) -> tuple[Bouquet, ...]:
        return await self._cache.get(BOUQUETS_KEY, self._load_bouquets, cancel)

    async def collection_names(self, cancel: asyncio.Event | None = None) -> tuple[str, ...]:
        return await self._cache.get(COLLECTIONS_KEY, self._load_collection_names, cancel)

    def catalog_changed(self) -> None:
        """Call after any bouquet mutation."""
        self._cache.invalidate(BOUQUETS_KEY)

    def collections_changed(self) -> None:
        self._cache.invalidate(COLLECTIONS_KEY)

    async def _load_bouquets(self) -> tuple[Bouquet, ...]:
        bouquets = await asyncio.to_thread(self._bouquet_repo.list_all)
        return tuple(sorted(bouquets, key=lambda b: b.name.lower()))

    async def _load_collection_names(self) -> tuple[str, ...]:
        collections = await asyncio.to_thread(self._collection_repo.list_all)
        names = {c.name.strip() for c in collections if c.name.strip()}
        return tuple(sorted(names, key=str.lower))
