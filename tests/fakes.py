"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from florist.application.reference_data import ReferenceCache
from florist.domain.model.catalog import Bouquet, Collection
from florist.domain.model.customer import Customer
from florist.domain.model.order import Order
from florist.domain.repository.catalog_repository import (
    BouquetRepository,
    CollectionRepository,
)
from florist.domain.repository.customer_repository import CustomerRepository
from florist.domain.repository.order_repository import OrderRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self.saves = 0

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def list_all(self) -> list[Order]:
        return sorted(self._store.values(), key=lambda o: o.created_at, reverse=True)

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order
        self.saves += 1

    def delete(self, order_id: int) -> bool:
        return self._store.pop(order_id, None) is not None


class FakeCustomerRepository(CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[str, Customer] = {}
        for c in customers or []:
            self._store[c.id] = c

    def get_by_id(self, customer_id: str) -> Customer | None:
        return self._store.get(customer_id)

    def get_by_phone(self, phone_number: str) -> Customer | None:
        for c in self._store.values():
            if c.phone_number == phone_number:
                return c
        return None

    def search(self, query: str, limit: int) -> list[Customer]:
        return [c for c in self._store.values() if c.matches(query)][:limit]

    def save(self, customer: Customer) -> None:
        if customer.id is None:
            customer.id = str(len(self._store) + 1)
        self._store[customer.id] = customer


class FakeBouquetRepository(BouquetRepository):

    def __init__(self, bouquets: list[Bouquet] | None = None) -> None:
        self._store: dict[str, Bouquet] = {}
        self.list_calls = 0
        for b in bouquets or []:
            self._store[b.id] = b

    def get_by_id(self, bouquet_id: str) -> Bouquet | None:
        return self._store.get(bouquet_id)

    def list_all(self) -> list[Bouquet]:
        self.list_calls += 1
        return list(self._store.values())

    def save(self, bouquet: Bouquet) -> None:
        self._store[bouquet.id] = bouquet


class FakeCollectionRepository(CollectionRepository):

    def __init__(self, collections: list[Collection] | None = None) -> None:
        self._collections = list(collections or [])

    def list_all(self) -> list[Collection]:
        return list(self._collections)


class FakeReferenceCache(ReferenceCache):
    """Plain dict cache: no TTL, no coalescing."""

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    async def get(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        cancel: asyncio.Event | None = None,
    ) -> Any:
        if key not in self.values:
            self.values[key] = await fetcher()
        return self.values[key]

    def invalidate(self, key: str) -> None:
        self.values.pop(key, None)
