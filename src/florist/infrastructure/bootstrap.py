"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from florist.application.reference_data import ReferenceDataService
from florist.application.submit_guard import SubmitGuard
from florist.infrastructure.config import Settings
from florist.infrastructure.persistence.json_catalog_repository import (
    JsonBouquetRepository,
    JsonCollectionRepository,
)
from florist.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from florist.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from florist.infrastructure.reference_cache import ReferenceDataCache

# One guard per process; every order mutation goes through it.
_submit_guard = SubmitGuard()


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def customer_repository(settings: Settings) -> JsonCustomerRepository:
    return JsonCustomerRepository(settings.data_dir / "customers.json")


def bouquet_repository(settings: Settings) -> JsonBouquetRepository:
    return JsonBouquetRepository(settings.data_dir / "bouquets.json")


def collection_repository(settings: Settings) -> JsonCollectionRepository:
    return JsonCollectionRepository(settings.data_dir / "collections.json")


def submit_guard() -> SubmitGuard:
    return _submit_guard


def reference_cache(settings: Settings) -> ReferenceDataCache:
    return ReferenceDataCache(
        ttl_seconds=settings.cache.ttl_seconds,
        coalesce_grace_seconds=settings.cache.coalesce_grace_seconds,
        serve_stale=settings.cache.serve_stale,
    )


def reference_data(settings: Settings) -> ReferenceDataService:
    return ReferenceDataService(
        cache=reference_cache(settings),
        bouquet_repo=bouquet_repository(settings),
        collection_repo=collection_repository(settings),
    )
