"""Application service: Find Customers use case (query)."""

from __future__ import annotations

from florist.application.list_orders import clamp_limit
from florist.domain.exceptions import EntityNotFoundError
from florist.domain.model.customer import Customer
from florist.domain.repository.customer_repository import CustomerRepository

DEFAULT_CUSTOMER_LIMIT = 200
MAX_QUERY_LENGTH = 120


class FindCustomersHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, query: str = "", limit: int | None = None) -> list[Customer]:
        """Search by name or phone number substring; empty query lists everyone."""
        return self._customer_repo.search(
            query.strip()[:MAX_QUERY_LENGTH],
            clamp_limit(limit, default=DEFAULT_CUSTOMER_LIMIT),
        )

    def by_id(self, customer_id: str) -> Customer:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer not found: '{customer_id}'")
        return customer
