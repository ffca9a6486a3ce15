"""Abstract repository for the customer directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from florist.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def get_by_phone(self, phone_number: str) -> Customer | None:
        """Return the customer registered under a phone number, or None."""

    @abstractmethod
    def search(self, query: str, limit: int) -> list[Customer]:
        """Return up to ``limit`` customers whose name or phone contains ``query``."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer, assigning an ID if needed."""
