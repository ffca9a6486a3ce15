"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from pathlib import Path

from florist.domain.model.customer import Customer
from florist.domain.repository.customer_repository import CustomerRepository
from florist.infrastructure.persistence.json_file import JsonFile


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._file.load():
            if raw["id"] == customer_id:
                return self._to_domain(raw)
        return None

    def get_by_phone(self, phone_number: str) -> Customer | None:
        for raw in self._file.load():
            if raw["phone_number"] == phone_number:
                return self._to_domain(raw)
        return None

    def search(self, query: str, limit: int) -> list[Customer]:
        # Newest first, like the order list.
        customers = [self._to_domain(raw) for raw in reversed(self._file.load())]
        return [c for c in customers if c.matches(query)][:limit]

    def save(self, customer: Customer) -> None:
        records = self._file.load()
        if customer.id is None:
            numeric_ids = [int(r["id"]) for r in records if str(r["id"]).isdigit()]
            customer.id = str(max(numeric_ids) + 1) if numeric_ids else "1"

        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == customer.id:
                records[i] = self._to_raw(customer)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(customer))
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "buyer_name": customer.buyer_name,
            "phone_number": customer.phone_number,
            "address": customer.address,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            buyer_name=raw["buyer_name"],
            phone_number=raw["phone_number"],
            address=raw["address"],
        )
