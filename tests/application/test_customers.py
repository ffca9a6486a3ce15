"""Integration tests for the customer directory use cases."""

import pytest

from florist.application.create_customer import CreateCustomerHandler
from florist.application.find_customers import FindCustomersHandler
from florist.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import FakeCustomerRepository


class TestCreateCustomer:

    def test_creates_with_id(self):
        repo = FakeCustomerRepository()
        customer = CreateCustomerHandler(repo).handle("Siti", " 08123 ", "Jl. Kartini 1")
        assert customer.id == "1"
        assert customer.phone_number == "08123"

    def test_same_phone_updates_existing(self):
        repo = FakeCustomerRepository()
        handler = CreateCustomerHandler(repo)
        first = handler.handle("Siti", "08123", "Jl. Kartini 1")
        second = handler.handle("Siti Aminah", "08123", "Jl. Cipto 4")
        assert second.id == first.id
        assert repo.get_by_id(first.id).address == "Jl. Cipto 4"
        assert len(repo.search("", 10)) == 1

    def test_name_required(self):
        with pytest.raises(ValidationError, match="Buyer name is required"):
            CreateCustomerHandler(FakeCustomerRepository()).handle("", "08123", "Jl. A")


class TestFindCustomers:

    def _repo(self) -> FakeCustomerRepository:
        repo = FakeCustomerRepository()
        handler = CreateCustomerHandler(repo)
        handler.handle("Siti", "08123", "Jl. A")
        handler.handle("Budi", "08999", "Jl. B")
        return repo

    def test_search_by_name_or_phone(self):
        handler = FindCustomersHandler(self._repo())
        assert [c.buyer_name for c in handler.handle("bud")] == ["Budi"]
        assert [c.buyer_name for c in handler.handle("0812")] == ["Siti"]

    def test_empty_query_lists_all(self):
        assert len(FindCustomersHandler(self._repo()).handle()) == 2

    def test_limit(self):
        assert len(FindCustomersHandler(self._repo()).handle(limit=1)) == 1

    def test_by_id(self):
        handler = FindCustomersHandler(self._repo())
        assert handler.by_id("2").buyer_name == "Budi"
        with pytest.raises(EntityNotFoundError):
            handler.by_id("77")
