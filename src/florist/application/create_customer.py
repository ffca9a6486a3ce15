"""Application service: Create Customer use case.

The phone number identifies a customer: submitting an existing number
refreshes that customer's name and address instead of creating a duplicate.
"""

from __future__ import annotations

import logging

from florist.domain.model.customer import MAX_PHONE_LENGTH, Customer, clean_text
from florist.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class CreateCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, buyer_name: str, phone_number: str, address: str) -> Customer:
        existing = self._customer_repo.get_by_phone(clean_text(phone_number, MAX_PHONE_LENGTH))
        if existing is not None:
            existing.update_details(buyer_name, address)
            self._customer_repo.save(existing)
            logger.info("Updated customer #%s", existing.id)
            return existing

        customer = Customer.create(buyer_name, phone_number, address)
        self._customer_repo.save(customer)
        logger.info("Created customer #%s", customer.id)
        return customer
