"""Catalog aggregates: bouquets and the collections that group them.

Bouquets live independently of orders. Their prices change over time, but
orders capture a price snapshot at creation time and never follow.
"""

from __future__ import annotations

from dataclasses import dataclass

from florist.domain.exceptions import ValidationError
from florist.domain.model.value_objects import Money


@dataclass
class Bouquet:
    """A bouquet in the catalog.

    Kept as a mutable dataclass because price updates are a legitimate
    mutation on the aggregate.
    """

    id: str
    name: str
    price: Money
    collection: str | None = None

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Bouquet price must be greater than zero")
        self.price = new_price


@dataclass(frozen=True)
class Collection:
    id: str
    name: str
