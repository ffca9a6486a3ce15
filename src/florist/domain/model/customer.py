"""Customer aggregate and the buyer snapshot copied onto orders.

Orders keep their own point-in-time copy of the buyer fields, so editing a
customer's profile never rewrites historical orders.
"""

from __future__ import annotations

from dataclasses import dataclass

from florist.domain.exceptions import ValidationError

MAX_NAME_LENGTH = 120
MAX_PHONE_LENGTH = 40
MAX_ADDRESS_LENGTH = 500


def clean_text(value: object, max_length: int) -> str:
    """Trim a free-text field and cut it to ``max_length`` characters."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length]


@dataclass(frozen=True)
class BuyerSnapshot:
    buyer_name: str
    phone_number: str
    address: str

    @staticmethod
    def of(buyer_name: object, phone_number: object, address: object) -> BuyerSnapshot:
        snapshot = BuyerSnapshot(
            buyer_name=clean_text(buyer_name, MAX_NAME_LENGTH),
            phone_number=clean_text(phone_number, MAX_PHONE_LENGTH),
            address=clean_text(address, MAX_ADDRESS_LENGTH),
        )
        if not snapshot.buyer_name:
            raise ValidationError("Buyer name is required")
        if not snapshot.phone_number:
            raise ValidationError("Phone number is required")
        if not snapshot.address:
            raise ValidationError("Address is required")
        return snapshot


@dataclass
class Customer:
    """A returning buyer in the customer directory."""

    id: str | None
    buyer_name: str
    phone_number: str
    address: str

    @staticmethod
    def create(buyer_name: str, phone_number: str, address: str) -> Customer:
        snapshot = BuyerSnapshot.of(buyer_name, phone_number, address)
        return Customer(
            id=None,
            buyer_name=snapshot.buyer_name,
            phone_number=snapshot.phone_number,
            address=snapshot.address,
        )

    def update_details(self, buyer_name: str, address: str) -> None:
        """Refresh name and address; the phone number identifies the customer."""
        snapshot = BuyerSnapshot.of(buyer_name, self.phone_number, address)
        self.buyer_name = snapshot.buyer_name
        self.address = snapshot.address

    def snapshot(self) -> BuyerSnapshot:
        return BuyerSnapshot(
            buyer_name=self.buyer_name,
            phone_number=self.phone_number,
            address=self.address,
        )

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name or phone number."""
        q = query.strip().lower()
        if not q:
            return True
        return q in self.buyer_name.lower() or q in self.phone_number.lower()
