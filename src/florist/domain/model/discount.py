"""Bulk discount rules.

The tier table below is the single source of discount percentages; every
display surface derives its numbers and hints from it.
"""

from __future__ import annotations

from dataclasses import dataclass

from florist.domain.model.value_objects import Money


@dataclass(frozen=True)
class DiscountTier:
    threshold_quantity: int
    percentage: int
    label: str


# Highest threshold first; the zero-threshold tier is the catch-all.
DISCOUNT_TIERS: tuple[DiscountTier, ...] = (
    DiscountTier(threshold_quantity=50, percentage=20, label="Premium (50+)"),
    DiscountTier(threshold_quantity=20, percentage=15, label="Besar (20-49)"),
    DiscountTier(threshold_quantity=10, percentage=10, label="Menengah (10-19)"),
    DiscountTier(threshold_quantity=5, percentage=5, label="Kecil (5-9)"),
    DiscountTier(threshold_quantity=0, percentage=0, label="Standar"),
)

# Quantity from which customers are nudged towards the first paid tier.
DISCOUNT_HINT_QUANTITY = 3


@dataclass(frozen=True)
class BulkDiscountResult:
    """Outcome of applying the tier table to one order line.

    Invariants:
    - ``final_price == original_price - discount_amount``
    - ``discount_amount == round(original_price * discount_percentage / 100)``
    """

    original_price: Money
    discount_amount: Money
    discount_percentage: int
    final_price: Money
    tier: DiscountTier


def discount_tier_for(quantity: int) -> DiscountTier:
    """Return the highest tier whose threshold does not exceed ``quantity``."""
    for tier in DISCOUNT_TIERS:
        if quantity >= tier.threshold_quantity:
            return tier
    return DISCOUNT_TIERS[-1]


def calculate_bulk_discount(unit_price: Money | int, quantity: int) -> BulkDiscountResult:
    """Price ``quantity`` units of ``unit_price`` with the bulk discount applied.

    Never raises for numeric input: a negative quantity is treated as zero and
    a raw unit price is clamped through ``Money.clamped``.
    """
    quantity = max(0, int(quantity))
    price = Money.clamped(unit_price)
    tier = discount_tier_for(quantity)

    original = price * quantity
    discount = original.percent(tier.percentage)
    return BulkDiscountResult(
        original_price=original,
        discount_amount=discount,
        discount_percentage=tier.percentage,
        final_price=original - discount,
        tier=tier,
    )


def bulk_discount_message(quantity: int) -> str | None:
    """Promotional hint for the quantity picker, or None when there is nothing to say."""
    tier = discount_tier_for(quantity)
    if tier.percentage > 0:
        return (
            f"Diskon {tier.percentage}% untuk order "
            f"{tier.threshold_quantity}+ pcs!"
        )

    if quantity >= DISCOUNT_HINT_QUANTITY:
        first = min(
            (t for t in DISCOUNT_TIERS if t.percentage > 0),
            key=lambda t: t.threshold_quantity,
        )
        return (
            f"Order {first.threshold_quantity}+ pcs untuk dapat "
            f"diskon {first.percentage}%!"
        )
    return None
