"""Unit tests for the bulk discount tiers."""

import pytest

from florist.domain.model.discount import (
    bulk_discount_message,
    calculate_bulk_discount,
    discount_tier_for,
)
from florist.domain.model.value_objects import Money


class TestTierBoundaries:

    @pytest.mark.parametrize(
        "quantity, percentage",
        [(0, 0), (1, 0), (4, 0), (5, 5), (9, 5), (10, 10), (19, 10), (20, 15), (49, 15), (50, 20), (500, 20)],
    )
    def test_percentage_by_quantity(self, quantity, percentage):
        assert discount_tier_for(quantity).percentage == percentage

    def test_negative_quantity_is_standard_tier(self):
        assert discount_tier_for(-3).label == "Standar"


class TestCalculateBulkDiscount:

    def test_ten_bouquets_get_ten_percent(self):
        result = calculate_bulk_discount(Money(150000), 10)
        assert result.original_price == Money(1500000)
        assert result.discount_percentage == 10
        assert result.discount_amount == Money(150000)
        assert result.final_price == Money(1350000)
        assert result.tier.label == "Menengah (10-19)"

    def test_discount_rounds_half_up(self):
        # 5 x 1001 = 5005; 5% = 250.25 -> 250
        result = calculate_bulk_discount(Money(1001), 5)
        assert result.discount_amount == Money(250)
        # 5 x 1002 = 5010; 5% = 250.5 -> 251
        assert calculate_bulk_discount(Money(1002), 5).discount_amount == Money(251)

    def test_final_price_is_original_minus_discount(self):
        for qty in (1, 5, 12, 33, 77):
            result = calculate_bulk_discount(Money(123457), qty)
            assert result.final_price == result.original_price - result.discount_amount

    def test_raw_prices_are_clamped(self):
        assert calculate_bulk_discount(-100, 10).original_price == Money(0)
        assert calculate_bulk_discount(float("nan"), 10).final_price == Money(0)

    def test_negative_quantity_treated_as_zero(self):
        result = calculate_bulk_discount(Money(100000), -4)
        assert result.original_price == Money(0)
        assert result.discount_percentage == 0


class TestBulkDiscountMessage:

    def test_silent_for_small_orders(self):
        assert bulk_discount_message(1) is None
        assert bulk_discount_message(2) is None

    def test_hint_before_first_tier(self):
        assert bulk_discount_message(3) == "Order 5+ pcs untuk dapat diskon 5%!"
        assert bulk_discount_message(4) == "Order 5+ pcs untuk dapat diskon 5%!"

    def test_current_tier_announced(self):
        assert bulk_discount_message(5) == "Diskon 5% untuk order 5+ pcs!"
        assert bulk_discount_message(25) == "Diskon 15% untuk order 20+ pcs!"
