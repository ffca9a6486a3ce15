"""Unit tests for distance-based delivery pricing."""

import math

import pytest

from florist.domain.model.delivery import (
    UNDELIVERABLE_TIME_LABEL,
    UNDELIVERABLE_ZONE_LABEL,
    calculate_delivery_price,
    calculate_delivery_price_from,
    delivery_zone_for,
    haversine_km,
    is_same_day_delivery,
    price_for_distance,
)
from florist.domain.model.value_objects import Coordinates, Money

STORE = Coordinates(-6.7575719, 108.5621832)


class TestHaversine:

    def test_same_point_is_zero(self):
        assert haversine_km(STORE, STORE) == 0.0

    def test_one_degree_of_latitude(self):
        d = haversine_km(Coordinates(0.0, 0.0), Coordinates(1.0, 0.0))
        assert d == pytest.approx(111.19, abs=0.01)

    def test_symmetric(self):
        other = Coordinates(-6.9175, 107.6191)
        assert haversine_km(STORE, other) == pytest.approx(haversine_km(other, STORE))

    def test_non_finite_input_is_nan(self):
        assert math.isnan(haversine_km(STORE, Coordinates(float("nan"), 108.5)))
        assert math.isnan(haversine_km(STORE, Coordinates(-6.7, float("inf"))))


class TestPriceForDistance:

    @pytest.mark.parametrize(
        "distance, price, label",
        [
            (0.0, 15000, "Zona Same-Day"),
            (5.0, 15000, "Zona Same-Day"),
            (5.1, 20000, "Zona Standar"),
            (10.0, 20000, "Zona Standar"),
            (20.0, 30000, "Zona Extended"),
            (30.0, 40000, "Zona Jauh"),
            (30.1, 50000, "Zona Khusus"),
            (250.0, 50000, "Zona Khusus"),
        ],
    )
    def test_band_boundaries(self, distance, price, label):
        result = price_for_distance(distance)
        assert result.price == Money(price)
        assert result.zone_label == label
        assert result.is_deliverable

    def test_distance_reported_to_one_decimal(self):
        assert price_for_distance(7.26).distance_km == 7.3

    def test_reported_distance_rounds_halves_up(self):
        assert price_for_distance(2.25).distance_km == 2.3

    def test_band_uses_unrounded_distance(self):
        # 5.04 rounds to 5.0 for display but is past the same-day band.
        result = price_for_distance(5.04)
        assert result.distance_km == 5.0
        assert result.price == Money(20000)

    @pytest.mark.parametrize("distance", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_distance_is_undeliverable(self, distance):
        result = price_for_distance(distance)
        assert not result.is_deliverable
        assert result.price is None
        assert result.distance_km is None
        assert result.estimated_time == UNDELIVERABLE_TIME_LABEL
        assert result.zone_label == UNDELIVERABLE_ZONE_LABEL
        assert result.formatted_price == "—"


class TestCalculateDeliveryPrice:

    def test_nearby_destination_is_same_day(self):
        nearby = Coordinates(-6.7375719, 108.5621832)  # ~2.2 km north
        result = calculate_delivery_price(STORE, nearby)
        assert result.price == Money(15000)
        assert result.estimated_time == "30-45 menit"
        assert result.formatted_price == "Rp 15.000"

    def test_flat_argument_form(self):
        result = calculate_delivery_price_from(-6.7575719, 108.5621832, float("nan"), 108.0)
        assert not result.is_deliverable


class TestZoneHelpers:

    def test_delivery_zone_for(self):
        assert delivery_zone_for(3.0) == "Zona Same-Day"
        assert delivery_zone_for(float("nan")) == UNDELIVERABLE_ZONE_LABEL

    def test_same_day(self):
        assert is_same_day_delivery(5.0)
        assert not is_same_day_delivery(5.1)
        assert not is_same_day_delivery(float("nan"))
