"""Distance calculation and delivery pricing by distance band.

Band lookup uses the unrounded great-circle distance; only the reported
distance is rounded.  A non-finite distance (bad or missing geocode) is never
priced: every comparison against NaN is false, so it would otherwise land in
the unbounded catch-all band.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from florist.domain.model.value_objects import Coordinates, Money

EARTH_RADIUS_KM = 6371.0

SAME_DAY_MAX_DISTANCE_KM = 5.0

UNDELIVERABLE_TIME_LABEL = "hubungi untuk konfirmasi"
UNDELIVERABLE_ZONE_LABEL = "Di luar jangkauan"


@dataclass(frozen=True)
class DeliveryZone:
    max_distance_km: float | None  # None = unbounded
    price: Money
    estimated_time: str
    zone_label: str

    def covers(self, distance_km: float) -> bool:
        return self.max_distance_km is None or distance_km <= self.max_distance_km


# Ascending bands, inclusive upper bounds.
DELIVERY_ZONES: tuple[DeliveryZone, ...] = (
    DeliveryZone(5.0, Money(15000), "30-45 menit", "Zona Same-Day"),
    DeliveryZone(10.0, Money(20000), "45-60 menit", "Zona Standar"),
    DeliveryZone(20.0, Money(30000), "1-2 jam", "Zona Extended"),
    DeliveryZone(30.0, Money(40000), "2-3 jam", "Zona Jauh"),
    DeliveryZone(None, Money(50000), "3+ jam, confirm", "Zona Khusus"),
)


@dataclass(frozen=True)
class DeliveryPriceResult:
    price: Money | None
    distance_km: float | None
    estimated_time: str
    zone_label: str

    @property
    def is_deliverable(self) -> bool:
        return self.price is not None

    @property
    def formatted_price(self) -> str:
        return str(self.price) if self.price is not None else "—"


def haversine_km(origin: Coordinates, destination: Coordinates) -> float:
    """Great-circle distance in kilometres.

    Non-finite coordinates yield a NaN distance.
    """
    points = (origin.latitude, origin.longitude, destination.latitude, destination.longitude)
    if not all(math.isfinite(p) for p in points):
        return math.nan

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lng = math.radians(destination.longitude - origin.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def zone_for_distance(distance_km: float) -> DeliveryZone | None:
    """Return the band covering ``distance_km``, or None if it cannot be priced."""
    if not math.isfinite(distance_km):
        return None
    distance_km = max(0.0, distance_km)
    for zone in DELIVERY_ZONES:
        if zone.covers(distance_km):
            return zone
    return DELIVERY_ZONES[-1]


def _round_tenth(value: float) -> float:
    # Halves round up: 2.25 reports as 2.3.
    return math.floor(value * 10 + 0.5) / 10


def price_for_distance(distance_km: float) -> DeliveryPriceResult:
    zone = zone_for_distance(distance_km)
    if zone is None:
        return DeliveryPriceResult(
            price=None,
            distance_km=None,
            estimated_time=UNDELIVERABLE_TIME_LABEL,
            zone_label=UNDELIVERABLE_ZONE_LABEL,
        )
    return DeliveryPriceResult(
        price=zone.price,
        distance_km=_round_tenth(max(0.0, distance_km)),
        estimated_time=zone.estimated_time,
        zone_label=zone.zone_label,
    )


def calculate_delivery_price(
    store: Coordinates, destination: Coordinates
) -> DeliveryPriceResult:
    """Price a delivery from the store to ``destination``.

    Callers must branch on ``is_deliverable``: invalid coordinates produce an
    undeliverable result that needs a manual quote.
    """
    return price_for_distance(haversine_km(store, destination))


def calculate_delivery_price_from(
    store_lat: float, store_lng: float, dest_lat: float, dest_lng: float
) -> DeliveryPriceResult:
    return calculate_delivery_price(
        Coordinates(store_lat, store_lng), Coordinates(dest_lat, dest_lng)
    )


def delivery_zone_for(distance_km: float) -> str:
    zone = zone_for_distance(distance_km)
    return zone.zone_label if zone is not None else UNDELIVERABLE_ZONE_LABEL


def is_same_day_delivery(distance_km: float) -> bool:
    return math.isfinite(distance_km) and distance_km <= SAME_DAY_MAX_DISTANCE_KM
