"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from florist.domain.exceptions import ValidationError

_WHOLE_UNIT = Decimal("1")


def round_half_up(value: Decimal) -> int:
    """Round to a whole currency unit, halves away from zero."""
    return int(value.quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Money:
    """Monetary amount as a whole count of the smallest currency unit.

    Rupiah has no fractional unit in practice, so amounts are plain ints and
    every operation that could produce a fraction rounds immediately.
    """

    amount: int
    currency: str = "IDR"

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        if factor < 0:
            raise ValidationError("Cannot multiply Money by a negative factor")
        return Money(self.amount * factor, self.currency)

    def saturating_sub(self, other: Money) -> Money:
        """Subtract, flooring the result at zero."""
        self._assert_same_currency(other)
        return Money(max(0, self.amount - other.amount), self.currency)

    def percent(self, percentage: int) -> Money:
        """Return ``percentage`` percent of this amount, rounded half-up."""
        share = Decimal(self.amount) * Decimal(percentage) / Decimal(100)
        return Money(round_half_up(share), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return "Rp " + f"{self.amount:,}".replace(",", ".")

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Strict factory: rejects anything that is not a whole, non-negative amount."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite() or value != value.to_integral_value():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(int(value))

    @staticmethod
    def clamped(value: object) -> Money:
        """Lenient factory for raw amounts coming from forms or the order store.

        Missing, non-numeric and non-finite values become zero, negatives are
        clamped to zero and fractions are rounded half-up.
        """
        if isinstance(value, Money):
            return value
        if value is None or isinstance(value, bool):
            return Money(0)
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return Money(0)
        if not number.is_finite() or number <= 0:
            return Money(0)
        return Money(round_half_up(number))


@dataclass(frozen=True)
class Coordinates:
    """A geocoded point in signed decimal degrees.

    Ranges are not validated; geocoding is the caller's job.
    """

    latitude: float
    longitude: float

    @staticmethod
    def of(latitude: float | str, longitude: float | str) -> Coordinates:
        try:
            return Coordinates(float(latitude), float(longitude))
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid coordinates: {latitude!r}, {longitude!r}"
            ) from exc

    def __str__(self) -> str:
        return f"{self.latitude:.6f},{self.longitude:.6f}"
