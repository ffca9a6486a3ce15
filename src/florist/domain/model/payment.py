"""Order totals and payment-status derivation.

Payment status is a pure function of the amounts.  It is never accepted as
an input and must be recomputed whenever the amounts are read or written.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from florist.domain.model.value_objects import Money, round_half_up


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class PaymentMethod(Enum):
    NONE = ""
    CASH = "cash"
    BANK_TRANSFER = "transfer_bank"
    EWALLET = "ewallet"
    QRIS = "qris"
    OTHER = "lainnya"


# Down-payment suggestions are rounded to this step for larger totals.
DOWN_PAYMENT_ROUNDING = 1000


@dataclass(frozen=True)
class PaymentBreakdown:
    total: Money
    paid: Money
    remaining: Money
    status: PaymentStatus


def derive_payment_status(total: Money, paid: Money) -> PaymentStatus:
    """Classify payment progress; first matching rule wins.

    A zero total counts as settled, whatever has been paid.
    """
    if total.amount <= 0:
        return PaymentStatus.PAID
    if paid.amount <= 0:
        return PaymentStatus.UNPAID
    if paid >= total:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL


def calculate_payment_breakdown(
    bouquet_price: object = 0,
    delivery_price: object = 0,
    down_payment_amount: object = 0,
    additional_payment: object = 0,
) -> PaymentBreakdown:
    """Combine the four order amounts into total, paid, remaining and status.

    Every input goes through ``Money.clamped`` so missing or negative values
    count as zero.
    """
    total = Money.clamped(bouquet_price) + Money.clamped(delivery_price)
    paid = Money.clamped(down_payment_amount) + Money.clamped(additional_payment)
    return PaymentBreakdown(
        total=total,
        paid=paid,
        remaining=total.saturating_sub(paid),
        status=derive_payment_status(total, paid),
    )


def apply_payment_preset(
    preset: PaymentStatus,
    total: Money,
    down_payment_amount: Money,
    additional_payment: Money,
) -> tuple[Money, Money]:
    """Suggest (down payment, additional payment) for a one-click status preset.

    The result is only a suggestion for the amount fields; the status itself is
    still derived from whatever amounts are finally saved.
    """
    if preset is PaymentStatus.UNPAID:
        return Money.zero(), Money.zero()

    if total.amount <= 0:
        return down_payment_amount, additional_payment

    paid = down_payment_amount + additional_payment

    if preset is PaymentStatus.PAID:
        return down_payment_amount, additional_payment + total.saturating_sub(paid)

    if paid.amount > 0:
        return down_payment_amount, additional_payment

    if total.amount >= 10 * DOWN_PAYMENT_ROUNDING:
        half = round_half_up(Decimal(total.amount) / 2)
        suggested = round_half_up(Decimal(half) / DOWN_PAYMENT_ROUNDING) * DOWN_PAYMENT_ROUNDING
    else:
        suggested = max(1, total.amount // 2)
    suggested = min(max(0, suggested), max(0, total.amount - 1))
    return Money(suggested), Money.zero()
