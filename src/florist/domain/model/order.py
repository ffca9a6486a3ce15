"""Order aggregate, the core of the domain.

The Order owns its price snapshot, payment amounts and the activity log.
Derived values (total, remaining, payment status) are properties computed
from the amounts on every read; they are never stored on the aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum

from florist.domain.exceptions import ValidationError
from florist.domain.model.catalog import Bouquet
from florist.domain.model.customer import (
    MAX_ADDRESS_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    BuyerSnapshot,
    Customer,
    clean_text,
)
from florist.domain.model.payment import (
    PaymentBreakdown,
    PaymentMethod,
    PaymentStatus,
    calculate_payment_breakdown,
)
from florist.domain.model.value_objects import Coordinates, Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    INQUIRING = "inquiring"
    ORDERED = "ordered"
    PROCESSING = "processing"
    AWAITING_COURIER = "awaiting_courier"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @property
    def is_terminal(self) -> bool:
        return self is OrderStatus.DELIVERED


# Guided fulfillment sequence, strictly forward.
STATUS_FLOW: tuple[OrderStatus, ...] = tuple(OrderStatus)


def _following(status: OrderStatus) -> OrderStatus:
    index = STATUS_FLOW.index(status)
    return STATUS_FLOW[min(index + 1, len(STATUS_FLOW) - 1)]


def next_status(current: OrderStatus | str) -> OrderStatus | str:
    """Return the status after ``current`` in the guided flow.

    Total: a terminal status or an unrecognized value comes back unchanged.
    A raw string in gives a raw string out.
    """
    if isinstance(current, OrderStatus):
        return _following(current)
    try:
        status = OrderStatus(current)
    except ValueError:
        return current
    return _following(status).value


class ActivityKind(Enum):
    CREATED = "created"
    STATUS = "status"
    PAYMENT = "payment"
    DELIVERY = "delivery"
    EDIT = "edit"


MAX_ACTIVITY_MESSAGE_LENGTH = 240


@dataclass(frozen=True)
class ActivityEntry:
    """One audit line. ``message`` is the source of truth for display."""

    at: datetime
    kind: ActivityKind
    message: str


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

# Fields that are derived or frozen at creation and can never be patched.
_READ_ONLY_FIELDS = frozenset(
    {"payment_status", "total", "total_amount", "paid", "remaining", "bouquet_price"}
)


def parse_delivery_at(raw: object) -> datetime | None:
    """Parse an ISO-8601 delivery time; blank means "no delivery time".

    Naive values are taken as UTC.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError(f"Invalid delivery time: {raw!r}") from exc
    else:
        raise ValidationError(f"Invalid delivery time: {raw!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_order_status(raw: object) -> OrderStatus:
    if isinstance(raw, OrderStatus):
        return raw
    try:
        return OrderStatus(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"Unknown order status: {raw!r}") from exc


def parse_payment_method(raw: object) -> PaymentMethod:
    if isinstance(raw, PaymentMethod):
        return raw
    if raw is None:
        return PaymentMethod.NONE
    try:
        return PaymentMethod(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"Unknown payment method: {raw!r}") from exc


@dataclass(frozen=True)
class OrderPatch:
    """A partial update. Fields left as ``UNSET`` are not touched.

    ``customer_id`` of ``None`` or ``""`` unlinks the customer; ``delivery_at``
    of ``None`` clears the delivery time.
    """

    customer_id: str | None | _Unset = UNSET
    buyer_name: str | _Unset = UNSET
    phone_number: str | _Unset = UNSET
    address: str | _Unset = UNSET
    order_status: OrderStatus | _Unset = UNSET
    payment_method: PaymentMethod | _Unset = UNSET
    down_payment_amount: Money | _Unset = UNSET
    additional_payment: Money | _Unset = UNSET
    delivery_price: Money | _Unset = UNSET
    delivery_at: datetime | None | _Unset = UNSET

    @staticmethod
    def from_dict(raw: dict) -> OrderPatch:
        """Build a patch from loosely-typed input (CLI, JSON payloads).

        Amounts are clamped to whole non-negative values.  Derived or frozen
        fields such as ``payment_status`` are rejected outright.
        """
        read_only = _READ_ONLY_FIELDS.intersection(raw)
        if read_only:
            raise ValidationError(
                f"Cannot patch derived or frozen field(s): {', '.join(sorted(read_only))}"
            )
        known = {f.name for f in fields(OrderPatch)}
        unknown = set(raw) - known
        if unknown:
            raise ValidationError(f"Unknown order field(s): {', '.join(sorted(unknown))}")

        values: dict[str, object] = {}
        for name, value in raw.items():
            if name in ("down_payment_amount", "additional_payment", "delivery_price"):
                values[name] = Money.clamped(value)
            elif name == "order_status":
                values[name] = parse_order_status(value)
            elif name == "payment_method":
                values[name] = parse_payment_method(value)
            elif name == "delivery_at":
                values[name] = parse_delivery_at(value)
            elif name == "customer_id":
                values[name] = clean_text(value, 64) or None
            else:
                values[name] = value
        return OrderPatch(**values)

    @property
    def touches_amounts(self) -> bool:
        return any(
            value is not UNSET
            for value in (self.down_payment_amount, self.additional_payment, self.delivery_price)
        )


@dataclass
class Order:
    """Aggregate root for bouquet orders.

    Use the ``Order.create()`` factory for new orders. It enforces all
    business rules and takes the price snapshot.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted orders
    without re-validating.
    """

    id: int | None
    buyer: BuyerSnapshot
    bouquet_id: str
    bouquet_name: str
    bouquet_price: Money  # locked at order-creation time
    customer_id: str | None = None
    order_status: OrderStatus = OrderStatus.INQUIRING
    payment_method: PaymentMethod = PaymentMethod.NONE
    down_payment_amount: Money = field(default_factory=Money.zero)
    additional_payment: Money = field(default_factory=Money.zero)
    delivery_price: Money = field(default_factory=Money.zero)
    delivery_at: datetime | None = None
    destination: Coordinates | None = None
    activity: list[ActivityEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        buyer: BuyerSnapshot,
        bouquet: Bouquet,
        *,
        customer_id: str | None = None,
        order_status: OrderStatus = OrderStatus.INQUIRING,
        payment_method: PaymentMethod = PaymentMethod.NONE,
        down_payment_amount: Money | None = None,
        additional_payment: Money | None = None,
        delivery_price: Money | None = None,
        delivery_at: datetime | None = None,
        destination: Coordinates | None = None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new order, snapshotting the bouquet's current price."""
        if not bouquet.id or not bouquet.name.strip():
            raise ValidationError("Bouquet is required")

        now = now or _utcnow()
        order = Order(
            id=None,
            buyer=buyer,
            bouquet_id=bouquet.id,
            bouquet_name=bouquet.name.strip(),
            bouquet_price=bouquet.price,
            customer_id=customer_id,
            order_status=order_status,
            payment_method=payment_method,
            down_payment_amount=down_payment_amount or Money.zero(),
            additional_payment=additional_payment or Money.zero(),
            delivery_price=delivery_price or Money.zero(),
            delivery_at=delivery_at,
            destination=destination,
            created_at=now,
        )
        order._log(
            ActivityKind.CREATED,
            f"Order dibuat • status: {order.order_status.label} "
            f"• bayar: {order.payment_status.value}",
            now,
        )
        return order

    # --- State transitions ----------------------------------------------------

    def advance_status(self, now: datetime | None = None) -> OrderStatus:
        """Guided progression to the next status.

        A delivered order stays delivered and nothing is logged.
        """
        target = _following(self.order_status)
        if target is not self.order_status:
            self._change_status(target, manual=False, now=now or _utcnow())
        return self.order_status

    def force_status(self, status: OrderStatus, now: datetime | None = None) -> None:
        """Manual override: jump to any status without walking the flow.

        The log marks the change as manual so nobody reads the skipped
        steps as having happened.
        """
        if status is not self.order_status:
            self._change_status(status, manual=True, now=now or _utcnow())

    def mark_delivered(self, now: datetime | None = None) -> None:
        self.force_status(OrderStatus.DELIVERED, now=now)

    def apply_patch(
        self,
        patch: OrderPatch,
        customer: Customer | None = None,
        now: datetime | None = None,
    ) -> list[ActivityEntry]:
        """Apply a partial update and log what changed.

        ``customer`` must be the resolved customer when the patch links one.
        Buyer fields are only editable while no customer is linked.
        Returns the activity entries appended by this patch.
        """
        now = now or _utcnow()
        logged_before = len(self.activity)

        prev_status = self.order_status
        prev_payment_status = self.payment_status
        prev_method = self.payment_method
        prev_delivery_at = self.delivery_at

        if patch.customer_id is not UNSET:
            if not patch.customer_id:
                self.customer_id = None
            else:
                if customer is None or customer.id != patch.customer_id:
                    raise ValidationError(f"Invalid customer id: {patch.customer_id!r}")
                self.customer_id = customer.id
                self.buyer = customer.snapshot()

        if self.customer_id is None:
            self._patch_buyer(patch)

        if patch.payment_method is not UNSET:
            self.payment_method = patch.payment_method
        if patch.down_payment_amount is not UNSET:
            self.down_payment_amount = patch.down_payment_amount
        if patch.additional_payment is not UNSET:
            self.additional_payment = patch.additional_payment
        if patch.delivery_price is not UNSET:
            self.delivery_price = patch.delivery_price
        if patch.delivery_at is not UNSET:
            self.delivery_at = patch.delivery_at

        if patch.order_status is not UNSET and patch.order_status is not prev_status:
            self._change_status(patch.order_status, manual=True, now=now)

        next_payment_status = self.payment_status
        if next_payment_status is not prev_payment_status:
            self._log(
                ActivityKind.PAYMENT,
                f"Status bayar: {prev_payment_status.value} → {next_payment_status.value}",
                now,
            )

        if self.payment_method is not prev_method:
            self._log(
                ActivityKind.PAYMENT,
                f"Metode bayar: {_method_label(prev_method)} → {_method_label(self.payment_method)}",
                now,
            )

        if patch.delivery_at is not UNSET and self.delivery_at != prev_delivery_at:
            message = (
                "Waktu deliver diperbarui" if self.delivery_at else "Waktu deliver dihapus"
            )
            self._log(ActivityKind.DELIVERY, message, now)

        if patch.touches_amounts:
            self._log(ActivityKind.PAYMENT, "Nominal pembayaran/ongkir diperbarui", now)

        if len(self.activity) == logged_before:
            self._log(ActivityKind.EDIT, "Order diperbarui", now)

        return self.activity[logged_before:]

    # --- Computed properties --------------------------------------------------

    @property
    def payment(self) -> PaymentBreakdown:
        return calculate_payment_breakdown(
            self.bouquet_price,
            self.delivery_price,
            self.down_payment_amount,
            self.additional_payment,
        )

    @property
    def total(self) -> Money:
        return self.payment.total

    @property
    def paid(self) -> Money:
        return self.payment.paid

    @property
    def remaining(self) -> Money:
        return self.payment.remaining

    @property
    def payment_status(self) -> PaymentStatus:
        return self.payment.status

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True if the delivery time has passed and the order is not delivered."""
        if self.delivery_at is None or self.order_status.is_terminal:
            return False
        return self.delivery_at < (now or _utcnow())

    # --- Internal helpers -----------------------------------------------------

    def _patch_buyer(self, patch: OrderPatch) -> None:
        current = self.buyer
        buyer_name = patch.buyer_name if patch.buyer_name is not UNSET else ""
        phone_number = patch.phone_number if patch.phone_number is not UNSET else ""
        address = patch.address if patch.address is not UNSET else ""
        # Blank values keep what is there.
        self.buyer = BuyerSnapshot.of(
            clean_text(buyer_name, MAX_NAME_LENGTH) or current.buyer_name,
            clean_text(phone_number, MAX_PHONE_LENGTH) or current.phone_number,
            clean_text(address, MAX_ADDRESS_LENGTH) or current.address,
        )

    def _change_status(self, target: OrderStatus, *, manual: bool, now: datetime) -> None:
        previous = self.order_status
        self.order_status = target
        prefix = "Status order (manual)" if manual else "Status order"
        self._log(ActivityKind.STATUS, f"{prefix}: {previous.label} → {target.label}", now)

    def _log(self, kind: ActivityKind, message: str, at: datetime) -> None:
        # Keep the log ordered by time even if the clock steps backwards.
        if self.activity and at < self.activity[-1].at:
            at = self.activity[-1].at
        text = message.strip()[:MAX_ACTIVITY_MESSAGE_LENGTH]
        self.activity.append(ActivityEntry(at=at, kind=kind, message=text))


def _method_label(method: PaymentMethod) -> str:
    return method.value.replace("_", " ") if method.value else "—"
