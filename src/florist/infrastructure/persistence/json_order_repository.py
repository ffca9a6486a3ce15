"""JSON-file-backed implementation of OrderRepository.

``payment_status`` and ``total_amount`` are written for anyone querying the
file directly, recomputed from the amounts on every save.  They are never
read back: the aggregate derives them again.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from florist.domain.model.customer import BuyerSnapshot
from florist.domain.model.order import (
    ActivityEntry,
    ActivityKind,
    Order,
    OrderStatus,
)
from florist.domain.model.payment import PaymentMethod
from florist.domain.model.value_objects import Coordinates, Money
from florist.domain.repository.order_repository import OrderRepository
from florist.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._file.load()]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    def save(self, order: Order) -> None:
        orders = self._file.load()

        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._file.persist(orders)

    def delete(self, order_id: int) -> bool:
        orders = self._file.load()
        remaining = [raw for raw in orders if raw["id"] != order_id]
        if len(remaining) == len(orders):
            return False
        self._file.persist(remaining)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "buyer_name": order.buyer.buyer_name,
            "phone_number": order.buyer.phone_number,
            "address": order.buyer.address,
            "bouquet_id": order.bouquet_id,
            "bouquet_name": order.bouquet_name,
            "bouquet_price": order.bouquet_price.amount,
            "order_status": order.order_status.value,
            "payment_method": order.payment_method.value,
            "down_payment_amount": order.down_payment_amount.amount,
            "additional_payment": order.additional_payment.amount,
            "delivery_price": order.delivery_price.amount,
            "total_amount": order.total.amount,
            "payment_status": order.payment_status.value,
            "delivery_at": order.delivery_at.isoformat() if order.delivery_at else None,
            "destination": (
                [order.destination.latitude, order.destination.longitude]
                if order.destination
                else None
            ),
            "created_at": order.created_at.isoformat(),
            "activity": [
                {"at": e.at.isoformat(), "kind": e.kind.value, "message": e.message}
                for e in order.activity
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        destination = raw.get("destination")
        delivery_at = raw.get("delivery_at")
        return Order(
            id=raw["id"],
            customer_id=raw.get("customer_id"),
            buyer=BuyerSnapshot(
                buyer_name=raw["buyer_name"],
                phone_number=raw["phone_number"],
                address=raw["address"],
            ),
            bouquet_id=raw["bouquet_id"],
            bouquet_name=raw["bouquet_name"],
            bouquet_price=Money.clamped(raw.get("bouquet_price")),
            order_status=OrderStatus(raw.get("order_status", OrderStatus.INQUIRING.value)),
            payment_method=PaymentMethod(raw.get("payment_method", "")),
            down_payment_amount=Money.clamped(raw.get("down_payment_amount")),
            additional_payment=Money.clamped(raw.get("additional_payment")),
            delivery_price=Money.clamped(raw.get("delivery_price")),
            delivery_at=datetime.fromisoformat(delivery_at) if delivery_at else None,
            destination=Coordinates(*destination) if destination else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            activity=[
                ActivityEntry(
                    at=datetime.fromisoformat(e["at"]),
                    kind=ActivityKind(e["kind"]),
                    message=e["message"],
                )
                for e in raw.get("activity", [])
            ],
        )
