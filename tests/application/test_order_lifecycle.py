"""Integration tests for status progression, deletion and order queries."""

from datetime import datetime, timedelta, timezone

import pytest

from florist.application.advance_order import AdvanceOrderHandler
from florist.application.delete_order import DeleteOrderHandler
from florist.application.list_orders import ListOrdersHandler, clamp_limit
from florist.application.mark_delivered import MarkDeliveredHandler
from florist.application.order_stats import OrderStatsHandler
from florist.application.show_order import ShowOrderHandler
from florist.application.submit_guard import SubmitGuard
from florist.domain.exceptions import EntityNotFoundError, SubmitInProgressError
from florist.domain.model.catalog import Bouquet
from florist.domain.model.customer import BuyerSnapshot
from florist.domain.model.order import Order, OrderStatus
from florist.domain.model.payment import PaymentStatus
from florist.domain.model.value_objects import Money
from florist.domain.service.order_reporting import SortKey
from tests.fakes import FakeOrderRepository

START = datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc)


def _seed_many(order_repo: FakeOrderRepository, names: list[str], price: int = 100000) -> None:
    for i, name in enumerate(names):
        order_repo.save(
            Order.create(
                BuyerSnapshot.of(name, f"08{i}", "Cirebon"),
                Bouquet(id="1", name="Mawar Merah", price=Money(price)),
                now=START + timedelta(minutes=i),
            )
        )


def _seed(order_repo: FakeOrderRepository) -> None:
    rows = [
        ("Siti", "Mawar Merah", 100000, 100000),
        ("Budi", "Lily Putih", 250000, 50000),
        ("Ayu", "Tulip Kuning", 175000, 0),
    ]
    for i, (name, bouquet, price, dp) in enumerate(rows):
        order_repo.save(
            Order.create(
                BuyerSnapshot.of(name, f"08{i}", "Cirebon"),
                Bouquet(id=str(i), name=bouquet, price=Money(price)),
                down_payment_amount=Money(dp),
                now=START + timedelta(hours=i),
            )
        )


@pytest.fixture
def order_repo() -> FakeOrderRepository:
    repo = FakeOrderRepository()
    _seed(repo)
    return repo


class TestAdvanceOrder:

    def test_advances_one_step(self, order_repo):
        dto = AdvanceOrderHandler(order_repo, SubmitGuard()).handle(1)
        assert dto.order_status == "ordered"
        assert order_repo.get_by_id(1).order_status is OrderStatus.ORDERED

    def test_stops_at_delivered(self, order_repo):
        handler = AdvanceOrderHandler(order_repo, SubmitGuard())
        for _ in range(7):
            dto = handler.handle(1)
        assert dto.order_status == "delivered"
        assert len(dto.activity) == 6  # created + five steps

    def test_unknown_order(self, order_repo):
        with pytest.raises(EntityNotFoundError):
            AdvanceOrderHandler(order_repo, SubmitGuard()).handle(99)


class TestMarkDelivered:

    def test_jumps_to_delivered(self, order_repo):
        dto = MarkDeliveredHandler(order_repo, SubmitGuard()).handle(2)
        assert dto.order_status == "delivered"
        assert dto.activity[-1].message == "Status order (manual): inquiring → delivered"

    def test_already_delivered_not_saved_again(self, order_repo):
        handler = MarkDeliveredHandler(order_repo, SubmitGuard())
        handler.handle(2)
        saves = order_repo.saves
        handler.handle(2)
        assert order_repo.saves == saves


class TestDeleteAndShow:

    def test_delete_removes_order(self, order_repo):
        DeleteOrderHandler(order_repo, SubmitGuard()).handle(1)
        with pytest.raises(EntityNotFoundError, match="Order #1 not found"):
            ShowOrderHandler(order_repo).handle(1)

    def test_delete_unknown(self, order_repo):
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(order_repo, SubmitGuard()).handle(42)

    def test_delete_rejected_while_submit_in_progress(self, order_repo):
        guard = SubmitGuard()
        with guard.submitting(1):
            with pytest.raises(SubmitInProgressError):
                DeleteOrderHandler(order_repo, guard).handle(1)
        assert order_repo.get_by_id(1) is not None

    def test_show(self, order_repo):
        dto = ShowOrderHandler(order_repo).handle(2)
        assert dto.buyer_name == "Budi"
        assert dto.total == "Rp 250.000"
        assert dto.created_at == "2026-02-01 09:00 UTC"


class TestListOrders:

    def test_newest_first_by_default(self, order_repo):
        result = ListOrdersHandler(order_repo).handle()
        assert [o.buyer_name for o in result] == ["Ayu", "Budi", "Siti"]

    def test_query_and_payment_filter(self, order_repo):
        handler = ListOrdersHandler(order_repo)
        assert [o.buyer_name for o in handler.handle(query="lily")] == ["Budi"]
        unpaid = handler.handle(payment_status=PaymentStatus.UNPAID)
        assert [o.buyer_name for o in unpaid] == ["Ayu"]

    def test_sort_by_amount(self, order_repo):
        result = ListOrdersHandler(order_repo).handle(sort_by=SortKey.AMOUNT)
        assert [o.total for o in result] == ["Rp 250.000", "Rp 175.000", "Rp 100.000"]

    def test_limit_caps_the_result(self, order_repo):
        result = ListOrdersHandler(order_repo).handle(limit=1)
        assert [o.buyer_name for o in result] == ["Ayu"]

    def test_query_matches_orders_older_than_the_limit(self):
        order_repo = FakeOrderRepository()
        _seed_many(order_repo, ["Siti"] + ["Budi"] * 149)
        result = ListOrdersHandler(order_repo).handle(query="siti")
        assert [o.buyer_name for o in result] == ["Siti"]

    def test_limit_applies_after_sorting(self):
        order_repo = FakeOrderRepository()
        order_repo.save(
            Order.create(
                BuyerSnapshot.of("Siti", "0811", "Cirebon"),
                Bouquet(id="2", name="Anggrek Ungu", price=Money(900000)),
                now=START - timedelta(days=1),
            )
        )
        _seed_many(order_repo, ["Budi"] * 120)
        result = ListOrdersHandler(order_repo).handle(sort_by=SortKey.AMOUNT, limit=1)
        assert [o.buyer_name for o in result] == ["Siti"]

    @pytest.mark.parametrize("raw, expected", [(None, 100), (0, 1), (-5, 1), (20, 20), (9999, 500)])
    def test_clamp_limit(self, raw, expected):
        assert clamp_limit(raw) == expected


class TestOrderStats:

    def test_summary(self, order_repo):
        stats = OrderStatsHandler(order_repo).handle()
        assert stats.total == 3
        assert stats.by_status["inquiring"] == 3
        assert stats.by_payment == {"unpaid": 1, "partial": 1, "paid": 1}
        assert stats.total_revenue == "Rp 525.000"
        assert stats.paid_revenue == "Rp 150.000"
        assert stats.pending_revenue == "Rp 375.000"

    def test_counts_every_order(self):
        order_repo = FakeOrderRepository()
        _seed_many(order_repo, ["Budi"] * 600, price=1000)
        stats = OrderStatsHandler(order_repo).handle()
        assert stats.total == 600
        assert stats.by_payment == {"unpaid": 600, "partial": 0, "paid": 0}
        assert stats.total_revenue == "Rp 600.000"
        assert stats.pending_revenue == "Rp 600.000"
