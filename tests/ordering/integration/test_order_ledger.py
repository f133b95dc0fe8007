"""Integration tests for the order ledger and its CSV store."""

from datetime import datetime

import pytest
from menu.item import MenuItem
from ordering.billing.engine import compute_bill
from ordering.cart.cart import ShoppingCart
from ordering.ledger.ledger import OrderLedger
from ordering.ledger.store import HEADER, CsvOrderLedgerStore
from protean.exceptions import DatabaseError


@pytest.fixture()
def orders_path(tmp_path):
    return tmp_path / "orders.csv"


@pytest.fixture()
def store(orders_path):
    return CsvOrderLedgerStore(orders_path)


@pytest.fixture()
def filled_cart():
    cart = ShoppingCart.create()
    cart.add(MenuItem(id=1, name="Margherita Pizza", category="Pizza", price=249.0), 2)
    cart.add(MenuItem(id=3, name="Masala Dosa", category="South Indian", price=129.0), 1)
    return cart


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


class TestIdRecovery:
    def test_missing_file_starts_at_one(self, store):
        assert OrderLedger(store).next_id == 1

    def test_header_only_starts_at_one(self, store, orders_path):
        orders_path.write_text(",".join(HEADER) + "\n", encoding="utf-8")
        assert OrderLedger(store).next_id == 1

    def test_resumes_after_highest_existing_id(self, store, orders_path):
        orders_path.write_text(
            ",".join(HEADER)
            + "\n"
            + "3,2026-10-01 10:00:00,1,100.00,0.00,5.00,35.00,140.00,-\n"
            + "12,2026-10-02 10:00:00,2,500.00,50.00,22.50,0.00,472.50,FLAT50\n"
            + "7,2026-10-03 10:00:00,1,100.00,0.00,5.00,35.00,140.00,-\n",
            encoding="utf-8",
        )
        assert OrderLedger(store).next_id == 13

    def test_ignores_junk_rows(self, store, orders_path):
        orders_path.write_text(
            ",".join(HEADER)
            + "\n"
            + "abc,garbage\n"
            + "\n"
            + "²,junk\n"
            + "4,2026-10-01 10:00:00,1,1,0,0,0,1,-\n",
            encoding="utf-8",
        )
        assert OrderLedger(store).next_id == 5

    def test_recovery_is_idempotent(self, store, orders_path, filled_cart):
        ledger = OrderLedger(store)
        ledger.persist(filled_cart, compute_bill(filled_cart))
        assert ledger.recover_next_id() == ledger.recover_next_id() == 2


class TestPersist:
    def test_ids_strictly_increase(self, store, filled_cart):
        ledger = OrderLedger(store)
        bill = compute_bill(filled_cart)
        ids = [ledger.persist(filled_cart, bill) for _ in range(3)]
        assert ids == [1, 2, 3]

    def test_resumes_across_restarts(self, store, filled_cart):
        first = OrderLedger(store)
        for _ in range(4):
            first.persist(filled_cart, compute_bill(filled_cart))

        restarted = OrderLedger(CsvOrderLedgerStore(store.path))
        assert restarted.persist(filled_cart, compute_bill(filled_cart)) == 5

    def test_writes_header_once_and_one_row_per_order(self, store, orders_path, filled_cart):
        ledger = OrderLedger(store, clock=lambda: datetime(2026, 10, 19, 12, 30, 45))
        ledger.persist(filled_cart, compute_bill(filled_cart, "FLAT50"))
        ledger.persist(filled_cart, compute_bill(filled_cart))

        lines = _lines(orders_path)
        assert lines[0] == ",".join(HEADER)
        assert lines[1] == "1,2026-10-19 12:30:45,3,627.00,50.00,28.85,0.00,605.85,FLAT50"
        assert lines[2] == "2,2026-10-19 12:30:45,3,627.00,0.00,31.35,0.00,658.35,-"
        assert len(lines) == 3

    def test_records_round_trip(self, store, filled_cart):
        ledger = OrderLedger(store, clock=lambda: datetime(2026, 10, 19, 12, 30, 45, 999))
        ledger.persist(filled_cart, compute_bill(filled_cart, "FLAT50"))

        [record] = ledger.records()
        assert record.order_id == 1
        assert record.timestamp == datetime(2026, 10, 19, 12, 30, 45)
        assert record.total_quantity == 3
        assert record.discount == 50.0
        assert record.promotion_code == "FLAT50"

    def test_no_code_read_back_as_empty(self, store, filled_cart):
        ledger = OrderLedger(store)
        ledger.persist(filled_cart, compute_bill(filled_cart))
        assert ledger.records()[0].promotion_code == ""

    def test_blank_code_written_as_no_coupon(self, store, orders_path, filled_cart):
        ledger = OrderLedger(store)
        ledger.persist(filled_cart, compute_bill(filled_cart, "   "))
        assert _lines(orders_path)[1].endswith(",-")
        assert ledger.records()[0].promotion_code == ""

    def test_unwritable_ledger(self, tmp_path, filled_cart):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        ledger = OrderLedger(CsvOrderLedgerStore(blocker / "orders.csv"))

        with pytest.raises(DatabaseError):
            ledger.persist(filled_cart, compute_bill(filled_cart))
        assert ledger.next_id == 1


class TestInMemoryLedger:
    def test_timestamp_truncated_to_seconds(self, ledger, ledger_store, cart, pizza):
        cart.add(pizza, 1)
        ledger.persist(cart, compute_bill(cart))
        assert ledger_store.records[0].timestamp == datetime(2026, 10, 19, 12, 30, 45)

    def test_starts_after_existing_records(self, ledger_store, cart, pizza, fixed_clock):
        cart.add(pizza, 1)
        OrderLedger(ledger_store, clock=fixed_clock).persist(cart, compute_bill(cart))
        OrderLedger(ledger_store, clock=fixed_clock).persist(cart, compute_bill(cart))
        assert [r.order_id for r in ledger_store.records] == [1, 2]
