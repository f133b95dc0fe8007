from datetime import datetime

import pytest
from menu.catalog import Catalog
from menu.item import MenuItem
from menu.store import CatalogSnapshot
from ordering.cart.cart import ShoppingCart
from ordering.checkout.session import ShoppingSession
from ordering.ledger.ledger import OrderLedger
from protean.exceptions import DatabaseError


@pytest.fixture(scope="session")
def _ordering_domain():
    """Initialize the ordering domain once per session."""
    from menu.domain import menu
    from ordering.domain import ordering

    menu.init()
    ordering.init()
    return ordering


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()


class InMemoryCatalogStore:
    def __init__(self):
        self.snapshot = None

    def load(self):
        return self.snapshot

    def save(self, snapshot):
        self.snapshot = CatalogSnapshot(items=list(snapshot.items), next_id=snapshot.next_id)


class InMemoryLedgerStore:
    """Ledger store keeping records in a list; can be told to fail appends."""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.fail_writes = False

    def read_all(self):
        return list(self.records)

    def order_ids(self):
        return [record.order_id for record in self.records]

    def append(self, record):
        if self.fail_writes:
            raise DatabaseError("disk full")
        self.records.append(record)


@pytest.fixture()
def pizza():
    return MenuItem(id=1, name="Margherita Pizza", category="Pizza", price=249.0)


@pytest.fixture()
def dosa():
    return MenuItem(id=3, name="Masala Dosa", category="South Indian", price=129.0)


@pytest.fixture()
def coffee():
    return MenuItem(id=7, name="Cold Coffee", category="Beverages", price=99.0)


@pytest.fixture()
def cart():
    return ShoppingCart.create()


@pytest.fixture()
def fixed_clock():
    return lambda: datetime(2026, 10, 19, 12, 30, 45, 123456)


@pytest.fixture()
def ledger_store():
    return InMemoryLedgerStore()


@pytest.fixture()
def ledger(ledger_store, fixed_clock):
    return OrderLedger(ledger_store, clock=fixed_clock)


@pytest.fixture()
def catalog(pizza, dosa, coffee):
    unavailable = MenuItem(id=8, name="Gulab Jamun", category="Desserts", price=79.0, available=False)
    return Catalog(InMemoryCatalogStore(), [pizza, dosa, coffee, unavailable], next_id=9)


@pytest.fixture()
def session(catalog, ledger):
    return ShoppingSession(catalog, ledger)
