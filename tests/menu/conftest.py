import pytest
from menu.catalog import Catalog
from menu.item import MenuItem
from menu.store import CatalogSnapshot
from protean.exceptions import DatabaseError


@pytest.fixture(scope="session")
def _menu_domain():
    """Initialize the menu domain once per session."""
    from menu.domain import menu

    menu.init()
    return menu


@pytest.fixture(autouse=True)
def run_around_tests(_menu_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _menu_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()


class InMemoryCatalogStore:
    """Catalog store that keeps snapshots in memory and can be told to fail."""

    def __init__(self, snapshot=None):
        self.snapshot = snapshot
        self.saves = 0
        self.fail_writes = False

    def load(self):
        return self.snapshot

    def save(self, snapshot):
        if self.fail_writes:
            raise DatabaseError("disk full")
        self.snapshot = CatalogSnapshot(
            items=[MenuItem(**item.to_record()) for item in snapshot.items],
            next_id=snapshot.next_id,
        )
        self.saves += 1


@pytest.fixture()
def memory_store():
    return InMemoryCatalogStore()


@pytest.fixture()
def catalog(memory_store):
    items = [
        MenuItem(id=1, name="Margherita Pizza", category="Pizza", price=249.0),
        MenuItem(id=2, name="Farmhouse Pizza", category="Pizza", price=399.0),
        MenuItem(id=3, name="Masala Dosa", category="South Indian", price=129.0),
        MenuItem(id=4, name="Cold Coffee", category="Beverages", price=99.0, available=False),
        MenuItem(id=5, name="Gulab Jamun", category="Desserts", price=79.0),
    ]
    return Catalog(memory_store, items, next_id=6)
