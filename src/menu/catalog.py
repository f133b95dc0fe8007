"""Menu catalog: the registry of purchasable items.

The catalog owns every ``MenuItem``. Lookups used for purchasing only ever
see available items. Mutations go through ``add_item``, ``edit_item`` and
``remove_item``, each of which rewrites the backing store before returning.
When that write fails the in-memory change is undone and the
``DatabaseError`` propagates.
"""

from enum import Enum

import structlog
from protean.exceptions import DatabaseError, ObjectNotFoundError

from menu.item import DEFAULT_MENU, MenuItem
from menu.store import CatalogSnapshot, CatalogStore

logger = structlog.get_logger(__name__)

ANY_CATEGORY = "ALL"


class SortOrder(Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME = "name"


class Catalog:
    def __init__(self, store: CatalogStore, items=None, next_id: int = 1):
        self._store = store
        self._items: list[MenuItem] = list(items or [])
        highest = max((item.id for item in self._items), default=0)
        self._next_id = max(next_id, highest + 1)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def load(cls, store: CatalogStore) -> "Catalog":
        """Build the catalog from its store, seeding the default menu on first run."""
        snapshot = store.load()
        if snapshot is not None:
            return cls(store, snapshot.items, snapshot.next_id)

        catalog = cls(store, [MenuItem(**record) for record in DEFAULT_MENU])
        catalog._persist()
        logger.info("Seeded default menu", item_count=len(catalog._items))
        return catalog

    @property
    def next_id(self) -> int:
        return self._next_id

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def items(self) -> list[MenuItem]:
        """Every item, including unavailable ones, in insertion order."""
        return list(self._items)

    def available_items(self) -> list[MenuItem]:
        return [item for item in self._items if item.available]

    def filter_by_category(self, category: str | None) -> list[MenuItem]:
        """Available items in ``category``; exactly ``"ALL"`` or blank means any category."""
        if not (category or "").strip() or category == ANY_CATEGORY:
            return self.available_items()
        return [item for item in self._items if item.available and item.category == category]

    def search_by_name(self, query: str | None) -> list[MenuItem]:
        """Available items whose name contains ``query``, ignoring case."""
        needle = (query or "").lower()
        return [item for item in self._items if item.available and needle in item.name.lower()]

    def sorted_items(self, order: SortOrder | str) -> list[MenuItem]:
        order = SortOrder(order)
        available = self.available_items()
        if order is SortOrder.PRICE_ASC:
            return sorted(available, key=lambda item: item.price)
        if order is SortOrder.PRICE_DESC:
            return sorted(available, key=lambda item: item.price, reverse=True)
        return sorted(available, key=lambda item: item.name)

    def find_by_id(self, item_id: int) -> MenuItem | None:
        """The available item with ``item_id``, or ``None``."""
        item = self._find(item_id)
        if item is None or not item.available:
            return None
        return item

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def add_item(self, name: str, category: str, price: float, available: bool = True) -> MenuItem:
        item = MenuItem(id=self._next_id, name=name, category=category, price=price, available=available)

        # The id is spent even if the write below fails
        self._next_id += 1
        self._items.append(item)
        try:
            self._persist()
        except DatabaseError:
            self._items.pop()
            raise

        logger.info("Menu item added", item_id=item.id, name=item.name, price=item.price)
        return item

    def edit_item(
        self,
        item_id: int,
        name: str | None = None,
        category: str | None = None,
        price: float | None = None,
        available: bool | None = None,
    ) -> MenuItem:
        """Replace the given fields of an item, keeping its id and position."""
        index = self._index_of(item_id)
        previous = self._items[index]

        changes = {
            field: value
            for field, value in (("name", name), ("category", category), ("price", price), ("available", available))
            if value is not None
        }
        updated = MenuItem(**{**previous.to_record(), **changes})

        self._items[index] = updated
        try:
            self._persist()
        except DatabaseError:
            self._items[index] = previous
            raise

        logger.info("Menu item updated", item_id=item_id, changes=sorted(changes))
        return updated

    def remove_item(self, item_id: int) -> MenuItem:
        index = self._index_of(item_id)
        removed = self._items.pop(index)
        try:
            self._persist()
        except DatabaseError:
            self._items.insert(index, removed)
            raise

        logger.info("Menu item removed", item_id=item_id, name=removed.name)
        return removed

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _find(self, item_id: int) -> MenuItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    def _index_of(self, item_id: int) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise ObjectNotFoundError(f"Menu item {item_id} not found")

    def _persist(self) -> None:
        self._store.save(CatalogSnapshot(items=self._items, next_id=self._next_id))
