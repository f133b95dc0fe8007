"""Catalog persistence.

The catalog is stored as a single JSON document holding the id high-water
mark and a mapping of item records keyed by id::

    {"next_id": 9, "items": {"1": {"id": 1, "name": "...", ...}}}

Every save rewrites the whole document through a temporary sibling file and
``os.replace``, so readers see either the old or the new catalog.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import structlog
from protean.exceptions import DatabaseError, ValidationError

from menu.item import MenuItem

logger = structlog.get_logger(__name__)


@dataclass
class CatalogSnapshot:
    """Everything the catalog needs to persist: its items and id high-water mark."""

    items: list[MenuItem] = field(default_factory=list)
    next_id: int = 1


class CatalogStore(Protocol):
    def load(self) -> CatalogSnapshot | None: ...

    def save(self, snapshot: CatalogSnapshot) -> None: ...


class JsonCatalogStore:
    """Catalog store backed by a JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> CatalogSnapshot | None:
        """Read the catalog, or ``None`` if the file does not exist yet."""
        if not self.path.exists():
            return None

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise DatabaseError(f"Cannot read {self.path}: {exc}", original_exception=exc) from exc
        except json.JSONDecodeError as exc:
            raise DatabaseError(f"Malformed catalog file {self.path}: {exc}", original_exception=exc) from exc

        records = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(records, dict):
            raise DatabaseError(f"Malformed catalog file {self.path}: expected an items mapping")

        try:
            items = [MenuItem(**record) for record in records.values()]
        except (ValidationError, TypeError) as exc:
            raise DatabaseError(f"Invalid item record in {self.path}: {exc}", original_exception=exc) from exc

        stored_next_id = payload.get("next_id") or 1
        if not isinstance(stored_next_id, int) or isinstance(stored_next_id, bool):
            raise DatabaseError(f"Invalid next_id in {self.path}: {stored_next_id!r}")

        highest = max((item.id for item in items), default=0)
        next_id = max(stored_next_id, highest + 1)

        logger.debug("Catalog loaded", path=str(self.path), item_count=len(items), next_id=next_id)
        return CatalogSnapshot(items=items, next_id=next_id)

    def save(self, snapshot: CatalogSnapshot) -> None:
        """Atomically replace the catalog file with ``snapshot``."""
        document = {
            "next_id": snapshot.next_id,
            "items": {str(item.id): item.to_record() for item in snapshot.items},
        }
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise DatabaseError(f"Cannot write {self.path}: {exc}", original_exception=exc) from exc

        logger.debug("Catalog saved", path=str(self.path), item_count=len(snapshot.items))
