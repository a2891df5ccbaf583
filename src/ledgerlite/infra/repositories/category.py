"""SQLModel implementation of Category repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

from ...constants.categories import CATEGORY_KINDS
from ...logging_config import get_logger
from ...models.category import Category
from ..ids import generate_id
from ..store import RecordStore
from .validators import optional_text, reject_unknown, require_choice, require_text

COLLECTION = "categories"
EDITABLE_FIELDS = ("name", "color", "emoji", "kind")

logger = get_logger(__name__)


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = datetime.now):
        """Initialize with the shared record store and a timestamp source."""
        self.store = store
        self.clock = clock

    def get_by_id(self, category_id: str) -> Category:
        """Retrieve a category by ID."""
        return self.store.get_by_id(COLLECTION, category_id)  # type: ignore[return-value]

    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by name."""
        rows = self.store.find(COLLECTION, where={"name": name})
        return rows[0] if rows else None  # type: ignore[return-value]

    def list_all(self) -> list[Category]:
        """List all categories."""
        rows = self.store.get_all(COLLECTION)
        return sorted(rows, key=lambda c: c.name.lower())  # type: ignore[attr-defined]

    def list_by_kind(self, kind: str) -> list[Category]:
        """List categories filtered by kind (expense/income/both)."""
        require_choice("kind", kind, CATEGORY_KINDS)
        rows = self.store.find(COLLECTION, where={"kind": kind})
        return sorted(rows, key=lambda c: c.name.lower())  # type: ignore[attr-defined]

    def count(self) -> int:
        return self.store.count(COLLECTION)

    def create(
        self, *, name: str, color: str, kind: str = "expense", emoji: Optional[str] = None
    ) -> Category:
        """Create a new category."""
        category = self._build(name=name, color=color, kind=kind, emoji=emoji, now=self.clock())
        created = self.store.insert(COLLECTION, category)
        logger.info(f"Category created: {created.name}")
        return created

    def create_many(self, payloads: Iterable[Mapping[str, Any]]) -> list[Category]:
        """Create several categories atomically; on any failure none are stored."""
        now = self.clock()
        categories = [self._build(**dict(payload), now=now) for payload in payloads]
        created = self.store.insert_many(COLLECTION, categories)
        logger.info(f"Categories created: {len(created)}")
        return created

    def _build(
        self,
        *,
        name: str,
        color: str,
        now: datetime,
        kind: str = "expense",
        emoji: Optional[str] = None,
    ) -> Category:
        return Category(
            id=generate_id(),
            name=require_text("name", name),
            color=require_text("color", color),
            emoji=optional_text("emoji", emoji),
            kind=require_choice("kind", kind, CATEGORY_KINDS),
            created_at=now,
            updated_at=now,
        )

    def update(self, category_id: str, **changes: Any) -> Category:
        """Update an existing category."""
        reject_unknown("Category", changes, EDITABLE_FIELDS)
        cleaned: dict[str, Any] = {}
        if "name" in changes:
            cleaned["name"] = require_text("name", changes["name"])
        if "color" in changes:
            cleaned["color"] = require_text("color", changes["color"])
        if "emoji" in changes:
            cleaned["emoji"] = optional_text("emoji", changes["emoji"])
        if "kind" in changes:
            cleaned["kind"] = require_choice("kind", changes["kind"], CATEGORY_KINDS)
        cleaned["updated_at"] = self.clock()

        updated = self.store.update(COLLECTION, category_id, cleaned)
        logger.info(f"Category updated: {updated.name}")  # type: ignore[attr-defined]
        return updated  # type: ignore[return-value]

    def delete(self, category_id: str) -> None:
        """Delete a category by ID.

        Transactions that reference the category keep their ``category_id``;
        analytics reports them under the unknown-category fallback.
        """
        self.store.delete(COLLECTION, category_id)
        logger.info(f"Category deleted: {category_id}")
