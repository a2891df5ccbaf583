"""Category repository protocol."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def get_by_id(self, category_id: str) -> Category:
        """Retrieve a category by ID, raising NotFoundError when absent."""
        ...

    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by its unique name."""
        ...

    def list_all(self) -> list[Category]:
        """List all categories."""
        ...

    def list_by_kind(self, kind: str) -> list[Category]:
        """List categories filtered by kind (expense/income/both)."""
        ...

    def create(
        self, *, name: str, color: str, kind: str = "expense", emoji: Optional[str] = None
    ) -> Category:
        """Create a new category."""
        ...

    def create_many(self, payloads: Iterable[Mapping[str, Any]]) -> list[Category]:
        """Create several categories in one transaction."""
        ...

    def update(self, category_id: str, **changes: Any) -> Category:
        """Apply partial changes to an existing category."""
        ...

    def delete(self, category_id: str) -> None:
        """Delete a category by ID."""
        ...

    def count(self) -> int:
        """Number of stored categories."""
        ...
