"""Transaction repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def get_by_id(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction by ID, raising NotFoundError when absent."""
        ...

    def list_all(self) -> list[Transaction]:
        """List all transactions, newest first."""
        ...

    def filter_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        """Get transactions within a date range."""
        ...

    def filter_by_category(self, category_id: str) -> list[Transaction]:
        """Get all transactions for a specific category."""
        ...

    def search(
        self,
        *,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        category_id: Optional[str] = None,
        flow: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> list[Transaction]:
        """Advanced search with multiple filters."""
        ...

    def create(
        self,
        *,
        flow: str,
        amount: int,
        payment_method: str,
        category_id: Optional[str] = None,
        reason: Optional[str] = None,
        happened_at: Optional[datetime] = None,
    ) -> Transaction:
        """Create a new transaction."""
        ...

    def update(self, transaction_id: str, **changes: Any) -> Transaction:
        """Apply partial changes to an existing transaction."""
        ...

    def delete(self, transaction_id: str) -> None:
        """Delete a transaction by ID."""
        ...

    def count(self) -> int:
        """Number of stored transactions."""
        ...
