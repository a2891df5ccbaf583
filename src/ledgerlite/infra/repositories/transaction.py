"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from ...constants.categories import FLOW_ADJUSTMENT, PAYMENT_METHODS, TRANSACTION_FLOWS
from ...logging_config import get_logger
from ...models.transaction import Transaction
from ..ids import generate_id
from ..store import RecordStore
from .validators import (
    optional_text,
    reject_unknown,
    require_amount,
    require_choice,
    require_datetime,
)

COLLECTION = "transactions"
EDITABLE_FIELDS = ("flow", "category_id", "amount", "payment_method", "reason", "happened_at")

logger = get_logger(__name__)


def _newest_first(rows: list[Any]) -> list[Transaction]:
    return sorted(rows, key=lambda t: t.happened_at, reverse=True)


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = datetime.now):
        """Initialize with the shared record store and a timestamp source."""
        self.store = store
        self.clock = clock

    def get_by_id(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction by ID."""
        return self.store.get_by_id(COLLECTION, transaction_id)  # type: ignore[return-value]

    def list_all(self) -> list[Transaction]:
        """List all transactions, newest first."""
        return _newest_first(self.store.get_all(COLLECTION))

    def count(self) -> int:
        return self.store.count(COLLECTION)

    def filter_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        """Get transactions within a date range (both ends inclusive)."""
        return self.search(start_date=start_date, end_date=end_date)

    def filter_by_category(self, category_id: str) -> list[Transaction]:
        """Get all transactions for a specific category."""
        return self.search(category_id=category_id)

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
        where: dict[str, Any] = {}
        if category_id:
            where["category_id"] = category_id
        if flow:
            where["flow"] = require_choice("flow", flow, TRANSACTION_FLOWS)
        if payment_method:
            where["payment_method"] = require_choice("payment_method", payment_method, PAYMENT_METHODS)

        between = {}
        if start_date is not None or end_date is not None:
            between["happened_at"] = (
                require_datetime("start_date", start_date) if start_date is not None else None,
                require_datetime("end_date", end_date) if end_date is not None else None,
            )

        return _newest_first(self.store.find(COLLECTION, where=where, between=between))

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
        require_choice("flow", flow, TRANSACTION_FLOWS)
        if flow == FLOW_ADJUSTMENT:
            category_id = None
        elif category_id is None:
            logger.debug(f"Uncategorized {flow} transaction")

        now = self.clock()
        transaction = Transaction(
            id=generate_id(),
            flow=flow,
            category_id=category_id,
            amount=require_amount(amount),
            payment_method=require_choice("payment_method", payment_method, PAYMENT_METHODS),
            reason=optional_text("reason", reason),
            happened_at=require_datetime("happened_at", happened_at) if happened_at is not None else now,
            created_at=now,
            updated_at=now,
        )
        created = self.store.insert(COLLECTION, transaction)
        logger.info(
            f"Transaction created: {created.flow} {created.amount}",
            extra={"transaction_id": created.id},
        )
        return created

    def update(self, transaction_id: str, **changes: Any) -> Transaction:
        """Update an existing transaction."""
        reject_unknown("Transaction", changes, EDITABLE_FIELDS)
        existing = self.get_by_id(transaction_id)

        cleaned: dict[str, Any] = {}
        if "flow" in changes:
            cleaned["flow"] = require_choice("flow", changes["flow"], TRANSACTION_FLOWS)
        if "category_id" in changes:
            cleaned["category_id"] = changes["category_id"]
        if "amount" in changes:
            cleaned["amount"] = require_amount(changes["amount"])
        if "payment_method" in changes:
            cleaned["payment_method"] = require_choice(
                "payment_method", changes["payment_method"], PAYMENT_METHODS
            )
        if "reason" in changes:
            cleaned["reason"] = optional_text("reason", changes["reason"])
        if "happened_at" in changes:
            cleaned["happened_at"] = require_datetime("happened_at", changes["happened_at"])

        if cleaned.get("flow", existing.flow) == FLOW_ADJUSTMENT:
            cleaned["category_id"] = None
        cleaned["updated_at"] = self.clock()

        updated = self.store.update(COLLECTION, transaction_id, cleaned)
        logger.info("Transaction updated", extra={"transaction_id": transaction_id})
        return updated  # type: ignore[return-value]

    def delete(self, transaction_id: str) -> None:
        """Delete a transaction by ID."""
        self.store.delete(COLLECTION, transaction_id)
        logger.info("Transaction deleted", extra={"transaction_id": transaction_id})
