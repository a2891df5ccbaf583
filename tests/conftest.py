"""Pytest configuration and shared fixtures for LedgerLite tests.

This module provides database fixtures, repository fixtures bound to a
controllable clock, and small factories for categories and transactions.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sqlmodel import create_engine

from ledgerlite.infra.database import create_session_factory, init_database
from ledgerlite.infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelSettingsRepository,
    SQLModelTransactionRepository,
)
from ledgerlite.infra.store import RecordStore
from ledgerlite.models import Category, Transaction
from ledgerlite.services.analytics import AnalyticsEngine

FIXED_NOW = datetime(2025, 3, 20, 12, 0, 0)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep config objects from creating ./instance in the working tree."""
    monkeypatch.setenv("LEDGERLITE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("LEDGERLITE_DATABASE_URL", raising=False)
    return tmp_path / "data"


@pytest.fixture(autouse=True)
def package_logger():
    """Detach handlers added by setup_logging once the test finishes."""
    logger = logging.getLogger("ledgerlite")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application builds."""
    return create_session_factory(db_engine)


@pytest.fixture
def store(session_factory) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def category_repo(store, clock) -> SQLModelCategoryRepository:
    return SQLModelCategoryRepository(store, clock=clock)


@pytest.fixture
def transaction_repo(store, clock) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(store, clock=clock)


@pytest.fixture
def settings_repo(store) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(store)


@pytest.fixture
def analytics(transaction_repo, category_repo, settings_repo, clock) -> AnalyticsEngine:
    return AnalyticsEngine(transaction_repo, category_repo, settings_repo, clock=clock)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def category_factory(category_repo):
    """Factory for creating persisted categories."""

    def _create_category(
        name: str = "Test Category",
        color: str = "#FF5733",
        kind: str = "expense",
        emoji: str | None = None,
    ) -> Category:
        return category_repo.create(name=name, color=color, kind=kind, emoji=emoji)

    return _create_category


@pytest.fixture
def transaction_factory(transaction_repo):
    """Factory for creating persisted transactions.

    Amounts are minor units (paise); direction comes from ``flow``.
    """

    def _create_transaction(
        amount: int,
        flow: str = "expense",
        category_id: str | None = None,
        happened_at: datetime | None = None,
        payment_method: str = "upi",
        reason: str | None = "Test transaction",
    ) -> Transaction:
        return transaction_repo.create(
            flow=flow,
            amount=amount,
            payment_method=payment_method,
            category_id=category_id,
            reason=reason,
            happened_at=happened_at,
        )

    return _create_transaction


def make_transaction(
    flow: str,
    amount: int,
    happened_at: datetime,
    category_id: str | None = None,
    txn_id: str | None = None,
) -> Transaction:
    """Build an unsaved transaction for pure analytics tests."""
    return Transaction(
        id=txn_id or f"t-{flow}-{amount}-{happened_at:%Y%m%d%H%M}",
        flow=flow,
        amount=amount,
        category_id=category_id,
        payment_method="upi",
        happened_at=happened_at,
        created_at=happened_at,
        updated_at=happened_at,
    )


def make_category(category_id: str, name: str, color: str = "#123456", emoji: str | None = None) -> Category:
    """Build an unsaved category for pure analytics tests."""
    return Category(
        id=category_id,
        name=name,
        color=color,
        emoji=emoji,
        kind="expense",
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )
