"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelSettingsRepository,
    SQLModelTransactionRepository,
)
from .infra.store import RecordStore
from .logging_config import get_logger, setup_logging
from .services.analytics import AnalyticsEngine
from .services.seed import SeedSummary, run_initial_seed

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Everything presentation code needs, created once at startup."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    store: RecordStore

    category_repo: SQLModelCategoryRepository
    transaction_repo: SQLModelTransactionRepository
    settings_repo: SQLModelSettingsRepository

    analytics: AnalyticsEngine
    seed_summary: Optional[SeedSummary] = None


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Callable[[], datetime] = datetime.now,
) -> AppContext:
    """Create and initialize the application context.

    Raises StorageInitializationError when the database cannot be opened,
    so callers can report a startup failure separately from query errors.
    """

    if config is None:
        config = BaseConfig()
    setup_logging(config)

    engine, session_factory = bootstrap_database(config)
    store = RecordStore(session_factory)

    category_repo = SQLModelCategoryRepository(store, clock=clock)
    transaction_repo = SQLModelTransactionRepository(store, clock=clock)
    settings_repo = SQLModelSettingsRepository(store)
    analytics = AnalyticsEngine(transaction_repo, category_repo, settings_repo, clock=clock)

    seed_summary = None
    if config.SEED_ON_STARTUP:
        seed_summary = run_initial_seed(category_repo, transaction_repo, now=clock())

    logger.info("Application context ready")
    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        store=store,
        category_repo=category_repo,
        transaction_repo=transaction_repo,
        settings_repo=settings_repo,
        analytics=analytics,
        seed_summary=seed_summary,
    )
