"""Database infrastructure: engine, schema and session factory."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..errors import StorageInitializationError
from ..logging_config import get_logger

SessionFactory = Callable[[], ContextManager[Session]]

logger = get_logger(__name__)


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    try:
        return create_engine(config.DATABASE_URL, **engine_options)
    except (SQLAlchemyError, ImportError, ValueError) as exc:
        logger.error(f"Failed to create database engine: {exc}", exc_info=True)
        raise StorageInitializationError(f"Cannot create engine for {config.DATABASE_URL}") from exc


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    try:
        SQLModel.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        logger.error(f"Failed to initialize schema: {exc}", exc_info=True)
        raise StorageInitializationError("Cannot create database schema") from exc


def create_session_factory(engine: Engine) -> SessionFactory:
    """Create a session factory function."""

    @contextmanager
    def factory() -> Iterator[Session]:
        """Create a new session."""
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, SessionFactory]:
    """Convenience bootstrap for engine + session_factory with schema init.

    Used by application startup and tests to ensure consistent engine options
    and session configuration. Returns (engine, session_factory).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    logger.info("Database ready", extra={"database_url": cfg.DATABASE_URL})
    return engine, create_session_factory(engine)
