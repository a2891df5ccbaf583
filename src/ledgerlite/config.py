"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "LedgerLite"
    DB_FILENAME = "ledgerlite.db"
    LOG_FILENAME = "ledgerlite.log"
    ENV_PREFIX = "LEDGERLITE_"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool(f"{self.ENV_PREFIX}DEV_MODE", default=True)
        self.SEED_ON_STARTUP = _env_bool(f"{self.ENV_PREFIX}SEED_ON_STARTUP", default=True)
        self.SQL_ECHO = _env_bool(f"{self.ENV_PREFIX}SQL_ECHO", default=False)
        self.DATABASE_URL = os.getenv(f"{self.ENV_PREFIX}DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv(f"{self.ENV_PREFIX}DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {"echo": self.SQL_ECHO}
        if self.is_sqlite:
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Throwaway in-memory database, no startup seed."""

    __test__ = False  # not a pytest test class
    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
        self.SEED_ON_STARTUP = False
