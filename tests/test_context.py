from __future__ import annotations

import pytest

from ledgerlite import TestConfig, create_app_context
from ledgerlite.errors import StorageInitializationError, StorageUnavailableError
from tests.conftest import FakeClock


def test_context_wires_repositories_against_one_store():
    ctx = create_app_context(TestConfig())

    assert ctx.seed_summary is None
    assert ctx.category_repo.store is ctx.store
    assert ctx.transaction_repo.store is ctx.store
    assert ctx.settings_repo.store is ctx.store
    assert ctx.analytics.transaction_repo is ctx.transaction_repo
    ctx.engine.dispose()


def test_context_seeds_on_startup_when_enabled():
    config = TestConfig()
    config.SEED_ON_STARTUP = True

    ctx = create_app_context(config, clock=FakeClock())

    assert ctx.seed_summary is not None and ctx.seed_summary.seeded
    assert ctx.category_repo.count() == 12
    balance = ctx.analytics.calculate_balance()
    assert balance.current_balance == pytest.approx(45000 - 250 - 60)
    ctx.engine.dispose()


def test_file_backed_database_persists_between_contexts(tmp_path):
    config = TestConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'ledger.db'}"
    config.SEED_ON_STARTUP = True

    first = create_app_context(config)
    first.engine.dispose()
    second = create_app_context(config)

    assert second.seed_summary is not None and not second.seed_summary.seeded
    assert second.category_repo.count() == 12
    second.engine.dispose()


@pytest.mark.parametrize(
    "url",
    [
        "definitely-not-a-dialect://nowhere",
        "sqlite:////nonexistent-ledgerlite-dir/sub/ledger.db",
    ],
)
def test_startup_failure_is_distinguishable(url):
    config = TestConfig()
    config.DATABASE_URL = url

    with pytest.raises(StorageInitializationError) as excinfo:
        create_app_context(config)
    assert isinstance(excinfo.value, StorageUnavailableError)


def test_context_configures_package_logging(package_logger):
    config = TestConfig()

    ctx = create_app_context(config)

    assert len(package_logger.handlers) == 2
    log_file = config.DATA_DIR / "logs" / "ledgerlite.log"
    for handler in package_logger.handlers:
        handler.flush()
    assert "Application context ready" in log_file.read_text(encoding="utf-8")
    ctx.engine.dispose()
