"""Pytest configuration and shared fixtures."""

import pytest

from padelpro.config import error_aggregator
from padelpro.config.settings import ConfigurationManager, build_pricing_table
from padelpro.services.ledger import MatchLedger
from padelpro.services.settlement import SettlementProcessor
from padelpro.services.storage import SnapshotStore
from padelpro.services.transaction_log import TransactionLog
from padelpro.session import PadelProSession

MATCH_DAY = "2024-05-10"

@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Isolate configuration and global state between tests."""
    for var in ("PADELPRO_CONFIG_DIR", "PADELPRO_DB_PATH", "PADELPRO_LOG_LEVEL", "PADELPRO_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PADELPRO_CONFIG_DIR", str(tmp_path))

    ConfigurationManager._instance = None
    error_aggregator._error_aggregator = None

    yield

    ConfigurationManager._instance = None
    error_aggregator._error_aggregator = None

@pytest.fixture
def pricing():
    """Default pricing table."""
    return build_pricing_table()

@pytest.fixture
def ledger(pricing):
    return MatchLedger(pricing)

@pytest.fixture
def log():
    return TransactionLog()

@pytest.fixture
def settlement(ledger, log):
    return SettlementProcessor(ledger, log)

@pytest.fixture
def match(ledger):
    """Indoor match on court 1 at 09:00 with Ana as responsible."""
    return ledger.create_match(1, MATCH_DAY, "09:00", "Ana")

@pytest.fixture
def store(tmp_path):
    return SnapshotStore(str(tmp_path / "data" / "padelpro.db"))

@pytest.fixture
def session(pricing, store):
    return PadelProSession(pricing, store)
