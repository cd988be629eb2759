"""Tests for logging setup and error aggregation."""

import json
import logging

import pytest
import yaml

from padelpro.config import error_aggregator
from padelpro.config.error_aggregator import (
    ErrorAggregator,
    aggregate_error,
    get_error_aggregator,
)
from padelpro.config.logging import ColoredFormatter, JsonFormatter, setup_logging
from padelpro.config.logging_config import (
    ErrorAggregationConfig,
    LoggingConfig,
    load_logging_config,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg="Payment recorded", **extra):
    record = logging.LogRecord("padelpro.test", logging.INFO, __file__, 1, msg, None, None)
    if extra:
        record.extra_fields = extra
    return record


def test_missing_logging_file_uses_defaults(tmp_path):
    config = load_logging_config(tmp_path / "logging.yaml")
    assert config == LoggingConfig()

def test_logging_file_sections(tmp_path):
    path = tmp_path / "logging.yaml"
    path.write_text(yaml.safe_dump({
        "default_level": "INFO",
        "console": {"color": False},
        "error_aggregation": {"error_threshold": 2},
        "libraries": {"padelpro.services": "ERROR"},
    }), encoding="utf-8")

    config = load_logging_config(path)

    assert config.default_level == "INFO"
    assert config.console.color is False
    assert config.console.enabled is True
    assert config.error_aggregation.error_threshold == 2
    assert config.libraries == {"padelpro.services": "ERROR"}

def test_setup_logging_levels_and_file(tmp_path):
    log_file = tmp_path / "logs" / "padelpro.log"
    setup_logging(LoggingConfig(), verbose=False, log_file=str(log_file))

    logging.getLogger("padelpro.test").debug("written to file only")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file.exists()
    assert "written to file only" in log_file.read_text(encoding="utf-8")
    assert get_error_aggregator() is not None

def test_setup_logging_verbose():
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.DEBUG

def test_json_formatter():
    data = json.loads(JsonFormatter(include_timestamp=False).format(_record(amount="12.50")))
    assert data == {
        "level": "INFO",
        "logger": "padelpro.test",
        "message": "Payment recorded",
        "amount": "12.50",
    }

def test_colored_formatter_without_color():
    output = ColoredFormatter(use_color=False).format(_record(player="Ana"))
    assert "\033[" not in output
    assert "padelpro.test - INFO - Payment recorded" in output
    assert "player: Ana" in output


def test_aggregate_error_without_aggregator():
    assert error_aggregator._error_aggregator is None
    aggregate_error("ignored", "ledger")

def test_errors_grouped_until_threshold(caplog):
    aggregator = ErrorAggregator(ErrorAggregationConfig(error_threshold=3))

    with caplog.at_level(logging.ERROR, logger="error_aggregator"):
        aggregator.add_error("Snapshot not saved", "session")
        aggregator.add_error("Snapshot not saved", "storage")
        assert aggregator.pending["Snapshot not saved"].count == 2
        assert not caplog.records

        aggregator.add_error("Snapshot not saved", "session")

    assert aggregator.pending == {}
    assert [record.getMessage() for record in caplog.records] == ["Snapshot not saved"]
    assert caplog.records[0].extra_fields == {"error_count": 3, "services": ["session", "storage"]}

def test_flush_reports_remaining(caplog):
    aggregator = ErrorAggregator(ErrorAggregationConfig())
    aggregator.add_error("Unknown court 9", "ledger", "Traceback line")

    with caplog.at_level(logging.ERROR, logger="error_aggregator"):
        aggregator.flush()

    assert aggregator.pending == {}
    assert caplog.records[0].getMessage() == "Unknown court 9"

def test_disabled_aggregation():
    aggregator = ErrorAggregator(ErrorAggregationConfig(enabled=False))
    aggregator.add_error("ignored", "ledger")
    assert aggregator.pending == {}
