# ============================================================================
# FILE: tests/unit/test_logging.py
# ============================================================================
"""
Unit tests for logging setup and helpers
"""

import json
import logging

import pytest

from vet_ingestion.utils.logging import JsonFormatter, log_performance, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back after setup_logging replaced its handlers"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter():
    """Test records are rendered as one JSON object"""
    record = logging.LogRecord("vet.test", logging.WARNING, __file__, 10, "parsed %s", ("rossi.txt",), None)
    data = json.loads(JsonFormatter().format(record))

    assert data["message"] == "parsed rossi.txt"
    assert data["level"] == "WARNING"
    assert data["logger"] == "vet.test"
    assert data["timestamp"].endswith("+00:00")


def test_setup_logging_with_file(tmp_path, restore_root_logger):
    """Test setup_logging writes to the given log file"""
    log_file = tmp_path / "logs" / "ingestion.log"
    setup_logging(level="debug", log_file=log_file, format_json=True)

    logging.getLogger("vet.test").info("città")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["message"] == "città"


def test_log_performance(caplog):
    """Test the decorator logs duration and passes the result through"""
    logger = logging.getLogger("vet.test.performance")

    @log_performance(logger, "Sample operation")
    def work(x):
        return x * 2

    with caplog.at_level(logging.INFO, logger="vet.test.performance"):
        assert work(21) == 42

    assert "Sample operation completed" in caplog.text


def test_log_performance_reraises(caplog):
    """Test failures are logged and re-raised"""
    logger = logging.getLogger("vet.test.performance")

    @log_performance(logger, "Failing operation")
    def fail():
        raise ValueError("boom")

    with caplog.at_level(logging.INFO, logger="vet.test.performance"):
        with pytest.raises(ValueError):
            fail()

    assert "Failing operation failed" in caplog.text
    assert fail.__name__ == "fail"


def test_json_formatter_extra_fields():
    """Test document and duration extras appear in JSON output"""
    record = logging.LogRecord("vet.test", logging.INFO, __file__, 10, "done", (), None)
    record.document = "rossi.txt"
    record.duration_ms = 1.5

    data = json.loads(JsonFormatter().format(record))

    assert data["document"] == "rossi.txt"
    assert data["duration_ms"] == 1.5
