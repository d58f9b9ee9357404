"""Tests for core.logging_config module."""

import json
import logging
import logging.handlers
import sys

from core.logging_config import StructuredFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        name="core.cricket.repository",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg="Fetching %s failed",
        args=("live",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_outputs_json():
    """Test records are rendered as one JSON object."""
    data = json.loads(StructuredFormatter().format(_record()))

    assert data["level"] == "WARNING"
    assert data["logger"] == "core.cricket.repository"
    assert data["message"] == "Fetching live failed"
    assert data["line"] == 42
    assert "timestamp" in data
    assert "category" not in data


def test_structured_formatter_includes_extra_fields():
    """Test category, match and endpoint context is kept."""
    record = _record(
        category="live", match_id="101", endpoint="/matches/v1/live"
    )

    data = json.loads(StructuredFormatter().format(record))

    assert data["category"] == "live"
    assert data["match_id"] == "101"
    assert data["endpoint"] == "/matches/v1/live"


def test_structured_formatter_includes_exception():
    """Test exception tracebacks are included."""
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    data = json.loads(StructuredFormatter().format(record))

    assert "RuntimeError: boom" in data["exception"]


def test_setup_logging_configures_handlers(tmp_path):
    """Test console and rotating JSON file handlers are installed."""
    log_file = tmp_path / "bot.log"
    root = logging.getLogger()
    previous = root.handlers[:]

    try:
        setup_logging(log_file)

        handlers = root.handlers
        assert len(handlers) == 2
        file_handlers = [
            h
            for h in handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, StructuredFormatter)
        assert logging.getLogger("apscheduler").level == logging.WARNING

        logging.getLogger("test").info(
            "hello", extra={"category": "past"}
        )
        file_handlers[0].flush()
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["category"] == "past"
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = previous
