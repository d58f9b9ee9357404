"""Logging configuration: readable console output plus JSON log files."""

import json
import logging
import logging.handlers
from datetime import UTC, datetime
from pathlib import Path

# Fields passed through `extra=` by the cricket data layer
EXTRA_FIELDS = ("category", "match_id", "endpoint")

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    One JSON object per line, so refresh cycles can be followed with jq
    (e.g. ``jq 'select(.category == "live")' bot.log``).
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(
                record.created, UTC
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


def setup_logging(log_file: Path, level: int = logging.INFO) -> None:
    """Configure the root logger with console and rotating file handlers.

    Args:
        log_file: Path of the JSON log file.
        level: Minimum level for both handlers.
    """
    # Console handler - human-readable format
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    # File handler - JSON format for easier parsing
    file_handler = logging.handlers.RotatingFileHandler(
        str(log_file),
        maxBytes=10_000_000,  # 10MB
        backupCount=5,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(StructuredFormatter())

    logging.basicConfig(
        level=level,
        handlers=[console_handler, file_handler],
        force=True,
    )
    # apscheduler logs every job run at INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
