"""Date parsing utilities for vendor match data.

Centralizes all date parsing logic so both vendor shapes produce the same
canonical strings. Supports epoch-millisecond and ISO 8601 inputs.
"""

import logging
from datetime import datetime
from typing import Any

import pendulum

from config.constants import TIMEZONE

logger = logging.getLogger(__name__)


def parse_iso_datetime(
    datetime_str: str, timezone: str = TIMEZONE
) -> pendulum.DateTime:
    """Parse ISO 8601 datetime into pendulum datetime.

    Args:
        datetime_str: ISO 8601 string (e.g., "2025-11-29T18:00:00Z").
            Naive values are read as UTC.
        timezone: Target timezone (default: UTC)

    Returns:
        Timezone-aware pendulum datetime in specified timezone

    Raises:
        ValueError: If datetime_str is invalid
    """
    try:
        clean_str = datetime_str.replace("Z", "+00:00")
        dt = datetime.fromisoformat(clean_str)
        return pendulum.instance(dt).in_timezone(timezone)
    except (ValueError, AttributeError, OverflowError) as e:
        logger.warning(f"ISO parse error: '{datetime_str}': {e}")
        raise ValueError(f"Invalid ISO datetime: '{datetime_str}'") from e


def parse_epoch_millis(
    value: int | float | str, timezone: str = TIMEZONE
) -> pendulum.DateTime:
    """Parse epoch milliseconds into pendulum datetime.

    Args:
        value: Milliseconds since the epoch, as a number or digit string
            (e.g., "1732557600000").
        timezone: Target timezone (default: UTC)

    Returns:
        Timezone-aware pendulum datetime

    Raises:
        ValueError: If value is not a usable timestamp
    """
    try:
        millis = float(value)
        return pendulum.from_timestamp(millis / 1000, tz=timezone)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.warning(f"Epoch parse error: '{value}': {e}")
        raise ValueError(f"Invalid epoch milliseconds: '{value}'") from e


def parse_vendor_datetime(
    value: Any, timezone: str = TIMEZONE
) -> pendulum.DateTime | None:
    """Parse a vendor date in either epoch-millisecond or ISO form.

    Numbers and digit-only strings are read as epoch milliseconds, any other
    string as ISO 8601.

    Args:
        value: Raw vendor value.
        timezone: Target timezone (default: UTC)

    Returns:
        Pendulum datetime, or None if value is absent or unparsable.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, (int, float)):
            return parse_epoch_millis(value, timezone)
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            if stripped.isdigit():
                return parse_epoch_millis(stripped, timezone)
            return parse_iso_datetime(stripped, timezone)
    except ValueError:
        return None

    return None


def format_to_iso_date(dt: pendulum.DateTime) -> str:
    """Format pendulum datetime to YYYY-MM-DD string.

    Args:
        dt: Pendulum datetime to format

    Returns:
        Date string in YYYY-MM-DD format
    """
    return dt.format("YYYY-MM-DD")


def format_to_hh_mm(dt: pendulum.DateTime) -> str:
    """Format pendulum datetime to HH:mm string.

    Args:
        dt: Pendulum datetime to format

    Returns:
        Time string in HH:mm format
    """
    return dt.format("HH:mm")
