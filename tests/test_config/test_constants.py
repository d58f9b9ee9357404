"""Tests for config.constants module."""

import pytest

from config.constants import (
    AUTH_STYLES,
    DEFAULT_AUTH_STYLE,
    DEFAULT_BASE_URL,
    DEFAULT_SHAPE,
    NO_MATCHES,
    REFRESH_DONE,
    REFRESH_INTERVAL_SECONDS,
    TIMEZONE,
    VENDOR_ENDPOINTS,
)


def test_timezone_is_utc():
    """Test that canonical dates are produced in UTC."""
    assert TIMEZONE == "UTC"


def test_default_refresh_interval():
    """Test the refresh interval defaults to one minute."""
    assert REFRESH_INTERVAL_SECONDS == 60


@pytest.mark.parametrize("shape", ["nested", "flat"])
def test_vendor_endpoints_cover_every_category(shape):
    """Test each vendor shape defines all category and detail endpoints."""
    endpoints = VENDOR_ENDPOINTS[shape]

    assert set(endpoints) == {"live", "upcoming", "past", "detail"}
    assert all(path.startswith("/") for path in endpoints.values())
    assert "{match_id}" in endpoints["detail"]


def test_defaults_are_supported():
    """Test default shape and auth style are known values."""
    assert DEFAULT_SHAPE in VENDOR_ENDPOINTS
    assert DEFAULT_AUTH_STYLE in AUTH_STYLES
    assert DEFAULT_BASE_URL.startswith("https://")


def test_message_templates():
    """Test message templates format with their placeholders."""
    assert NO_MATCHES.format(category="live") == "No live matches available"
    assert "2 live, 0 upcoming, 1 results" in REFRESH_DONE.format(
        live=2, upcoming=0, past=1
    )
