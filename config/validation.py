"""Configuration validation utilities."""

import logging
from typing import Any
from urllib.parse import urlparse

from config.constants import AUTH_STYLES, VENDOR_ENDPOINTS

logger = logging.getLogger(__name__)


def validate_discord_token(token: str) -> bool:
    """Validate Discord bot token format.

    Args:
        token: Discord bot token to validate.

    Returns:
        True if token format is valid, False otherwise.
    """
    # Discord tokens are base64 encoded, typically 59+ chars
    return (
        len(token) > 50
        and not token.startswith("your_")
        and not token.startswith("YOUR_")
    )


def validate_api_key(api_key: str) -> bool:
    """Validate the vendor API key is set and not a placeholder.

    Args:
        api_key: Vendor API key.

    Returns:
        True if the key looks usable, False otherwise.
    """
    return bool(api_key.strip()) and not api_key.upper().startswith("YOUR_")


def validate_base_url(url: str) -> bool:
    """Validate the vendor base URL is an absolute http(s) URL.

    Args:
        url: Base URL to validate.

    Returns:
        True if URL is valid, False otherwise.
    """
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_positive_int(value: str) -> bool:
    """Validate a string holds a positive integer.

    Args:
        value: Value to validate.

    Returns:
        True if value is a positive integer, False otherwise.
    """
    if not value.isdigit():
        return False

    return int(value) > 0


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate cricket API configuration values.

    Args:
        config: Dictionary of configuration key-value pairs.

    Returns:
        List of validation error messages (empty if all valid).

    Example:
        >>> errors = validate_config({
        ...     "CRICKET_API_BASE_URL": "https://api.example.com",
        ...     "CRICKET_API_KEY": "abc123",
        ...     "CRICKET_API_SHAPE": "flat",
        ... })
        >>> errors
        []
    """
    errors = []

    if not validate_base_url(config.get("CRICKET_API_BASE_URL", "")):
        errors.append(
            "CRICKET_API_BASE_URL must be an absolute http(s) URL"
        )

    if not validate_api_key(config.get("CRICKET_API_KEY", "")):
        errors.append(
            "Invalid CRICKET_API_KEY (must be set and not be a placeholder)"
        )

    shape = config.get("CRICKET_API_SHAPE", "nested")
    if shape not in VENDOR_ENDPOINTS:
        errors.append(
            f"CRICKET_API_SHAPE must be one of {sorted(VENDOR_ENDPOINTS)}"
        )

    auth_style = config.get("CRICKET_API_AUTH", "header")
    if auth_style not in AUTH_STYLES:
        errors.append(f"CRICKET_API_AUTH must be one of {list(AUTH_STYLES)}")

    if not validate_positive_int(config.get("REFRESH_INTERVAL_SECONDS", "60")):
        errors.append("REFRESH_INTERVAL_SECONDS must be a positive integer")

    if not validate_positive_int(config.get("FETCH_RETRY_ATTEMPTS", "1")):
        errors.append("FETCH_RETRY_ATTEMPTS must be a positive integer")

    if errors:
        logger.error(f"Configuration validation failed: {errors}")
    else:
        logger.info("Configuration validation passed")

    return errors
