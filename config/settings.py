"""Environment-based settings loaded from the project's .env file."""

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv, set_key

from config.constants import (
    DEFAULT_AUTH_STYLE,
    DEFAULT_BASE_URL,
    DEFAULT_SHAPE,
    REFRESH_INTERVAL_SECONDS,
)
from config.paths import ENV_FILE
from config.validation import validate_config

logger = logging.getLogger(__name__)

env_path = ENV_FILE

load_dotenv(env_path)


@dataclass(frozen=True)
class CricketConfig:
    """Vendor API and refresh configuration, injected at construction."""

    base_url: str
    api_key: str
    api_host: str
    shape: str = DEFAULT_SHAPE
    auth_style: str = DEFAULT_AUTH_STYLE
    refresh_interval: int = REFRESH_INTERVAL_SECONDS
    retry_attempts: int = 1


def exists() -> bool:
    """Check whether the .env file exists.

    Returns:
        True if the .env file is present.
    """
    return env_path.exists()


def get(key: str, default: str | None = None) -> str | None:
    """Get an environment variable.

    Args:
        key: Variable name.
        default: Value returned when the variable is not set.

    Returns:
        Variable value or default.
    """
    return os.getenv(key, default)


def get_required(key: str) -> str:
    """Get an environment variable that must be set.

    Args:
        key: Variable name.

    Returns:
        Variable value.

    Raises:
        ValueError: If the variable is not set or empty.
    """
    value = os.getenv(key)
    if not value:
        raise ValueError(f"Required environment variable {key} is not set")
    return value


def _default_host(base_url: str) -> str:
    return urlparse(base_url).hostname or ""


def load_cricket_config() -> CricketConfig:
    """Load and validate the cricket API configuration.

    Returns:
        Validated CricketConfig.

    Raises:
        ValueError: If a required key is missing or a value is invalid.
    """
    base_url = get("CRICKET_API_BASE_URL", DEFAULT_BASE_URL)
    raw = {
        "CRICKET_API_BASE_URL": base_url,
        "CRICKET_API_KEY": get_required("CRICKET_API_KEY"),
        "CRICKET_API_HOST": get("CRICKET_API_HOST", _default_host(base_url)),
        "CRICKET_API_SHAPE": get("CRICKET_API_SHAPE", DEFAULT_SHAPE),
        "CRICKET_API_AUTH": get("CRICKET_API_AUTH", DEFAULT_AUTH_STYLE),
        "REFRESH_INTERVAL_SECONDS": get(
            "REFRESH_INTERVAL_SECONDS", str(REFRESH_INTERVAL_SECONDS)
        ),
        "FETCH_RETRY_ATTEMPTS": get("FETCH_RETRY_ATTEMPTS", "1"),
    }

    errors = validate_config(raw)
    if errors:
        raise ValueError(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {err}" for err in errors)
        )

    return CricketConfig(
        base_url=raw["CRICKET_API_BASE_URL"],
        api_key=raw["CRICKET_API_KEY"],
        api_host=raw["CRICKET_API_HOST"],
        shape=raw["CRICKET_API_SHAPE"],
        auth_style=raw["CRICKET_API_AUTH"],
        refresh_interval=int(raw["REFRESH_INTERVAL_SECONDS"]),
        retry_attempts=int(raw["FETCH_RETRY_ATTEMPTS"]),
    )


def setup_interactive() -> None:
    """Prompt for the required settings and write them to the .env file."""
    print("Cricket scores bot setup")
    token = input("Discord bot token: ").strip()
    api_key = input("Cricket API key: ").strip()
    base_url = (
        input(f"Cricket API base URL [{DEFAULT_BASE_URL}]: ").strip()
        or DEFAULT_BASE_URL
    )
    shape = (
        input(f"Vendor shape, nested or flat [{DEFAULT_SHAPE}]: ").strip()
        or DEFAULT_SHAPE
    )

    env_path.touch(exist_ok=True)
    for key, value in (
        ("DISCORD_TOKEN", token),
        ("CRICKET_API_KEY", api_key),
        ("CRICKET_API_BASE_URL", base_url),
        ("CRICKET_API_SHAPE", shape),
    ):
        set_key(str(env_path), key, value)
        os.environ[key] = value

    logger.info(f"Configuration written to {env_path}")
