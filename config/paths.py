"""File locations used by the bot, relative to the project root."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

# Settings written by the setup wizard and read by python-dotenv
ENV_FILE = PROJECT_ROOT / ".env"

# Rotating JSON log
LOG_FILE = PROJECT_ROOT / "bot.log"
