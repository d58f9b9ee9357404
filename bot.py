"""Cricket Scores Bot - Main entry point.

A Discord bot that serves live, upcoming and completed cricket matches,
refreshed from a sports-data API every minute.
"""

import asyncio
import logging
import signal

import discord
from discord.ext import commands

from commands.scores import (
    details_command,
    live_command,
    refresh_command,
    results_command,
    upcoming_command,
)
from config import settings
from config.paths import LOG_FILE
from config.settings import CricketConfig
from config.validation import validate_discord_token
from core.cricket.fetcher import build_fetcher
from core.cricket.refresh import RefreshScheduler
from core.cricket.repository import MatchRepository
from core.logging_config import setup_logging

setup_logging(LOG_FILE)
logger = logging.getLogger(__name__)

# Configure bot with minimal required intents
intents = discord.Intents.default()
description = "A bot for live cricket scores."
bot = commands.Bot(
    command_prefix="!", description=description, intents=intents
)

# Loaded at startup, refresher created once the bot is ready
cricket_config: CricketConfig
refresher: RefreshScheduler | None = None


def load_configuration() -> tuple[str, CricketConfig]:
    """Load configuration from .env file or run setup wizard.

    Returns:
        Tuple of (token, cricket_config).

    Raises:
        ValueError: If configuration is invalid.
    """
    if not settings.exists():
        logger.info("No configuration found, running setup wizard")
        settings.setup_interactive()

    try:
        token = settings.get_required("DISCORD_TOKEN")
        if not validate_discord_token(token):
            raise ValueError(
                "Invalid DISCORD_TOKEN format (must be >50 chars "
                "and not be a placeholder)"
            )

        config = settings.load_cricket_config()
        logger.info(
            f"Configuration loaded: {config.shape} vendor shape at "
            f"{config.base_url}, refresh every {config.refresh_interval}s"
        )
        return token, config

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise


def build_refresher(config: CricketConfig) -> RefreshScheduler:
    """Wire fetcher, repository and refresh scheduler from configuration."""
    repository = MatchRepository(
        build_fetcher(config),
        shape=config.shape,
        retry_attempts=config.retry_attempts,
    )
    return RefreshScheduler(repository, interval=config.refresh_interval)


async def safe_defer(interaction: discord.Interaction) -> bool:
    """Safely defer an interaction with fallback error handling.

    Args:
        interaction: Discord interaction to defer.

    Returns:
        True if defer succeeded, False if it failed.
    """
    try:
        await interaction.response.defer()
        return True
    except discord.NotFound:
        # Interaction expired - this is a hard failure
        logger.warning(
            f"Interaction {interaction.id} expired (10062). "
            "This usually means network latency >3s."
        )
        return False
    except discord.HTTPException as e:
        logger.error(f"HTTP error deferring interaction {interaction.id}: {e}")
        return False


# Command registration
@bot.tree.command(name="live", description="Live cricket matches")
async def live(interaction: discord.Interaction) -> None:
    """Show live matches with current scores."""
    if not await safe_defer(interaction):
        return
    await live_command(interaction, refresher)


@bot.tree.command(name="upcoming", description="Upcoming cricket matches")
async def upcoming(interaction: discord.Interaction) -> None:
    """Show scheduled matches."""
    if not await safe_defer(interaction):
        return
    await upcoming_command(interaction, refresher)


@bot.tree.command(name="results", description="Recent cricket results")
async def results(interaction: discord.Interaction) -> None:
    """Show completed matches."""
    if not await safe_defer(interaction):
        return
    await results_command(interaction, refresher)


@bot.tree.command(name="refresh", description="Refresh match data now")
async def refresh(interaction: discord.Interaction) -> None:
    """Refresh all match lists on demand."""
    if not await safe_defer(interaction):
        return
    await refresh_command(interaction, refresher)


@bot.tree.command(name="details", description="Scorecard of a live match")
@discord.app_commands.describe(match_id="Match id, as shown by /live")
async def details(interaction: discord.Interaction, match_id: str) -> None:
    """Show batting, bowling and partnership details of a live match."""
    if not await safe_defer(interaction):
        return
    await details_command(interaction, refresher, match_id)


@bot.event
async def on_ready() -> None:
    """Event handler for bot ready state."""
    global refresher

    logger.info(f"Logged in as {bot.user} (ID: {bot.user.id})")

    try:
        synced = await bot.tree.sync()
        logger.info(f"Synced {len(synced)} slash command(s)")
    except Exception as e:
        logger.error(f"Failed to sync commands: {e}")

    # on_ready fires again after reconnects
    if refresher is None:
        refresher = build_refresher(cricket_config)
        refresher.start()


@bot.tree.error
async def on_app_command_error(
    interaction: discord.Interaction,
    error: discord.app_commands.AppCommandError,
) -> None:
    """Global error handler for slash commands."""
    if isinstance(error, discord.app_commands.CommandNotFound):
        return

    logger.error(f"App command error: {error}", exc_info=True)

    try:
        error_msg = "An error occurred while running the command."
        if not interaction.response.is_done():
            await interaction.response.send_message(error_msg, ephemeral=True)
        else:
            await interaction.followup.send(error_msg, ephemeral=True)
    except discord.HTTPException as e:
        logger.error(f"Failed to send error message: {e}")


async def shutdown(sig):
    """Cleanup tasks on shutdown.

    Args:
        sig: Signal received (SIGTERM or SIGINT).
    """
    logger.info(f"Received exit signal {sig.name}...")

    if refresher is not None:
        refresher.stop()

    await bot.close()
    logger.info("Bot shutdown complete")


if __name__ == "__main__":
    token, cricket_config = load_configuration()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig, lambda s=sig: asyncio.create_task(shutdown(s))
        )

    try:
        loop.run_until_complete(bot.start(token))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    finally:
        logger.info("Bot stopped")
