"""Decorators for Discord command handlers."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import discord

from config.constants import ERROR_NOT_READY

logger = logging.getLogger(__name__)


def async_command(*, error_message: str):
    """Decorator for async Discord command handlers.

    Handles common patterns:
    - Replying when the refresh scheduler is not running yet
    - Error handling and logging
    - Sending error responses

    Args:
        error_message: Error message to send if command fails.

    Example:
        @async_command(error_message="Failed to fetch data")
        async def my_command(interaction, refresher) -> None:
            result = await some_async_operation()
            await interaction.followup.send(result)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(
            interaction: discord.Interaction,
            refresher: Any,
            *args: Any,
            **kwargs: Any,
        ) -> None:
            if refresher is None or not refresher.running:
                logger.info(f"{func.__name__} called before scores are ready")
                await interaction.followup.send(ERROR_NOT_READY)
                return

            try:
                await func(interaction, refresher, *args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error in {func.__name__}: {e}", exc_info=True
                )
                await interaction.followup.send(error_message)

        return wrapper

    return decorator
