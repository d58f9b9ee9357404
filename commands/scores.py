"""Discord slash commands for cricket scores."""

import logging

import discord

from commands.decorators import async_command
from config.constants import (
    ERROR_DETAILS,
    ERROR_DETAILS_NOT_LIVE,
    ERROR_REFRESH,
    ERROR_SCORES,
    REFRESH_DONE,
    REFRESH_IN_PROGRESS,
)
from core.cricket.errors import DetailFetchError
from core.cricket.formatter import (
    format_category_message,
    format_detail_message,
)
from core.cricket.models import Category, MatchStatus
from core.cricket.refresh import RefreshScheduler

logger = logging.getLogger(__name__)


async def _send_category(
    interaction: discord.Interaction,
    refresher: RefreshScheduler,
    category: Category,
) -> None:
    message = format_category_message(refresher.state, category)
    await interaction.followup.send(message)


@async_command(error_message=ERROR_SCORES)
async def live_command(
    interaction: discord.Interaction, refresher: RefreshScheduler
) -> None:
    """Handle /live slash command.

    Args:
        interaction: Discord interaction from slash command.
        refresher: Running refresh scheduler.
    """
    await _send_category(interaction, refresher, Category.LIVE)


@async_command(error_message=ERROR_SCORES)
async def upcoming_command(
    interaction: discord.Interaction, refresher: RefreshScheduler
) -> None:
    """Handle /upcoming slash command."""
    await _send_category(interaction, refresher, Category.UPCOMING)


@async_command(error_message=ERROR_SCORES)
async def results_command(
    interaction: discord.Interaction, refresher: RefreshScheduler
) -> None:
    """Handle /results slash command."""
    await _send_category(interaction, refresher, Category.PAST)


@async_command(error_message=ERROR_REFRESH)
async def refresh_command(
    interaction: discord.Interaction, refresher: RefreshScheduler
) -> None:
    """Handle /refresh slash command.

    Requests made while a refresh is running are coalesced into it.

    Args:
        interaction: Discord interaction from slash command.
        refresher: Running refresh scheduler.
    """
    if refresher.refreshing:
        await interaction.followup.send(REFRESH_IN_PROGRESS)
        return

    task = refresher.refresh_now()
    if task is not None:
        await task

    state = refresher.state
    if state.error:
        await interaction.followup.send(f"⚠️ {state.error}")
        return

    await interaction.followup.send(
        REFRESH_DONE.format(
            live=len(state.live),
            upcoming=len(state.upcoming),
            past=len(state.past),
        )
    )


@async_command(error_message=ERROR_DETAILS)
async def details_command(
    interaction: discord.Interaction,
    refresher: RefreshScheduler,
    match_id: str,
) -> None:
    """Handle /details slash command.

    Details are only fetched for matches in the current live list.

    Args:
        interaction: Discord interaction from slash command.
        refresher: Running refresh scheduler.
        match_id: Id of a live match, as shown by /live.
    """
    match = refresher.state.find(match_id.strip())
    if match is None or match.status is not MatchStatus.LIVE:
        await interaction.followup.send(ERROR_DETAILS_NOT_LIVE)
        return

    logger.info(
        f"Fetching details for match {match.id} for user {interaction.user}",
        extra={"match_id": match.id},
    )
    try:
        detail = await refresher.fetch_detail(match.id)
    except DetailFetchError as e:
        logger.warning(f"Details unavailable: {e}")
        await interaction.followup.send(ERROR_DETAILS)
        return

    await interaction.followup.send(format_detail_message(match, detail))
