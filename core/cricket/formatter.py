"""Match message formatters for Discord."""

import logging

from config.constants import (
    DISCORD_MESSAGE_LIMIT,
    LOADING_MATCHES,
    NO_MATCHES,
)
from core.cricket.models import (
    Category,
    Match,
    MatchDetail,
    MatchStatus,
    RefreshState,
    Score,
)

logger = logging.getLogger(__name__)

CATEGORY_TITLES = {
    Category.LIVE: "🔴 Live Matches",
    Category.UPCOMING: "📅 Upcoming Matches",
    Category.PAST: "🏆 Past Results",
}


def format_score(score: Score) -> str:
    """Format a score as runs/wickets (overs), e.g. "120/3 (15.2 ov)"."""
    return f"{score.runs}/{score.wickets} ({score.overs:g} ov)"


def format_match_line(match: Match) -> str:
    """Format one match as a single message line.

    Args:
        match: Normalized match.

    Returns:
        Line with teams, the status payload, match type and venue.
    """
    teams = f"**{match.team1.name}** vs **{match.team2.name}**"

    if match.status is MatchStatus.LIVE:
        details = [
            f"Score: {format_score(match.current_score)}",
            match.match_type,
            match.venue,
        ]
    elif match.status is MatchStatus.UPCOMING:
        details = [
            f"{match.scheduled_date} {match.scheduled_time}",
            match.match_type,
            match.venue,
        ]
    else:
        result = match.result.winner
        if match.result.margin:
            result = match.result.margin
        details = [f"Result: {result}", match.date, match.venue]

    line = f"`{match.id}` {teams} · " + " · ".join(details)
    if match.series is not None:
        line += f"\n  _{match.series.name}_"
    return line


def _truncate(message: str) -> str:
    if len(message) <= DISCORD_MESSAGE_LIMIT:
        return message
    logger.debug(f"Truncating message of {len(message)} characters")
    return message[: DISCORD_MESSAGE_LIMIT - 1] + "…"


def format_category_message(state: RefreshState, category: Category) -> str:
    """Render one category of the current refresh state.

    Shows a loading notice before the first refresh completes, the error
    banner when every category failed, and an empty notice when the
    category has no matches.

    Args:
        state: Current refresh state.
        category: Category to render.

    Returns:
        Formatted message.
    """
    matches = state.matches(category)

    if state.loading and state.refreshed_at is None:
        return LOADING_MATCHES.format(category=category.value)

    if state.error:
        return f"⚠️ {state.error}"

    if not matches:
        return NO_MATCHES.format(category=category.value)

    lines = [f"**{CATEGORY_TITLES[category]}**", ""]
    lines.extend(format_match_line(match) for match in matches)
    if state.refreshed_at:
        lines.append("")
        lines.append(f"_Updated {state.refreshed_at}_")
    return _truncate("\n".join(lines))


def format_detail_message(match: Match, detail: MatchDetail) -> str:
    """Render the expanded view of a live match.

    Args:
        match: The live match the detail belongs to.
        detail: Normalized match detail.

    Returns:
        Formatted message.
    """
    innings = detail.current_innings
    lines = [
        f"**{match.team1.name} vs {match.team2.name}** · {match.match_type}",
        f"🏏 {innings.batting_team} "
        f"{format_score(innings.current_score)} "
        f"· RR {innings.run_rate:.2f}",
        f"🎯 Bowling: {innings.bowling_team}",
        "",
        "**Batsmen**",
    ]

    batsmen = detail.top_performers.batsmen
    if batsmen:
        lines.extend(
            f"{b.name}: {b.runs} ({b.balls}) · 4s {b.fours} · 6s {b.sixes}"
            f" · SR {b.strike_rate:.2f}"
            for b in batsmen
        )
    else:
        lines.append("No batting data")

    lines.append("")
    lines.append("**Bowlers**")
    bowlers = detail.top_performers.bowlers
    if bowlers:
        lines.extend(
            f"{b.name}: {b.wickets}-{b.runs} ({b.overs:g} ov)"
            f" · Econ {b.economy:.2f}"
            for b in bowlers
        )
    else:
        lines.append("No bowling data")

    if innings.fall_of_wickets:
        wickets = ", ".join(
            f"{w.runs}-{w.wicket} ({w.batsman}, {w.overs:g} ov)"
            for w in innings.fall_of_wickets
        )
        lines.append("")
        lines.append(f"**Fall of wickets:** {wickets}")

    if detail.partnerships:
        current = detail.partnerships[-1]
        partnership = f"{current.runs} ({current.balls})"
        if current.batsmen:
            partnership += f" · {' & '.join(current.batsmen)}"
        lines.append(f"**Partnership:** {partnership}")

    if detail.power_play is not None:
        pp = detail.power_play
        lines.append(
            f"**Power play:** {pp.name} "
            f"({pp.from_over:g}-{pp.to_over:g} ov) · {pp.runs} runs"
        )

    return _truncate("\n".join(lines))
