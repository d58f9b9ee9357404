"""Vendor payload normalization.

Each known vendor shape gets its own field table and payload walker. Both
converge on the same Match / MatchDetail records, and every vendor read goes
through ``dig`` so that a missing segment falls back to a default instead of
raising.
"""

import logging
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from config.constants import (
    DEFAULT_BATSMAN,
    DEFAULT_BOWLER,
    DEFAULT_TEAM1,
    DEFAULT_TEAM2,
    TBA,
    TIMEZONE,
    UNKNOWN,
    UNKNOWN_ID,
)
from core.cricket.errors import NormalizationError
from core.cricket.models import (
    Batsman,
    Bowler,
    FallOfWicket,
    Innings,
    Match,
    MatchDetail,
    MatchResult,
    MatchStatus,
    Partnership,
    PowerPlay,
    Score,
    Series,
    SourceShape,
    TeamRef,
    TopPerformers,
)
from core.utils.date_parser import (
    format_to_hh_mm,
    format_to_iso_date,
    parse_vendor_datetime,
)

logger = logging.getLogger(__name__)

# A field is read from one path, or from the first present of several.
Path = tuple[str | int, ...]
FieldTable = dict[str, Path | list[Path]]


def dig(data: Any, *path: str | int, default: Any = None) -> Any:
    """Walk nested dicts and lists, returning default on any missing segment.

    String segments index dicts, integer segments index lists (negative
    indices allowed). A None value counts as missing.

    Example:
        >>> dig({"teams": [{"name": "A"}]}, "teams", 0, "name")
        'A'
        >>> dig({"teams": []}, "teams", 0, "name", default="Team 1")
        'Team 1'
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not (
                -len(current) <= key < len(current)
            ):
                return default
        elif not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return default if current is None else current


def _pluck(raw: dict, table: FieldTable) -> dict[str, Any]:
    fields = {}
    for name, paths in table.items():
        if isinstance(paths, tuple):
            paths = [paths]
        fields[name] = next(
            (v for v in (dig(raw, *p) for p in paths) if v is not None), None
        )
    return fields


def _text(value: Any, default: str | None) -> str | None:
    if value is None or isinstance(value, (dict, list, bool)):
        return default
    text = str(value).strip()
    return text or default


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _dicts(value: Any, what: str) -> Iterator[dict]:
    """Yield the dict entries of a vendor list, skipping anything else."""
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return
    for item in value:
        if isinstance(item, dict):
            yield item
        else:
            logger.warning(f"Skipping malformed {what} entry: {item!r}")


def overs_to_balls(overs: float) -> int:
    """Convert cricket over notation (15.2 = 15 overs, 2 balls) to balls."""
    whole = int(overs)
    return whole * 6 + round((overs - whole) * 10)


def run_rate(runs: int, overs: float) -> float:
    balls = overs_to_balls(overs)
    return round(runs * 6 / balls, 2) if balls else 0.0


def strike_rate(runs: int, balls: int) -> float:
    return round(runs * 100 / balls, 2) if balls else 0.0


def _schedule(
    start: Any, start_time: Any = None, timezone: str = TIMEZONE
) -> tuple[str, str]:
    """Return canonical (date, time) strings, "TBA" where unknown."""
    dt = parse_vendor_datetime(start, timezone)
    if dt is None:
        date, time = TBA, TBA
    else:
        date, time = format_to_iso_date(dt), format_to_hh_mm(dt)
    return date, _text(start_time, None) or time


# Nested tree: typeMatches -> seriesMatches -> matchDetails
_NESTED_MATCH: FieldTable = {
    "id": ("matchId",),
    "team1_name": ("team1", "teamName"),
    "team1_short": ("team1", "teamSName"),
    "team1_logo": ("team1", "imageId"),
    "team2_name": ("team2", "teamName"),
    "team2_short": ("team2", "teamSName"),
    "team2_logo": ("team2", "imageId"),
    "match_type": ("matchFormat",),
    "venue": [("venue", "name"), ("venueInfo", "ground")],
    "series_name": ("seriesName",),
    "series_season": ("season",),
    # The last team score is the innings in progress
    "runs": ("matchScoreDetails", "teamScores", -1, "runs"),
    "wickets": ("matchScoreDetails", "teamScores", -1, "wickets"),
    "overs": ("matchScoreDetails", "teamScores", -1, "overs"),
    "start": ("startDate",),
    "start_time": ("startTime",),
    "winner": ("matchResult", "winningTeam"),
    "margin": ("matchResult", "description"),
}

_NESTED_DETAIL: FieldTable = {
    "id": ("matchId",),
    "batting_team": ("battingTeam", "teamName"),
    "bowling_team": ("bowlingTeam", "teamName"),
    "runs": ("battingTeam", "teamScore"),
    "wickets": ("battingTeam", "teamWkts"),
    "overs": ("overs",),
    "run_rate": ("currentRunRate",),
    "fall_of_wickets": ("fallOfWickets",),
    "batsmen": ("batsmen",),
    "bowlers": ("bowlers",),
    "partnerships": ("partnerShip",),
    "power_play": ("ppData", "pp_1"),
}

_NESTED_ITEMS = {
    "batsman": {
        "name": "name",
        "runs": "runs",
        "balls": "balls",
        "fours": "fours",
        "sixes": "sixes",
        "strike_rate": "strikeRate",
    },
    "bowler": {
        "name": "name",
        "overs": "overs",
        "maidens": "maidens",
        "runs": "runs",
        "wickets": "wickets",
        "economy": "economy",
    },
    "wicket": {
        "batsman": "batName",
        "runs": "wktRuns",
        "wicket": "wktNbr",
        "overs": "wktOver",
    },
    "partnership": {"runs": "runs", "balls": "balls", "batsmen": "batsmen"},
    "power_play": {
        "name": "ppType",
        "from_over": "ppOversFrom",
        "to_over": "ppOversTo",
        "runs": "runsScored",
    },
}

# Flat array: matches[] with teams[0] / teams[1]
_FLAT_MATCH: FieldTable = {
    "id": ("match_id",),
    "team1_name": ("teams", 0, "name"),
    "team1_short": ("teams", 0, "short_name"),
    "team1_logo": ("teams", 0, "logo"),
    "team2_name": ("teams", 1, "name"),
    "team2_short": ("teams", 1, "short_name"),
    "team2_logo": ("teams", 1, "logo"),
    "match_type": ("format_str",),
    "venue": [("venue", "name"), ("venue",)],
    "series_name": ("series", "name"),
    "series_season": ("series", "season"),
    "runs": ("live_score", "runs"),
    "wickets": ("live_score", "wickets"),
    "overs": ("live_score", "overs"),
    "start": [("start_time",), ("date",)],
    "winner": [("result", "winner"), ("winner",)],
    "margin": [("result", "margin"), ("result",)],
}

_FLAT_DETAIL: FieldTable = {
    "id": ("match_id",),
    "batting_team": ("innings", "batting_team", "name"),
    "bowling_team": ("innings", "bowling_team", "name"),
    "runs": ("innings", "score", "runs"),
    "wickets": ("innings", "score", "wickets"),
    "overs": ("innings", "score", "overs"),
    "run_rate": ("innings", "run_rate"),
    "fall_of_wickets": ("innings", "fall_of_wickets"),
    "batsmen": ("batsmen",),
    "bowlers": ("bowlers",),
    "partnerships": ("partnerships",),
    "power_play": ("power_play",),
}

_FLAT_ITEMS = {
    "batsman": {
        "name": "name",
        "runs": "runs",
        "balls": "balls",
        "fours": "fours",
        "sixes": "sixes",
        "strike_rate": "strike_rate",
    },
    "bowler": {
        "name": "name",
        "overs": "overs",
        "maidens": "maidens",
        "runs": "runs",
        "wickets": "wickets",
        "economy": "economy",
    },
    "wicket": {
        "batsman": "player",
        "runs": "runs",
        "wicket": "wicket",
        "overs": "over",
    },
    "partnership": {"runs": "runs", "balls": "balls", "batsmen": "batsmen"},
    "power_play": {
        "name": "name",
        "from_over": "from_over",
        "to_over": "to_over",
        "runs": "runs",
    },
}


def _series_of(container: dict) -> Series | None:
    name = dig(container, "seriesName") or dig(
        container, "seriesAdWrapper", "seriesName"
    )
    season = dig(container, "season")
    if name is None and season is None:
        return None
    return Series(name=_text(name, UNKNOWN), season=_text(season, UNKNOWN))


def _walk_nested(payload: dict) -> Iterator[tuple[dict, Series | None]]:
    for type_match in _dicts(dig(payload, "typeMatches"), "typeMatches"):
        for series_match in _dicts(
            dig(type_match, "seriesMatches"), "seriesMatches"
        ):
            series = _series_of(series_match)
            for raw in _dicts(dig(series_match, "matchDetails"), "match"):
                yield raw, series


def _walk_flat(payload: dict) -> Iterator[tuple[dict, Series | None]]:
    for raw in _dicts(dig(payload, "matches"), "match"):
        yield raw, None


@dataclass(frozen=True)
class _ShapeAdapter:
    match_fields: FieldTable
    detail_fields: FieldTable
    items: dict[str, dict[str, str]]
    walk: Callable[[dict], Iterator[tuple[dict, Series | None]]]


_ADAPTERS = {
    SourceShape.NESTED: _ShapeAdapter(
        _NESTED_MATCH, _NESTED_DETAIL, _NESTED_ITEMS, _walk_nested
    ),
    SourceShape.FLAT: _ShapeAdapter(
        _FLAT_MATCH, _FLAT_DETAIL, _FLAT_ITEMS, _walk_flat
    ),
}


def _team(fields: dict, prefix: str, default: str) -> TeamRef:
    return TeamRef(
        name=_text(fields[f"{prefix}_name"], default),
        short_name=_text(fields[f"{prefix}_short"], None),
        logo=_text(fields[f"{prefix}_logo"], None),
    )


def normalize_match(
    raw: Any,
    status: MatchStatus | str,
    shape: SourceShape | str = SourceShape.NESTED,
    series: Series | None = None,
    timezone: str = TIMEZONE,
) -> Match:
    """Normalize one vendor match object.

    Args:
        raw: Vendor match object.
        status: Status of the category the match was fetched from. Only the
            payload for this status is filled in.
        shape: Vendor shape the object follows.
        series: Series of the enclosing container, used when the match
            object carries none of its own.
        timezone: Timezone for canonical date strings.

    Returns:
        Fully populated Match with defaults substituted.

    Raises:
        NormalizationError: If raw is not an object.
    """
    if not isinstance(raw, dict):
        raise NormalizationError(
            f"Expected a match object, got {type(raw).__name__}"
        )

    status = MatchStatus(status)
    fields = _pluck(raw, _ADAPTERS[SourceShape(shape)].match_fields)

    own_series = _series_of(
        {"seriesName": fields["series_name"], "season": fields["series_season"]}
    )

    kwargs: dict[str, Any] = {
        "id": _text(fields["id"], UNKNOWN_ID),
        "team1": _team(fields, "team1", DEFAULT_TEAM1),
        "team2": _team(fields, "team2", DEFAULT_TEAM2),
        "status": status,
        "match_type": _text(fields["match_type"], UNKNOWN),
        "venue": _text(fields["venue"], UNKNOWN),
        "series": own_series or series,
    }

    if status is MatchStatus.LIVE:
        kwargs["current_score"] = Score(
            runs=_int(fields["runs"]),
            wickets=_int(fields["wickets"]),
            overs=_float(fields["overs"]),
        )
    elif status is MatchStatus.UPCOMING:
        date, time = _schedule(
            fields["start"], fields.get("start_time"), timezone
        )
        kwargs["scheduled_date"] = date
        kwargs["scheduled_time"] = time
    else:
        kwargs["result"] = MatchResult(
            winner=_text(fields["winner"], UNKNOWN),
            margin=_text(fields["margin"], None),
        )
        kwargs["date"] = _schedule(fields["start"], None, timezone)[0]

    return Match(**kwargs)


def normalize_payload(
    payload: Any,
    status: MatchStatus | str,
    shape: SourceShape | str = SourceShape.NESTED,
    timezone: str = TIMEZONE,
) -> list[Match]:
    """Normalize a whole category response.

    Args:
        payload: Parsed JSON body of a category endpoint.
        status: Status of the category.
        shape: Vendor shape of the body.
        timezone: Timezone for canonical date strings.

    Returns:
        List of matches in vendor order; empty if the body holds none.

    Raises:
        NormalizationError: If payload is not an object.
    """
    if not isinstance(payload, dict):
        raise NormalizationError(
            f"Expected a response object, got {type(payload).__name__}"
        )

    adapter = _ADAPTERS[SourceShape(shape)]
    return [
        normalize_match(raw, status, shape, series=series, timezone=timezone)
        for raw, series in adapter.walk(payload)
    ]


def _remap(item: dict, keys: dict[str, str]) -> dict[str, Any]:
    return {name: dig(item, vendor_key) for name, vendor_key in keys.items()}


def _batsman(item: dict, keys: dict[str, str]) -> Batsman:
    f = _remap(item, keys)
    runs, balls = _int(f["runs"]), _int(f["balls"])
    return Batsman(
        name=_text(f["name"], DEFAULT_BATSMAN),
        runs=runs,
        balls=balls,
        fours=_int(f["fours"]),
        sixes=_int(f["sixes"]),
        strike_rate=_float(f["strike_rate"], strike_rate(runs, balls)),
    )


def _bowler(item: dict, keys: dict[str, str]) -> Bowler:
    f = _remap(item, keys)
    overs, runs = _float(f["overs"]), _int(f["runs"])
    return Bowler(
        name=_text(f["name"], DEFAULT_BOWLER),
        overs=overs,
        maidens=_int(f["maidens"]),
        runs=runs,
        wickets=_int(f["wickets"]),
        economy=_float(f["economy"], run_rate(runs, overs)),
    )


def _fall_of_wicket(item: dict, keys: dict[str, str]) -> FallOfWicket:
    f = _remap(item, keys)
    return FallOfWicket(
        batsman=_text(f["batsman"], UNKNOWN),
        runs=_int(f["runs"]),
        wicket=_int(f["wicket"]),
        overs=_float(f["overs"]),
    )


def _partnership(item: dict, keys: dict[str, str]) -> Partnership:
    f = _remap(item, keys)
    batsmen = f["batsmen"] if isinstance(f["batsmen"], list) else []
    names = []
    for entry in batsmen:
        if isinstance(entry, dict):
            entry = dig(entry, "name")
        name = _text(entry, None)
        if name:
            names.append(name)
    return Partnership(
        runs=_int(f["runs"]), balls=_int(f["balls"]), batsmen=tuple(names)
    )


def _power_play(item: dict, keys: dict[str, str]) -> PowerPlay:
    f = _remap(item, keys)
    return PowerPlay(
        name=_text(f["name"], UNKNOWN),
        from_over=_float(f["from_over"]),
        to_over=_float(f["to_over"]),
        runs=_int(f["runs"]),
    )


def top_batsmen(batsmen: list[Batsman]) -> tuple[Batsman, ...]:
    return tuple(sorted(batsmen, key=lambda b: -b.runs))


def top_bowlers(bowlers: list[Bowler]) -> tuple[Bowler, ...]:
    return tuple(sorted(bowlers, key=lambda b: (-b.wickets, b.economy)))


def normalize_match_detail(
    raw: Any,
    shape: SourceShape | str = SourceShape.NESTED,
    match_id: str | None = None,
) -> MatchDetail:
    """Normalize a single match's detail response.

    Args:
        raw: Parsed JSON body of the detail endpoint.
        shape: Vendor shape of the body.
        match_id: Id the detail was requested for, used when the body does
            not carry one.

    Returns:
        MatchDetail with defaults substituted and derived rates filled in.

    Raises:
        NormalizationError: If raw is not an object.
    """
    if not isinstance(raw, dict):
        raise NormalizationError(
            f"Expected a detail object, got {type(raw).__name__}"
        )

    adapter = _ADAPTERS[SourceShape(shape)]
    fields = _pluck(raw, adapter.detail_fields)
    items = adapter.items

    score = Score(
        runs=_int(fields["runs"]),
        wickets=_int(fields["wickets"]),
        overs=_float(fields["overs"]),
    )
    innings = Innings(
        batting_team=_text(fields["batting_team"], UNKNOWN),
        bowling_team=_text(fields["bowling_team"], UNKNOWN),
        current_score=score,
        fall_of_wickets=tuple(
            _fall_of_wicket(item, items["wicket"])
            for item in _dicts(fields["fall_of_wickets"], "fall of wicket")
        ),
        run_rate=_float(fields["run_rate"], run_rate(score.runs, score.overs)),
    )

    batsmen = [
        _batsman(item, items["batsman"])
        for item in _dicts(fields["batsmen"], "batsman")
    ]
    bowlers = [
        _bowler(item, items["bowler"])
        for item in _dicts(fields["bowlers"], "bowler")
    ]

    partnerships = None
    if fields["partnerships"] is not None:
        partnerships = tuple(
            _partnership(item, items["partnership"])
            for item in _dicts(fields["partnerships"], "partnership")
        )

    power_play = None
    if isinstance(fields["power_play"], dict):
        power_play = _power_play(fields["power_play"], items["power_play"])

    return MatchDetail(
        id=_text(fields["id"], None) or _text(match_id, UNKNOWN_ID),
        current_innings=innings,
        top_performers=TopPerformers(
            batsmen=top_batsmen(batsmen), bowlers=top_bowlers(bowlers)
        ),
        partnerships=partnerships,
        power_play=power_play,
    )
