"""Normalized match records.

Every record is a frozen snapshot produced by one fetch cycle. A new cycle
builds new records instead of patching existing ones.
"""

from dataclasses import dataclass, field
from enum import StrEnum


class MatchStatus(StrEnum):
    LIVE = "Live"
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"


class Category(StrEnum):
    """Match groupings fetched on every refresh cycle."""

    LIVE = "live"
    UPCOMING = "upcoming"
    PAST = "past"

    @property
    def status(self) -> MatchStatus:
        return _CATEGORY_STATUS[self]


_CATEGORY_STATUS = {
    Category.LIVE: MatchStatus.LIVE,
    Category.UPCOMING: MatchStatus.UPCOMING,
    Category.PAST: MatchStatus.COMPLETED,
}


class SourceShape(StrEnum):
    """Known vendor JSON layouts."""

    NESTED = "nested"
    FLAT = "flat"


@dataclass(frozen=True)
class TeamRef:
    name: str
    short_name: str | None = None
    logo: str | None = None


@dataclass(frozen=True)
class Series:
    name: str
    season: str


@dataclass(frozen=True)
class Score:
    runs: int = 0
    wickets: int = 0
    overs: float = 0.0


@dataclass(frozen=True)
class MatchResult:
    winner: str
    margin: str | None = None


@dataclass(frozen=True)
class Match:
    """One match in one category.

    Only the payload matching ``status`` is populated: ``current_score`` for
    live matches, ``scheduled_date``/``scheduled_time`` for upcoming ones and
    ``result``/``date`` for completed ones. The others stay None.
    """

    id: str
    team1: TeamRef
    team2: TeamRef
    status: MatchStatus
    match_type: str
    venue: str
    series: Series | None = None
    current_score: Score | None = None
    scheduled_date: str | None = None
    scheduled_time: str | None = None
    result: MatchResult | None = None
    date: str | None = None


@dataclass(frozen=True)
class FallOfWicket:
    batsman: str
    runs: int
    wicket: int
    overs: float


@dataclass(frozen=True)
class Innings:
    batting_team: str
    bowling_team: str
    current_score: Score
    fall_of_wickets: tuple[FallOfWicket, ...] = ()
    run_rate: float = 0.0


@dataclass(frozen=True)
class Batsman:
    name: str
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    strike_rate: float = 0.0


@dataclass(frozen=True)
class Bowler:
    name: str
    overs: float = 0.0
    maidens: int = 0
    runs: int = 0
    wickets: int = 0
    economy: float = 0.0


@dataclass(frozen=True)
class TopPerformers:
    batsmen: tuple[Batsman, ...] = ()
    bowlers: tuple[Bowler, ...] = ()


@dataclass(frozen=True)
class Partnership:
    runs: int = 0
    balls: int = 0
    batsmen: tuple[str, ...] = ()


@dataclass(frozen=True)
class PowerPlay:
    name: str
    from_over: float = 0.0
    to_over: float = 0.0
    runs: int = 0


@dataclass(frozen=True)
class MatchDetail:
    """On-demand detail for a live match; never cached."""

    id: str
    current_innings: Innings
    top_performers: TopPerformers
    partnerships: tuple[Partnership, ...] | None = None
    power_play: PowerPlay | None = None


@dataclass(frozen=True)
class RefreshState:
    """Result of one refresh cycle, replaced as a whole."""

    live: tuple[Match, ...] = ()
    upcoming: tuple[Match, ...] = ()
    past: tuple[Match, ...] = ()
    loading: bool = False
    error: str | None = None
    refreshed_at: str | None = field(default=None, compare=False)

    def matches(self, category: Category) -> tuple[Match, ...]:
        return getattr(self, category.value)

    def find(self, match_id: str) -> Match | None:
        """Look up a match by id across all categories."""
        for category in Category:
            for match in self.matches(category):
                if match.id == match_id:
                    return match
        return None
