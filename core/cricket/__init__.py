"""Cricket module - Handles match data fetching, normalization and refresh.

This module provides a clean API for cricket match information:
- Fetching from the vendor API (nested or flat response shapes)
- Normalizing vendor JSON into immutable Match / MatchDetail records
- Refreshing live, upcoming and past lists on an interval
- Formatting messages for Discord
"""

from core.cricket.errors import (
    CricketDataError,
    DetailFetchError,
    NormalizationError,
    TransportError,
)
from core.cricket.fetcher import Fetcher, build_fetcher
from core.cricket.models import (
    Category,
    Match,
    MatchDetail,
    MatchStatus,
    RefreshState,
    SourceShape,
    TeamRef,
)
from core.cricket.normalizer import (
    normalize_match,
    normalize_match_detail,
    normalize_payload,
)
from core.cricket.refresh import RefreshScheduler
from core.cricket.repository import MatchRepository

__all__ = [
    # Records
    "Category",
    "Match",
    "MatchDetail",
    "MatchStatus",
    "RefreshState",
    "SourceShape",
    "TeamRef",
    # Errors
    "CricketDataError",
    "DetailFetchError",
    "NormalizationError",
    "TransportError",
    # Components
    "Fetcher",
    "build_fetcher",
    "MatchRepository",
    "RefreshScheduler",
    "normalize_match",
    "normalize_match_detail",
    "normalize_payload",
]
