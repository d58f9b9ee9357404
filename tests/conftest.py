"""Pytest configuration and shared fixtures."""

import pytest

from config.constants import VENDOR_ENDPOINTS
from core.cricket.errors import TransportError


class FakeFetcher:
    """Fetcher stand-in serving canned responses per endpoint.

    Responses that are exceptions are raised. Unknown endpoints raise a 404
    TransportError. When ``gate`` is set, every fetch waits on it first.
    """

    def __init__(self, responses=None, gate=None, fail_first=None):
        self.responses = responses or {}
        self.gate = gate
        self.fail_first = dict(fail_first or {})
        self.calls = []

    async def fetch(self, endpoint, params=None):
        self.calls.append(endpoint)
        if self.gate is not None:
            await self.gate.wait()

        if self.fail_first.get(endpoint, 0) > 0:
            self.fail_first[endpoint] -= 1
            raise TransportError(endpoint, status_code=503)

        response = self.responses.get(endpoint)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise TransportError(endpoint, status_code=404)
        return response


@pytest.fixture
def make_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture
def nested_endpoints():
    return VENDOR_ENDPOINTS["nested"]


@pytest.fixture
def flat_endpoints():
    return VENDOR_ENDPOINTS["flat"]


@pytest.fixture
def nested_live_payload():
    """Live category response in the nested tree shape."""
    return {
        "typeMatches": [
            {
                "matchType": "International",
                "seriesMatches": [
                    {
                        "seriesName": "India tour of Australia",
                        "season": "2025-26",
                        "matchDetails": [
                            {
                                "matchId": 101,
                                "team1": {
                                    "teamName": "India",
                                    "teamSName": "IND",
                                    "imageId": 719,
                                },
                                "team2": {
                                    "teamName": "Australia",
                                    "teamSName": "AUS",
                                },
                                "matchFormat": "ODI",
                                "venue": {"name": "MCG"},
                                "matchScoreDetails": {
                                    "teamScores": [
                                        {
                                            "runs": 250,
                                            "wickets": 10,
                                            "overs": 49.3,
                                        },
                                        {
                                            "runs": 87,
                                            "wickets": 2,
                                            "overs": 15.4,
                                        },
                                    ]
                                },
                            }
                        ],
                    },
                    {"seriesAdWrapper": {"seriesName": "Sponsored"}},
                ],
            }
        ]
    }


@pytest.fixture
def nested_upcoming_payload():
    return {
        "typeMatches": [
            {
                "seriesMatches": [
                    {
                        "seriesName": "Big Bash League",
                        "matchDetails": [
                            {
                                "matchId": "202",
                                "team1": {"teamName": "Sixers"},
                                "team2": {"teamName": "Stars"},
                                "matchFormat": "T20",
                                "venue": {"name": "SCG"},
                                "startDate": "1732557600000",
                            }
                        ],
                    }
                ]
            }
        ]
    }


@pytest.fixture
def nested_past_payload():
    return {
        "typeMatches": [
            {
                "seriesMatches": [
                    {
                        "seriesName": "County Championship",
                        "matchDetails": [
                            {
                                "matchId": 303,
                                "team1": {"teamName": "Surrey"},
                                "team2": {"teamName": "Kent"},
                                "matchFormat": "TEST",
                                "startDate": 1732557600000,
                                "matchResult": {
                                    "winningTeam": "Surrey",
                                    "description": "Surrey won by 5 wkts",
                                },
                            }
                        ],
                    }
                ]
            }
        ]
    }


@pytest.fixture
def flat_live_payload():
    """Live category response in the flat array shape."""
    return {
        "matches": [
            {
                "match_id": "7",
                "teams": [{"name": "A"}, {"name": "B"}],
                "format_str": "T20",
                "venue": {"name": "Oval"},
                "live_score": {"runs": 120, "wickets": 3, "overs": 15.2},
            }
        ]
    }


@pytest.fixture
def nested_detail_payload():
    return {
        "matchId": 101,
        "battingTeam": {
            "teamName": "Australia",
            "teamScore": 87,
            "teamWkts": 2,
        },
        "bowlingTeam": {"teamName": "India"},
        "overs": 15.4,
        "batsmen": [
            {"name": "Head", "runs": 12, "balls": 10},
            {"name": "Smith", "runs": 45, "balls": 50, "fours": 5},
        ],
        "bowlers": [
            {"name": "Bumrah", "overs": 4, "runs": 20, "wickets": 1},
            {"name": "Siraj", "overs": 4, "runs": 16, "wickets": 1},
            {"name": "Jadeja", "overs": 3, "runs": 30, "wickets": 0},
        ],
        "fallOfWickets": [
            {"batName": "Warner", "wktRuns": 10, "wktNbr": 1, "wktOver": 2.1},
        ],
        "partnerShip": {"runs": 40, "balls": 38},
        "ppData": {
            "pp_1": {
                "ppType": "mandatory",
                "ppOversFrom": 0.1,
                "ppOversTo": 10,
                "runsScored": 55,
            }
        },
    }
