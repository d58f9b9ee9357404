"""Immutable constants for the cricket scores bot."""

# Vendor defaults
DEFAULT_BASE_URL = "https://cricbuzz-cricket.p.rapidapi.com"
DEFAULT_SHAPE = "nested"
DEFAULT_AUTH_STYLE = "header"
AUTH_STYLES = ("header", "query")

# Category endpoints per vendor shape ("{match_id}" is filled in for details)
VENDOR_ENDPOINTS = {
    "nested": {
        "live": "/matches/v1/live",
        "upcoming": "/matches/v1/upcoming",
        "past": "/matches/v1/recent",
        "detail": "/matches/v1/{match_id}/commentary",
    },
    "flat": {
        "live": "/matches/live",
        "upcoming": "/matches/upcoming",
        "past": "/matches/completed",
        "detail": "/matches/{match_id}",
    },
}

# Timezone used for canonical dates
TIMEZONE = "UTC"

# Refresh cycle
REFRESH_INTERVAL_SECONDS = 60
REFRESH_JOB_ID = "cricket_refresh"
REQUEST_TIMEOUT = 15.0

# Placeholders substituted for missing vendor fields
UNKNOWN = "Unknown"
UNKNOWN_ID = "unknown"
TBA = "TBA"
DEFAULT_TEAM1 = "Team 1"
DEFAULT_TEAM2 = "Team 2"
DEFAULT_BATSMAN = "Batsman"
DEFAULT_BOWLER = "Bowler"

# Error messages
ERROR_ALL_CATEGORIES_FAILED = (
    "Failed to fetch matches. Please check your API configuration."
)
ERROR_REFRESH_FAILED = "Match refresh failed unexpectedly."
ERROR_SCORES = "❌ Error fetching match scores."
ERROR_DETAILS = "❌ Error fetching match details."
ERROR_DETAILS_NOT_LIVE = (
    "❌ Details are only available for live matches. "
    "Use `/live` to see match ids."
)
ERROR_REFRESH = "❌ Error refreshing matches."
ERROR_NOT_READY = "⏳ Scores are not available yet, try again in a moment."

# Status messages
REFRESH_IN_PROGRESS = "🔄 A refresh is already in progress."
REFRESH_DONE = (
    "✅ Matches refreshed: {live} live, {upcoming} upcoming, {past} results."
)
LOADING_MATCHES = "🔄 Loading {category} matches..."
NO_MATCHES = "No {category} matches available"

# Discord message hard limit
DISCORD_MESSAGE_LIMIT = 2000
