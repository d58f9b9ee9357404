"""Error taxonomy for the cricket data layer."""


class CricketDataError(Exception):
    """Base class for cricket data failures."""


class TransportError(CricketDataError):
    """Network or HTTP failure at the fetcher boundary."""

    def __init__(
        self,
        endpoint: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.endpoint = endpoint
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            message = f"HTTP {status_code} from {endpoint}"
        else:
            message = f"Request to {endpoint} failed: {cause}"
        super().__init__(message)


class NormalizationError(CricketDataError):
    """Vendor payload is not shaped like an object at the top level."""


class DetailFetchError(CricketDataError):
    """Fetching or normalizing a single match's detail failed."""

    def __init__(self, match_id: str, cause: Exception | None = None):
        self.match_id = match_id
        self.cause = cause
        super().__init__(f"Could not fetch details for match {match_id}: {cause}")
