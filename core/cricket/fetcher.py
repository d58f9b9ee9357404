"""HTTP client for the cricket data vendor."""

import logging
from typing import Any

import aiohttp

from config.constants import REQUEST_TIMEOUT
from config.settings import CricketConfig
from core.cricket.errors import TransportError

logger = logging.getLogger(__name__)


class Fetcher:
    """Issues authenticated GET requests against the vendor API.

    No retries happen here; callers decide on a retry policy.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        auth_params: dict[str, str] | None = None,
        timeout: float = REQUEST_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize the fetcher.

        Args:
            base_url: Vendor base URL (e.g., "https://api.example.com").
            headers: Headers sent with every request, including auth.
            auth_params: Query parameters sent with every request, for
                vendors that take the key in the query string.
            timeout: Total request timeout in seconds.
            session: Shared session to use. When omitted, a short-lived
                session is opened per request.
        """
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self.auth_params = dict(auth_params or {})
        self.timeout = timeout
        self._session = session

    def build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def fetch(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> Any:
        """GET an endpoint and return its parsed JSON body.

        Args:
            endpoint: Path relative to the base URL (e.g., "/matches/live").
            params: Extra query parameters, URL-encoded by aiohttp.

        Returns:
            Parsed JSON body.

        Raises:
            TransportError: On a non-2xx status, a network failure or an
                undecodable body.
        """
        url = self.build_url(endpoint)
        query = {**self.auth_params, **(params or {})}
        logger.debug(f"Fetching {url}", extra={"endpoint": endpoint})

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            if self._session is not None:
                return await self._get(
                    self._session, url, endpoint, query, timeout
                )

            async with aiohttp.ClientSession(timeout=timeout) as session:
                return await self._get(session, url, endpoint, query, timeout)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.error(
                f"Request to {endpoint} failed: {e}",
                extra={"endpoint": endpoint},
            )
            raise TransportError(endpoint, cause=e) from e

    async def _get(
        self,
        session: aiohttp.ClientSession,
        url: str,
        endpoint: str,
        query: dict[str, str],
        timeout: aiohttp.ClientTimeout,
    ) -> Any:
        async with session.get(
            url, headers=self.headers, params=query, timeout=timeout
        ) as response:
            if not 200 <= response.status < 300:
                logger.error(
                    f"HTTP {response.status} from {endpoint}",
                    extra={"endpoint": endpoint},
                )
                raise TransportError(endpoint, status_code=response.status)
            return await response.json(content_type=None)


def build_fetcher(
    config: CricketConfig, session: aiohttp.ClientSession | None = None
) -> Fetcher:
    """Build a Fetcher from a CricketConfig.

    Args:
        config: Loaded CricketConfig.
        session: Optional shared aiohttp session.

    Returns:
        Fetcher with the vendor's auth style applied.
    """
    if config.auth_style == "query":
        return Fetcher(
            config.base_url,
            auth_params={"apikey": config.api_key},
            session=session,
        )

    return Fetcher(
        config.base_url,
        headers={
            "X-RapidAPI-Key": config.api_key,
            "X-RapidAPI-Host": config.api_host,
        },
        session=session,
    )
