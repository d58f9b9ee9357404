"""Match repository - categorized fetch-and-normalize operations."""

import asyncio
import logging

import pendulum

from config.constants import (
    ERROR_ALL_CATEGORIES_FAILED,
    TIMEZONE,
    VENDOR_ENDPOINTS,
)
from core.cricket.errors import (
    DetailFetchError,
    NormalizationError,
    TransportError,
)
from core.cricket.fetcher import Fetcher
from core.cricket.models import (
    Category,
    Match,
    MatchDetail,
    RefreshState,
    SourceShape,
)
from core.cricket.normalizer import normalize_match_detail, normalize_payload
from core.retry import retry_on_failure

logger = logging.getLogger(__name__)


class MatchRepository:
    """Fetches and normalizes the live, upcoming and past match lists.

    Nothing is cached: every refresh is a full re-fetch, since live scores
    change continuously.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        shape: SourceShape | str = SourceShape.NESTED,
        endpoints: dict[str, str] | None = None,
        retry_attempts: int = 1,
        retry_delay: float = 1.0,
        timezone: str = TIMEZONE,
    ):
        """Initialize the repository.

        Args:
            fetcher: Fetcher bound to the vendor API.
            shape: Vendor shape the responses follow.
            endpoints: Category and detail paths. Defaults to the known
                paths for the shape.
            retry_attempts: Attempts per request on TransportError
                (1 means no retry).
            retry_delay: Initial backoff between attempts, in seconds.
            timezone: Timezone for canonical date strings.
        """
        self.shape = SourceShape(shape)
        self.endpoints = endpoints or VENDOR_ENDPOINTS[self.shape.value]
        self.timezone = timezone
        self._fetch = retry_on_failure(
            max_attempts=retry_attempts,
            delay=retry_delay,
            exceptions=(TransportError,),
        )(fetcher.fetch)

    async def fetch_category(self, category: Category) -> list[Match]:
        """Fetch and normalize one category.

        Raises:
            TransportError: If the request fails.
            NormalizationError: If the response is not an object.
        """
        payload = await self._fetch(self.endpoints[category.value])
        matches = normalize_payload(
            payload, category.status, self.shape, timezone=self.timezone
        )
        logger.info(
            f"Fetched {len(matches)} {category} matches",
            extra={"category": category.value},
        )
        return matches

    async def _fetch_category_safely(
        self, category: Category
    ) -> list[Match] | None:
        try:
            return await self.fetch_category(category)
        except (TransportError, NormalizationError) as e:
            logger.warning(
                f"Failed to fetch {category} matches: {e}",
                extra={"category": category.value},
            )
            return None
        except Exception as e:
            logger.error(
                f"Unexpected error fetching {category} matches: {e}",
                exc_info=True,
                extra={"category": category.value},
            )
            return None

    async def refresh_all(self) -> RefreshState:
        """Fetch all three categories concurrently.

        A failing category degrades to an empty list. Only when every
        category fails does the state carry an error.

        Returns:
            RefreshState replacing all three lists at once.
        """
        categories = list(Category)
        results = await asyncio.gather(
            *(self._fetch_category_safely(c) for c in categories)
        )
        lists = {
            category.value: tuple(result or ())
            for category, result in zip(categories, results)
        }

        error = None
        if all(result is None for result in results):
            logger.error("All match categories failed to load")
            error = ERROR_ALL_CATEGORIES_FAILED

        return RefreshState(
            **lists,
            loading=False,
            error=error,
            refreshed_at=pendulum.now(self.timezone).to_iso8601_string(),
        )

    async def fetch_detail(self, match_id: str) -> MatchDetail:
        """Fetch the detail view of a live match.

        Only valid for matches currently in the live list; callers must not
        request details for upcoming or completed matches.

        Args:
            match_id: Id of a live match.

        Returns:
            Normalized MatchDetail.

        Raises:
            DetailFetchError: If the request or normalization fails.
        """
        endpoint = self.endpoints["detail"].format(match_id=match_id)
        try:
            payload = await self._fetch(endpoint)
            return normalize_match_detail(payload, self.shape, match_id)
        except (TransportError, NormalizationError) as e:
            logger.warning(
                f"Failed to fetch details for match {match_id}: {e}",
                extra={"match_id": match_id},
            )
            raise DetailFetchError(match_id, e) from e
