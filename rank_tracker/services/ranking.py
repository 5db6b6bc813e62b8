"""Ranking lookups against the DataForSEO SERP API."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from rank_tracker.config import get_settings

logger = logging.getLogger(__name__)


class ProviderUnavailable(Exception):
    """The ranking provider could not produce a usable response."""


@dataclass(frozen=True)
class RankLookup:
    """Outcome of a single ranking lookup.

    Exactly one of ``rank`` and ``error`` is set.
    """

    rank: int | None = None
    error: str | None = None

    @classmethod
    def found(cls, rank: int) -> "RankLookup":
        return cls(rank=rank)

    @classmethod
    def unavailable(cls, reason: str) -> "RankLookup":
        return cls(error=reason)

    @property
    def available(self) -> bool:
        return self.rank is not None


def extract_rank_absolute(payload: Any) -> int | None:
    """Read ``tasks[0].result[0].items[0].rank_absolute`` from a SERP response.

    Returns None when any level is missing, empty or of the wrong type, or
    when the rank is not a positive integer.
    """
    node = payload
    for key in ("tasks", "result", "items"):
        if not isinstance(node, dict):
            return None
        children = node.get(key)
        if not isinstance(children, list) or not children:
            return None
        node = children[0]

    if not isinstance(node, dict):
        return None

    rank = node.get("rank_absolute")
    # bool is an int subclass
    if isinstance(rank, bool) or not isinstance(rank, int) or rank < 1:
        return None
    return rank


def _describe_missing_rank(payload: dict[str, Any]) -> str:
    """Best explanation for a response that carried no rank."""
    tasks = payload.get("tasks")
    if isinstance(tasks, list) and tasks and isinstance(tasks[0], dict):
        task = tasks[0]
        if task.get("status_code") not in (None, 20000):
            return f"DataForSEO task error {task.get('status_code')}: {task.get('status_message')}"
    return "URL not found in ranking results"


class DataForSEOClient:
    """Client for the DataForSEO Google organic SERP endpoint."""

    SERP_PATH = "/v3/serp/google/organic/live/regular"

    def __init__(
        self,
        login: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        location_code: int | None = None,
        language_code: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.login = login if login is not None else settings.dataforseo_login
        self.password = password if password is not None else settings.dataforseo_password
        self.base_url = (base_url or settings.dataforseo_base_url).rstrip("/")
        self.location_code = location_code or settings.dataforseo_location_code
        self.language_code = language_code or settings.dataforseo_language_code
        self.timeout = timeout or settings.ranking_timeout_seconds
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if DataForSEO credentials are available."""
        return bool(self.login and self.password)

    async def check_ranking(self, search_phrase: str, url: str) -> dict[str, Any]:
        """Run a live SERP query for ``search_phrase`` filtered to ``url``.

        Args:
            search_phrase: Keyword to search for
            url: Target page whose position is wanted

        Returns:
            The decoded JSON response

        Raises:
            ProviderUnavailable: Credentials are missing, or the API answered
                with an error status or a body that is not a JSON object.
            httpx.HTTPError: The request could not be completed.
        """
        if not self.is_configured:
            raise ProviderUnavailable("DataForSEO credentials not found")

        request = [
            {
                "keyword": search_phrase,
                "location_code": self.location_code,
                "language_code": self.language_code,
                "target": url,
            }
        ]

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                f"{self.base_url}{self.SERP_PATH}",
                auth=(self.login, self.password),
                json=request,
            )

        if response.is_error:
            raise ProviderUnavailable(f"DataForSEO API error: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderUnavailable("Invalid response from DataForSEO API") from e

        if not isinstance(data, dict):
            raise ProviderUnavailable("Invalid response from DataForSEO API")

        return data


class RankingService:
    """Looks up a URL's organic rank, reporting failures as values."""

    def __init__(self, client: DataForSEOClient | None = None) -> None:
        self.client = client or DataForSEOClient()

    async def lookup_rank(self, search_phrase: str, url: str) -> RankLookup:
        """Look up the absolute rank of ``url`` for ``search_phrase``.

        Never raises; every failure is returned as ``RankLookup.unavailable``.
        """
        try:
            payload = await self.client.check_ranking(search_phrase, url)
        except ProviderUnavailable as e:
            return RankLookup.unavailable(str(e))
        except httpx.TimeoutException:
            return RankLookup.unavailable("DataForSEO request timed out")
        except httpx.HTTPError as e:
            return RankLookup.unavailable(f"DataForSEO request failed: {e!r}")
        except Exception as e:
            logger.exception("Unexpected error during ranking lookup")
            return RankLookup.unavailable(f"Unexpected ranking error: {e}")

        rank = extract_rank_absolute(payload)
        if rank is None:
            return RankLookup.unavailable(_describe_missing_rank(payload))

        logger.debug("Ranking lookup for %s returned %d", url, rank)
        return RankLookup.found(rank)


def get_ranking_service() -> RankingService:
    """Get a ranking service instance."""
    return RankingService()
