"""SpaceX v3 launches feed reader."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from launchfeed.data import LaunchRecord
from launchfeed.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

SPACEX_API_URL = "https://api.spacexdata.com/v3/launches"


class SpaceXLaunchSource:
    """Bulk-read launches from the SpaceX v3 REST API.

    Each call issues one request for up to ``limit`` records.

    Args:
        api_url: Launches endpoint.
        limit: Maximum number of records requested per snapshot.
        timeout_seconds: HTTP timeout for the request.
    """

    def __init__(
        self,
        *,
        api_url: str = SPACEX_API_URL,
        limit: int = 1000,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._api_url = api_url
        self._limit = limit
        self._timeout = timeout_seconds

    async def fetch_launches(self) -> list[LaunchRecord]:
        """Fetch and parse one upstream snapshot.

        Raises:
            UpstreamUnavailable: On transport errors, non-2xx answers, or a
                body that is not a list of launch objects.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._api_url, params={"limit": self._limit})
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Upstream fetch from %s failed: %s", self._api_url, e)
            raise UpstreamUnavailable(f"Failed to fetch launches: {e}") from e

        launches = parse_launches(data)
        logger.debug("Fetched %d raw launches from %s", len(launches), self._api_url)
        return launches


def parse_launches(data: Any) -> list[LaunchRecord]:
    """Parse a raw upstream payload into launch records.

    Raises:
        UpstreamUnavailable: If the payload is not a list of launch objects.
    """
    if not isinstance(data, list):
        raise UpstreamUnavailable(f"Expected a list of launches, got {type(data).__name__}")
    try:
        return [LaunchRecord.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UpstreamUnavailable(f"Unparseable launch record: {e}") from e
