"""Async HTTP client for the launch query endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from launchfeed.data import FilterSet, ResultPage
from launchfeed.errors import MalformedResponse, PageFetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class LaunchesClient:
    """Fetch launch pages from a launchfeed server.

    Args:
        base_url: Server root, without a trailing slash.
        timeout_seconds: HTTP timeout per request.
        client: Optional shared ``httpx.AsyncClient``. When omitted, a client
            is opened per request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._client = client

    async def fetch_page(self, filters: FilterSet, offset: int, limit: int) -> ResultPage:
        """Request one page of launches.

        A body without a launches array is logged and read as an empty,
        exhausted page.

        Raises:
            PageFetchError: On transport errors, non-2xx answers, or a body
                that is not JSON.
        """
        params: dict[str, str | int] = {"limit": limit, "offset": offset, **filters.as_params()}
        data = await self._get("/launches", params)
        try:
            return ResultPage.from_dict(data)
        except MalformedResponse as e:
            logger.warning("Malformed launches response for %s: %s", params, e)
            return ResultPage()

    async def fetch_years(self) -> list[str]:
        """Request the distinct launch years, newest first.

        Raises:
            PageFetchError: If the request fails.
        """
        data = await self._get("/launches/years", {})
        years = data.get("years") if isinstance(data, dict) else None
        if not isinstance(years, list):
            logger.warning("Malformed years response: %r", data)
            return []
        return [str(year) for year in years]

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise PageFetchError(
                f"{path} answered {e.response.status_code}: {_error_message(e.response)}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise PageFetchError(f"{path} request failed: {e}") from e


def _error_message(response: httpx.Response) -> str:
    """Pull the ``error`` field out of an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text
