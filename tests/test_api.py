"""Tests for the HTTP query API."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from launchfeed.api import UPSTREAM_ERROR_MESSAGE, create_app
from launchfeed.data import LaunchRecord
from launchfeed.engine import QueryEngine
from launchfeed.errors import UpstreamUnavailable
from launchfeed.source import StaticLaunchSource


def _launch(
    flight_number: int,
    name: str,
    year: str,
    success: bool | None = True,
    upcoming: bool = False,
) -> LaunchRecord:
    return LaunchRecord(
        flight_number=flight_number,
        mission_name=name,
        launch_year=year,
        launch_date_utc=f"{year}-06-01T12:00:00.000Z",
        launch_success=success,
        upcoming=upcoming,
    )


@pytest.fixture
def source() -> StaticLaunchSource:
    launches = [_launch(n, f"Starlink-{n}", str(2015 + n % 5)) for n in range(1, 16)]
    launches.append(_launch(4, "Starlink-4 (duplicate)", "2019"))
    launches.append(_launch(16, "Crew-1", "2020", success=False))
    launches.append(_launch(17, "Crew-2", "2021", success=None, upcoming=True))
    return StaticLaunchSource(launches)


@pytest.fixture
async def client(source: StaticLaunchSource) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(QueryEngine(source))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestLaunchesEndpoint:
    """Tests for GET /launches."""

    async def test_default_page(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches")
        assert response.status_code == 200
        body = response.json()
        assert len(body["launches"]) == 10
        assert body["hasMore"] is True
        assert body["total"] == 17

    async def test_pagination(self, client: httpx.AsyncClient) -> None:
        seen: list[int] = []
        offset = 0
        while True:
            response = await client.get("/launches", params={"offset": offset, "limit": 5})
            body = response.json()
            seen.extend(launch["flight_number"] for launch in body["launches"])
            if not body["hasMore"]:
                break
            offset += 5
        assert len(seen) == len(set(seen)) == body["total"] == 17

    async def test_records_in_upstream_shape(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"search": "crew-2"})
        launch = response.json()["launches"][0]
        assert launch["flight_number"] == 17
        assert launch["mission_name"] == "Crew-2"
        assert launch["launch_success"] is None
        assert launch["upcoming"] is True

    async def test_filters(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"status": "failed"})
        body = response.json()
        assert [launch["flight_number"] for launch in body["launches"]] == [16]
        assert body["total"] == 1
        assert body["hasMore"] is False

    async def test_empty_strings_mean_no_filter(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"search": "", "year": "", "status": ""})
        assert response.json()["total"] == 17

    async def test_year_filter(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"year": "2019", "limit": 50})
        body = response.json()
        assert all(launch["launch_year"] == "2019" for launch in body["launches"])
        # Starlink-4 kept, its duplicate dropped
        names = [launch["mission_name"] for launch in body["launches"]]
        assert "Starlink-4" in names
        assert "Starlink-4 (duplicate)" not in names

    async def test_offset_past_end(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"offset": 500})
        assert response.status_code == 200
        assert response.json() == {"launches": [], "hasMore": False, "total": 17}

    async def test_unsupported_status(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"status": "partial"})
        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported status value: partial"}

    async def test_negative_offset(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"offset": -1})
        assert response.status_code == 400
        assert "offset" in response.json()["error"]

    async def test_non_integer_limit(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches", params={"limit": "ten"})
        assert response.status_code == 400
        assert "limit" in response.json()["error"]

    async def test_upstream_failure(self) -> None:
        source = MagicMock()
        source.fetch_launches = AsyncMock(side_effect=UpstreamUnavailable("timeout"))
        app = create_app(QueryEngine(source))
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/launches")
        assert response.status_code == 500
        assert response.json() == {"error": UPSTREAM_ERROR_MESSAGE}


class TestAuxiliaryEndpoints:
    """Tests for /launches/years and /health."""

    async def test_years(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/launches/years")
        assert response.json() == {"years": ["2021", "2020", "2019", "2018", "2017", "2016", "2015"]}

    async def test_health_reports_cached_views(self, client: httpx.AsyncClient) -> None:
        await client.get("/launches")
        await client.get("/launches", params={"year": "2019"})
        response = await client.get("/health")
        assert response.json() == {"status": "ok", "cachedViews": 2}
