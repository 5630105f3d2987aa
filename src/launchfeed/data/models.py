"""Core data models for launchfeed."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from launchfeed.errors import InvalidQueryError, MalformedResponse, UnsupportedStatusValue


class LaunchStatus(StrEnum):
    """Outcome filter accepted by the query engine."""

    SUCCESS = "success"
    FAILED = "failed"
    UPCOMING = "upcoming"

    @classmethod
    def parse(cls, value: "str | LaunchStatus | None") -> "LaunchStatus | None":
        """Parse a status filter value.

        Empty or missing values mean "no status filter". Anything outside the
        fixed set is rejected rather than silently ignored.

        Raises:
            UnsupportedStatusValue: If the value is not a known status.
        """
        if value is None or value == "":
            return None
        if isinstance(value, LaunchStatus):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedStatusValue(value) from None


@dataclass(frozen=True)
class LaunchLinks:
    """External resource URLs attached to a launch. Not read by the core."""

    mission_patch: str | None = None
    mission_patch_small: str | None = None
    article_link: str | None = None
    wikipedia: str | None = None
    video_link: str | None = None
    presskit: str | None = None
    reddit_campaign: str | None = None
    reddit_launch: str | None = None
    flickr_images: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "LaunchLinks":
        images = item.get("flickr_images")
        if not isinstance(images, list | tuple):
            images = ()
        return cls(
            mission_patch=item.get("mission_patch"),
            mission_patch_small=item.get("mission_patch_small"),
            article_link=item.get("article_link"),
            wikipedia=item.get("wikipedia"),
            video_link=item.get("video_link"),
            presskit=item.get("presskit"),
            reddit_campaign=item.get("reddit_campaign"),
            reddit_launch=item.get("reddit_launch"),
            flickr_images=tuple(str(url) for url in images),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mission_patch": self.mission_patch,
            "mission_patch_small": self.mission_patch_small,
            "article_link": self.article_link,
            "wikipedia": self.wikipedia,
            "video_link": self.video_link,
            "presskit": self.presskit,
            "reddit_campaign": self.reddit_campaign,
            "reddit_launch": self.reddit_launch,
            "flickr_images": list(self.flickr_images),
        }


def _parse_flight_number(value: Any) -> int:
    """Read a flight number, refusing values that would collide after truncation."""
    if isinstance(value, bool):
        raise TypeError(f"flight_number must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"flight_number must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"flight_number must be an integer, got {type(value).__name__}")


@dataclass(frozen=True)
class LaunchRecord:
    """A single launch as delivered by the upstream feed.

    ``flight_number`` is meant to identify a launch, but the feed does not
    guarantee it; records only become unique after normalization.
    ``launch_success`` is tri-state: ``None`` means the outcome is unknown
    (upcoming or unresolved), which is distinct from ``False``.
    """

    flight_number: int
    mission_name: str
    launch_year: str
    launch_date_utc: str
    launch_success: bool | None = None
    upcoming: bool = False
    details: str | None = None
    rocket_name: str | None = None
    launch_site_name: str | None = None
    links: LaunchLinks | None = None

    @property
    def year_value(self) -> int | None:
        """Numeric launch year, or None if the year is not an integer."""
        try:
            return int(self.launch_year)
        except ValueError:
            return None

    @property
    def launched_at(self) -> datetime | None:
        """Launch timestamp as an aware UTC datetime, or None if unparseable."""
        if not self.launch_date_utc:
            return None
        try:
            ts = datetime.fromisoformat(self.launch_date_utc)
        except ValueError:
            return None
        if ts.tzinfo is None:
            return ts.replace(tzinfo=UTC)
        return ts.astimezone(UTC)

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "LaunchRecord":
        """Build a record from the upstream (SpaceX v3) JSON shape.

        Raises:
            KeyError: If ``flight_number`` is missing.
            TypeError: If ``item`` is not an object.
            TypeError, ValueError: If ``flight_number`` is not an integer.
        """
        if not isinstance(item, Mapping):
            raise TypeError(f"Expected a launch object, got {type(item).__name__}")

        date_utc = str(item.get("launch_date_utc") or "")
        year = item.get("launch_year")
        if year is None or year == "":
            # Older snapshots occasionally omit the year; the date still has it.
            year = date_utc[:4]

        success = item.get("launch_success")
        rocket = item.get("rocket")
        site = item.get("launch_site")
        links = item.get("links")

        return cls(
            flight_number=_parse_flight_number(item["flight_number"]),
            mission_name=str(item.get("mission_name") or ""),
            launch_year=str(year),
            launch_date_utc=date_utc,
            launch_success=success if isinstance(success, bool) else None,
            upcoming=item.get("upcoming") is True,
            details=item.get("details"),
            rocket_name=rocket.get("rocket_name") if isinstance(rocket, Mapping) else None,
            launch_site_name=site.get("site_name_long") if isinstance(site, Mapping) else None,
            links=LaunchLinks.from_dict(links) if isinstance(links, Mapping) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the upstream JSON shape."""
        data: dict[str, Any] = {
            "flight_number": self.flight_number,
            "mission_name": self.mission_name,
            "launch_year": self.launch_year,
            "launch_date_utc": self.launch_date_utc,
            "launch_success": self.launch_success,
            "upcoming": self.upcoming,
            "details": self.details,
            "links": self.links.to_dict() if self.links else None,
        }
        if self.rocket_name is not None:
            data["rocket"] = {"rocket_name": self.rocket_name}
        if self.launch_site_name is not None:
            data["launch_site"] = {"site_name_long": self.launch_site_name}
        return data


@dataclass(frozen=True)
class FilterSet:
    """The active search/year/status filters of a query.

    Hashable, so it doubles as the key for cached query views and as the
    client's ``activeFilters``.
    """

    search: str = ""
    year: str = ""
    status: LaunchStatus | None = None

    @classmethod
    def parse(
        cls,
        *,
        search: str | None = None,
        year: str | int | None = None,
        status: "str | LaunchStatus | None" = None,
    ) -> "FilterSet":
        return cls(
            search=search or "",
            year="" if year is None else str(year),
            status=LaunchStatus.parse(status),
        )

    @property
    def is_empty(self) -> bool:
        return not self.search and not self.year and self.status is None

    def as_params(self) -> dict[str, str]:
        """Query-string parameters for the non-empty filters only."""
        params: dict[str, str] = {}
        if self.search:
            params["search"] = self.search
        if self.year:
            params["year"] = self.year
        if self.status is not None:
            params["status"] = self.status.value
        return params


@dataclass(frozen=True)
class QueryParameters:
    """Filters plus the pagination window of a single query."""

    filters: FilterSet = field(default_factory=FilterSet)
    offset: int = 0
    limit: int = 10

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise InvalidQueryError(f"offset must be >= 0, got {self.offset}")
        if self.limit < 1:
            raise InvalidQueryError(f"limit must be >= 1, got {self.limit}")

    @classmethod
    def parse(
        cls,
        *,
        search: str | None = None,
        year: str | int | None = None,
        status: "str | LaunchStatus | None" = None,
        offset: int = 0,
        limit: int = 10,
    ) -> "QueryParameters":
        filters = FilterSet.parse(search=search, year=year, status=status)
        return cls(filters=filters, offset=offset, limit=limit)

    @property
    def search(self) -> str:
        return self.filters.search

    @property
    def year(self) -> str:
        return self.filters.year

    @property
    def status(self) -> LaunchStatus | None:
        return self.filters.status


@dataclass(frozen=True)
class ResultPage:
    """One page of a filtered, sorted query.

    ``total`` counts every record matching the filters, independent of the
    pagination window.
    """

    launches: tuple[LaunchRecord, ...] = ()
    has_more: bool = False
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "launches": [launch.to_dict() for launch in self.launches],
            "hasMore": self.has_more,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ResultPage":
        """Parse a query endpoint response body.

        Raises:
            MalformedResponse: If the body has no launches array or a record
                cannot be parsed.
        """
        if not isinstance(data, Mapping) or not isinstance(data.get("launches"), list):
            raise MalformedResponse("Expected a launches array in the response")
        try:
            launches = tuple(LaunchRecord.from_dict(item) for item in data["launches"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponse(f"Unparseable launch record: {e}") from e
        total = data.get("total")
        return cls(
            launches=launches,
            has_more=data.get("hasMore") is True,
            total=total if isinstance(total, int) else len(launches),
        )


@dataclass(frozen=True)
class YearGroup:
    """Launches sharing a launch year, in collection order."""

    year: str
    launches: tuple[LaunchRecord, ...]
