"""Search, year and status predicates over launch records."""

from collections.abc import Iterable

from launchfeed.data import FilterSet, LaunchRecord, LaunchStatus


def matches_search(launch: LaunchRecord, search: str) -> bool:
    """Case-insensitive substring match on the mission name."""
    if not search:
        return True
    return search.casefold() in launch.mission_name.casefold()


def matches_year(launch: LaunchRecord, year: str) -> bool:
    """Exact year match, comparing numerically when both sides are integers."""
    if not year:
        return True
    if launch.launch_year == year:
        return True
    try:
        return launch.year_value is not None and launch.year_value == int(year)
    except ValueError:
        return False


def matches_status(launch: LaunchRecord, status: LaunchStatus | None) -> bool:
    """Status predicate.

    ``success`` and ``failed`` require an explicit outcome; records with an
    unknown outcome satisfy neither.
    """
    if status is None:
        return True
    if status is LaunchStatus.SUCCESS:
        return launch.launch_success is True
    if status is LaunchStatus.FAILED:
        return launch.launch_success is False
    return launch.upcoming is True


def matches(launch: LaunchRecord, filters: FilterSet) -> bool:
    """True iff every active filter holds for the launch."""
    return (
        matches_search(launch, filters.search)
        and matches_year(launch, filters.year)
        and matches_status(launch, filters.status)
    )


def filter_launches(launches: Iterable[LaunchRecord], filters: FilterSet) -> list[LaunchRecord]:
    """Return the launches matching all active filters, order preserved."""
    if filters.is_empty:
        return list(launches)
    return [launch for launch in launches if matches(launch, filters)]
