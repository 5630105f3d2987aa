"""Year-grouped view of an aggregated launch collection."""

from collections.abc import Iterable

from launchfeed.data import LaunchRecord, YearGroup


def _year_order(year: str) -> int:
    try:
        return int(year)
    except ValueError:
        return -1


def group_by_year(launches: Iterable[LaunchRecord]) -> list[YearGroup]:
    """Group launches by ``launch_year``, newest year first.

    Launches keep their collection order inside each group. Years that are
    not integers come last.
    """
    grouped: dict[str, list[LaunchRecord]] = {}
    for launch in launches:
        grouped.setdefault(launch.launch_year, []).append(launch)

    years = sorted(grouped, key=_year_order, reverse=True)
    return [YearGroup(year=year, launches=tuple(grouped[year])) for year in years]
