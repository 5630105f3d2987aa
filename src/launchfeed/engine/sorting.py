"""Newest-first ordering of launch records."""

from collections.abc import Iterable
from datetime import UTC, datetime

from launchfeed.data import LaunchRecord

# Unparseable years and timestamps order after everything else.
_UNKNOWN_YEAR = -1
_UNKNOWN_DATE = datetime.min.replace(tzinfo=UTC)


def sort_key(launch: LaunchRecord) -> tuple[int, datetime]:
    """Ascending key of (numeric year, launch timestamp)."""
    year = launch.year_value
    launched_at = launch.launched_at
    return (
        year if year is not None else _UNKNOWN_YEAR,
        launched_at if launched_at is not None else _UNKNOWN_DATE,
    )


def sort_launches(launches: Iterable[LaunchRecord]) -> list[LaunchRecord]:
    """Order by year descending, then launch date descending.

    Stable: records with equal year and timestamp keep their input order.
    ``sorted(..., reverse=True)`` preserves the relative order of equal keys.
    """
    return sorted(launches, key=sort_key, reverse=True)
