"""Duplicate removal for raw launch batches."""

from collections.abc import Iterable

from launchfeed.data import LaunchRecord


def deduplicate_launches(launches: Iterable[LaunchRecord]) -> list[LaunchRecord]:
    """Keep the first record for each flight number, in original order.

    Idempotent: a deduplicated sequence passes through unchanged.
    """
    seen: set[int] = set()
    unique: list[LaunchRecord] = []
    for launch in launches:
        if launch.flight_number in seen:
            continue
        seen.add(launch.flight_number)
        unique.append(launch)
    return unique
