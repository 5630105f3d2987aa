"""Offset/limit windowing over an ordered result."""

from collections.abc import Sequence

from launchfeed.data import LaunchRecord, ResultPage


def paginate(launches: Sequence[LaunchRecord], offset: int, limit: int) -> ResultPage:
    """Cut the ``[offset, offset + limit)`` window out of ``launches``.

    Out-of-range offsets yield an empty page rather than an error.
    ``total`` is the length of the whole sequence.
    """
    total = len(launches)
    end = offset + limit
    return ResultPage(
        launches=tuple(launches[offset:end]),
        has_more=end < total,
        total=total,
    )
