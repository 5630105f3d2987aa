from typing import Protocol

from launchfeed.data import LaunchRecord


class LaunchSource(Protocol):
    """Interface for reading a bulk snapshot of raw launch records."""

    async def fetch_launches(self) -> list[LaunchRecord]:
        """Read the current upstream snapshot.

        The result may contain several records with the same flight number;
        callers must normalize it before use.

        Returns:
            Raw launch records in upstream order.

        Raises:
            UpstreamUnavailable: If the snapshot cannot be read or parsed.
        """
        ...
