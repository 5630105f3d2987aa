"""Launch sources that do not touch the network."""

import json
import logging
from pathlib import Path

from launchfeed.data import LaunchRecord
from launchfeed.errors import UpstreamUnavailable
from launchfeed.source.spacex import parse_launches

logger = logging.getLogger(__name__)


class StaticLaunchSource:
    """Serve a fixed, in-memory list of launches.

    ``replace`` swaps the snapshot, which lets callers simulate upstream
    drift between requests.
    """

    def __init__(self, launches: list[LaunchRecord] | None = None) -> None:
        self._launches = list(launches or [])
        self.fetch_count = 0

    def replace(self, launches: list[LaunchRecord]) -> None:
        self._launches = list(launches)

    async def fetch_launches(self) -> list[LaunchRecord]:
        self.fetch_count += 1
        return list(self._launches)


class FileLaunchSource:
    """Read launches from a JSON file in the upstream (SpaceX v3) shape.

    The file is re-read on every fetch so edits show up without a restart.

    Args:
        path: Path to a JSON file holding a list of launch objects.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    async def fetch_launches(self) -> list[LaunchRecord]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Reading launches from %s failed: %s", self._path, e)
            raise UpstreamUnavailable(f"Failed to read {self._path}: {e}") from e
        return parse_launches(data)
