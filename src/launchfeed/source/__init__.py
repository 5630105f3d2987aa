from launchfeed.source.base import LaunchSource
from launchfeed.source.spacex import SPACEX_API_URL, SpaceXLaunchSource, parse_launches
from launchfeed.source.static import FileLaunchSource, StaticLaunchSource

__all__ = [
    "FileLaunchSource",
    "LaunchSource",
    "SPACEX_API_URL",
    "SpaceXLaunchSource",
    "StaticLaunchSource",
    "parse_launches",
]
