"""HTTP API for launchfeed."""

from launchfeed.api.app import UPSTREAM_ERROR_MESSAGE, create_app

__all__ = ["UPSTREAM_ERROR_MESSAGE", "create_app"]
