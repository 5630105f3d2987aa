"""Errors raised by the launch query engine and its client."""


class LaunchFeedError(Exception):
    """Base error for this package."""


class UpstreamUnavailable(LaunchFeedError):
    """Raised when the upstream launch snapshot cannot be fetched or parsed."""


class MalformedResponse(LaunchFeedError):
    """Raised when a query response does not carry a launches array."""


class UnsupportedStatusValue(LaunchFeedError, ValueError):
    """Raised when a status filter is outside the supported set."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unsupported status value: {value}")
        self.value = value


class InvalidQueryError(LaunchFeedError, ValueError):
    """Raised when offset or limit are out of range."""


class PageFetchError(LaunchFeedError):
    """Raised by the client when a page request fails."""


class InvalidTransitionError(LaunchFeedError):
    """Raised when the fetch state machine receives an event it cannot accept."""
