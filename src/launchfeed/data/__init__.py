"""Data models for launchfeed."""

from launchfeed.data.models import (
    FilterSet,
    LaunchLinks,
    LaunchRecord,
    LaunchStatus,
    QueryParameters,
    ResultPage,
    YearGroup,
)

__all__ = [
    "FilterSet",
    "LaunchLinks",
    "LaunchRecord",
    "LaunchStatus",
    "QueryParameters",
    "ResultPage",
    "YearGroup",
]
