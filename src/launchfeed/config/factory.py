"""Factory functions to create components from configuration."""

from pathlib import Path

import httpx
from fastapi import FastAPI

from launchfeed.api.app import create_app
from launchfeed.client.http import LaunchesClient
from launchfeed.client.session import ScrollSession
from launchfeed.config.models import (
    ClientConfig,
    FileSourceConfig,
    LaunchFeedConfig,
    SourceConfig,
    SpaceXSourceConfig,
)
from launchfeed.engine.query import QueryEngine
from launchfeed.run_logger import RunLogger
from launchfeed.source.base import LaunchSource
from launchfeed.source.spacex import SpaceXLaunchSource
from launchfeed.source.static import FileLaunchSource


def create_source(config: SourceConfig) -> LaunchSource:
    """Create an upstream launch source from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, SpaceXSourceConfig):
        return SpaceXLaunchSource(
            api_url=config.api_url,
            limit=config.limit,
            timeout_seconds=config.timeout_seconds,
        )
    if isinstance(config, FileSourceConfig):
        return FileLaunchSource(config.path)
    msg = f"Unknown source config type: {type(config)}"
    raise ValueError(msg)


def create_run_logger(
    config: LaunchFeedConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> RunLogger | None:
    """Create a RunLogger, or None if tracing is disabled."""
    log_enabled = log_override if log_override is not None else config.logging.enabled
    if not log_enabled:
        return None
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)
    return RunLogger(log_dir=log_dir, enabled=True)


def create_engine(
    config: LaunchFeedConfig,
    *,
    source: LaunchSource | None = None,
    run_logger: RunLogger | None = None,
) -> QueryEngine:
    """Create a query engine; ``source`` overrides the configured one."""
    return QueryEngine(
        source if source is not None else create_source(config.source),
        snapshot_ttl_seconds=config.engine.snapshot_ttl_seconds,
        max_cached_views=config.engine.max_cached_views,
        run_logger=run_logger,
    )


def create_app_from_config(
    config: LaunchFeedConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> FastAPI:
    """Create the HTTP app with its engine and optional run logger."""
    run_logger = create_run_logger(
        config, log_override=log_override, log_dir_override=log_dir_override
    )
    return create_app(create_engine(config, run_logger=run_logger))


def create_client(
    config: ClientConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> LaunchesClient:
    """Create an HTTP client for the query endpoint."""
    return LaunchesClient(
        config.base_url,
        timeout_seconds=config.timeout_seconds,
        client=http_client,
    )


def create_session(
    config: ClientConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> ScrollSession:
    """Create a scroll session backed by a LaunchesClient."""
    return ScrollSession(
        create_client(config, http_client=http_client),
        page_size=config.page_size,
        debounce_seconds=config.debounce_seconds,
        scroll_threshold_px=config.scroll_threshold_px,
    )
