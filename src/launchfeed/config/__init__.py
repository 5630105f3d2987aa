"""Configuration module for launchfeed."""

from launchfeed.config.factory import (
    create_app_from_config,
    create_client,
    create_engine,
    create_run_logger,
    create_session,
    create_source,
)
from launchfeed.config.loader import get_default_config_path, load_config
from launchfeed.config.models import (
    ClientConfig,
    EngineConfig,
    FileSourceConfig,
    LaunchFeedConfig,
    LoggingConfig,
    ServerConfig,
    SourceConfig,
    SpaceXSourceConfig,
)

__all__ = [
    "ClientConfig",
    "EngineConfig",
    "FileSourceConfig",
    "LaunchFeedConfig",
    "LoggingConfig",
    "ServerConfig",
    "SourceConfig",
    "SpaceXSourceConfig",
    "create_app_from_config",
    "create_client",
    "create_engine",
    "create_run_logger",
    "create_session",
    "create_source",
    "get_default_config_path",
    "load_config",
]
