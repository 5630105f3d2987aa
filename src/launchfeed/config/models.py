"""Pydantic configuration models for launchfeed components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# ============================================================
# Source Configs
# ============================================================


class SpaceXSourceConfig(BaseModel):
    """Configuration for SpaceXLaunchSource."""

    type: Literal["spacex"] = "spacex"
    api_url: str = "https://api.spacexdata.com/v3/launches"
    limit: int = Field(default=1000, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}


class FileSourceConfig(BaseModel):
    """Configuration for FileLaunchSource."""

    type: Literal["file"] = "file"
    path: str

    model_config = {"frozen": True}


SourceConfig = Annotated[
    SpaceXSourceConfig | FileSourceConfig,
    Field(discriminator="type"),
]


# ============================================================
# Engine / Server / Client Configs
# ============================================================


class EngineConfig(BaseModel):
    """Configuration for QueryEngine view caching."""

    snapshot_ttl_seconds: float = Field(default=300.0, ge=0)
    max_cached_views: int = Field(default=64, ge=1)

    model_config = {"frozen": True}


class ServerConfig(BaseModel):
    """Where the HTTP API listens."""

    host: str = "127.0.0.1"
    port: int = 5000

    model_config = {"frozen": True}


class ClientConfig(BaseModel):
    """Configuration for LaunchesClient and ScrollSession."""

    base_url: str = "http://localhost:5000"
    page_size: int = Field(default=10, ge=1)
    debounce_seconds: float = Field(default=0.5, ge=0)
    scroll_threshold_px: float = Field(default=100.0, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Log level plus optional per-query JSON traces."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class LaunchFeedConfig(BaseModel):
    """Root configuration for launchfeed."""

    source: SourceConfig = Field(default_factory=SpaceXSourceConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
