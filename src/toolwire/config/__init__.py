"""Configuration loading and validation."""

from toolwire.config.loader import load_config
from toolwire.config.schema import (
    APIConfig,
    FetchConfig,
    FilesConfig,
    LoggingConfig,
    RouterConfig,
    ToolsConfig,
    ToolwireConfig,
)

__all__ = [
    "APIConfig",
    "FetchConfig",
    "FilesConfig",
    "LoggingConfig",
    "RouterConfig",
    "ToolsConfig",
    "ToolwireConfig",
    "load_config",
]
