"""Pydantic models for toolwire configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from toolwire import __version__


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class FilesConfig(BaseModel):
    """Settings shared by read-file, write-file and list-directory."""

    allowed_dir: str = ""
    max_read_bytes: int = Field(default=1024 * 1024, gt=0)


class FetchConfig(BaseModel):
    """fetch-url tool configuration."""

    enabled: bool = True
    timeout: float = Field(default=10.0, gt=0)
    max_chars: int = Field(default=1000, gt=0)
    user_agent: str = f"toolwire/{__version__}"


class ToolsConfig(BaseModel):
    """Tool framework configuration."""

    invoke_timeout: float | None = 30.0
    files: FilesConfig = Field(default_factory=FilesConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)


class RouterConfig(BaseModel):
    """Intent router configuration."""

    variant: Literal["assistant", "literal"] = "assistant"
    default_directory: str = "./"


class APIConfig(BaseModel):
    """REST API server settings."""

    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class ToolwireConfig(BaseModel):
    """Top-level configuration for toolwire."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    router: RouterConfig = Field(default_factory=RouterConfig)
    api: APIConfig = Field(default_factory=APIConfig)
