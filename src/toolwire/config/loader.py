"""Configuration loading for toolwire.

Each TOML file is a layer; layers merge in this order, later winning:

    1. Model defaults
    2. ``$XDG_CONFIG_HOME/toolwire/config.toml`` (``~/.config`` fallback)
    3. ``./toolwire.toml``
    4. The file named by ``$TOOLWIRE_CONFIG``
    5. An explicit ``path`` argument
    6. ``overrides`` passed by the caller

Path-valued settings (``tools.files.allowed_dir``, ``logging.file``) that
are relative in a file are anchored to that file's directory, so a
project config means the same thing from any working directory.
Overrides are taken as given.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from toolwire.core.errors import ConfigError

from .schema import ToolwireConfig

ENV_VAR = "TOOLWIRE_CONFIG"
PROJECT_FILE = "toolwire.toml"

_PATH_SETTINGS: tuple[tuple[str, ...], ...] = (
    ("tools", "files", "allowed_dir"),
    ("logging", "file"),
)


# ── Layer discovery ──────────────────────────────────────────────


def _user_layer() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    root = Path(xdg) if xdg else Path.home() / ".config"
    return root / "toolwire" / "config.toml"


def _layer_paths(explicit: str | Path | None) -> list[Path]:
    """Config files to merge, lowest priority first.

    Implicit layers are skipped when absent; a missing env or explicit
    file is an error.
    """
    layers = [p for p in (_user_layer(), Path.cwd() / PROJECT_FILE) if p.is_file()]

    env_value = os.environ.get(ENV_VAR)
    if env_value:
        env_path = Path(env_value)
        if not env_path.is_file():
            msg = f"{ENV_VAR} points to non-existent file: {env_value}"
            raise ConfigError(msg)
        layers.append(env_path)

    if explicit is not None:
        explicit_path = Path(explicit)
        if not explicit_path.is_file():
            msg = f"Config file not found: {explicit}"
            raise ConfigError(msg)
        layers.append(explicit_path)

    return layers


# ── Layer reading ────────────────────────────────────────────────


def _anchor_paths(data: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    """Rewrite relative path settings in *data* against *base_dir*."""
    for keys in _PATH_SETTINGS:
        *parents, leaf = keys
        table: Any = data
        for key in parents:
            table = table.get(key) if isinstance(table, dict) else None
        if not isinstance(table, dict):
            continue
        value = table.get(leaf)
        if not isinstance(value, str) or not value:
            continue
        if not Path(value).expanduser().is_absolute():
            table[leaf] = str(base_dir / value)
    return data


def _read_layer(path: Path) -> dict[str, Any]:
    """Parse one TOML layer and anchor its relative paths."""
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e
    return _anchor_paths(data, path.resolve().parent)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* with *override* merged in; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


# ── Entry point ──────────────────────────────────────────────────


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ToolwireConfig:
    """Merge every config layer and validate the result.

    Raises:
        ConfigError: On a missing explicit or env file, invalid TOML, or
            a value the schema rejects.
    """
    merged: dict[str, Any] = {}
    for layer in _layer_paths(path):
        merged = _deep_merge(merged, _read_layer(layer))
    if overrides:
        merged = _deep_merge(merged, overrides)

    try:
        return ToolwireConfig.model_validate(merged)
    except ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e
