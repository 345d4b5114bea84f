"""File tools: read-file, write-file and list-directory.

All three share one path policy: when an allowed directory is
configured, relative paths resolve inside it and anything that resolves
outside it is refused. Blocking I/O runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from toolwire.tools.base import ParameterSpec

if TYPE_CHECKING:
    from toolwire.config.schema import FilesConfig


class _FileTool:
    """Shared path handling for the file tools."""

    def __init__(self, config: FilesConfig | None = None) -> None:
        from toolwire.config.schema import FilesConfig as FConfig

        self._config = config or FConfig()
        self._allowed_dir: Path | None = (
            Path(self._config.allowed_dir).expanduser().resolve()
            if self._config.allowed_dir
            else None
        )

    def _resolve(self, path_str: str) -> Path:
        """Resolve *path_str* and enforce the allowed directory."""
        if not path_str:
            msg = "Path must be a non-empty string."
            raise ValueError(msg)

        path = Path(path_str).expanduser()
        if self._allowed_dir is not None and not path.is_absolute():
            path = self._allowed_dir / path
        resolved = path.resolve()

        if self._allowed_dir and not self._is_within(resolved, self._allowed_dir):
            msg = f"Path is outside allowed directory: {path_str}"
            raise PermissionError(msg)
        return resolved

    @staticmethod
    def _is_within(path: Path, directory: Path) -> bool:
        """Check if path is within directory."""
        try:
            path.relative_to(directory)
        except ValueError:
            return False
        return True


class ReadFileTool(_FileTool):
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "read-file"

    @property
    def description(self) -> str:
        return "Read the contents of a text file."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (ParameterSpec("filePath", description="Path of the file to read."),)

    async def execute(self, **kwargs: Any) -> str:
        """Read a file's contents, unmodified.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a regular file, is too large,
                or looks binary.
            PermissionError: If the path is outside the allowed directory.
        """
        return await asyncio.to_thread(self._read_file, kwargs["filePath"])

    def _read_file(self, path_str: str) -> str:
        resolved = self._resolve(path_str)

        if not resolved.exists():
            msg = f"File not found: {path_str}"
            raise FileNotFoundError(msg)

        if not resolved.is_file():
            msg = f"Not a regular file: {path_str}"
            raise ValueError(msg)

        size = resolved.stat().st_size
        if size > self._config.max_read_bytes:
            msg = f"File too large: {size} bytes (max {self._config.max_read_bytes} bytes)"
            raise ValueError(msg)

        data = resolved.read_bytes()
        if b"\x00" in data[:8192]:
            msg = f"Binary file cannot be read as text: {path_str}"
            raise ValueError(msg)

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"File is not valid UTF-8: {path_str} ({e.reason})"
            raise ValueError(msg) from e


class WriteFileTool(_FileTool):
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "write-file"

    @property
    def description(self) -> str:
        return "Write text content to a file, replacing any existing content."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (
            ParameterSpec("filePath", description="Path of the file to write."),
            ParameterSpec("content", description="Text to write."),
        )

    async def execute(self, **kwargs: Any) -> str:
        return await asyncio.to_thread(self._write_file, kwargs["filePath"], kwargs["content"])

    def _write_file(self, path_str: str, content: str) -> str:
        resolved = self._resolve(path_str)
        resolved.write_bytes(content.encode("utf-8"))
        return f"File written: {path_str}"


class ListDirectoryTool(_FileTool):
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "list-directory"

    @property
    def description(self) -> str:
        return "List the entries of a directory, one per line."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (ParameterSpec("dirPath", description="Path of the directory to list."),)

    async def execute(self, **kwargs: Any) -> str:
        return await asyncio.to_thread(self._list_directory, kwargs["dirPath"])

    def _list_directory(self, path_str: str) -> str:
        resolved = self._resolve(path_str)
        return "\n".join(sorted(os.listdir(resolved)))
