"""Error taxonomy for failures the editor reports instead of clamping."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class EditorError(RuntimeError):
    """Base class for every reportable editor failure."""


class PersistenceError(EditorError):
    """Raised when a file cannot be read or written."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ToolError(EditorError):
    """Raised when an external formatter or build command fails."""

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = tuple(command or ())
        self.returncode = returncode
        self.stderr = stderr


class ConfigError(EditorError):
    """Raised when the project configuration is missing or malformed."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


__all__ = ["EditorError", "PersistenceError", "ToolError", "ConfigError"]
