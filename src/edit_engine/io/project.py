"""Project configuration stored as a small JSON file next to the sources."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from edit_engine.errors import ConfigError
from edit_engine.runtime import telemetry

DEFAULT_CONFIG_NAME = "editor_project.json"
DEFAULT_FORMATTER_BIN = "clang-format"
DEFAULT_FORMATTER_STYLE = "Mozilla"
DEFAULT_FORMAT_EXTENSIONS: Tuple[str, ...] = ("c", "cpp", "h", "hpp")


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    bin: str = DEFAULT_FORMATTER_BIN
    style: Optional[str] = DEFAULT_FORMATTER_STYLE
    extensions: Tuple[str, ...] = DEFAULT_FORMAT_EXTENSIONS

    def command(self) -> Tuple[str, ...]:
        if self.style:
            return (self.bin, f"--style={self.style}")
        return (self.bin,)

    def supports(self, extension: str) -> bool:
        return extension.lower() in self.extensions


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Settings for formatting and building the edited project.

    Missing keys fall back to defaults so a partial file is still usable.
    """

    path: Optional[Path] = None
    build_command: Optional[str] = None
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    format_on_save: bool = False

    @property
    def root(self) -> Optional[Path]:
        return self.path.parent if self.path is not None else None

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, path: Optional[Path] = None
    ) -> "ProjectConfig":
        if not isinstance(data, Mapping):
            raise ConfigError("Project configuration must be a JSON object", path=path)

        build_command = data.get("build_command")
        if build_command is not None and not isinstance(build_command, str):
            raise ConfigError("'build_command' must be a string", path=path)

        return cls(
            path=path,
            build_command=build_command or None,
            formatter=_formatter_from(data.get("formatter"), path=path),
            format_on_save=bool(data.get("format_on_save", False)),
        )

    @classmethod
    def read(cls, path: str | Path) -> "ProjectConfig":
        """Parse ``path``; raises :class:`ConfigError` on any problem."""

        target = Path(path)
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(
                f"Unable to open project configuration: {target}", path=target
            ) from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(
                f"Error parsing project configuration: {exc}", path=target
            ) from exc
        return cls.from_mapping(data, path=target)

    @classmethod
    def load(cls, path: str | Path) -> "ProjectConfig":
        """Like :meth:`read` but reports errors and returns defaults."""

        try:
            config = cls.read(path)
        except ConfigError as exc:
            telemetry.record_event(
                "project.config_error",
                level="error",
                data={"path": str(path), "error": str(exc)},
            )
            return cls(path=Path(path))
        telemetry.record_event("project.config_loaded", data={"path": str(path)})
        return config


def _formatter_from(raw: Any, *, path: Optional[Path]) -> FormatterConfig:
    if raw is None:
        return FormatterConfig()
    if not isinstance(raw, Mapping):
        raise ConfigError("'formatter' must be an object", path=path)
    extensions = raw.get("extensions", DEFAULT_FORMAT_EXTENSIONS)
    if not isinstance(extensions, (list, tuple)) or not all(
        isinstance(e, str) for e in extensions
    ):
        raise ConfigError("'formatter.extensions' must be a list of strings", path=path)
    # An explicit null or empty style means "use the formatter's own default".
    style = raw.get("style", DEFAULT_FORMATTER_STYLE)
    return FormatterConfig(
        bin=str(raw.get("bin", DEFAULT_FORMATTER_BIN)),
        style=str(style) if style else None,
        extensions=tuple(e.lower().lstrip(".") for e in extensions),
    )


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_FORMAT_EXTENSIONS",
    "FormatterConfig",
    "ProjectConfig",
]
