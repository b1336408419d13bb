"""Telemetry for the editing engine, built on telelog.

Engine code only uses ``record_event`` and ``span``; hosts may call
``configure`` once at start-up (explicit settings, a named preset, or the
``EDIT_ENGINE_*`` environment variables, which are the default).
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EDIT_ENGINE_"
DEFAULT_LOGGER_NAME = "edit_engine"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """What telelog should do with engine log lines.

    An editor emits a span per keystroke, so the defaults are quiet: warnings
    and errors on the console, no profiling.
    """

    level: str = "WARNING"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048
    profile: bool = False

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        size = _env("LOG_BUFFER_SIZE")
        return cls(
            level=(_env("LOG_LEVEL") or "WARNING").upper(),
            console=not _env_flag("DISABLE_CONSOLE", False),
            color=not _env_flag("NO_COLOR", False),
            json=_env_flag("LOG_JSON", False),
            log_file=_env("LOG_FILE") or "",
            buffered=_env_flag("LOG_BUFFERED", False),
            buffer_size=int(size) if size and size.isdigit() else 2048,
            profile=_env_flag("PROFILE", False),
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(self.profile)
        return config


PRESETS: Mapping[str, TelemetrySettings] = MappingProxyType(
    {
        "development": TelemetrySettings(level="DEBUG", profile=True),
        "quiet": TelemetrySettings(level="ERROR", color=False),
        "performance": TelemetrySettings(
            level="DEBUG",
            console=False,
            json=True,
            log_file="edit_engine-performance.log",
            buffered=True,
            profile=True,
        ),
    }
)

_LOGGERS: MutableMapping[str, Any] = {}
_settings: Optional[TelemetrySettings] = None
_config: Optional[Any] = None


def configure(
    settings: Optional[TelemetrySettings] = None, *, preset: Optional[str] = None
) -> TelemetrySettings:
    """Swap the active configuration and drop cached loggers.

    ``preset`` names an entry of :data:`PRESETS`; the ``EDIT_ENGINE_LOG_FILE``
    variable still overrides its log file.
    """

    global _settings, _config
    if settings is not None and preset is not None:
        raise ValueError("Pass either settings or a preset, not both")
    if preset is not None:
        try:
            settings = PRESETS[preset.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown telemetry preset '{preset}'") from exc
        if _env("LOG_FILE"):
            settings = replace(settings, log_file=_env("LOG_FILE") or "")
    _settings = settings or TelemetrySettings.from_env()
    _config = _settings.to_config()
    _LOGGERS.clear()
    return _settings


def active_settings() -> TelemetrySettings:
    if _settings is None:
        configure()
    return cast(TelemetrySettings, _settings)


def get_logger(name: Optional[str] = None) -> Any:
    """Cached ``telelog.Logger`` bound to the active configuration."""

    active_settings()
    key = name or DEFAULT_LOGGER_NAME
    logger = _LOGGERS.get(key)
    if logger is None:
        logger = _LOGGERS[key] = tl.Logger.with_config(key, _config)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _log(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in fields.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as structured fields."""

    fields = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; lets the block flag a failure."""

    logger: Any
    name: str
    component: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.fields, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Run a block under telelog context, profiling it when enabled.

    ``metadata`` becomes logger context for the duration of the block. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    logger = get_logger(logger_name)
    fields = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(logger, name, component, dict(fields))
    with ExitStack() as stack:
        for key, value in fields.items():
            logger.add_context(key, value)
            stack.callback(logger.remove_context, key)
        if component:
            stack.enter_context(logger.track_component(component))
        if active_settings().profile:
            stack.enter_context(logger.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "active_settings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
