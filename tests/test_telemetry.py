from __future__ import annotations

import pytest

from edit_engine.runtime import telemetry


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("EDIT_ENGINE_NO_COLOR", "1")
    monkeypatch.setenv("EDIT_ENGINE_LOG_BUFFER_SIZE", "64")
    monkeypatch.setenv("EDIT_ENGINE_LOG_BUFFERED", "yes")

    settings = telemetry.TelemetrySettings.from_env()

    assert settings.level == "DEBUG"
    assert settings.color is False
    assert settings.buffered is True
    assert settings.buffer_size == 64
    assert settings.profile is False


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(telemetry.TelemetrySettings(), preset="quiet")
    with pytest.raises(ValueError):
        telemetry.configure(preset="no-such-preset")


def test_configure_preset_and_cached_loggers() -> None:
    try:
        settings = telemetry.configure(preset="Quiet")
        assert settings == telemetry.PRESETS["quiet"]
        assert telemetry.get_logger() is telemetry.get_logger()
    finally:
        telemetry.configure()


def test_span_reraises_errors() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("test::span", component="tests", metadata={"n": 1}):
            raise KeyError("boom")
