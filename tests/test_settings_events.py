from __future__ import annotations

from typing import List

import pytest

from edit_engine import EditorBus, EditorSettings


def test_settings_defaults() -> None:
    settings = EditorSettings()

    assert settings.indent == "  "
    assert settings.line_comment == "//"
    assert settings.block_comment == ("/*", "*/")
    assert settings.max_history == 256


@pytest.mark.parametrize(
    "kwargs",
    [
        {"indent_width": 0},
        {"line_comment": ""},
        {"block_comment": ("/*", "")},
    ],
)
def test_settings_reject_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        EditorSettings(**kwargs)


def test_bus_delivers_in_subscription_order() -> None:
    bus = EditorBus()
    seen: List[str] = []

    def first(payload: object) -> None:
        seen.append(f"first:{payload}")

    bus.subscribe("buffer.changed", first)
    bus.subscribe("buffer.changed", lambda payload: seen.append(f"second:{payload}"))
    bus.emit("buffer.changed", 1)

    bus.unsubscribe("buffer.changed", first)
    bus.emit("buffer.changed", 2)
    bus.emit("nobody.listens")

    assert seen == ["first:1", "second:1", "second:2"]
