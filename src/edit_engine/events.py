"""Synchronous event bus connecting the editor to caches and hosts."""

from __future__ import annotations

from typing import Callable, Dict

EventCallback = Callable[[object], None]


class EditorBus:
    """Minimal pub/sub channel; callbacks run in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[EventCallback]] = {}

    def subscribe(self, event: str, callback: EventCallback) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: EventCallback) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = ["EditorBus", "EventCallback"]
