"""Clipboard boundary; hosts plug in the system clipboard."""

from __future__ import annotations

from typing import Optional, Protocol


class Clipboard(Protocol):
    def get_text(self) -> Optional[str]:
        ...

    def set_text(self, value: str) -> None:
        ...


class InMemoryClipboard:
    """Process-local clipboard used when no host clipboard is attached."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._value = initial

    def get_text(self) -> Optional[str]:
        return self._value

    def set_text(self, value: str) -> None:
        self._value = value


__all__ = ["Clipboard", "InMemoryClipboard"]
