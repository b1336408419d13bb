"""Editor-wide settings injected at construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from edit_engine.buffer.undo import MAX_STACK_SIZE


@dataclass(frozen=True, slots=True)
class EditorSettings:
    indent_width: int = 2
    line_comment: str = "//"
    block_comment: Tuple[str, str] = ("/*", "*/")
    max_history: int = MAX_STACK_SIZE

    def __post_init__(self) -> None:
        if self.indent_width < 1:
            raise ValueError("indent_width must be positive")
        if not self.line_comment:
            raise ValueError("line_comment must not be empty")
        if len(self.block_comment) != 2 or not all(self.block_comment):
            raise ValueError("block_comment needs an opening and a closing marker")

    @property
    def indent(self) -> str:
        return " " * self.indent_width


__all__ = ["EditorSettings"]
