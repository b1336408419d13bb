"""Text storage for the single editing buffer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TextDocument:
    """Flat string storage with a change counter.

    Offsets into the document are Python string indices (code points).
    ``version`` increases on every content change so derived caches can key
    on it; ``modified`` tracks unsaved changes.
    """

    text: str = ""
    version: int = 0
    modified: bool = False

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text=text, version=0, modified=False)

    def __len__(self) -> int:
        return len(self.text)

    def replace(self, start: int, end: int, new_text: str) -> None:
        """Replace ``[start:end]`` with ``new_text`` and bump the version."""

        self.text = self.text[:start] + new_text + self.text[end:]
        self.version += 1
        self.modified = True

    def reset(self, text: str, *, modified: bool) -> None:
        self.text = text
        self.version += 1
        self.modified = modified

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]


__all__ = ["TextDocument"]
