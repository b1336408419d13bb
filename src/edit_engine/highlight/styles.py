"""Immutable style table mapping token categories to colors."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_CATEGORY = "default"


@dataclass(frozen=True, slots=True)
class Style:
    color: str
    bold: bool = False
    italic: bool = False


_DEFAULT_STYLES: Mapping[str, Style] = MappingProxyType(
    {
        DEFAULT_CATEGORY: Style("#d4d4d4"),
        "keyword": Style("#569cd6", bold=True),
        "type": Style("#4ec9b0"),
        "function": Style("#dcdcaa"),
        "string": Style("#ce9178"),
        "number": Style("#b5cea8"),
        "comment": Style("#6a9955", italic=True),
        "preprocessor": Style("#c586c0"),
        "operator": Style("#d4d4d4"),
        "punctuation": Style("#808080"),
        "error": Style("#f44747", bold=True),
    }
)


@dataclass(frozen=True)
class StyleTable:
    """Read-only category → :class:`Style` lookup injected into renderers."""

    styles: Mapping[str, Style] = field(default_factory=lambda: _DEFAULT_STYLES)

    def __post_init__(self) -> None:
        object.__setattr__(self, "styles", MappingProxyType(dict(self.styles)))

    def style_for(self, category: str) -> Style:
        return self.styles.get(category) or self.styles.get(
            DEFAULT_CATEGORY, Style("#ffffff")
        )

    def with_overrides(self, overrides: Mapping[str, Style]) -> "StyleTable":
        return StyleTable({**self.styles, **overrides})

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self.styles)


def default_style_table() -> StyleTable:
    return StyleTable()


__all__ = ["DEFAULT_CATEGORY", "Style", "StyleTable", "default_style_table"]
