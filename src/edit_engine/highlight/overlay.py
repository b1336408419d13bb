"""Token cache and per-line style spans for renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from edit_engine.layout.wrap import WrappedLine
from edit_engine.runtime import telemetry

from .styles import DEFAULT_CATEGORY, StyleTable, default_style_table


@dataclass(frozen=True, slots=True)
class Token:
    start: int
    text: str
    type: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True, slots=True)
class StyledSpan:
    """Slice of one visual line drawn with a single category."""

    start: int
    text: str
    category: str


class Tokenizer(Protocol):
    def tokenize(self, text: str) -> Sequence[Token]:
        ...


class TokenCursor:
    """Incremental overlap queries over offset-ordered tokens.

    Queries are expected in ascending order, as a renderer walks visual
    lines top to bottom; a query that moves backwards rewinds the scan.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._index = 0
        self._last_start = 0

    def overlapping(self, start: int, end: int) -> List[Token]:
        if start < self._last_start:
            self._index = 0
        self._last_start = start
        tokens = self._tokens
        while self._index < len(tokens) and tokens[self._index].end <= start:
            self._index += 1
        found: List[Token] = []
        index = self._index
        while index < len(tokens) and tokens[index].start < end:
            if tokens[index].end > start:
                found.append(tokens[index])
            index += 1
        return found


class HighlightOverlay:
    """Holds the latest token stream and a dirty flag.

    The stream is recomputed lazily, at most once per buffer version, the
    next time a renderer asks for it after :meth:`invalidate`.
    """

    def __init__(
        self, tokenizer: Tokenizer, styles: Optional[StyleTable] = None
    ) -> None:
        self.tokenizer = tokenizer
        self.styles = styles or default_style_table()
        self.dirty = True
        self._version: Optional[int] = None
        self._tokens: Tuple[Token, ...] = ()
        self.computations = 0

    def invalidate(self, _payload: object | None = None) -> None:
        self.dirty = True

    def set_tokenizer(self, tokenizer: Tokenizer) -> None:
        self.tokenizer = tokenizer
        self.dirty = True

    def tokens(self, text: str, version: int) -> Tuple[Token, ...]:
        if self.dirty or version != self._version:
            with telemetry.span("highlight::tokenize", component="highlight"):
                self._tokens = tuple(
                    sorted(self.tokenizer.tokenize(text), key=lambda t: t.start)
                )
            self.computations += 1
            self._version = version
            self.dirty = False
        return self._tokens

    def spans_for_lines(
        self, text: str, version: int, lines: Sequence[WrappedLine]
    ) -> List[List[StyledSpan]]:
        """Styled spans for every visual line, in one merge scan."""

        return list(merge_spans(self.tokens(text, version), lines))


def merge_spans(
    tokens: Sequence[Token], lines: Sequence[WrappedLine]
) -> Iterator[List[StyledSpan]]:
    """Walk tokens and lines together; both are ordered by offset.

    Text not covered by any token is emitted with the default category so
    gaps in the token stream never drop characters.
    """

    index = 0
    for line in lines:
        spans: List[StyledSpan] = []
        pos = line.start
        while index < len(tokens):
            token = tokens[index]
            if token.end <= line.start:
                index += 1
                continue
            if token.start >= line.end:
                break
            overlap_start = max(token.start, pos)
            overlap_end = min(token.end, line.end)
            if overlap_start > pos:
                spans.append(_gap(line, pos, overlap_start))
            if overlap_end > overlap_start:
                spans.append(
                    StyledSpan(
                        start=overlap_start,
                        text=line.text[
                            overlap_start - line.start : overlap_end - line.start
                        ],
                        category=token.type,
                    )
                )
                pos = overlap_end
            if token.end <= line.end:
                index += 1
            else:
                break
        if pos < line.end:
            spans.append(_gap(line, pos, line.end))
        yield spans


def _gap(line: WrappedLine, start: int, end: int) -> StyledSpan:
    return StyledSpan(
        start=start,
        text=line.text[start - line.start : end - line.start],
        category=DEFAULT_CATEGORY,
    )


__all__ = [
    "HighlightOverlay",
    "StyledSpan",
    "Token",
    "TokenCursor",
    "Tokenizer",
    "merge_spans",
]
