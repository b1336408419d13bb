from __future__ import annotations

from typing import Sequence

from edit_engine.layout import CellMetrics, WrapCache, WrappedLine, wrap_text


def unit(_char: str) -> float:
    return 1.0


def rebuild(lines: Sequence[WrappedLine]) -> str:
    parts = []
    for previous, line in zip((None, *lines), lines):
        if previous is not None and previous.logical_index != line.logical_index:
            parts.append("\n")
        parts.append(line.text)
    return "".join(parts)


def test_wrap_round_trips_text_and_offsets() -> None:
    samples = ["", "a", "abc\n", "\n\n", "hello world\nfoo\n\nbar baz qux", "x" * 23]
    for text in samples:
        lines = wrap_text(text, 5, unit)
        assert rebuild(lines) == text
        for line in lines:
            assert text[line.start : line.end] == line.text


def test_wrap_splits_long_lines_greedily() -> None:
    lines = wrap_text("abcdef\ngh", 4, unit)

    assert [line.text for line in lines] == ["abcd", "ef", "gh"]
    assert [line.start for line in lines] == [0, 4, 7]
    assert [line.logical_index for line in lines] == [0, 0, 1]
    assert [line.logical_start for line in lines] == [0, 0, 7]


def test_wrap_never_exceeds_width_except_single_wide_char() -> None:
    metrics = CellMetrics()
    lines = wrap_text("中文字", 3, metrics.width_of)

    assert [line.text for line in lines] == ["中", "文", "字"]

    narrow = wrap_text("中x", 1, metrics.width_of)
    assert [line.text for line in narrow] == ["中", "x"]


def test_wrap_non_positive_width_places_one_char_per_line() -> None:
    lines = wrap_text("abc", 0, unit)

    assert [line.text for line in lines] == ["a", "b", "c"]


def test_wrap_trailing_newline_adds_empty_line() -> None:
    lines = wrap_text("abc\n", 10, unit)

    assert len(lines) == 2
    assert lines[-1] == WrappedLine(start=4, text="", logical_index=1, logical_start=4)


def test_wrap_empty_text_has_one_line() -> None:
    assert wrap_text("", 10, unit) == (WrappedLine(0, "", 0, 0),)


def test_wrap_keeps_blank_lines() -> None:
    lines = wrap_text("a\n\nb", 10, unit)

    assert [line.text for line in lines] == ["a", "", "b"]
    assert [line.logical_index for line in lines] == [0, 1, 2]


def test_wrap_cache_recomputes_only_when_needed() -> None:
    cache = WrapCache()

    first = cache.get("abc", 1, 10, unit)
    second = cache.get("abc", 1, 10, unit)
    assert first is second
    assert cache.computations == 1

    cache.invalidate()
    cache.get("abc", 1, 10, unit)
    assert cache.computations == 2

    cache.get("abc", 1, 2, unit)
    assert cache.computations == 3

    cache.get("abcd", 2, 2, unit)
    assert cache.computations == 4
