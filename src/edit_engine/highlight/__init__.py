"""Syntax highlight overlay fed by an external tokenizer."""

from .overlay import (
    HighlightOverlay,
    StyledSpan,
    Token,
    TokenCursor,
    Tokenizer,
    merge_spans,
)
from .styles import DEFAULT_CATEGORY, Style, StyleTable, default_style_table
from .tokenizer import PygmentsTokenizer, category_for

__all__ = [
    "DEFAULT_CATEGORY",
    "HighlightOverlay",
    "PygmentsTokenizer",
    "Style",
    "StyleTable",
    "StyledSpan",
    "Token",
    "TokenCursor",
    "Tokenizer",
    "category_for",
    "default_style_table",
    "merge_spans",
]
