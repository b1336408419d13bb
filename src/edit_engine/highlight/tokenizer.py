"""Default tokenizer backed by pygments lexers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Tuple

from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.token import (
    Comment,
    Error,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
)
from pygments.util import ClassNotFound

from .overlay import Token
from .styles import DEFAULT_CATEGORY

# First match wins, so more specific token types come first.
CATEGORY_MAP: Tuple[Tuple[Any, str], ...] = (
    (Comment.Preproc, "preprocessor"),
    (Comment, "comment"),
    (Keyword.Type, "type"),
    (Keyword, "keyword"),
    (Name.Builtin, "type"),
    (Name.Class, "type"),
    (Name.Function, "function"),
    (String, "string"),
    (Number, "number"),
    (Operator, "operator"),
    (Punctuation, "punctuation"),
    (Error, "error"),
)


def category_for(token_type: Any) -> str:
    for parent, category in CATEGORY_MAP:
        if token_type in parent:
            return category
    return DEFAULT_CATEGORY


class PygmentsTokenizer:
    """Adapts a pygments lexer to the engine's tokenizer interface."""

    def __init__(self, lexer: Optional[Any] = None) -> None:
        self.lexer = lexer or TextLexer(stripnl=False, ensurenl=False)

    @classmethod
    def for_filename(cls, path: str | Path, text: str = "") -> "PygmentsTokenizer":
        try:
            lexer = get_lexer_for_filename(
                str(path), text, stripnl=False, ensurenl=False
            )
        except ClassNotFound:
            lexer = TextLexer(stripnl=False, ensurenl=False)
        return cls(lexer)

    @property
    def name(self) -> str:
        return str(getattr(self.lexer, "name", "text"))

    def tokenize(self, text: str) -> List[Token]:
        tokens: List[Token] = []
        for position, token_type, value in self.lexer.get_tokens_unprocessed(text):
            if not value:
                continue
            tokens.append(Token(position, value, category_for(token_type)))
        return tokens


__all__ = ["CATEGORY_MAP", "PygmentsTokenizer", "category_for"]
