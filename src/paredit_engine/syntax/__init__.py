"""Lexer and token cursor over s-expression text."""

from .lexer import (
    CLOSE_FOR_OPEN,
    LexerError,
    Token,
    closing_bracket_for,
    is_map_opening,
    tokenize,
)
from .token_cursor import LispTokenCursor, TokenCursor

__all__ = [
    "CLOSE_FOR_OPEN",
    "LexerError",
    "LispTokenCursor",
    "Token",
    "TokenCursor",
    "closing_bracket_for",
    "is_map_opening",
    "tokenize",
]
