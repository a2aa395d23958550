"""Regex lexer turning buffer text into a flat, gap-free token list.

Bracket prefixes (``#``, ``'``, ``^``, ``#?`` ...) are glued onto the
opening bracket so ``#{``, ``#(`` and ``^{`` each arrive as one ``open``
token. Reader tags such as ``#inst`` stay separate ``reader`` tokens; the
cursor binds them to the form that follows.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List

CLOSE_FOR_OPEN: Dict[str, str] = {"(": ")", "[": "]", "{": "}"}

WHITESPACE_TYPES = frozenset({"ws", "eol"})
TRIVIA_TYPES = frozenset({"ws", "eol", "comment"})
ATOM_TYPES = frozenset({"id", "kw", "lit", "str", "junk"})


class LexerError(RuntimeError):
    """Raised when no token rule can consume the text at ``position``."""

    def __init__(self, position: int) -> None:
        super().__init__(f"No token matches at offset {position}")
        self.position = position

_NOT_SYMBOL = r"\s,()\[\]{}\"';\\"

_TOKEN_PATTERN = re.compile(
    rf"""
    (?P<eol>\r?\n)
  | (?P<ws>(?:[^\S\n]|,)+)
  | (?P<comment>;[^\n]*)
  | (?P<str>\#?"(?:[^"\\]|\\.)*")
  | (?P<str_unclosed>\#?"(?:[^"\\]|\\.)*\\?)
  | (?P<open>(?:\#::?[^{_NOT_SYMBOL}]*|\#\?@|\#\?|\#'|~@|[\#'`~^@])*[(\[{{])
  | (?P<close>[)\]}}])
  | (?P<char>\\(?:newline|space|tab|formfeed|backspace|return|u[0-9a-fA-F]{{4}}|o[0-7]{{1,3}}|.))
  | (?P<special>\#\#(?:-?Inf|NaN))
  | (?P<ignore>\#_)
  | (?P<atom>(?:\#'|~@|[@'`~^])*[^{_NOT_SYMBOL}\#@`~^][^\s,()\[\]{{}}";\\]*)
  | (?P<reader>\#[^{_NOT_SYMBOL}@`~^]+)
  | (?P<junk>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_ATOM_PREFIX = re.compile(r"(?:#'|~@|[@'`~^])*")
_NUMBER = re.compile(r"[+-]?\d")
_LITERAL_WORDS = frozenset({"nil", "true", "false"})


@dataclass(frozen=True, slots=True)
class Token:
    """A read-only lexical unit; ``start`` is an absolute buffer offset."""

    type: str
    raw: str
    start: int
    closed: bool = True

    @property
    def end(self) -> int:
        return self.start + len(self.raw)

    def contains(self, offset: int) -> bool:
        return self.start < offset < self.end


def _classify_atom(raw: str) -> str:
    body = raw[_ATOM_PREFIX.match(raw).end():]  # type: ignore[union-attr]
    if body.startswith(":"):
        return "kw"
    if _NUMBER.match(body) or body in _LITERAL_WORDS:
        return "lit"
    return "id"


def tokenize(text: str) -> List[Token]:
    """Lex ``text`` into tokens that tile it exactly, plus an ``eof`` sentinel."""

    tokens: List[Token] = []
    position = 0
    length = len(text)
    while position < length:
        match = _TOKEN_PATTERN.match(text, position)
        if match is None or match.end() == position:
            raise LexerError(position)
        kind = match.lastgroup or "junk"
        raw = match.group()
        if kind == "atom":
            kind = _classify_atom(raw)
        elif kind in {"char", "special"}:
            kind = "lit"
        elif kind == "ignore":
            kind = "reader"
        if kind == "str_unclosed":
            tokens.append(Token("str", raw, position, closed=False))
        else:
            tokens.append(Token(kind, raw, position))
        position = match.end()
    tokens.append(Token("eof", "", length))
    return tokens


def closing_bracket_for(opening: str) -> str:
    """Return the closing bracket matching an ``open`` token's raw text."""

    return CLOSE_FOR_OPEN.get(opening[-1:], "")


def is_map_opening(opening: str) -> bool:
    """``{``, ``^{`` and ``#:ns{`` hold key/value pairs; ``#{`` sets do not."""

    return opening.endswith("{") and not opening.endswith("#{")


def string_content_start(token: Token) -> int:
    """Offset just inside the opening quote of a ``str`` token."""

    return token.start + (2 if token.raw.startswith("#") else 1)


__all__ = [
    "ATOM_TYPES",
    "CLOSE_FOR_OPEN",
    "LexerError",
    "TRIVIA_TYPES",
    "Token",
    "WHITESPACE_TYPES",
    "closing_bracket_for",
    "is_map_opening",
    "string_content_start",
    "tokenize",
]
