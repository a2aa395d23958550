"""Text storage plus the token mirror kept in step with each version."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Sequence

from paredit_engine.syntax import LispTokenCursor, Token, tokenize

from .validation import ensure_offset


@dataclass(slots=True)
class BufferDocument:
    """Immutable text snapshot with lazily lexed tokens.

    Every edit produces a new document with a bumped ``version``; cursors
    remember the version they were created for.
    """

    text: str = ""
    version: int = 0
    _tokens: List[Token] | None = field(default=None, repr=False, compare=False)
    _starts: List[int] | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(text=text, version=0)

    def replace(self, text: str) -> "BufferDocument":
        """Return a new document holding ``text`` with the version bumped."""

        return BufferDocument(text=text, version=self.version + 1)

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def tokens(self) -> Sequence[Token]:
        if self._tokens is None:
            self._tokens = tokenize(self.text)
            self._starts = [token.start for token in self._tokens]
        return self._tokens

    def get_token_cursor(self, offset: int, previous: bool = False) -> LispTokenCursor:
        """Cursor on the token containing ``offset``.

        With ``previous`` set, an offset on a token boundary resolves to the
        token that ends there instead of the one that starts there.
        """

        ensure_offset(self.length, offset)
        tokens = self.tokens
        assert self._starts is not None
        index = bisect_right(self._starts, offset) - 1
        if previous and index > 0 and tokens[index].start == offset:
            index -= 1
        return LispTokenCursor(tokens, max(index, 0), version=self.version)

    def get_text(self, start: int, end: int) -> str:
        ensure_offset(self.length, start)
        ensure_offset(self.length, end)
        if start > end:
            start, end = end, start
        return self.text[start:end]

    def snapshot(self) -> Sequence[str]:
        return tuple(self.text.split("\n"))

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    def get_line(self, index: int) -> str:
        return self.snapshot()[index]

    def column_of(self, offset: int) -> int:
        ensure_offset(self.length, offset)
        return offset - (self.text.rfind("\n", 0, offset) + 1)
