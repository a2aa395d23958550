"""Cursors that walk a token list by token, by form and by list.

``TokenCursor`` only knows about single-token steps. ``LispTokenCursor``
adds structural movement: a cursor sits *before* the token it points at,
so ``offset_start`` is the caret position the cursor represents.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .lexer import (
    TRIVIA_TYPES,
    WHITESPACE_TYPES,
    Token,
    closing_bracket_for,
)

Range = Tuple[int, int]

_BEFORE_START = Token("bof", "", 0)


class TokenCursor:
    def __init__(self, tokens: Sequence[Token], index: int = 0, *, version: int = 0) -> None:
        self.tokens = tokens
        self.index = index
        self.version = version

    def clone(self) -> "TokenCursor":
        return type(self)(self.tokens, self.index, version=self.version)

    def set(self, other: "TokenCursor") -> None:
        self.tokens = other.tokens
        self.index = other.index
        self.version = other.version

    def get_token(self) -> Token:
        return self.tokens[self.index]

    def get_prev_token(self) -> Token:
        if self.index == 0:
            return _BEFORE_START
        return self.tokens[self.index - 1]

    @property
    def offset_start(self) -> int:
        return self.get_token().start

    @property
    def offset_end(self) -> int:
        return self.get_token().end

    def at_start(self) -> bool:
        return self.index == 0

    def at_end(self) -> bool:
        return self.get_token().type == "eof"

    def next(self) -> "TokenCursor":
        if not self.at_end():
            self.index += 1
        return self

    def previous(self) -> "TokenCursor":
        if self.index > 0:
            self.index -= 1
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenCursor):
            return NotImplemented
        return self.tokens is other.tokens and self.index == other.index

    def __repr__(self) -> str:
        token = self.get_token()
        return f"<{type(self).__name__} {token.type}:{token.raw!r}@{token.start}>"


class LispTokenCursor(TokenCursor):
    """Token cursor with s-expression aware movement."""

    def clone(self) -> "LispTokenCursor":
        return LispTokenCursor(self.tokens, self.index, version=self.version)

    # -- whitespace -----------------------------------------------------

    def forward_whitespace(self, include_comments: bool = True) -> None:
        skip = TRIVIA_TYPES if include_comments else WHITESPACE_TYPES
        while not self.at_end() and self.get_token().type in skip:
            self.next()

    def backward_whitespace(self, include_comments: bool = True) -> None:
        skip = TRIVIA_TYPES if include_comments else WHITESPACE_TYPES
        while not self.at_start() and self.get_prev_token().type in skip:
            self.previous()

    def backward_readers(self, skip_comments: bool = True) -> None:
        """Extend backwards over the reader tags that decorate the form here."""

        scan = self.clone()
        while True:
            scan.backward_whitespace(skip_comments)
            if scan.at_start() or scan.get_prev_token().type != "reader":
                return
            scan.previous()
            self.set(scan)

    # -- forms ------------------------------------------------------------

    def forward_sexp(self, skip_comments: bool = True) -> bool:
        """Move past the next form, including any reader tags in front of it.

        Returns ``False`` (cursor unmoved) when a closing bracket or the end
        of the text comes first, or when a tag chain has nothing to decorate.
        """

        cursor = self.clone()
        cursor.forward_whitespace(skip_comments)
        token = cursor.get_token()
        while token.type == "reader":
            cursor.next()
            cursor.forward_whitespace(skip_comments)
            token = cursor.get_token()
        if token.type in ("close", "eof"):
            return False
        if token.type == "open":
            depth = 0
            while not cursor.at_end():
                kind = cursor.get_token().type
                if kind == "open":
                    depth += 1
                elif kind == "close":
                    depth -= 1
                cursor.next()
                if depth == 0:
                    self.set(cursor)
                    return True
            return False
        cursor.next()
        self.set(cursor)
        return True

    def backward_sexp(self, skip_comments: bool = True) -> bool:
        """Move to the start of the previous form (reader tags included)."""

        cursor = self.clone()
        cursor.backward_whitespace(skip_comments)
        if cursor.at_start() or cursor.get_prev_token().type == "open":
            return False
        if cursor.get_prev_token().type == "close":
            depth = 0
            while not cursor.at_start():
                kind = cursor.get_prev_token().type
                if kind == "close":
                    depth += 1
                elif kind == "open":
                    depth -= 1
                cursor.previous()
                if depth == 0:
                    break
            else:
                return False
        else:
            cursor.previous()
        cursor.backward_readers(skip_comments)
        self.set(cursor)
        return True

    # -- lists ----------------------------------------------------------

    def forward_list(self) -> bool:
        """Move to the closing bracket of the enclosing list."""

        cursor = self.clone()
        depth = 0
        while not cursor.at_end():
            kind = cursor.get_token().type
            if kind == "close":
                if depth == 0:
                    self.set(cursor)
                    return True
                depth -= 1
            elif kind == "open":
                depth += 1
            cursor.next()
        return False

    def backward_list(self) -> bool:
        """Move to just after the opening bracket of the enclosing list."""

        cursor = self.clone()
        depth = 0
        while not cursor.at_start():
            kind = cursor.get_prev_token().type
            if kind == "open":
                if depth == 0:
                    self.set(cursor)
                    return True
                depth -= 1
            elif kind == "close":
                depth += 1
            cursor.previous()
        return False

    def up_list(self) -> bool:
        """Move past the closing bracket of the enclosing list."""

        cursor = self.clone()
        if cursor.forward_list():
            cursor.next()
            self.set(cursor)
            return True
        return False

    def backward_up_list(self) -> bool:
        """Move before the enclosing list's opening bracket and its tags."""

        cursor = self.clone()
        if cursor.backward_list():
            cursor.previous()
            cursor.backward_readers()
            self.set(cursor)
            return True
        return False

    def down_list(self) -> bool:
        """Move forward into the next list at this level (past its tags)."""

        cursor = self.clone()
        while True:
            cursor.forward_whitespace()
            kind = cursor.get_token().type
            if kind == "open":
                cursor.next()
                self.set(cursor)
                return True
            if kind == "reader":
                cursor.next()
                continue
            if not cursor.forward_sexp():
                return False

    def backward_down_list(self) -> bool:
        """Move backward into the previous list, just before its close."""

        cursor = self.clone()
        while True:
            cursor.backward_whitespace()
            if cursor.at_start():
                return False
            if cursor.get_prev_token().type == "close":
                cursor.previous()
                self.set(cursor)
                return True
            if not cursor.backward_sexp():
                return False

    # -- context queries ------------------------------------------------

    def within_string(self, offset: Optional[int] = None) -> bool:
        token = self.get_token()
        position = token.start if offset is None else offset
        if token.type == "str" and token.contains(position):
            return True
        previous = self.get_prev_token()
        return (
            previous.type == "str"
            and not previous.closed
            and position == previous.end
            and not self.at_start()
        )

    def within_comment(self, offset: Optional[int] = None) -> bool:
        token = self.get_token()
        position = token.start if offset is None else offset
        if token.type == "comment" and token.start < position:
            return True
        previous = self.get_prev_token()
        return (
            previous.type == "comment"
            and position == token.start
            and not self.at_start()
        )

    def at_top_level(self) -> bool:
        return not self.clone().backward_list()

    def list_depth(self) -> int:
        depth = 0
        cursor = self.clone()
        while cursor.backward_up_list():
            depth += 1
        return depth

    def enclosing_list_range(self) -> Optional[Range]:
        """``[open.start, close.end)`` of the enclosing list."""

        start = self.clone()
        end = self.clone()
        if not (start.backward_list() and end.forward_list()):
            return None
        return (start.get_prev_token().start, end.offset_end)

    def child_ranges(self) -> List[Range]:
        """Ranges of the direct children of the enclosing list (or top level)."""

        cursor = self.clone()
        if not cursor.backward_list():
            cursor.index = 0
        ranges: List[Range] = []
        while True:
            cursor.forward_whitespace()
            start = cursor.offset_start
            if not cursor.forward_sexp():
                return ranges
            ranges.append((start, cursor.offset_start))

    def function_name(self) -> Optional[str]:
        """Text of the first symbol in the enclosing list, if it is one."""

        cursor = self.clone()
        if not cursor.backward_list():
            return None
        cursor.forward_whitespace()
        token = cursor.get_token()
        if token.type == "id":
            return token.raw
        return None

    def doc_is_balanced(self) -> bool:
        stack: List[str] = []
        for token in self.tokens:
            if token.type == "open":
                stack.append(closing_bracket_for(token.raw))
            elif token.type == "close":
                if not stack or stack.pop() != token.raw:
                    return False
            elif token.type == "str" and not token.closed:
                return False
        return not stack


__all__ = ["LispTokenCursor", "Range", "TokenCursor"]
