"""Ranges of structural units relative to the caret or selection.

Every function returns a ``(start, end)`` tuple. When no unit exists in the
requested direction the result is an empty range at the starting offset.
"""

from __future__ import annotations

from typing import Optional

from paredit_engine.buffer import Buffer, Range
from paredit_engine.syntax.lexer import ATOM_TYPES

_NOT_FORM_START = frozenset({"ws", "eol", "comment", "close", "eof"})
_NOT_FORM_END = frozenset({"ws", "eol", "comment", "open", "reader", "bof"})


def forward_sexp_range(doc: Buffer, offset: Optional[int] = None) -> Range:
    """From the right edge of the selection to the end of the next form.

    Leading whitespace is part of the range; mid-atom, only the rest of the
    atom is covered.
    """

    if offset is None:
        offset = max(doc.selection.anchor, doc.selection.active)
    cursor = doc.get_token_cursor(offset)
    if cursor.forward_sexp():
        return (offset, cursor.offset_start)
    return (offset, offset)


def backward_sexp_range(doc: Buffer, offset: Optional[int] = None) -> Range:
    """From the start of the previous form to the left edge of the selection."""

    if offset is None:
        offset = min(doc.selection.anchor, doc.selection.active)
    cursor = doc.get_token_cursor(offset)
    if cursor.offset_start < offset:
        cursor.next()
    if cursor.backward_sexp():
        return (cursor.offset_start, offset)
    return (offset, offset)


def range_to_forward_down_list(doc: Buffer, offset: Optional[int] = None) -> Range:
    """Up to just inside the next opening bracket at this level."""

    if offset is None:
        offset = max(doc.selection.anchor, doc.selection.active)
    cursor = doc.get_token_cursor(offset)
    if cursor.down_list():
        return (offset, cursor.offset_start)
    return (offset, offset)


def range_to_backward_up_list(doc: Buffer, offset: Optional[int] = None) -> Range:
    """Back to the start of the enclosing form, reader tags included."""

    if offset is None:
        offset = min(doc.selection.anchor, doc.selection.active)
    cursor = doc.get_token_cursor(offset)
    if cursor.backward_up_list():
        return (cursor.offset_start, offset)
    return (offset, offset)


def range_to_forward_up_list(doc: Buffer, offset: Optional[int] = None) -> Range:
    if offset is None:
        offset = max(doc.selection.anchor, doc.selection.active)
    cursor = doc.get_token_cursor(offset)
    if cursor.up_list():
        return (offset, cursor.offset_start)
    return (offset, offset)


def range_to_backward_down_list(doc: Buffer, offset: Optional[int] = None) -> Range:
    if offset is None:
        offset = min(doc.selection.anchor, doc.selection.active)
    cursor = doc.get_token_cursor(offset)
    if cursor.backward_down_list():
        return (cursor.offset_start, offset)
    return (offset, offset)


def current_form_range(doc: Buffer, offset: Optional[int] = None) -> Range:
    """The form the caret is on, touching, or (in whitespace) nearest to.

    Preference order: the atom or string the caret is inside, the form that
    starts at the caret, the form that ends at the caret, the next form, the
    previous form.
    """

    if offset is None:
        offset = doc.selection.active
    cursor = doc.get_token_cursor(offset)
    token = cursor.get_token()

    if token.contains(offset) and token.type in ATOM_TYPES:
        start = cursor.clone()
        start.backward_readers()
        return (start.offset_start, token.end)

    if token.start == offset and token.type not in _NOT_FORM_START:
        start = cursor.clone()
        start.backward_readers()
        end = cursor.clone()
        if end.forward_sexp():
            return (start.offset_start, end.offset_start)

    if token.start == offset and cursor.get_prev_token().type not in _NOT_FORM_END:
        back = cursor.clone()
        if back.backward_sexp():
            return (back.offset_start, offset)

    ahead = cursor.clone()
    ahead.forward_whitespace()
    start = ahead.clone()
    if ahead.forward_sexp():
        return (start.offset_start, ahead.offset_start)

    back = cursor.clone()
    if back.backward_sexp():
        end = back.clone()
        end.forward_sexp()
        return (back.offset_start, end.offset_start)
    return (offset, offset)


__all__ = [
    "backward_sexp_range",
    "current_form_range",
    "forward_sexp_range",
    "range_to_backward_down_list",
    "range_to_backward_up_list",
    "range_to_forward_down_list",
    "range_to_forward_up_list",
]
