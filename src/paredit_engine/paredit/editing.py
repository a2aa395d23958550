"""Character-level edits that keep brackets and quotes balanced."""

from __future__ import annotations

from typing import Optional

from paredit_engine.buffer import Buffer, ModelEdit, Selection
from paredit_engine.runtime.config import get_config
from paredit_engine.syntax import Token, closing_bracket_for
from paredit_engine.syntax.lexer import string_content_start

from .helpers import is_escaped, record_noop

CLOSING_BRACKETS = frozenset(")]}")


def _replace_selection(doc: Buffer, text: str, label: str, caret_advance: int) -> None:
    start, end = doc.selection.as_range
    doc.edit(
        [ModelEdit(start, end, text)],
        selection=Selection.caret(start + caret_advance),
        label=label,
    )


def _delete(
    doc: Buffer, start: int, end: int, label: str, caret: Optional[int] = None
) -> None:
    doc.edit(
        [ModelEdit.delete(start, end)],
        selection=Selection.caret(start if caret is None else caret),
        label=label,
    )


def _move_caret(doc: Buffer, offset: int) -> None:
    doc.selection = Selection.caret(offset)


def _is_pair(opening: Token, closing: Token) -> bool:
    return (
        opening.type == "open"
        and closing.type == "close"
        and opening.end == closing.start
        and closing_bracket_for(opening.raw) == closing.raw
    )


def close(doc: Buffer, bracket: str = ")") -> None:
    """Step over the matching closing bracket, or type it where that is safe.

    Stepping over leaves the text alone, whitespace before the bracket
    included. Inside a comment this does nothing; in a balanced document a
    bracket that would unbalance it is not inserted.
    """

    offset = doc.selection.active
    cursor = doc.get_token_cursor(offset)
    if cursor.within_comment(offset):
        record_noop("close", doc, "in_comment")
        return
    ahead = cursor.clone()
    ahead.forward_whitespace(False)
    token = ahead.get_token()
    in_string = cursor.within_string(offset)
    if token.type == "close" and token.raw == bracket and not in_string:
        doc.selection = Selection.caret(token.end)
        return
    if in_string or not cursor.doc_is_balanced():
        _replace_selection(doc, bracket, "close", len(bracket))
        return
    record_noop("close", doc, "balanced", bracket=bracket)


def _string_at(doc: Buffer, offset: int) -> Optional[Token]:
    cursor = doc.get_token_cursor(offset)
    token = cursor.get_token()
    if token.type == "str" and token.contains(offset):
        return token
    previous = cursor.get_prev_token()
    if (
        previous.type == "str"
        and not previous.closed
        and previous.end == offset
        and not cursor.at_start()
    ):
        return previous
    return None


def string_quote(doc: Buffer) -> None:
    """Type a double quote the structural way.

    Outside strings a ``""`` pair is inserted; at a string's closing quote the
    caret steps over it; inside a string the quote is escaped.
    """

    selection = doc.selection
    if not selection.is_empty:
        _replace_selection(doc, '"', "string_quote", 1)
        return
    offset = selection.active
    text = doc.text
    string = _string_at(doc, offset)
    if string is not None:
        if string.closed and offset == string.end - 1:
            _move_caret(doc, string.end)
        elif is_escaped(text, offset) or (not string.closed and offset == string.end):
            _replace_selection(doc, '"', "string_quote", 1)
        else:
            _replace_selection(doc, '\\"', "string_quote", 2)
        return
    cursor = doc.get_token_cursor(offset)
    if cursor.within_comment(offset) or is_escaped(text, offset):
        _replace_selection(doc, '"', "string_quote", 1)
        return
    _replace_selection(doc, '""', "string_quote", 1)


def backspace(doc: Buffer) -> None:
    """Delete backwards without breaking structure.

    Brackets and quotes of non-empty forms are stepped over instead of
    deleted; empty pairs go as a unit; unbalanced brackets are deleted.
    """

    selection = doc.selection
    if not selection.is_empty:
        _delete(doc, selection.start, selection.end, "backspace")
        return
    offset = selection.active
    if offset == 0:
        record_noop("backspace", doc, "start_of_buffer")
        return
    text = doc.text
    if offset >= 2 and is_escaped(text, offset - 1):
        _delete(doc, offset - 2, offset, "backspace")
        return

    cursor = doc.get_token_cursor(offset)
    token = cursor.get_token()
    previous = cursor.get_prev_token()
    at_boundary = token.start == offset and not cursor.at_start()

    if at_boundary and _is_pair(previous, token):
        _delete(doc, previous.start, token.end, "backspace")
        return

    string = _string_at(doc, offset)
    if string is not None:
        content_start = string_content_start(string)
        if offset < content_start:
            _move_caret(doc, string.start)
        elif offset == content_start and string.closed:
            if string.end - 1 == content_start:
                _delete(doc, string.start, string.end, "backspace")
            else:
                _move_caret(doc, string.start)
        elif offset == content_start:
            _delete(doc, string.start, content_start, "backspace")
        else:
            _delete(doc, offset - 1, offset, "backspace")
        return

    if at_boundary and previous.type == "str":
        _move_caret(doc, offset - 1)
        return
    if at_boundary and previous.type in ("open", "close"):
        if cursor.doc_is_balanced():
            _move_caret(doc, previous.start)
        else:
            _delete(doc, previous.start, previous.end, "backspace")
        return
    _delete(doc, offset - 1, offset, "backspace")


def delete_forward(doc: Buffer) -> None:
    """Forward mirror of :func:`backspace`."""

    selection = doc.selection
    if not selection.is_empty:
        _delete(doc, selection.start, selection.end, "delete_forward")
        return
    offset = selection.active
    text = doc.text
    if offset >= len(text):
        record_noop("delete_forward", doc, "end_of_buffer")
        return
    if text[offset] == "\\" and not is_escaped(text, offset):
        _delete(doc, offset, min(offset + 2, len(text)), "delete_forward")
        return

    cursor = doc.get_token_cursor(offset)
    token = cursor.get_token()
    previous = cursor.get_prev_token()
    at_boundary = token.start == offset

    if at_boundary and not cursor.at_start() and _is_pair(previous, token):
        _delete(doc, previous.start, token.end, "delete_forward", caret=previous.start)
        return

    if at_boundary and token.type == "str":
        content_start = string_content_start(token)
        if token.closed:
            _move_caret(doc, content_start)
        else:
            _delete(doc, token.start, content_start, "delete_forward")
        return

    string = _string_at(doc, offset)
    if string is not None:
        if string.closed and offset == string.end - 1:
            if offset == string_content_start(string):
                _delete(doc, string.start, string.end, "delete_forward")
            else:
                _move_caret(doc, string.end)
        elif offset < string_content_start(string):
            _move_caret(doc, string_content_start(string))
        else:
            _delete(doc, offset, offset + 1, "delete_forward")
        return

    if at_boundary and token.type in ("open", "close"):
        if cursor.doc_is_balanced():
            _move_caret(doc, token.end)
        else:
            _delete(doc, token.start, token.end, "delete_forward")
        return
    _delete(doc, offset, offset + 1, "delete_forward")


def on_type_close(doc: Buffer, bracket: str, strict: Optional[bool] = None) -> None:
    """Fix up a closing bracket an editor has just inserted before the caret.

    In strict mode the typed bracket is removed again and :func:`close`
    decides whether to step over an existing bracket or keep the new one.
    """

    if bracket not in CLOSING_BRACKETS:
        return
    if strict is None:
        strict = get_config().strict_close
    if not strict:
        return
    offset = doc.selection.active
    text = doc.text
    if offset == 0 or text[offset - 1] != bracket or is_escaped(text, offset - 1):
        return
    cursor = doc.get_token_cursor(offset)
    if cursor.within_comment(offset):
        return
    backspace(doc)
    close(doc, bracket)


__all__ = [
    "backspace",
    "close",
    "delete_forward",
    "on_type_close",
    "string_quote",
]
