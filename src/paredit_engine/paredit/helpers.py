"""Small pieces shared by the structural operations."""

from __future__ import annotations

from typing import Any

from paredit_engine.buffer import Buffer, Range
from paredit_engine.runtime.telemetry import record_event


def record_noop(operation: str, doc: Buffer, reason: str, **data: Any) -> None:
    """Log a refused structural operation; the buffer is left untouched."""

    record_event(
        "paredit_noop",
        level="debug",
        data={
            "operation": operation,
            "reason": reason,
            "buffer": doc.name,
            "offset": doc.selection.active,
            **data,
        },
    )


def is_escaped(text: str, index: int) -> bool:
    """``True`` when the character at ``index`` follows an odd run of backslashes."""

    count = 0
    position = index - 1
    while position >= 0 and text[position] == "\\":
        count += 1
        position -= 1
    return count % 2 == 1


def offset_in_form(offset: int, form: Range) -> int:
    """``offset`` relative to the start of ``form``, clamped into the form.

    A caret in the whitespace before or after the form counts as its edge.
    """

    start, end = form
    return max(0, min(offset, end) - start)


def first_in_list(doc: Buffer, offset: int) -> bool:
    """``True`` when only whitespace separates ``offset`` from an opening bracket."""

    cursor = doc.get_token_cursor(offset)
    cursor.backward_whitespace(False)
    return not cursor.at_start() and cursor.get_prev_token().type == "open"


__all__ = ["first_in_list", "is_escaped", "offset_in_form", "record_noop"]
