"""Directional selection changes and the grow/shrink selection stack."""

from __future__ import annotations

from paredit_engine.buffer import Buffer, Range, Selection

from .helpers import record_noop
from .navigation import (
    backward_sexp_range,
    current_form_range,
    forward_sexp_range,
    range_to_backward_down_list,
    range_to_backward_up_list,
    range_to_forward_down_list,
    range_to_forward_up_list,
)


def grow_selection_stack(doc: Buffer, span: Range) -> None:
    """Make ``Selection(*span)`` current and push it on the selection stack.

    A stack whose top no longer matches the current selection is stale and
    restarts from the current selection. Growing into the top entry again
    changes nothing.
    """

    selection = Selection(span[0], span[1])
    stack = doc.selection_stack
    if stack:
        if stack[-1] != doc.selection:
            stack[:] = [doc.selection]
        elif stack[-1] == selection:
            return
    else:
        stack.append(doc.selection)
    doc.selection = selection
    stack.append(selection)


def shrink_selection(doc: Buffer) -> None:
    """Pop back to the previous selection on the stack, if there is one."""

    stack = doc.selection_stack
    if not stack:
        return
    if stack[-1] != doc.selection:
        stack.clear()
        return
    if len(stack) > 1:
        stack.pop()
        doc.selection = stack[-1]


def select_range_forward(doc: Buffer, span: Range) -> None:
    """Keep the anchor and move the active end to the right edge of ``span``."""

    grow_selection_stack(doc, (doc.selection.anchor, max(span)))


def select_range_backward(doc: Buffer, span: Range) -> None:
    """Keep the anchor and move the active end to the left edge of ``span``."""

    grow_selection_stack(doc, (doc.selection.anchor, min(span)))


def move_to_range_right(doc: Buffer, span: Range) -> None:
    doc.selection = Selection.caret(max(span))


def move_to_range_left(doc: Buffer, span: Range) -> None:
    doc.selection = Selection.caret(min(span))


def select_forward_sexp(doc: Buffer) -> None:
    select_range_forward(doc, forward_sexp_range(doc))


def select_backward_sexp(doc: Buffer) -> None:
    select_range_backward(doc, backward_sexp_range(doc))


def select_forward_up_list(doc: Buffer) -> None:
    select_range_forward(doc, range_to_forward_up_list(doc))


def select_backward_up_list(doc: Buffer) -> None:
    select_range_backward(doc, range_to_backward_up_list(doc))


def select_forward_down_list(doc: Buffer) -> None:
    select_range_forward(doc, range_to_forward_down_list(doc))


def select_backward_down_list(doc: Buffer) -> None:
    select_range_backward(doc, range_to_backward_down_list(doc))


def select_current_form(doc: Buffer) -> None:
    start, end = current_form_range(doc)
    if start == end:
        record_noop("select_current_form", doc, "no_form")
        return
    grow_selection_stack(doc, (start, end))


def grow_selection(doc: Buffer) -> None:
    """Expand: caret -> current form -> list contents -> whole list -> ..."""

    selection = doc.selection
    if selection.is_empty:
        form = current_form_range(doc)
        if form[0] != form[1]:
            grow_selection_stack(doc, form)
            return

    start, end = selection.as_range
    cursor = doc.get_token_cursor(start)
    inner_start = cursor.clone()
    inner_end = cursor.clone()
    if not (inner_start.backward_list() and inner_end.forward_list()):
        record_noop("grow_selection", doc, "top_level")
        return
    contents = (inner_start.offset_start, inner_end.offset_start)
    if contents != (start, end) and contents[0] <= start and end <= contents[1]:
        grow_selection_stack(doc, contents)
        return
    whole_start = cursor.clone()
    whole_start.backward_up_list()
    whole_end = inner_end.clone()
    whole_end.next()
    grow_selection_stack(doc, (whole_start.offset_start, whole_end.offset_start))


__all__ = [
    "grow_selection",
    "grow_selection_stack",
    "move_to_range_left",
    "move_to_range_right",
    "select_backward_down_list",
    "select_backward_sexp",
    "select_backward_up_list",
    "select_current_form",
    "select_forward_down_list",
    "select_forward_sexp",
    "select_forward_up_list",
    "select_range_backward",
    "select_range_forward",
    "shrink_selection",
]
