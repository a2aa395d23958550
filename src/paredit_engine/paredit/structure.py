"""Slurp, barf, raise, splice and wrap.

Each operation computes all of its edits up front and commits them through
``Buffer.edit`` as one step; when the structure does not allow the change it
logs a no-op and leaves the buffer alone.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from paredit_engine.buffer import Buffer, ModelEdit, Selection, shift_offset
from paredit_engine.syntax import LispTokenCursor

from .helpers import offset_in_form, record_noop
from .navigation import current_form_range

_Plan = Tuple[List[ModelEdit], LispTokenCursor]


def _shifted_selection(doc: Buffer, edits: List[ModelEdit]) -> Selection:
    selection = doc.selection
    return Selection(
        shift_offset(selection.anchor, edits), shift_offset(selection.active, edits)
    )


def _forward_slurp_plan(doc: Buffer, offset: int) -> Optional[_Plan]:
    cursor = doc.get_token_cursor(offset)
    close_cursor = cursor.clone()
    if not close_cursor.forward_list():
        return None
    close = close_cursor.get_token()

    inside = close_cursor.clone()
    inside.backward_whitespace(False)
    outside = close_cursor.clone()
    outside.next()
    outside.forward_whitespace(False)
    form_end = outside.clone()
    if not form_end.forward_sexp():
        # Nothing follows this list: slurp into the enclosing one instead.
        return _forward_slurp_plan(doc, close.end)

    gap_start, gap_end = inside.offset_start, outside.offset_start
    if "\n" in doc.get_text(gap_start, gap_end):
        edits = [ModelEdit.delete(close.start, close.end)]
    else:
        edits = [ModelEdit(gap_start, gap_end, " ")]
    edits.append(ModelEdit.insert(form_end.offset_start, close.raw))
    return edits, cursor


def forward_slurp_sexp(doc: Buffer) -> None:
    """Pull the form after the enclosing list's closing bracket inside it."""

    plan = _forward_slurp_plan(doc, doc.selection.active)
    if plan is None:
        record_noop("forward_slurp_sexp", doc, "nothing_to_slurp")
        return
    edits, cursor = plan
    doc.edit(
        edits,
        selection=_shifted_selection(doc, edits),
        label="forward_slurp_sexp",
        based_on=cursor,
    )


def _backward_slurp_plan(doc: Buffer, offset: int) -> Optional[_Plan]:
    cursor = doc.get_token_cursor(offset)
    open_cursor = cursor.clone()
    if not open_cursor.backward_list():
        return None
    opening = open_cursor.get_prev_token()

    inside = open_cursor.clone()
    inside.forward_whitespace(False)
    tagged = open_cursor.clone()
    tagged.previous()
    tagged.backward_readers()
    outside = tagged.clone()
    outside.backward_whitespace(False)
    form_start = outside.clone()
    if not form_start.backward_sexp():
        return _backward_slurp_plan(doc, tagged.offset_start)

    opening_text = doc.get_text(tagged.offset_start, opening.end)
    gap_start, gap_end = outside.offset_start, inside.offset_start
    if "\n" in doc.get_text(gap_start, gap_end):
        edits = [ModelEdit.delete(tagged.offset_start, opening.end)]
    else:
        edits = [ModelEdit(gap_start, gap_end, " ")]
    edits.insert(0, ModelEdit.insert(form_start.offset_start, opening_text))
    return edits, cursor


def backward_slurp_sexp(doc: Buffer) -> None:
    """Pull the form before the enclosing list's opening bracket inside it."""

    plan = _backward_slurp_plan(doc, doc.selection.active)
    if plan is None:
        record_noop("backward_slurp_sexp", doc, "nothing_to_slurp")
        return
    edits, cursor = plan
    doc.edit(
        edits,
        selection=_shifted_selection(doc, edits),
        label="backward_slurp_sexp",
        based_on=cursor,
    )


def forward_barf_sexp(doc: Buffer) -> None:
    """Push the last form of the enclosing list out past its closing bracket."""

    offset = doc.selection.active
    cursor = doc.get_token_cursor(offset)
    close_cursor = cursor.clone()
    if not close_cursor.forward_list():
        record_noop("forward_barf_sexp", doc, "not_in_list")
        return
    close = close_cursor.get_token()
    last = close_cursor.clone()
    if not last.backward_sexp():
        record_noop("forward_barf_sexp", doc, "empty_list")
        return
    new_close = last.clone()
    new_close.backward_whitespace()
    position = new_close.offset_start
    separator = " " if position == last.offset_start else ""
    edits = [
        ModelEdit.insert(position, close.raw + separator),
        ModelEdit.delete(close.start, close.end),
    ]
    if offset >= position:
        selection = Selection.caret(position)
    else:
        selection = _shifted_selection(doc, edits)
    doc.edit(edits, selection=selection, label="forward_barf_sexp", based_on=cursor)


def backward_barf_sexp(doc: Buffer) -> None:
    """Push the first form of the enclosing list out before its opening bracket."""

    offset = doc.selection.active
    cursor = doc.get_token_cursor(offset)
    open_cursor = cursor.clone()
    if not open_cursor.backward_list():
        record_noop("backward_barf_sexp", doc, "not_in_list")
        return
    opening = open_cursor.get_prev_token()
    tagged = open_cursor.clone()
    tagged.previous()
    tagged.backward_readers()
    first = open_cursor.clone()
    if not first.forward_sexp():
        record_noop("backward_barf_sexp", doc, "empty_list")
        return
    new_open = first.clone()
    new_open.forward_whitespace()
    position = new_open.offset_start
    opening_text = doc.get_text(tagged.offset_start, opening.end)
    separator = " " if position == first.offset_start else ""
    edits = [
        ModelEdit.delete(tagged.offset_start, opening.end),
        ModelEdit.insert(position, separator + opening_text),
    ]
    if offset <= position:
        removed = opening.end - tagged.offset_start
        selection = Selection.caret(position - removed + len(separator + opening_text))
    else:
        selection = _shifted_selection(doc, edits)
    doc.edit(edits, selection=selection, label="backward_barf_sexp", based_on=cursor)


def splice_sexp(doc: Buffer) -> None:
    """Remove the brackets of the enclosing list, keeping its contents."""

    cursor = doc.get_token_cursor(doc.selection.active)
    open_cursor = cursor.clone()
    close_cursor = cursor.clone()
    if not (open_cursor.backward_list() and close_cursor.forward_list()):
        record_noop("splice_sexp", doc, "not_in_list")
        return
    opening = open_cursor.get_prev_token()
    close = close_cursor.get_token()
    edits = [
        ModelEdit.delete(opening.start, opening.end),
        ModelEdit.delete(close.start, close.end),
    ]
    doc.edit(
        edits,
        selection=_shifted_selection(doc, edits),
        label="splice_sexp",
        based_on=cursor,
    )


def raise_sexp(doc: Buffer) -> None:
    """Replace the enclosing list with the form at the caret."""

    offset = doc.selection.active
    form_start, form_end = current_form_range(doc, offset)
    if form_start == form_end:
        record_noop("raise_sexp", doc, "no_form")
        return
    cursor = doc.get_token_cursor(form_start)
    enclosing = cursor.enclosing_list_range()
    if enclosing is None:
        record_noop("raise_sexp", doc, "top_level")
        return
    list_start, list_end = enclosing
    edits = [ModelEdit(list_start, list_end, doc.get_text(form_start, form_end))]
    doc.edit(
        edits,
        selection=Selection.caret(
            list_start + offset_in_form(offset, (form_start, form_end))
        ),
        label="raise_sexp",
        based_on=cursor,
    )


def wrap_sexpr(doc: Buffer, opening: str = "(", closing: str = ")") -> None:
    """Wrap the selection, or else the current form, in ``opening``/``closing``.

    With nothing to wrap an empty pair is inserted at the caret.
    """

    selection = doc.selection
    if selection.is_empty:
        start, end = current_form_range(doc)
    else:
        start, end = selection.as_range
    cursor = doc.get_token_cursor(end)
    if opening == '"' and cursor.within_string(end):
        opening = closing = '\\"'
    edits = [ModelEdit.insert(start, opening), ModelEdit.insert(end, closing)]
    if selection.is_empty:
        new_selection = Selection.caret(start + len(opening))
    else:
        new_selection = Selection(
            selection.anchor + len(opening), selection.active + len(opening)
        )
    doc.edit(edits, selection=new_selection, label="wrap_sexpr", based_on=cursor)


__all__ = [
    "backward_barf_sexp",
    "backward_slurp_sexp",
    "forward_barf_sexp",
    "forward_slurp_sexp",
    "raise_sexp",
    "splice_sexp",
    "wrap_sexpr",
]
