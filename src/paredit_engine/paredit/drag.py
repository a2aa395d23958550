"""Moving forms past their siblings and across list boundaries."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from paredit_engine.buffer import Buffer, ModelEdit, Range, Selection
from paredit_engine.runtime.config import get_config
from paredit_engine.syntax import LispTokenCursor, is_map_opening

from .helpers import first_in_list, offset_in_form, record_noop
from .navigation import current_form_range


def _pair_forms(pair_forms: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if pair_forms is None:
        return get_config().pair_forms
    return tuple(pair_forms)


def is_in_pairs_list(cursor: LispTokenCursor, pair_forms: Iterable[str]) -> bool:
    """Maps and binding vectors hold their children two by two."""

    scan = cursor.clone()
    if not scan.backward_list():
        return False
    opening = scan.get_prev_token().raw
    if is_map_opening(opening):
        return True
    if opening.endswith("["):
        scan.previous()
        outer = scan.clone()
        if not outer.backward_list():
            return False
        if outer.get_prev_token().raw.endswith("{"):
            return False
        name = scan.function_name()
        return name is not None and name in tuple(pair_forms)
    return False


def _sibling_units(
    cursor: LispTokenCursor, current: Range, pairs: bool
) -> Optional[Tuple[List[Range], int]]:
    children = cursor.child_ranges()
    if current not in children:
        return None
    index = children.index(current)
    if not pairs:
        return children, index
    complete = len(children) // 2
    if index // 2 >= complete:
        return None
    units = [(children[2 * k][0], children[2 * k + 1][1]) for k in range(complete)]
    return units, index // 2


def _moved_selection(selection: Selection, unit: Range, delta: int) -> Selection:
    if unit[0] <= selection.anchor <= unit[1]:
        return Selection(selection.anchor + delta, selection.active + delta)
    # A caret in the whitespace around the unit travels with the unit.
    return Selection.caret(unit[0] + offset_in_form(selection.active, unit) + delta)


def _swap(
    doc: Buffer,
    operation: str,
    step: int,
    pair_forms: Optional[Iterable[str]],
) -> None:
    offset = doc.selection.active
    current = current_form_range(doc, offset)
    if current[0] == current[1]:
        record_noop(operation, doc, "no_form")
        return
    cursor = doc.get_token_cursor(current[0])
    pairs = is_in_pairs_list(cursor, _pair_forms(pair_forms))
    located = _sibling_units(cursor, current, pairs)
    if located is None:
        record_noop(operation, doc, "incomplete_pair" if pairs else "not_a_sibling")
        return
    units, index = located
    other_index = index + step
    if other_index < 0 or other_index >= len(units):
        record_noop(operation, doc, "no_sibling", pairs=pairs)
        return
    unit, other = units[index], units[other_index]
    unit_text = doc.get_text(*unit)
    other_text = doc.get_text(*other)
    edits = [ModelEdit(unit[0], unit[1], other_text), ModelEdit(other[0], other[1], unit_text)]
    if step > 0:
        delta = other[1] - unit[1]
    else:
        delta = other[0] - unit[0]
    doc.edit(
        edits,
        selection=_moved_selection(doc.selection, unit, delta),
        label=operation,
        based_on=cursor,
    )


def drag_sexpr_forward(doc: Buffer, pair_forms: Optional[Iterable[str]] = None) -> None:
    """Swap the current form (or key/value pair) with the next one."""

    _swap(doc, "drag_sexpr_forward", 1, pair_forms)


def drag_sexpr_backward(doc: Buffer, pair_forms: Optional[Iterable[str]] = None) -> None:
    """Swap the current form (or key/value pair) with the previous one."""

    _swap(doc, "drag_sexpr_backward", -1, pair_forms)


def _whitespace_around(doc: Buffer, current: Range) -> Tuple[int, int]:
    left = doc.get_token_cursor(current[0])
    left.backward_whitespace(False)
    right = doc.get_token_cursor(current[1])
    right.forward_whitespace(False)
    return left.offset_start, right.offset_start


def drag_sexpr_backward_up(doc: Buffer) -> None:
    """Move the current form out of its list, in front of that list."""

    offset = doc.selection.active
    cur_start, cur_end = current_form_range(doc, offset)
    if cur_start == cur_end:
        record_noop("drag_sexpr_backward_up", doc, "no_form")
        return
    cursor = doc.get_token_cursor(cur_start)
    up = cursor.clone()
    if not up.backward_up_list():
        record_noop("drag_sexpr_backward_up", doc, "top_level")
        return
    list_start = up.offset_start
    left_start, right_end = _whitespace_around(doc, (cur_start, cur_end))
    newline = "\n" + " " * doc.document.column_of(list_start)
    if left_start < cur_start and not first_in_list(doc, cur_start):
        gap = doc.get_text(left_start, cur_start)
        deleted = (left_start, cur_end)
    else:
        # First in its list: the whitespace on both sides goes with it.
        gap = doc.get_text(left_start, cur_start) + doc.get_text(cur_end, right_end)
        deleted = (left_start, right_end)
    separator = newline if "\n" in gap else " "
    edits = [
        ModelEdit.insert(list_start, doc.get_text(cur_start, cur_end) + separator),
        ModelEdit.delete(*deleted),
    ]
    doc.edit(
        edits,
        selection=Selection.caret(list_start + offset_in_form(offset, (cur_start, cur_end))),
        label="drag_sexpr_backward_up",
        based_on=cursor,
    )


def drag_sexpr_forward_up(doc: Buffer) -> None:
    """Move the current form out of its list, right after that list."""

    offset = doc.selection.active
    cur_start, cur_end = current_form_range(doc, offset)
    if cur_start == cur_end:
        record_noop("drag_sexpr_forward_up", doc, "no_form")
        return
    cursor = doc.get_token_cursor(cur_start)
    up = cursor.clone()
    if not up.up_list():
        record_noop("drag_sexpr_forward_up", doc, "top_level")
        return
    list_end = up.offset_start
    left_start, right_end = _whitespace_around(doc, (cur_start, cur_end))
    if left_start < cur_start and not first_in_list(doc, cur_start):
        prefix = doc.get_text(left_start, cur_start)
        deleted = (left_start, cur_end)
    else:
        prefix = " "
        deleted = (left_start, right_end)
    edits = [
        ModelEdit.delete(*deleted),
        ModelEdit.insert(list_end, prefix + doc.get_text(cur_start, cur_end)),
    ]
    removed = deleted[1] - deleted[0]
    doc.edit(
        edits,
        selection=Selection.caret(
            list_end - removed + len(prefix) + offset_in_form(offset, (cur_start, cur_end))
        ),
        label="drag_sexpr_forward_up",
        based_on=cursor,
    )


def drag_sexpr_forward_down(doc: Buffer) -> None:
    """Move the current form into the next list at its level, first in line."""

    offset = doc.selection.active
    cur_start, cur_end = current_form_range(doc, offset)
    if cur_start == cur_end:
        record_noop("drag_sexpr_forward_down", doc, "no_form")
        return
    cursor = doc.get_token_cursor(cur_start)
    scan = cursor.clone()
    if not scan.forward_sexp():
        record_noop("drag_sexpr_forward_down", doc, "no_form")
        return
    while True:
        scan.forward_whitespace()
        token = scan.get_token()
        if token.type == "reader":
            scan.next()
            continue
        if token.type == "open":
            break
        if not scan.forward_sexp():
            record_noop("drag_sexpr_forward_down", doc, "no_list")
            return
    insert_at = scan.get_token().end
    inside = scan.clone()
    inside.next()
    inside.forward_whitespace()
    left_start, right_end = _whitespace_around(doc, (cur_start, cur_end))
    delete_from = left_start if first_in_list(doc, cur_start) else cur_start
    if inside.get_token().type == "close":
        separator = ""
    elif "\n" in doc.get_text(cur_end, right_end):
        separator = "\n"
    else:
        separator = " "
    edits = [
        ModelEdit.delete(delete_from, right_end),
        ModelEdit.insert(insert_at, doc.get_text(cur_start, cur_end) + separator),
    ]
    doc.edit(
        edits,
        selection=Selection.caret(
            insert_at
            - (right_end - delete_from)
            + offset_in_form(offset, (cur_start, cur_end))
        ),
        label="drag_sexpr_forward_down",
        based_on=cursor,
    )


def drag_sexpr_backward_down(doc: Buffer) -> None:
    """Move the current form into the previous list at its level, last in line."""

    offset = doc.selection.active
    cur_start, cur_end = current_form_range(doc, offset)
    if cur_start == cur_end:
        record_noop("drag_sexpr_backward_down", doc, "no_form")
        return
    cursor = doc.get_token_cursor(cur_start)
    scan = cursor.clone()
    while True:
        scan.backward_whitespace()
        if scan.at_start():
            record_noop("drag_sexpr_backward_down", doc, "no_list")
            return
        if scan.get_prev_token().type == "close":
            break
        if not scan.backward_sexp():
            record_noop("drag_sexpr_backward_down", doc, "no_list")
            return
    list_end = scan.get_prev_token().start
    inside = scan.clone()
    inside.previous()
    inside.backward_whitespace()
    separator = "" if inside.get_prev_token().type == "open" else " "
    left_start, _ = _whitespace_around(doc, (cur_start, cur_end))
    edits = [
        ModelEdit.insert(list_end, separator + doc.get_text(cur_start, cur_end)),
        ModelEdit.delete(left_start, cur_end),
    ]
    doc.edit(
        edits,
        selection=Selection.caret(
            list_end + len(separator) + offset_in_form(offset, (cur_start, cur_end))
        ),
        label="drag_sexpr_backward_down",
        based_on=cursor,
    )


__all__ = [
    "drag_sexpr_backward",
    "drag_sexpr_backward_down",
    "drag_sexpr_backward_up",
    "drag_sexpr_forward",
    "drag_sexpr_forward_down",
    "drag_sexpr_forward_up",
    "is_in_pairs_list",
]
