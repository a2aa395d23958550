import pytest

from paredit_engine.buffer import (
    Buffer,
    BufferValidationError,
    CursorDesyncError,
    ModelEdit,
    Selection,
    apply_edits,
    clamp_range,
    normalize_range,
    range_contains,
    range_is_empty,
    range_length,
    range_union,
    ranges_overlap,
    shift_offset,
    UndoTimeline,
)


def make_buffer(text: str = "(def foo [:foo :bar :baz])", offset: int = 0) -> Buffer:
    return Buffer.from_text(text, selection=Selection.caret(offset))


def test_selection_direction_is_derived() -> None:
    forward = Selection(2, 5)
    backward = Selection(5, 2)

    assert not forward.is_reversed
    assert backward.is_reversed
    assert forward != backward
    assert forward.as_range == backward.as_range == (2, 5)
    assert backward.reversed() == forward
    assert Selection.from_range((5, 2)) == forward
    assert Selection.from_range((2, 5), reversed=True) == backward
    assert Selection.caret(3).is_empty


def test_selection_rejects_negative_offsets() -> None:
    with pytest.raises(ValueError):
        Selection(-1, 0)


def test_range_helpers() -> None:
    assert normalize_range((5, 2)) == (2, 5)
    assert range_length((5, 2)) == 3
    assert range_is_empty((4, 4))
    assert range_contains((2, 8), (3, 5))
    assert range_contains((2, 8), 8)
    assert not range_contains((2, 8), (1, 5))
    assert ranges_overlap((0, 3), (2, 5))
    assert not ranges_overlap((0, 3), (3, 5))
    assert range_union((4, 6), (1, 2), (9, 7)) == (1, 9)
    assert clamp_range((-3, 40), 10) == (0, 10)


def test_apply_edits_uses_pre_edit_offsets() -> None:
    edits = [ModelEdit.insert(0, "["), ModelEdit(4, 7, "x"), ModelEdit.insert(10, "]")]

    assert apply_edits("abc defghi", edits) == "[abc xghi]"


def test_shift_offset() -> None:
    edits = [ModelEdit.insert(0, "ab"), ModelEdit.delete(5, 8)]

    assert shift_offset(3, edits) == 5
    assert shift_offset(9, edits) == 8
    assert shift_offset(6, edits) == 7


def test_edit_is_atomic_and_undoable() -> None:
    buffer = make_buffer("(a b)", 1)

    delta = buffer.edit(
        [ModelEdit(1, 2, "b"), ModelEdit(3, 4, "a")],
        selection=Selection.caret(3),
        label="swap",
    )

    assert buffer.text == "(b a)"
    assert delta.version == 1
    assert buffer.selection == Selection.caret(3)

    assert buffer.undo()
    assert buffer.text == "(a b)"
    assert buffer.selection == Selection.caret(1)

    assert buffer.redo()
    assert buffer.text == "(b a)"
    assert buffer.selection == Selection.caret(3)
    assert not buffer.redo()


def test_invalid_edits_leave_buffer_untouched() -> None:
    buffer = make_buffer("(a b)", 2)

    with pytest.raises(BufferValidationError):
        buffer.edit([ModelEdit(1, 3, "x"), ModelEdit(2, 4, "y")])
    with pytest.raises(BufferValidationError):
        buffer.edit([ModelEdit.insert(99, "x")])
    with pytest.raises(BufferValidationError):
        buffer.edit([ModelEdit.insert(0, "x")], selection=Selection.caret(50))

    assert buffer.text == "(a b)"
    assert buffer.version == 0
    assert buffer.selection == Selection.caret(2)


def test_stale_cursor_is_rejected() -> None:
    buffer = make_buffer("(a b)")
    cursor = buffer.get_token_cursor(1)
    buffer.insert_text(0, " ")

    with pytest.raises(CursorDesyncError) as info:
        buffer.edit([ModelEdit.delete(0, 1)], based_on=cursor)

    assert info.value.cursor_version == 0
    assert info.value.buffer_version == 1
    assert buffer.text == " (a b)"


def test_selection_setter_validates_bounds() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError):
        buffer.selection = Selection.caret(4)


def test_selection_only_edit_creates_no_undo_step() -> None:
    buffer = make_buffer("abc")

    buffer.edit([], selection=Selection.caret(2))

    assert buffer.selection == Selection.caret(2)
    assert buffer.version == 0
    assert not buffer.undo()


def test_close_resets_session_state() -> None:
    buffer = make_buffer("(a b)", 3)
    buffer.selection_stack.append(Selection(1, 2))
    buffer.delete_range(1, 2)

    buffer.close()

    assert buffer.closed
    assert buffer.selection == Selection.caret(0)
    assert buffer.selection_stack == []
    assert not buffer.undo()
    with pytest.raises(BufferValidationError):
        buffer.insert_text(0, "x")


def test_document_lines_and_columns() -> None:
    buffer = make_buffer("(a\n  b)")

    assert buffer.document.line_count == 2
    assert buffer.document.get_line(1) == "  b)"
    assert buffer.document.column_of(5) == 2
    assert buffer.get_text(5, 1) == "a\n  "


def test_undo_history_is_labelled_and_bounded() -> None:
    buffer = Buffer.from_text("", undo=UndoTimeline(limit=2))

    buffer.insert_text(0, "a")
    buffer.insert_text(1, "b")
    buffer.insert_text(2, "c")

    assert buffer.undo_timeline.labels() == ["insert_text", "insert_text"]
    assert buffer.undo()
    assert buffer.undo()
    assert not buffer.undo()
    assert buffer.text == "a"


def test_new_edit_discards_redo() -> None:
    buffer = make_buffer("ab", 2)
    buffer.insert_text(2, "c")
    buffer.undo()

    buffer.insert_text(2, "d")

    assert buffer.text == "abd"
    assert not buffer.redo()
