from notation import doc, render, selection_of

from paredit_engine.buffer import Buffer, Selection
from paredit_engine.paredit import (
    grow_selection,
    grow_selection_stack,
    select_backward_sexp,
    select_backward_up_list,
    select_current_form,
    select_forward_sexp,
    select_forward_up_list,
    select_range_backward,
    select_range_forward,
    shrink_selection,
)

DOC_TEXT = "(def foo [:foo :bar :baz])"


def make_buffer(selection: Selection = Selection.caret(0)) -> Buffer:
    return Buffer.from_text(DOC_TEXT, selection=selection)


def test_select_range_backward_extends_backward_selection() -> None:
    buffer = doc("(def foo [:foo :bar |<|:baz|<|])")

    select_range_backward(buffer, (15, 19))

    assert render(buffer) == "(def foo [:foo |<|:bar :baz|<|])"


def test_select_range_backward_contracts_forward_selection() -> None:
    buffer = doc("(def foo [:foo :bar |>|:baz|>|])")

    select_range_backward(buffer, (15, 19))

    assert (buffer.selection.anchor, buffer.selection.active) == selection_of(
        "(def foo [:foo |<|:bar |<|:baz])"
    )


def test_select_range_forward_extends_forward_selection() -> None:
    buffer = make_buffer(Selection(15, 19))

    select_range_forward(buffer, (20, 24))

    assert buffer.selection == Selection(15, 24)


def test_select_range_forward_keeps_anchor_of_backward_selection() -> None:
    buffer = make_buffer(Selection(19, 10))

    select_range_forward(buffer, (20, 24))
    assert buffer.selection == Selection(19, 24)

    buffer = make_buffer(Selection(19, 10))
    select_range_forward(buffer, (24, 20))
    assert buffer.selection == Selection(19, 24)


def test_grow_makes_range_topmost() -> None:
    buffer = make_buffer()

    grow_selection_stack(buffer, (15, 20))

    assert buffer.selection_stack[-1] == Selection(15, 20)
    assert buffer.selection == Selection(15, 20)


def test_grow_then_shrink_returns_to_start() -> None:
    buffer = make_buffer()

    grow_selection_stack(buffer, (15, 20))
    shrink_selection(buffer)

    assert buffer.selection_stack[-1] == Selection.caret(0)
    assert buffer.selection == Selection.caret(0)


def test_grow_skips_duplicate_of_topmost() -> None:
    buffer = make_buffer()

    grow_selection_stack(buffer, (15, 20))
    grow_selection_stack(buffer, (15, 20))
    shrink_selection(buffer)

    assert buffer.selection_stack[-1] == Selection.caret(0)


def test_shrink_after_two_grows() -> None:
    buffer = make_buffer()

    grow_selection_stack(buffer, (15, 20))
    grow_selection_stack(buffer, (10, 24))
    shrink_selection(buffer)

    assert buffer.selection_stack[-1] == Selection(15, 20)
    assert buffer.selection == Selection(15, 20)


def test_stale_stack_restarts_from_current_selection() -> None:
    buffer = make_buffer()
    grow_selection_stack(buffer, (15, 20))

    buffer.selection = Selection.caret(5)
    grow_selection_stack(buffer, (5, 8))

    assert buffer.selection_stack == [Selection.caret(5), Selection(5, 8)]


def test_shrink_with_stale_stack_clears_it() -> None:
    buffer = make_buffer()
    grow_selection_stack(buffer, (15, 20))

    buffer.selection = Selection.caret(3)
    shrink_selection(buffer)

    assert buffer.selection_stack == []
    assert buffer.selection == Selection.caret(3)


def test_select_forward_sexp_accumulates() -> None:
    buffer = doc("(|def foo [vec])")

    select_forward_sexp(buffer)
    assert render(buffer) == "(|>|def|>| foo [vec])"

    select_forward_sexp(buffer)
    assert render(buffer) == "(|>|def foo|>| [vec])"

    shrink_selection(buffer)
    assert render(buffer) == "(|>|def|>| foo [vec])"


def test_select_backward_sexp_selects_toward_start() -> None:
    buffer = doc("(def foo [vec]|)")

    select_backward_sexp(buffer)

    assert render(buffer) == "(def foo |<|[vec]|<|)"


def test_select_up_list() -> None:
    forward = doc("(a (b| c) d)")
    backward = doc("(a (b |c) d)")

    select_forward_up_list(forward)
    select_backward_up_list(backward)

    assert render(forward) == "(a (b|>| c)|>| d)"
    assert render(backward) == "(a |<|(b |<|c) d)"


def test_select_current_form() -> None:
    buffer = doc("(def fo|o [vec])")

    select_current_form(buffer)

    assert render(buffer) == "(def |>|foo|>| [vec])"


def test_select_current_form_without_form_is_noop() -> None:
    buffer = doc("(|)")

    select_current_form(buffer)

    assert render(buffer) == "(|)"
    assert buffer.selection_stack == []


def test_grow_selection_expands_outward_and_shrinks_back() -> None:
    buffer = doc("(a (b |c) d)")

    grow_selection(buffer)
    assert render(buffer) == "(a (b |>|c|>|) d)"

    grow_selection(buffer)
    assert render(buffer) == "(a (|>|b c|>|) d)"

    grow_selection(buffer)
    assert render(buffer) == "(a |>|(b c)|>| d)"

    grow_selection(buffer)
    assert render(buffer) == "(|>|a (b c) d|>|)"

    grow_selection(buffer)
    assert render(buffer) == "|>|(a (b c) d)|>|"

    grow_selection(buffer)
    assert render(buffer) == "|>|(a (b c) d)|>|"

    shrink_selection(buffer)
    shrink_selection(buffer)
    assert render(buffer) == "(a |>|(b c)|>| d)"
