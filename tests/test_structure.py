import pytest

from notation import doc, render

from paredit_engine.buffer import Selection
from paredit_engine.paredit import (
    backward_barf_sexp,
    backward_slurp_sexp,
    drag_sexpr_backward,
    drag_sexpr_backward_down,
    drag_sexpr_backward_up,
    drag_sexpr_forward,
    drag_sexpr_forward_down,
    drag_sexpr_forward_up,
    forward_barf_sexp,
    forward_slurp_sexp,
    raise_sexp,
    splice_sexp,
    wrap_sexpr,
)


def apply(operation, before: str, *args) -> str:
    buffer = doc(before)
    operation(buffer, *args)
    return render(buffer)


@pytest.mark.parametrize(
    ("before", "after"),
    [
        ('(str|) "foo"', '(str| "foo")'),
        ('(foo• (str| ) "foo")', '(foo• (str| "foo"))'),
        ("(s|tr)#(foo)", "(s|tr #(foo))"),
        ("(s|tr )#(foo)", "(s|tr #(foo))"),
        ('(str|   )"foo"', '(str| "foo")'),
        ('(str|)   "foo"', '(str| "foo")'),
        ('(str|   )   "foo"', '(str| "foo")'),
        ('(|) "foo"', '(| "foo")'),
    ],
)
def test_forward_slurp(before: str, after: str) -> None:
    assert apply(forward_slurp_sexp, before) == after


def test_forward_slurp_moves_bracket_across_newline() -> None:
    assert apply(forward_slurp_sexp, "(a|)•b") == "(a|•b)"


def test_forward_slurp_falls_back_to_enclosing_list() -> None:
    assert apply(forward_slurp_sexp, "((a|)) b") == "((a|) b)"


def test_forward_slurp_with_nothing_to_slurp_is_noop() -> None:
    buffer = doc("(a|) ")

    forward_slurp_sexp(buffer)

    assert render(buffer) == "(a|) "
    assert buffer.version == 0


def test_backward_slurp() -> None:
    assert apply(backward_slurp_sexp, "a (|b)") == "(a |b)"


def test_backward_slurp_carries_reader_tags() -> None:
    assert apply(backward_slurp_sexp, "x #f (|y)") == "#f (x |y)"


def test_forward_barf() -> None:
    assert apply(forward_barf_sexp, "(a b| c)") == "(a b|) c"
    assert apply(forward_barf_sexp, "(a b c|)") == "(a b|) c"


def test_forward_barf_separates_glued_forms() -> None:
    assert apply(forward_barf_sexp, "(a [b]|[c])") == "(a [b]|) [c]"


def test_backward_barf() -> None:
    assert apply(backward_barf_sexp, "(a |b c)") == "a (|b c)"


def test_barf_empty_list_is_noop() -> None:
    assert apply(forward_barf_sexp, "(|)") == "(|)"
    assert apply(backward_barf_sexp, "(|)") == "(|)"


def test_splice() -> None:
    assert apply(splice_sexp, "(a (b| c) d)") == "(a b| c d)"


def test_splice_at_top_level_is_noop() -> None:
    assert apply(splice_sexp, "a |b") == "a |b"


@pytest.mark.parametrize(
    ("before", "after"),
    [
        ("(comment•  (str |#(foo)))", "(comment•  |#(foo))"),
        ("(comment•  (str #(foo)|))", "(comment•  #(foo)|)"),
        ("(a (b |c d))", "(a |c)"),
        ("(|  a)", "|a"),
        ("(x (|  a))", "(x |a)"),
    ],
)
def test_raise(before: str, after: str) -> None:
    assert apply(raise_sexp, before) == after


def test_raise_at_top_level_is_noop() -> None:
    assert apply(raise_sexp, "a |b") == "a |b"


def test_wrap_current_form() -> None:
    assert apply(wrap_sexpr, "(a |b c)") == "(a (|b) c)"
    assert apply(wrap_sexpr, "(a |b c)", "[", "]") == "(a [|b] c)"
    assert apply(wrap_sexpr, "(a |b c)", "{", "}") == "(a {|b} c)"


def test_wrap_selection_keeps_it_selected() -> None:
    assert apply(wrap_sexpr, "(a |>|b c|>|)") == "(a (|>|b c|>|))"


def test_wrap_inserts_empty_pair_without_form() -> None:
    assert apply(wrap_sexpr, "(|)", "[", "]") == "([|])"


def test_wrap_in_quotes_inside_string_escapes_them() -> None:
    buffer = doc('"a |>|b|>| c"')

    wrap_sexpr(buffer, '"', '"')

    assert buffer.text == '"a \\"b\\" c"'
    assert buffer.selection == Selection(5, 6)


def test_structural_edit_is_one_undo_step() -> None:
    buffer = doc('(str|) "foo"')

    forward_slurp_sexp(buffer)
    assert buffer.undo()

    assert render(buffer) == '(str|) "foo"'


MUTATORS = [
    forward_slurp_sexp,
    forward_barf_sexp,
    backward_slurp_sexp,
    backward_barf_sexp,
    drag_sexpr_forward,
    drag_sexpr_backward,
    drag_sexpr_forward_down,
    drag_sexpr_backward_up,
    drag_sexpr_forward_up,
    drag_sexpr_backward_down,
    raise_sexp,
    splice_sexp,
]


@pytest.mark.parametrize(
    "before",
    [
        "(a (b |c) d)",
        "(|  a [b] c)",
        "(c #f |(#b [:f :b :z]) #z 1)",
        "{:a 1 |:b [2 3]}",
    ],
)
def test_mutators_keep_the_document_balanced(before: str) -> None:
    buffer = doc(before)

    for operation in MUTATORS:
        operation(buffer)
        assert buffer.get_token_cursor(0).doc_is_balanced(), operation.__name__
