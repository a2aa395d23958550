"""Built-in commands exposing every structural operation by id."""

from __future__ import annotations

from functools import partial
from typing import Callable, Sequence

from paredit_engine import paredit
from paredit_engine.buffer import Buffer, Range

from .models import CommandRef
from .registry import CommandRegistry


def _move_right(range_fn: Callable[[Buffer], Range]) -> Callable[[Buffer], None]:
    def handler(buffer: Buffer) -> None:
        paredit.move_to_range_right(buffer, range_fn(buffer))

    return handler


def _move_left(range_fn: Callable[[Buffer], Range]) -> Callable[[Buffer], None]:
    def handler(buffer: Buffer) -> None:
        paredit.move_to_range_left(buffer, range_fn(buffer))

    return handler


DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef(
        id="paredit.forwardSexp",
        handler=_move_right(paredit.forward_sexp_range),
        description="Move past the next form",
    ),
    CommandRef(
        id="paredit.backwardSexp",
        handler=_move_left(paredit.backward_sexp_range),
        description="Move to the start of the previous form",
    ),
    CommandRef(
        id="paredit.forwardDownList",
        handler=_move_right(paredit.range_to_forward_down_list),
        description="Move into the next list",
    ),
    CommandRef(
        id="paredit.backwardUpList",
        handler=_move_left(paredit.range_to_backward_up_list),
        description="Move to the start of the enclosing list",
    ),
    CommandRef(
        id="paredit.forwardUpList",
        handler=_move_right(paredit.range_to_forward_up_list),
        description="Move past the end of the enclosing list",
    ),
    CommandRef(
        id="paredit.backwardDownList",
        handler=_move_left(paredit.range_to_backward_down_list),
        description="Move into the previous list, before its closing bracket",
    ),
    CommandRef(
        id="paredit.selectForwardSexp",
        handler=paredit.select_forward_sexp,
        description="Extend the selection over the next form",
    ),
    CommandRef(
        id="paredit.selectBackwardSexp",
        handler=paredit.select_backward_sexp,
        description="Extend the selection over the previous form",
    ),
    CommandRef(
        id="paredit.selectForwardDownList",
        handler=paredit.select_forward_down_list,
        description="Extend the selection into the next list",
    ),
    CommandRef(
        id="paredit.selectBackwardUpList",
        handler=paredit.select_backward_up_list,
        description="Extend the selection to the start of the enclosing list",
    ),
    CommandRef(
        id="paredit.selectForwardUpList",
        handler=paredit.select_forward_up_list,
        description="Extend the selection past the end of the enclosing list",
    ),
    CommandRef(
        id="paredit.selectBackwardDownList",
        handler=paredit.select_backward_down_list,
        description="Extend the selection into the previous list",
    ),
    CommandRef(
        id="paredit.selectCurrentForm",
        handler=paredit.select_current_form,
        description="Select the form at the caret",
    ),
    CommandRef(
        id="paredit.growSelection",
        handler=paredit.grow_selection,
        description="Grow the selection to the enclosing structure",
    ),
    CommandRef(
        id="paredit.shrinkSelection",
        handler=paredit.shrink_selection,
        description="Shrink the selection to the previous one",
    ),
    CommandRef(
        id="paredit.close",
        handler=paredit.close,
        description="Step over or insert a closing bracket",
        metadata={"arguments": ("bracket",)},
    ),
    CommandRef(
        id="paredit.stringQuote",
        handler=paredit.string_quote,
        description="Insert, close or escape a double quote",
    ),
    CommandRef(
        id="paredit.onTypeClose",
        handler=paredit.on_type_close,
        description="Repair a just-typed closing bracket",
        metadata={"arguments": ("bracket",)},
    ),
    CommandRef(
        id="paredit.forwardSlurpSexp",
        handler=paredit.forward_slurp_sexp,
        description="Pull the next form into the list",
    ),
    CommandRef(
        id="paredit.backwardSlurpSexp",
        handler=paredit.backward_slurp_sexp,
        description="Pull the previous form into the list",
    ),
    CommandRef(
        id="paredit.forwardBarfSexp",
        handler=paredit.forward_barf_sexp,
        description="Push the last form out of the list",
    ),
    CommandRef(
        id="paredit.backwardBarfSexp",
        handler=paredit.backward_barf_sexp,
        description="Push the first form out of the list",
    ),
    CommandRef(
        id="paredit.raiseSexp",
        handler=paredit.raise_sexp,
        description="Replace the enclosing list with the current form",
    ),
    CommandRef(
        id="paredit.spliceSexp",
        handler=paredit.splice_sexp,
        description="Remove the brackets of the enclosing list",
    ),
    CommandRef(
        id="paredit.wrapAroundParens",
        handler=partial(paredit.wrap_sexpr, opening="(", closing=")"),
        description="Wrap the current form in ()",
    ),
    CommandRef(
        id="paredit.wrapAroundSquare",
        handler=partial(paredit.wrap_sexpr, opening="[", closing="]"),
        description="Wrap the current form in []",
    ),
    CommandRef(
        id="paredit.wrapAroundCurly",
        handler=partial(paredit.wrap_sexpr, opening="{", closing="}"),
        description="Wrap the current form in {}",
    ),
    CommandRef(
        id="paredit.wrapAroundQuote",
        handler=partial(paredit.wrap_sexpr, opening='"', closing='"'),
        description="Wrap the current form in double quotes",
    ),
    CommandRef(
        id="paredit.dragSexprForward",
        handler=paredit.drag_sexpr_forward,
        description="Swap the current form with the next one",
    ),
    CommandRef(
        id="paredit.dragSexprBackward",
        handler=paredit.drag_sexpr_backward,
        description="Swap the current form with the previous one",
    ),
    CommandRef(
        id="paredit.dragSexprForwardUp",
        handler=paredit.drag_sexpr_forward_up,
        description="Move the current form out of its list, forwards",
    ),
    CommandRef(
        id="paredit.dragSexprBackwardUp",
        handler=paredit.drag_sexpr_backward_up,
        description="Move the current form out of its list, backwards",
    ),
    CommandRef(
        id="paredit.dragSexprForwardDown",
        handler=paredit.drag_sexpr_forward_down,
        description="Move the current form into the next list",
    ),
    CommandRef(
        id="paredit.dragSexprBackwardDown",
        handler=paredit.drag_sexpr_backward_down,
        description="Move the current form into the previous list",
    ),
    CommandRef(
        id="paredit.backspace",
        handler=paredit.backspace,
        description="Structural backspace",
    ),
    CommandRef(
        id="paredit.deleteForward",
        handler=paredit.delete_forward,
        description="Structural delete",
    ),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    replace: bool = False,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> CommandRegistry:
    """Register the built-in commands, optionally filtered by id."""

    filters = _build_filters(include, exclude)
    for command in DEFAULT_COMMANDS:
        if not _selected(command.id, filters):
            continue
        registry.register(command, replace=replace)
    return registry


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["DEFAULT_COMMANDS", "load_default_commands"]
