"""Structural navigation, selection and editing over a :class:`Buffer`.

Navigation functions return ``(start, end)`` ranges; everything else mutates
the buffer (text and/or selection) in place.
"""

from .drag import (
    drag_sexpr_backward,
    drag_sexpr_backward_down,
    drag_sexpr_backward_up,
    drag_sexpr_forward,
    drag_sexpr_forward_down,
    drag_sexpr_forward_up,
    is_in_pairs_list,
)
from .editing import backspace, close, delete_forward, on_type_close, string_quote
from .navigation import (
    backward_sexp_range,
    current_form_range,
    forward_sexp_range,
    range_to_backward_down_list,
    range_to_backward_up_list,
    range_to_forward_down_list,
    range_to_forward_up_list,
)
from .selection import (
    grow_selection,
    grow_selection_stack,
    move_to_range_left,
    move_to_range_right,
    select_backward_down_list,
    select_backward_sexp,
    select_backward_up_list,
    select_current_form,
    select_forward_down_list,
    select_forward_sexp,
    select_forward_up_list,
    select_range_backward,
    select_range_forward,
    shrink_selection,
)
from .structure import (
    backward_barf_sexp,
    backward_slurp_sexp,
    forward_barf_sexp,
    forward_slurp_sexp,
    raise_sexp,
    splice_sexp,
    wrap_sexpr,
)

__all__ = [
    "backspace",
    "backward_barf_sexp",
    "backward_sexp_range",
    "backward_slurp_sexp",
    "close",
    "current_form_range",
    "delete_forward",
    "drag_sexpr_backward",
    "drag_sexpr_backward_down",
    "drag_sexpr_backward_up",
    "drag_sexpr_forward",
    "drag_sexpr_forward_down",
    "drag_sexpr_forward_up",
    "forward_barf_sexp",
    "forward_sexp_range",
    "forward_slurp_sexp",
    "grow_selection",
    "grow_selection_stack",
    "is_in_pairs_list",
    "move_to_range_left",
    "move_to_range_right",
    "on_type_close",
    "raise_sexp",
    "range_to_backward_down_list",
    "range_to_backward_up_list",
    "range_to_forward_down_list",
    "range_to_forward_up_list",
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
    "splice_sexp",
    "string_quote",
    "wrap_sexpr",
]
