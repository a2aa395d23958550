"""Selection geometry, text storage, atomic edits and undo."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument
from .edits import ModelEdit, apply_edits, shift_offset, validate_edits
from .ranges import (
    clamp_range,
    normalize_range,
    range_contains,
    range_is_empty,
    range_length,
    range_union,
    ranges_overlap,
)
from .state import BufferState, Range, Selection
from .undo import UndoEntry, UndoTimeline
from .validation import (
    BufferValidationError,
    CursorDesyncError,
    ensure_offset,
    ensure_selection,
)

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "CursorDesyncError",
    "ModelEdit",
    "Range",
    "Selection",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "apply_edits",
    "clamp_range",
    "ensure_offset",
    "ensure_selection",
    "normalize_range",
    "range_contains",
    "range_is_empty",
    "range_length",
    "range_union",
    "ranges_overlap",
    "shift_offset",
    "validate_edits",
]
