"""Selection values and the mutable per-buffer selection state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

Range = Tuple[int, int]  # [start, end)


@dataclass(frozen=True, slots=True)
class Selection:
    """Directional selection: ``active`` is where the caret sits.

    Two selections over the same span but with swapped ends are different
    values; ``is_reversed`` is derived, never stored.
    """

    anchor: int
    active: int

    def __post_init__(self) -> None:
        if self.anchor < 0 or self.active < 0:
            raise ValueError("selection offsets must be non-negative")

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @classmethod
    def from_range(cls, span: Range, *, reversed: bool = False) -> "Selection":
        start, end = sorted(span)
        if reversed:
            return cls(end, start)
        return cls(start, end)

    @property
    def start(self) -> int:
        return min(self.anchor, self.active)

    @property
    def end(self) -> int:
        return max(self.anchor, self.active)

    @property
    def is_reversed(self) -> bool:
        return self.anchor > self.active

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def as_range(self) -> Range:
        return (self.start, self.end)

    def reversed(self) -> "Selection":
        return Selection(self.active, self.anchor)


@dataclass(slots=True)
class BufferState:
    """Current selection plus the grow/shrink history tied to a buffer."""

    selection: Selection = field(default_factory=lambda: Selection.caret(0))
    selection_stack: List[Selection] = field(default_factory=list)
    last_change_tick: int = 0

    def set_selection(self, selection: Selection) -> None:
        self.selection = selection

    def reset(self) -> None:
        self.selection = Selection.caret(0)
        self.selection_stack = []
        self.last_change_tick = 0
