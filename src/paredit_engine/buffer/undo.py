"""Undo/redo of whole buffer transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Selection


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Text and selection on both sides of one committed ``Buffer.edit``."""

    label: str
    before_text: str
    after_text: str
    selection_before: Selection
    selection_after: Selection


class UndoTimeline:
    """Two-stack history: committing a new step discards everything redoable.

    ``limit`` caps how many undo steps are kept; the oldest are dropped first.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("undo limit must be positive")
        self.limit = limit
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def push(self, entry: UndoEntry) -> None:
        self._undone.clear()
        self._done.append(entry)
        if self.limit is not None and len(self._done) > self.limit:
            del self._done[: len(self._done) - self.limit]

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry

    def labels(self) -> List[str]:
        """Labels of the undoable steps, oldest first."""

        return [entry.label for entry in self._done]

    def clear(self) -> None:
        self._done.clear()
        self._undone.clear()

    def __len__(self) -> int:
        return len(self._done) + len(self._undone)


__all__ = ["UndoEntry", "UndoTimeline"]
