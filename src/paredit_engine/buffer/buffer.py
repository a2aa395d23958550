"""High-level buffer façade combining document, selection state and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, List, Optional, Sequence

from paredit_engine.runtime import telemetry
from paredit_engine.syntax import LispTokenCursor

from .document import BufferDocument
from .edits import ModelEdit, apply_edits, validate_edits
from .state import BufferState, Selection
from .undo import UndoEntry, UndoTimeline
from .validation import BufferValidationError, CursorDesyncError, ensure_selection


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: Selection
    label: str
    edits: tuple[ModelEdit, ...] = ()


class Buffer:
    """The editable document: text, one selection and its selection stack.

    All text changes go through :meth:`edit` so the token mirror is rebuilt
    for every new version.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo_timeline = undo if undo is not None else UndoTimeline()
        self.closed = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        selection: Optional[Selection] = None,
        name: str = "default",
        undo: Optional[UndoTimeline] = None,
    ) -> "Buffer":
        buffer = cls(name=name, document=BufferDocument.from_text(text), undo=undo)
        if selection is not None:
            buffer.selection = selection
        return buffer

    # -- state ----------------------------------------------------------

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def selection(self) -> Selection:
        return self.state.selection

    @selection.setter
    def selection(self, selection: Selection) -> None:
        self._ensure_open()
        self.state.set_selection(ensure_selection(self.document.length, selection))

    @property
    def selection_stack(self) -> List[Selection]:
        return self.state.selection_stack

    @selection_stack.setter
    def selection_stack(self, stack: Sequence[Selection]) -> None:
        self.state.selection_stack = list(stack)

    # -- reading --------------------------------------------------------

    def get_token_cursor(self, offset: int, previous: bool = False) -> LispTokenCursor:
        return self.document.get_token_cursor(offset, previous)

    def get_text(self, start: int, end: int) -> str:
        return self.document.get_text(start, end)

    # -- editing --------------------------------------------------------

    def edit(
        self,
        edits: Sequence[ModelEdit],
        *,
        selection: Optional[Selection] = None,
        label: str = "edit",
        based_on: Optional[LispTokenCursor] = None,
    ) -> BufferDelta:
        """Apply ``edits`` together as one undoable step.

        Offsets refer to the text before any of the edits. Everything is
        validated first; on error the text and selection stay untouched.
        """

        self._ensure_open()
        if based_on is not None and based_on.version != self.document.version:
            raise CursorDesyncError(
                cursor_version=based_on.version,
                buffer_version=self.document.version,
            )
        validate_edits(self.document.length, edits)
        with Transaction(self, label) as tx:
            before_text = self.document.text
            selection_before = self.state.selection
            after_text = apply_edits(before_text, edits)
            if selection is not None:
                ensure_selection(len(after_text), selection)
            if edits:
                self.document = self.document.replace(after_text)
                self.state.last_change_tick = self.document.version
            if selection is not None:
                self.state.set_selection(selection)
            if edits:
                tx.commit(before_text, after_text, selection_before, self.state.selection)

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selection=self.state.selection,
            label=label,
            edits=tuple(edits),
        )

    def insert_text(self, offset: int, text: str) -> BufferDelta:
        return self.edit(
            [ModelEdit.insert(offset, text)],
            selection=Selection.caret(offset + len(text)),
            label="insert_text",
        )

    def delete_range(self, start: int, end: int) -> BufferDelta:
        start, end = min(start, end), max(start, end)
        return self.edit(
            [ModelEdit.delete(start, end)],
            selection=Selection.caret(start),
            label="delete_range",
        )

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selection_before, f"undo::{entry.label}")
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selection_after, f"redo::{entry.label}")
        return True

    def close(self) -> None:
        """End the editing session; history and selection state are dropped."""

        self.state.reset()
        self.undo_timeline.clear()
        self.closed = True
        telemetry.record_event(
            "buffer_closed", level="debug", data={"buffer": self.name}
        )

    def _restore(self, text: str, selection: Selection, label: str) -> None:
        self._ensure_open()
        with telemetry.span(
            f"buffer::{label}", component=True, metadata={"buffer": self.name}
        ):
            self.document = self.document.replace(text)
            self.state.last_change_tick = self.document.version
            self.state.set_selection(selection)
            self.state.selection_stack = []

    def _ensure_open(self) -> None:
        if self.closed:
            raise BufferValidationError(f"Buffer '{self.name}' is closed")


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        selection_before: Selection,
        selection_after: Selection,
    ) -> None:
        entry = UndoEntry(
            label=self.label,
            before_text=before_text,
            after_text=after_text,
            selection_before=selection_before,
            selection_after=selection_after,
        )
        self.buffer.undo_timeline.push(entry)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
