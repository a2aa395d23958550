"""Validation helpers and errors shared across buffer services."""

from __future__ import annotations

from typing import Optional

from .state import Range, Selection


class BufferValidationError(RuntimeError):
    """Raised when callers hand the buffer out-of-bounds or conflicting offsets."""

    def __init__(
        self,
        message: str,
        *,
        offset: Optional[int] = None,
        span: Optional[Range] = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.span = span


class CursorDesyncError(BufferValidationError):
    """A token cursor from an older buffer version was used to compute edits."""

    def __init__(self, *, cursor_version: int, buffer_version: int) -> None:
        super().__init__(
            f"Token cursor for version {cursor_version} used against version {buffer_version}"
        )
        self.cursor_version = cursor_version
        self.buffer_version = buffer_version


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_selection(length: int, selection: Selection) -> Selection:
    ensure_offset(length, selection.anchor)
    ensure_offset(length, selection.active)
    return selection


__all__ = [
    "BufferValidationError",
    "CursorDesyncError",
    "ensure_offset",
    "ensure_selection",
]
