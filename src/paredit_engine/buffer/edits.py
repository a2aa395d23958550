"""Atomic multi-edit primitives in pre-edit coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .validation import BufferValidationError


@dataclass(frozen=True, slots=True)
class ModelEdit:
    """Replace ``[start, end)`` of the pre-edit text with ``text``."""

    start: int
    end: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("edit start must not exceed its end")

    @classmethod
    def insert(cls, offset: int, text: str) -> "ModelEdit":
        return cls(offset, offset, text)

    @classmethod
    def delete(cls, start: int, end: int) -> "ModelEdit":
        return cls(start, end, "")

    @property
    def delta(self) -> int:
        return len(self.text) - (self.end - self.start)


def validate_edits(length: int, edits: Sequence[ModelEdit]) -> List[ModelEdit]:
    """Check bounds and overlap; return the edits sorted by position."""

    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))
    previous_end = 0
    for edit in ordered:
        if edit.start < 0 or edit.end > length:
            raise BufferValidationError(
                "Edit out of range", offset=edit.start, span=(edit.start, edit.end)
            )
        if edit.start < previous_end:
            raise BufferValidationError(
                "Overlapping edits", offset=edit.start, span=(edit.start, edit.end)
            )
        previous_end = max(previous_end, edit.end)
    return ordered


def apply_edits(text: str, edits: Sequence[ModelEdit]) -> str:
    """Apply validated edits back to front so earlier offsets stay valid."""

    result = text
    for edit in reversed(validate_edits(len(text), edits)):
        result = result[: edit.start] + edit.text + result[edit.end :]
    return result


def shift_offset(offset: int, edits: Iterable[ModelEdit]) -> int:
    """Map a pre-edit ``offset`` into the post-edit text.

    Insertions exactly at ``offset`` push it forward; an offset swallowed by a
    replaced region lands at the end of the replacement.
    """

    shifted = offset
    for edit in edits:
        if edit.end <= offset:
            shifted += edit.delta
        elif edit.start < offset:
            shifted += edit.start + len(edit.text) - offset
    return shifted


__all__ = ["ModelEdit", "apply_edits", "shift_offset", "validate_edits"]
