"""Text notation for buffer fixtures.

``|`` marks the caret, ``|>|a|>|`` a forward selection, ``|<|a|<|`` a
backward selection (active end first) and ``•`` a newline.
"""

from __future__ import annotations

from typing import List, Tuple

from paredit_engine.buffer import Buffer, Selection

_MARKS = ("|>|", "|<|", "|")


def parse(notation: str) -> Tuple[str, Selection]:
    source = notation.replace("•", "\n")
    chars: List[str] = []
    marks: List[Tuple[str, int]] = []
    index = 0
    while index < len(source):
        for mark in _MARKS:
            if source.startswith(mark, index):
                marks.append((mark, len(chars)))
                index += len(mark)
                break
        else:
            chars.append(source[index])
            index += 1
    text = "".join(chars)
    if not marks:
        return text, Selection.caret(0)
    if len(marks) == 1:
        return text, Selection.caret(marks[0][1])
    (kind, first), (_, second) = marks[:2]
    if kind == "|<|":
        return text, Selection(second, first)
    return text, Selection(first, second)


def doc(notation: str) -> Buffer:
    text, selection = parse(notation)
    return Buffer.from_text(text, selection=selection)


def render(buffer: Buffer) -> str:
    """Inverse of :func:`doc`: the buffer's text with its selection marked."""

    text = buffer.text
    selection = buffer.selection
    if selection.is_empty:
        marked = text[: selection.active] + "|" + text[selection.active :]
    else:
        mark = "|<|" if selection.is_reversed else "|>|"
        start, end = selection.as_range
        marked = text[:start] + mark + text[start:end] + mark + text[end:]
    return marked.replace("\n", "•")


def selection_of(notation: str) -> Tuple[int, int]:
    """``(anchor, active)`` of a notation string."""

    _, selection = parse(notation)
    return (selection.anchor, selection.active)


def range_of(notation: str) -> Tuple[int, int]:
    _, selection = parse(notation)
    return selection.as_range
