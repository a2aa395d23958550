"""Pure helpers over half-open ``(start, end)`` offset ranges."""

from __future__ import annotations

from .state import Range


def normalize_range(span: Range) -> Range:
    start, end = span
    return (start, end) if start <= end else (end, start)


def range_length(span: Range) -> int:
    start, end = normalize_range(span)
    return end - start


def range_is_empty(span: Range) -> bool:
    return span[0] == span[1]


def range_contains(outer: Range, inner: Range | int) -> bool:
    """``True`` when ``inner`` (a range or a single offset) lies within ``outer``."""

    start, end = normalize_range(outer)
    if isinstance(inner, int):
        return start <= inner <= end
    inner_start, inner_end = normalize_range(inner)
    return start <= inner_start and inner_end <= end


def ranges_overlap(left: Range, right: Range) -> bool:
    """Half-open overlap test; touching ranges do not overlap."""

    left_start, left_end = normalize_range(left)
    right_start, right_end = normalize_range(right)
    return left_start < right_end and right_start < left_end


def range_union(*spans: Range) -> Range:
    if not spans:
        raise ValueError("range_union needs at least one range")
    flat = [normalize_range(span) for span in spans]
    return (min(start for start, _ in flat), max(end for _, end in flat))


def clamp_range(span: Range, length: int) -> Range:
    start, end = normalize_range(span)
    return (max(0, min(start, length)), max(0, min(end, length)))


__all__ = [
    "clamp_range",
    "normalize_range",
    "range_contains",
    "range_is_empty",
    "range_length",
    "range_union",
    "ranges_overlap",
]
