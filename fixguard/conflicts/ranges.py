"""
Line range model for fix operations.

Converts operations into comparable line ranges and implements the
range relations conflict classification is built on.
"""

from typing import Optional

from fixguard.conflicts.models import (
    FixAction,
    FixOperation,
    LineRange,
    SINGLE_LINE_ACTIONS,
)


def normalize_range(operation: FixOperation) -> Optional[LineRange]:
    """
    Normalize a fix operation to the line range it touches.

    File-level operations, and line operations whose line number is
    missing, have no line footprint and return None: nothing can be
    proven about them, so they never conflict.

    Args:
        operation: Fix operation to normalize

    Returns:
        LineRange, or None when the operation has no line-level footprint
    """
    if operation.is_file_level or operation.line is None:
        return None

    if operation.action in SINGLE_LINE_ACTIONS:
        return LineRange(start=operation.line, end=operation.line)

    if operation.action == FixAction.REPLACE_RANGE:
        end = operation.end_line if operation.end_line is not None else operation.line
        return LineRange(start=operation.line, end=end)

    return None


def ranges_overlap(a: LineRange, b: LineRange) -> bool:
    """Ranges [a, b] and [c, d] overlap if a <= d and c <= b."""
    return a.start <= b.end and b.start <= a.end


def range_contains(outer: LineRange, inner: LineRange) -> bool:
    """Check if ``outer`` fully contains ``inner`` (a range contains itself)."""
    return outer.start <= inner.start and outer.end >= inner.end


def ranges_adjacent(a: LineRange, b: LineRange) -> bool:
    """Check if two ranges touch at a boundary without sharing a line."""
    return a.end + 1 == b.start or b.end + 1 == a.start


def ranges_identical(a: LineRange, b: LineRange) -> bool:
    return a.start == b.start and a.end == b.end
