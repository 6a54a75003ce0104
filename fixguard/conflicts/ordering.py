"""
Application order for resolved fix operations.

Line edits shift every line below them, so the file writer must apply
them from the bottom of each file upward.
"""

import logging
from typing import Optional

from fixguard.conflicts.models import ConflictResolutionResult, FixOperation

logger = logging.getLogger(__name__)

# Sorts after any real line number
_NO_LINE = -1


def _bottom_up_key(operation: FixOperation) -> tuple[int, int]:
    start = operation.line if operation.line is not None else _NO_LINE
    end = operation.end_line if operation.end_line is not None else start
    return (start, end)


def coalesce_merged(merged: list[FixOperation]) -> list[FixOperation]:
    """
    Collapse merged range deletes that overlap or touch within a file.

    A chain of consecutive deletes yields one merge per neighbouring
    pair, e.g. [5, 6] and [6, 7]. Applied one after the other those
    would delete shifted lines, so each run is folded into one range.

    Args:
        merged: Merged replace-range operations, in discovery order

    Returns:
        Non-overlapping range deletes, grouped by file in first-seen
        order and sorted by line
    """
    by_file: dict[str, list[FixOperation]] = {}
    for op in merged:
        by_file.setdefault(op.file, []).append(op)

    coalesced = []
    for file_ops in by_file.values():
        current: Optional[FixOperation] = None
        for op in sorted(file_ops, key=lambda o: (o.line, o.end_line)):
            if current is not None and op.line <= current.end_line + 1:
                if op.end_line > current.end_line:
                    current = FixOperation(
                        action=current.action,
                        file=current.file,
                        line=current.line,
                        end_line=op.end_line,
                        new_code="",
                    )
                continue
            if current is not None:
                coalesced.append(current)
            current = op
        if current is not None:
            coalesced.append(current)

    if len(coalesced) < len(merged):
        logger.debug(f"Coalesced {len(merged)} merged deletes into {len(coalesced)} ranges")
    return coalesced


def order_for_application(
    result: ConflictResolutionResult,
) -> dict[str, list[FixOperation]]:
    """
    Order the resolved edit set for application.

    Applicable operations and the coalesced merged deletes are grouped
    by file (first-seen order) and sorted by descending start line.
    Operations without a line, including file-level ones, come last in
    their file.

    Args:
        result: Conflict resolution result

    Returns:
        Mapping of file path to operations in application order
    """
    by_file: dict[str, list[FixOperation]] = {}
    operations = [op.operation for op in result.applicable] + coalesce_merged(result.merged)
    for operation in operations:
        by_file.setdefault(operation.file, []).append(operation)

    return {
        file_path: sorted(file_ops, key=_bottom_up_key, reverse=True)
        for file_path, file_ops in by_file.items()
    }
