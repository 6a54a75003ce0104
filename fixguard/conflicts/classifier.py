"""
Conflict classification for fix operations.

Decides whether two operations on the same file interact and, if so,
which kind of conflict they form.
"""

from typing import Optional

from fixguard.conflicts.models import ConflictType, FixAction, IndexedOperation
from fixguard.conflicts.ranges import (
    range_contains,
    ranges_adjacent,
    ranges_identical,
    ranges_overlap,
)

INSERT_ACTIONS = (FixAction.INSERT_BEFORE, FixAction.INSERT_AFTER)


class ConflictClassifier:
    """
    Classifies pairs of indexed operations.

    Relations are checked in the order identical, nested, overlap,
    adjacent; the first that holds decides the conflict type. Pairs on
    different files, or where either side has no range, never conflict.
    """

    def classify(
        self,
        a: IndexedOperation,
        b: IndexedOperation,
    ) -> Optional[ConflictType]:
        """
        Detect the type of conflict between two operations.

        Args:
            a: First operation (lower batch index)
            b: Second operation

        Returns:
            ConflictType, or None if the operations do not interact
        """
        if a.operation.file != b.operation.file:
            return None

        # File-level or range-less operations have no line footprint
        if a.range is None or b.range is None:
            return None

        if ranges_identical(a.range, b.range):
            return self._classify_same_range(a, b)

        if range_contains(a.range, b.range) or range_contains(b.range, a.range):
            return ConflictType.NESTED

        if ranges_overlap(a.range, b.range):
            return ConflictType.OVERLAP

        if ranges_adjacent(a.range, b.range):
            return ConflictType.ADJACENT

        return None

    def _classify_same_range(
        self,
        a: IndexedOperation,
        b: IndexedOperation,
    ) -> ConflictType:
        """
        Classify two operations on exactly the same lines.

        Args:
            a: First operation
            b: Second operation

        Returns:
            INSERT_COLLISION, IDENTICAL or OVERLAP
        """
        action_a = a.operation.action
        action_b = b.operation.action

        # Two inserts at one point have no defined order
        if action_a == action_b and action_a in INSERT_ACTIONS:
            return ConflictType.INSERT_COLLISION

        if action_a == action_b and a.operation.new_code == b.operation.new_code:
            return ConflictType.IDENTICAL

        # Same location, different intent
        return ConflictType.OVERLAP


def detect_conflict_type(
    a: IndexedOperation,
    b: IndexedOperation,
) -> Optional[ConflictType]:
    """Classify a pair with a default classifier."""
    return ConflictClassifier().classify(a, b)
