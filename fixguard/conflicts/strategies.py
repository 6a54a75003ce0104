"""
Resolution strategies for fix-operation conflicts.

Maps a classified conflict and the configured policy to a resolution:
keep one side, skip both, merge, or allow both.
"""

import logging
from typing import Callable, Optional

from fixguard.conflicts.config import ConflictOptions, get_conflict_options
from fixguard.conflicts.models import (
    ConflictStrategy,
    ConflictType,
    FixAction,
    FixOperation,
    IndexedOperation,
    Resolution,
    ResolutionStrategy,
)

logger = logging.getLogger(__name__)

PolicyHandler = Callable[[ConflictType, IndexedOperation, IndexedOperation], Resolution]


def deletes_mergeable(a: IndexedOperation, b: IndexedOperation) -> bool:
    """
    Check if two delete ranges can collapse into one range delete.

    They can when the span of their union is at most one line larger
    than their combined sizes, i.e. they touch or overlap.
    """
    if a.range is None or b.range is None:
        return False
    combined = max(a.range.end, b.range.end) - min(a.range.start, b.range.start) + 1
    return combined <= a.range.size + b.range.size + 1


def merge_deletes(a: IndexedOperation, b: IndexedOperation) -> Optional[FixOperation]:
    """
    Merge two delete-line operations into a single range delete.

    Args:
        a: First delete
        b: Second delete

    Returns:
        replace-range operation with empty content spanning both, or None
    """
    if a.operation.action != FixAction.DELETE_LINE or b.operation.action != FixAction.DELETE_LINE:
        return None
    if not deletes_mergeable(a, b):
        return None

    return FixOperation(
        action=FixAction.REPLACE_RANGE,
        file=a.operation.file,
        line=min(a.range.start, b.range.start),
        end_line=max(a.range.end, b.range.end),
        new_code="",
    )


class ConflictResolver:
    """
    Decides the resolution of individual conflicts.

    Implements the resolution flow:
    - Identical -> keep the first (lower index) operation
    - Adjacent -> allow both, unless adjacency is configured as a conflict
    - Everything else -> dispatch on the configured policy

    Under priority-based resolution, equal priorities favour operand A,
    which the pairwise scan always passes as the lower batch index.
    """

    def __init__(
        self,
        options: Optional[ConflictOptions] = None,
    ):
        """
        Initialize resolver.

        Args:
            options: Conflict resolution options
        """
        self.options = options or get_conflict_options()
        self._handlers: dict[ConflictStrategy, PolicyHandler] = {
            ConflictStrategy.SKIP_ALL_CONFLICTS: self._skip_both,
            ConflictStrategy.SKIP_LOWER_PRIORITY: self._keep_higher_priority,
            ConflictStrategy.MERGE_WHEN_POSSIBLE: self._merge_or_keep_higher,
        }
        self._policy = self._parse_policy(self.options.strategy)

    def _parse_policy(self, strategy) -> Optional[ConflictStrategy]:
        try:
            return ConflictStrategy(strategy)
        except ValueError:
            logger.warning(
                f"Unknown conflict strategy '{strategy}', "
                f"skipping both sides of every conflict"
            )
            return None

    def resolve(
        self,
        conflict_type: ConflictType,
        a: IndexedOperation,
        b: IndexedOperation,
    ) -> Resolution:
        """
        Determine the resolution for a conflict.

        Args:
            conflict_type: Classified conflict type
            a: First operation (lower batch index)
            b: Second operation

        Returns:
            Resolution for the pair
        """
        if conflict_type == ConflictType.IDENTICAL:
            return Resolution(
                strategy=ResolutionStrategy.KEEP_FIRST,
                reason="Duplicate operation - keeping first",
                winner=a,
                loser=b,
            )

        if conflict_type == ConflictType.ADJACENT and not self.options.treat_adjacent_as_conflict:
            return Resolution(
                strategy=ResolutionStrategy.ALLOW,
                reason="Adjacent ranges - both can be applied",
            )

        handler = self._handlers.get(self._policy) if self._policy else None
        if handler is None:
            return Resolution(
                strategy=ResolutionStrategy.SKIP_BOTH,
                reason=f"Unknown strategy '{self.options.strategy}' - skipping both",
            )

        return handler(conflict_type, a, b)

    def _skip_both(
        self,
        conflict_type: ConflictType,
        a: IndexedOperation,
        b: IndexedOperation,
    ) -> Resolution:
        return Resolution(
            strategy=ResolutionStrategy.SKIP_BOTH,
            reason=f"Conflict ({conflict_type.value}) - skipping both operations",
        )

    def _keep_higher_priority(
        self,
        conflict_type: ConflictType,
        a: IndexedOperation,
        b: IndexedOperation,
        prefix: str = "Conflict",
    ) -> Resolution:
        """
        Keep the higher-priority operation and drop the other.

        Args:
            conflict_type: Classified conflict type
            a: First operation, wins ties
            b: Second operation
            prefix: Leading word of the reason text

        Returns:
            KEEP_FIRST resolution naming winner and loser
        """
        winner, loser = (a, b) if a.priority >= b.priority else (b, a)
        return Resolution(
            strategy=ResolutionStrategy.KEEP_FIRST,
            reason=(
                f"{prefix} ({conflict_type.value}) - keeping higher priority "
                f"({winner.priority} vs {loser.priority})"
            ),
            winner=winner,
            loser=loser,
        )

    def _merge_or_keep_higher(
        self,
        conflict_type: ConflictType,
        a: IndexedOperation,
        b: IndexedOperation,
    ) -> Resolution:
        """
        Merge consecutive deletes, otherwise fall back to priority.

        Args:
            conflict_type: Classified conflict type
            a: First operation
            b: Second operation

        Returns:
            MERGE resolution, or the priority-based fallback
        """
        merged = merge_deletes(a, b)
        if merged is not None:
            logger.debug(
                f"Merged deletes #{a.index} and #{b.index} into lines "
                f"{merged.line}-{merged.end_line} of {merged.file}"
            )
            return Resolution(
                strategy=ResolutionStrategy.MERGE,
                reason="Merged consecutive delete operations",
                merged=merged,
            )

        return self._keep_higher_priority(conflict_type, a, b, prefix="Cannot merge")
