"""
Conflict detection and resolution for batches of fix operations.

Prevents code corruption when fixes from unrelated analyzers target
overlapping line ranges of the same file.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from fixguard.conflicts.classifier import ConflictClassifier
from fixguard.conflicts.config import ConflictOptions, get_conflict_options
from fixguard.conflicts.models import (
    Conflict,
    ConflictResolutionResult,
    ConflictStats,
    FixOperation,
    IndexedOperation,
    OperationWithIssue,
    ResolutionStrategy,
    SkippedOperation,
)
from fixguard.conflicts.priority import PriorityCalculator
from fixguard.conflicts.ranges import normalize_range
from fixguard.conflicts.strategies import ConflictResolver

logger = logging.getLogger(__name__)


@dataclass
class _SkipRecord:
    """Accumulated skip information for one batch index."""

    reasons: list[str] = field(default_factory=list)
    conflicts_with: list[IndexedOperation] = field(default_factory=list)


class ConflictDetector:
    """
    Detects and resolves conflicts in a batch of fix operations.

    Operations are grouped by file and every unordered pair within a file
    is compared once. The scan is O(n^2) per file; an interval tree would
    only change the cost, not the classification or resolution of pairs.
    """

    def __init__(
        self,
        options: Optional[ConflictOptions] = None,
        calculator: Optional[PriorityCalculator] = None,
        classifier: Optional[ConflictClassifier] = None,
        resolver: Optional[ConflictResolver] = None,
    ):
        """
        Initialize detector.

        Args:
            options: Conflict resolution options
            calculator: Priority calculator (built from options if omitted)
            classifier: Conflict classifier
            resolver: Conflict resolver (built from options if omitted)
        """
        self.options = options or get_conflict_options()
        self.calculator = calculator or PriorityCalculator(
            weights=self.options.weights,
            priority_fn=self.options.priority_fn,
        )
        self.classifier = classifier or ConflictClassifier()
        self.resolver = resolver or ConflictResolver(self.options)

    def index_operations(
        self,
        operations: list[OperationWithIssue],
    ) -> list[IndexedOperation]:
        """
        Annotate operations with batch index, priority and range.

        Args:
            operations: Batch of (operation, issue) pairs

        Returns:
            Indexed operations in batch order
        """
        return [
            IndexedOperation(
                index=index,
                operation=op.operation,
                issue=op.issue,
                priority=self.calculator.compute(op.issue, op.operation),
                range=normalize_range(op.operation),
            )
            for index, op in enumerate(operations)
        ]

    def detect_conflicts(
        self,
        indexed: list[IndexedOperation],
    ) -> list[Conflict]:
        """
        Classify and resolve every interacting pair of operations.

        Args:
            indexed: Indexed operations

        Returns:
            Conflicts in scan order, each with its resolution
        """
        by_file: dict[str, list[IndexedOperation]] = {}
        for op in indexed:
            by_file.setdefault(op.operation.file, []).append(op)

        conflicts = []
        for file_path, file_ops in by_file.items():
            for i in range(len(file_ops)):
                for j in range(i + 1, len(file_ops)):
                    op_a = file_ops[i]
                    op_b = file_ops[j]

                    conflict_type = self.classifier.classify(op_a, op_b)
                    if conflict_type is None:
                        continue

                    resolution = self.resolver.resolve(conflict_type, op_a, op_b)
                    logger.debug(
                        f"{file_path}: #{op_a.index} vs #{op_b.index} "
                        f"{conflict_type.value} -> {resolution.strategy.value}"
                    )
                    conflicts.append(
                        Conflict(
                            type=conflict_type,
                            operation_a=op_a,
                            operation_b=op_b,
                            resolution=resolution,
                        )
                    )

        return conflicts

    def detect_and_resolve(
        self,
        operations: list[OperationWithIssue],
    ) -> ConflictResolutionResult:
        """
        Detect and resolve conflicts in a batch of operations.

        Args:
            operations: Batch of (operation, issue) pairs

        Returns:
            ConflictResolutionResult partitioning the batch
        """
        indexed = self.index_operations(operations)
        conflicts = self.detect_conflicts(indexed)

        skips: dict[int, _SkipRecord] = {}
        merged_ops: list[FixOperation] = []

        def add_skipped(op: IndexedOperation, reason: str, partner: IndexedOperation):
            record = skips.setdefault(op.index, _SkipRecord())
            record.reasons.append(reason)
            record.conflicts_with.append(partner)

        for conflict in conflicts:
            resolution = conflict.resolution
            op_a = conflict.operation_a
            op_b = conflict.operation_b

            if resolution.strategy == ResolutionStrategy.SKIP_BOTH:
                add_skipped(op_a, resolution.reason, op_b)
                add_skipped(op_b, resolution.reason, op_a)

            elif resolution.strategy in (
                ResolutionStrategy.KEEP_FIRST,
                ResolutionStrategy.KEEP_SECOND,
            ):
                if resolution.winner and resolution.loser:
                    add_skipped(resolution.loser, resolution.reason, resolution.winner)

            elif resolution.strategy == ResolutionStrategy.MERGE:
                if resolution.merged:
                    add_skipped(op_a, resolution.reason, op_b)
                    add_skipped(op_b, resolution.reason, op_a)
                    merged_ops.append(resolution.merged)

        applicable: list[OperationWithIssue] = []
        skipped: list[SkippedOperation] = []

        for op in indexed:
            record = skips.get(op.index)
            if record is None:
                applicable.append(op.pair)
                continue
            skipped.append(
                SkippedOperation(
                    operation=op.pair,
                    reason=record.reasons[0],
                    reasons=record.reasons,
                    conflicts_with=[c.pair for c in record.conflicts_with],
                )
            )

        result = ConflictResolutionResult(
            applicable=applicable,
            skipped=skipped,
            merged=merged_ops,
            conflicts=conflicts,
            stats=ConflictStats(
                total=len(operations),
                applicable=len(applicable),
                skipped=len(skipped),
                merged=len(merged_ops),
                conflicts=len(conflicts),
            ),
        )

        if conflicts:
            logger.info(
                f"Resolved {len(conflicts)} conflicts in {len(operations)} operations: "
                f"{len(applicable)} applicable, {len(skipped)} skipped, "
                f"{len(merged_ops)} merged"
            )
        return result


def detect_and_resolve(
    operations: list[OperationWithIssue],
    options: Optional[ConflictOptions] = None,
) -> ConflictResolutionResult:
    """
    Detect and resolve conflicts with a one-off detector.

    Args:
        operations: Batch of (operation, issue) pairs
        options: Conflict resolution options (global defaults if omitted)

    Returns:
        ConflictResolutionResult partitioning the batch
    """
    return ConflictDetector(options=options).detect_and_resolve(operations)
