"""
Priority calculation for fix operations.

Scores every operation so conflicts can be resolved in favour of the
fix that is safest and most specific.
"""

from typing import Callable, Optional

from fixguard.conflicts.config import PriorityFunction, PriorityWeights
from fixguard.conflicts.difficulty import get_fix_difficulty
from fixguard.conflicts.models import FixOperation, Issue

Scorer = Callable[[Issue, FixOperation], int]


def operation_span(operation: FixOperation) -> int:
    """Number of lines an operation declares, 1 without an explicit end."""
    if operation.line is not None and operation.end_line is not None:
        return operation.end_line - operation.line + 1
    return 1


class PriorityCalculator:
    """
    Computes operation priorities (higher = more important to apply).

    The default formula is::

        difficulty score + action score + max(0, ceiling - range size)

    with all scores taken from the injected PriorityWeights. A caller
    supplied priority function replaces the formula entirely; the
    calculator picks its scorer once, at construction.
    """

    def __init__(
        self,
        weights: Optional[PriorityWeights] = None,
        priority_fn: Optional[PriorityFunction] = None,
    ):
        """
        Initialize calculator.

        Args:
            weights: Score tables for the default formula
            priority_fn: Optional issue -> priority override
        """
        self.weights = weights or PriorityWeights()
        self._scorer: Scorer = self.formula_priority
        if priority_fn is not None:
            self._scorer = lambda issue, operation: priority_fn(issue)

    def compute(self, issue: Issue, operation: FixOperation) -> int:
        """
        Compute the priority of an operation.

        Args:
            issue: Issue the operation fixes
            operation: Proposed operation

        Returns:
            Integer priority
        """
        return self._scorer(issue, operation)

    def formula_priority(self, issue: Issue, operation: FixOperation) -> int:
        """Default priority formula."""
        return (
            self.difficulty_score(issue)
            + self.action_score(operation)
            + self.specificity_bonus(operation)
        )

    def difficulty_score(self, issue: Issue) -> int:
        return self.weights.difficulty.get(get_fix_difficulty(issue), 0)

    def action_score(self, operation: FixOperation) -> int:
        return self.weights.action.get(operation.action, 0)

    def specificity_bonus(self, operation: FixOperation) -> int:
        # Narrow edits are more specific and win over broad ones
        return max(0, self.weights.specificity_ceiling - operation_span(operation))


def compute_priority(
    issue: Issue,
    operation: FixOperation,
    priority_fn: Optional[PriorityFunction] = None,
) -> int:
    """
    Compute priority with the default tables.

    Args:
        issue: Issue the operation fixes
        operation: Proposed operation
        priority_fn: Optional issue -> priority override

    Returns:
        Integer priority
    """
    return PriorityCalculator(priority_fn=priority_fn).compute(issue, operation)
