"""
Fix-operation conflict resolution for fixguard.

Provides range normalization, priority calculation, conflict
classification and resolution for batches of proposed fixes.
"""

from fixguard.conflicts.models import (
    Conflict,
    ConflictResolutionResult,
    ConflictStats,
    ConflictStrategy,
    ConflictType,
    FixAction,
    FixDifficulty,
    FixOperation,
    IndexedOperation,
    Issue,
    IssueCategory,
    IssueSeverity,
    LineRange,
    NewFile,
    OperationWithIssue,
    Resolution,
    ResolutionStrategy,
    SkippedOperation,
)
from fixguard.conflicts.config import (
    BatchLoadError,
    ConflictOptions,
    PriorityWeights,
    configure_conflicts,
    get_conflict_options,
    load_batch,
    load_priority_weights,
)
from fixguard.conflicts.ranges import (
    normalize_range,
    range_contains,
    ranges_adjacent,
    ranges_identical,
    ranges_overlap,
)
from fixguard.conflicts.difficulty import get_fix_difficulty
from fixguard.conflicts.priority import PriorityCalculator, compute_priority
from fixguard.conflicts.classifier import ConflictClassifier, detect_conflict_type
from fixguard.conflicts.strategies import ConflictResolver
from fixguard.conflicts.detector import ConflictDetector, detect_and_resolve
from fixguard.conflicts.ordering import coalesce_merged, order_for_application

__all__ = [
    # Models
    "Conflict",
    "ConflictResolutionResult",
    "ConflictStats",
    "ConflictStrategy",
    "ConflictType",
    "FixAction",
    "FixDifficulty",
    "FixOperation",
    "IndexedOperation",
    "Issue",
    "IssueCategory",
    "IssueSeverity",
    "LineRange",
    "NewFile",
    "OperationWithIssue",
    "Resolution",
    "ResolutionStrategy",
    "SkippedOperation",
    # Config
    "BatchLoadError",
    "ConflictOptions",
    "PriorityWeights",
    "configure_conflicts",
    "get_conflict_options",
    "load_batch",
    "load_priority_weights",
    # Ranges
    "normalize_range",
    "range_contains",
    "ranges_adjacent",
    "ranges_identical",
    "ranges_overlap",
    # Core components
    "get_fix_difficulty",
    "PriorityCalculator",
    "compute_priority",
    "ConflictClassifier",
    "detect_conflict_type",
    "ConflictResolver",
    "ConflictDetector",
    "detect_and_resolve",
    "coalesce_merged",
    "order_for_application",
]
