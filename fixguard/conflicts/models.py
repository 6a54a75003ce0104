"""
Data models for fix-operation conflict resolution.

Defines the issues reported by analyzers, the fix operations proposed
for them, and the structures produced while detecting and resolving
conflicts between those operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class IssueCategory(str, Enum):
    """Category of a detected quality issue."""

    LINT = "lint"
    TYPE_SAFETY = "type-safety"
    HARDCODED = "hardcoded"
    DOCUMENTATION = "documentation"
    COMPLEXITY = "complexity"
    SRP = "srp"  # Single responsibility
    MIXED_CONCERNS = "mixed-concerns"
    SIZE = "size"
    CIRCULAR_DEP = "circular-dep"
    COMPOSITE = "composite"
    AGENT = "agent"  # Agent-assisted
    REFINE = "refine"  # Structural refinement


class IssueSeverity(str, Enum):
    """Severity of a detected quality issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FixAction(str, Enum):
    """Kind of edit a fix operation performs."""

    DELETE_LINE = "delete-line"
    REPLACE_LINE = "replace-line"
    REPLACE_RANGE = "replace-range"
    INSERT_BEFORE = "insert-before"
    INSERT_AFTER = "insert-after"
    EXTRACT_FUNCTION = "extract-function"
    WRAP_FUNCTION = "wrap-function"
    SPLIT_FILE = "split-file"  # File-level
    MOVE_FILE = "move-file"  # File-level
    CREATE_BARREL = "create-barrel"  # File-level


FILE_LEVEL_ACTIONS = frozenset(
    {FixAction.SPLIT_FILE, FixAction.MOVE_FILE, FixAction.CREATE_BARREL}
)

SINGLE_LINE_ACTIONS = frozenset(
    {
        FixAction.DELETE_LINE,
        FixAction.REPLACE_LINE,
        FixAction.INSERT_BEFORE,
        FixAction.INSERT_AFTER,
        FixAction.EXTRACT_FUNCTION,
        FixAction.WRAP_FUNCTION,
    }
)


class FixDifficulty(str, Enum):
    """How safe it is to apply a fix without review."""

    TRIVIAL = "trivial"  # Always safe
    SAFE = "safe"  # Unlikely to break anything
    RISKY = "risky"  # Skip first when in conflict


class ConflictType(str, Enum):
    """How the ranges of two operations interact."""

    IDENTICAL = "identical"  # Same action and content on the same lines
    OVERLAP = "overlap"  # Different intent on overlapping lines
    NESTED = "nested"  # One range fully contains the other
    ADJACENT = "adjacent"  # Ranges touch without overlapping
    INSERT_COLLISION = "insert-collision"  # Two inserts at the same point


class ResolutionStrategy(str, Enum):
    """Decided outcome for a single conflict."""

    KEEP_FIRST = "keep-first"
    KEEP_SECOND = "keep-second"
    SKIP_BOTH = "skip-both"
    MERGE = "merge"
    ALLOW = "allow"


class ConflictStrategy(str, Enum):
    """Configured policy for resolving conflicts in a batch."""

    SKIP_LOWER_PRIORITY = "skip-lower-priority"
    SKIP_ALL_CONFLICTS = "skip-all-conflicts"
    MERGE_WHEN_POSSIBLE = "merge-when-possible"


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, accepting snake_case and camelCase."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class Issue:
    """A problem reported by an analyzer."""

    file: str
    category: IssueCategory
    message: str
    severity: IssueSeverity = IssueSeverity.WARNING
    line: Optional[int] = None
    suggestion: Optional[str] = None
    snippet: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "file": self.file,
            "line": self.line,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "snippet": self.snippet,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Issue":
        """Create from dictionary."""
        return cls(
            file=data.get("file", ""),
            line=data.get("line"),
            category=IssueCategory(data.get("category", "lint")),
            severity=IssueSeverity(data.get("severity", "warning")),
            message=data.get("message", ""),
            suggestion=data.get("suggestion"),
            snippet=data.get("snippet"),
        )


@dataclass(frozen=True)
class NewFile:
    """File produced by a split-file operation."""

    path: str
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"path": self.path, "content": self.content}


@dataclass(frozen=True)
class FixOperation:
    """
    A proposed, not yet applied, edit to a single file.

    Line-based actions carry a 1-indexed ``line``; ``replace-range`` may
    also carry an inclusive ``end_line``. File-level actions carry no
    line range at all.
    """

    action: FixAction
    file: str
    line: Optional[int] = None
    end_line: Optional[int] = None
    old_code: Optional[str] = None
    new_code: Optional[str] = None

    # Action-specific payloads
    function_name: Optional[str] = None  # extract-function
    new_files: tuple[NewFile, ...] = ()  # split-file
    move_to: Optional[str] = None  # move-file

    @property
    def is_file_level(self) -> bool:
        """Check if the operation has no line-level footprint by nature."""
        return self.action in FILE_LEVEL_ACTIONS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "action": self.action.value,
            "file": self.file,
            "line": self.line,
            "end_line": self.end_line,
            "old_code": self.old_code,
            "new_code": self.new_code,
            "function_name": self.function_name,
            "new_files": [f.to_dict() for f in self.new_files],
            "move_to": self.move_to,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FixOperation":
        """Create from dictionary (snake_case or camelCase keys)."""
        return cls(
            action=FixAction(data.get("action", "delete-line")),
            file=data.get("file", ""),
            line=data.get("line"),
            end_line=_pick(data, "end_line", "endLine"),
            old_code=_pick(data, "old_code", "oldCode"),
            new_code=_pick(data, "new_code", "newCode"),
            function_name=_pick(data, "function_name", "functionName"),
            new_files=tuple(
                NewFile(path=f.get("path", ""), content=f.get("content", ""))
                for f in _pick(data, "new_files", "newFiles", default=[])
            ),
            move_to=_pick(data, "move_to", "moveTo"),
        )


@dataclass(frozen=True)
class LineRange:
    """Closed line interval, 1-indexed and inclusive on both ends."""

    start: int
    end: int

    @property
    def size(self) -> int:
        """Number of lines covered."""
        return self.end - self.start + 1

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class OperationWithIssue:
    """A fix operation paired with the issue it resolves."""

    operation: FixOperation
    issue: Issue

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "operation": self.operation.to_dict(),
            "issue": self.issue.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OperationWithIssue":
        """Create from dictionary."""
        return cls(
            operation=FixOperation.from_dict(data.get("operation", {})),
            issue=Issue.from_dict(data.get("issue", {})),
        )


@dataclass(frozen=True)
class IndexedOperation:
    """
    An operation annotated for conflict detection.

    Created once per batch. ``index`` is the position in the input batch
    and drives both output ordering and tie-breaking.
    """

    index: int
    operation: FixOperation
    issue: Issue
    priority: int
    range: Optional[LineRange]

    @property
    def pair(self) -> OperationWithIssue:
        """The original (operation, issue) pair."""
        return OperationWithIssue(operation=self.operation, issue=self.issue)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "priority": self.priority,
            "range": self.range.to_dict() if self.range else None,
            "operation": self.operation.to_dict(),
            "issue": self.issue.to_dict(),
        }


@dataclass
class Resolution:
    """Decision for one conflict."""

    strategy: ResolutionStrategy
    reason: str
    winner: Optional[IndexedOperation] = None
    loser: Optional[IndexedOperation] = None
    merged: Optional[FixOperation] = None  # Only for MERGE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "strategy": self.strategy.value,
            "reason": self.reason,
            "winner": self.winner.index if self.winner else None,
            "loser": self.loser.index if self.loser else None,
            "merged": self.merged.to_dict() if self.merged else None,
        }


@dataclass
class Conflict:
    """Two operations on the same file whose ranges interact."""

    type: ConflictType
    operation_a: IndexedOperation
    operation_b: IndexedOperation
    resolution: Resolution

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "operation_a": self.operation_a.index,
            "operation_b": self.operation_b.index,
            "resolution": self.resolution.to_dict(),
        }


@dataclass
class SkippedOperation:
    """An operation that will not be applied, and why."""

    operation: OperationWithIssue
    reason: str
    conflicts_with: list[OperationWithIssue] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "operation": self.operation.to_dict(),
            "reason": self.reason,
            "reasons": list(self.reasons),
            "conflicts_with": [c.to_dict() for c in self.conflicts_with],
        }


@dataclass
class ConflictStats:
    """Summary counts for a resolution run."""

    total: int = 0
    applicable: int = 0
    skipped: int = 0
    merged: int = 0
    conflicts: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "applicable": self.applicable,
            "skipped": self.skipped,
            "merged": self.merged,
            "conflicts": self.conflicts,
        }


@dataclass
class ConflictResolutionResult:
    """
    Outcome of resolving one batch of fix operations.

    ``applicable`` and ``merged`` together form the edit set that is safe
    to hand to the file writer. ``applicable + skipped`` may differ from
    ``total`` only through merges.
    """

    applicable: list[OperationWithIssue] = field(default_factory=list)
    skipped: list[SkippedOperation] = field(default_factory=list)
    merged: list[FixOperation] = field(default_factory=list)
    conflicts: list[Conflict] = field(default_factory=list)
    stats: ConflictStats = field(default_factory=ConflictStats)

    def has_conflicts(self) -> bool:
        """Check if any conflict other than an allowed one was found."""
        return any(
            c.resolution.strategy != ResolutionStrategy.ALLOW for c in self.conflicts
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "applicable": [op.to_dict() for op in self.applicable],
            "skipped": [s.to_dict() for s in self.skipped],
            "merged": [op.to_dict() for op in self.merged],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "stats": self.stats.to_dict(),
        }
