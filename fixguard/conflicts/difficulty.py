"""Fix difficulty classification for quality issues."""

from fixguard.conflicts.models import FixDifficulty, Issue, IssueCategory

TRIVIAL_LINT_MARKERS = ("console", "debugger", "alert")
SAFE_TYPE_SAFETY_MARKERS = ("@ts-ignore", "@ts-nocheck")


def get_fix_difficulty(issue: Issue) -> FixDifficulty:
    """
    Categorize how safe it is to fix an issue automatically.

    Debug statements flagged by lint rules are trivial to remove and
    suppression comments are safe to drop. Everything else is risky.

    Args:
        issue: Issue to classify

    Returns:
        FixDifficulty for the issue
    """
    message = issue.message

    if issue.category == IssueCategory.LINT:
        if any(marker in message for marker in TRIVIAL_LINT_MARKERS):
            return FixDifficulty.TRIVIAL

    if issue.category == IssueCategory.TYPE_SAFETY:
        if any(marker in message for marker in SAFE_TYPE_SAFETY_MARKERS):
            return FixDifficulty.SAFE

    return FixDifficulty.RISKY
