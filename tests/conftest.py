"""
Pytest configuration and fixtures for fixguard tests.

Provides builders for issues and fix operations, and resets global
configuration between tests.
"""

from typing import Any

import pytest

from fixguard.config.settings import get_settings
from fixguard.conflicts.config import set_conflict_options
from fixguard.conflicts.models import (
    FixAction,
    FixOperation,
    IndexedOperation,
    Issue,
    IssueCategory,
    IssueSeverity,
    OperationWithIssue,
)
from fixguard.conflicts.priority import compute_priority
from fixguard.conflicts.ranges import normalize_range

TEST_FILE = "/test/file.ts"


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reset cached settings and global conflict options."""
    get_settings.cache_clear()
    set_conflict_options(None)
    yield
    get_settings.cache_clear()
    set_conflict_options(None)


@pytest.fixture
def make_issue():
    """Factory for issues with test defaults."""

    def _make(**overrides: Any) -> Issue:
        data = {
            "file": TEST_FILE,
            "line": 10,
            "severity": IssueSeverity.WARNING,
            "category": IssueCategory.LINT,
            "message": "Test issue",
        }
        data.update(overrides)
        return Issue(**data)

    return _make


@pytest.fixture
def make_operation():
    """Factory for fix operations with test defaults."""

    def _make(**overrides: Any) -> FixOperation:
        data = {
            "action": FixAction.DELETE_LINE,
            "file": TEST_FILE,
            "line": 10,
        }
        data.update(overrides)
        return FixOperation(**data)

    return _make


@pytest.fixture
def make_pair(make_issue, make_operation):
    """Factory for (operation, issue) pairs."""

    def _make(issue: dict[str, Any] = None, **operation: Any) -> OperationWithIssue:
        op = make_operation(**operation)
        return OperationWithIssue(
            operation=op,
            issue=make_issue(file=op.file, **(issue or {})),
        )

    return _make


@pytest.fixture
def make_indexed(make_pair):
    """Factory for indexed operations using the default priority formula."""

    def _make(index: int = 0, issue: dict[str, Any] = None, **operation: Any) -> IndexedOperation:
        pair = make_pair(issue=issue, **operation)
        return IndexedOperation(
            index=index,
            operation=pair.operation,
            issue=pair.issue,
            priority=compute_priority(pair.issue, pair.operation),
            range=normalize_range(pair.operation),
        )

    return _make
