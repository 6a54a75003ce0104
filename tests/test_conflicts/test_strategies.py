"""Tests for conflict resolution strategies."""

import dataclasses
import logging

import pytest

from fixguard.conflicts.config import ConflictOptions, configure_conflicts
from fixguard.conflicts.detector import ConflictDetector
from fixguard.conflicts.models import (
    ConflictStrategy,
    ConflictType,
    FixAction,
    ResolutionStrategy,
)
from fixguard.conflicts.strategies import ConflictResolver, deletes_mergeable, merge_deletes


def _with_priority(op, priority):
    return dataclasses.replace(op, priority=priority)


class TestConflictResolver:
    """Tests for ConflictResolver."""

    @pytest.fixture
    def resolver(self) -> ConflictResolver:
        """Create resolver with the skip-lower-priority policy."""
        return ConflictResolver(ConflictOptions(strategy=ConflictStrategy.SKIP_LOWER_PRIORITY))

    @pytest.mark.parametrize("strategy", list(ConflictStrategy) + ["not-a-strategy"])
    def test_identical_always_keeps_first(self, make_indexed, strategy):
        """Duplicates keep the lower index under every policy."""
        resolver = ConflictResolver(ConflictOptions(strategy=strategy))
        a = _with_priority(make_indexed(0), 10)
        b = _with_priority(make_indexed(1), 90)

        resolution = resolver.resolve(ConflictType.IDENTICAL, a, b)

        assert resolution.strategy == ResolutionStrategy.KEEP_FIRST
        assert resolution.winner is a
        assert resolution.loser is b

    def test_adjacent_allowed_by_default(self, resolver, make_indexed):
        """Adjacent conflicts allow both operations."""
        resolution = resolver.resolve(
            ConflictType.ADJACENT, make_indexed(0, line=10), make_indexed(1, line=11)
        )
        assert resolution.strategy == ResolutionStrategy.ALLOW
        assert resolution.winner is None

    def test_adjacent_as_conflict(self, make_indexed):
        """With the adjacency flag, adjacent conflicts go through the policy."""
        resolver = ConflictResolver(
            ConflictOptions(
                strategy=ConflictStrategy.SKIP_ALL_CONFLICTS,
                treat_adjacent_as_conflict=True,
            )
        )
        resolution = resolver.resolve(
            ConflictType.ADJACENT, make_indexed(0, line=10), make_indexed(1, line=11)
        )
        assert resolution.strategy == ResolutionStrategy.SKIP_BOTH

    def test_skip_all_conflicts(self, make_indexed):
        """skip-all-conflicts drops both sides."""
        resolver = ConflictResolver(ConflictOptions(strategy=ConflictStrategy.SKIP_ALL_CONFLICTS))
        resolution = resolver.resolve(ConflictType.OVERLAP, make_indexed(0), make_indexed(1))

        assert resolution.strategy == ResolutionStrategy.SKIP_BOTH
        assert resolution.reason == "Conflict (overlap) - skipping both operations"

    def test_keep_higher_priority(self, resolver, make_indexed):
        """The higher priority side wins wherever it sits."""
        a = _with_priority(make_indexed(0), 40)
        b = _with_priority(make_indexed(1), 80)

        resolution = resolver.resolve(ConflictType.OVERLAP, a, b)

        assert resolution.strategy == ResolutionStrategy.KEEP_FIRST
        assert resolution.winner is b
        assert resolution.loser is a
        assert "80 vs 40" in resolution.reason

    def test_tie_favours_first_operand(self, resolver, make_indexed):
        """Equal priorities keep operand A."""
        a = _with_priority(make_indexed(0), 50)
        b = _with_priority(make_indexed(1), 50)

        resolution = resolver.resolve(ConflictType.NESTED, a, b)

        assert resolution.winner is a
        assert resolution.loser is b

    def test_merge_adjacent_deletes(self, make_indexed):
        """Touching deletes merge into one range delete."""
        resolver = ConflictResolver(
            ConflictOptions(
                strategy=ConflictStrategy.MERGE_WHEN_POSSIBLE,
                treat_adjacent_as_conflict=True,
            )
        )
        a = make_indexed(0, action=FixAction.DELETE_LINE, line=5)
        b = make_indexed(1, action=FixAction.DELETE_LINE, line=6)

        resolution = resolver.resolve(ConflictType.ADJACENT, a, b)

        assert resolution.strategy == ResolutionStrategy.MERGE
        assert resolution.merged.action == FixAction.REPLACE_RANGE
        assert resolution.merged.line == 5
        assert resolution.merged.end_line == 6
        assert resolution.merged.new_code == ""

    def test_merge_falls_back_to_priority(self, make_indexed):
        """Non-delete pairs fall back to priority resolution."""
        resolver = ConflictResolver(ConflictOptions(strategy=ConflictStrategy.MERGE_WHEN_POSSIBLE))
        a = make_indexed(0, action=FixAction.DELETE_LINE, line=5)
        b = make_indexed(1, action=FixAction.REPLACE_LINE, line=5, new_code="x")

        resolution = resolver.resolve(ConflictType.OVERLAP, a, b)

        assert resolution.strategy == ResolutionStrategy.KEEP_FIRST
        assert resolution.merged is None
        assert resolution.reason.startswith("Cannot merge (overlap)")
        assert resolution.winner is a  # delete-line 30 beats replace-line 25

    def test_unknown_strategy_skips_both(self, make_indexed):
        """An unrecognised policy fails safe by skipping both."""
        resolver = ConflictResolver(ConflictOptions(strategy="yolo"))
        resolution = resolver.resolve(ConflictType.OVERLAP, make_indexed(0), make_indexed(1))

        assert resolution.strategy == ResolutionStrategy.SKIP_BOTH
        assert "yolo" in resolution.reason

    def test_unknown_strategy_warns_once(self, caplog):
        """Configuring and running an unknown policy logs a single warning."""
        with caplog.at_level(logging.WARNING):
            options = configure_conflicts(strategy="yolo")
            ConflictDetector(options)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "yolo" in warnings[0].getMessage()

    def test_strategy_given_as_string(self, make_indexed):
        """Policy names are accepted as plain strings."""
        resolver = ConflictResolver(ConflictOptions(strategy="skip-all-conflicts"))
        resolution = resolver.resolve(ConflictType.NESTED, make_indexed(0), make_indexed(1))
        assert resolution.strategy == ResolutionStrategy.SKIP_BOTH


class TestMergeDeletes:
    """Tests for the delete merge helpers."""

    def test_mergeable_when_touching(self, make_indexed):
        """Consecutive single-line deletes are mergeable."""
        assert deletes_mergeable(make_indexed(0, line=5), make_indexed(1, line=6))

    def test_mergeable_bound(self, make_indexed):
        """Union span may exceed the summed sizes by at most one line."""
        assert deletes_mergeable(make_indexed(0, line=5), make_indexed(1, line=7))
        assert not deletes_mergeable(make_indexed(0, line=5), make_indexed(1, line=8))

    def test_only_deletes_merge(self, make_indexed):
        """merge_deletes refuses other actions."""
        a = make_indexed(0, action=FixAction.DELETE_LINE, line=5)
        b = make_indexed(1, action=FixAction.REPLACE_LINE, line=6, new_code="x")
        assert merge_deletes(a, b) is None

    def test_merged_range_is_union(self, make_indexed):
        """The merged operation spans min start to max end."""
        merged = merge_deletes(
            make_indexed(0, action=FixAction.DELETE_LINE, line=9),
            make_indexed(1, action=FixAction.DELETE_LINE, line=8),
        )
        assert (merged.line, merged.end_line) == (8, 9)
        assert merged.file == "/test/file.ts"
