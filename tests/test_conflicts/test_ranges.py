"""Tests for line range normalization and relations."""

import pytest

from fixguard.conflicts.models import FixAction, LineRange
from fixguard.conflicts.ranges import (
    normalize_range,
    range_contains,
    ranges_adjacent,
    ranges_identical,
    ranges_overlap,
)


def _all_ranges(limit: int = 6) -> list[LineRange]:
    return [
        LineRange(start, end)
        for start in range(1, limit + 1)
        for end in range(start, limit + 1)
    ]


class TestNormalizeRange:
    """Tests for normalize_range."""

    @pytest.mark.parametrize(
        "action",
        [
            FixAction.DELETE_LINE,
            FixAction.REPLACE_LINE,
            FixAction.INSERT_BEFORE,
            FixAction.INSERT_AFTER,
            FixAction.EXTRACT_FUNCTION,
            FixAction.WRAP_FUNCTION,
        ],
    )
    def test_single_line_actions(self, make_operation, action):
        """Single-line actions cover exactly their line."""
        op = make_operation(action=action, line=15)
        assert normalize_range(op) == LineRange(15, 15)

    def test_replace_range_with_end_line(self, make_operation):
        """replace-range spans line to end_line."""
        op = make_operation(action=FixAction.REPLACE_RANGE, line=5, end_line=10, new_code="")
        assert normalize_range(op) == LineRange(5, 10)

    def test_replace_range_without_end_line(self, make_operation):
        """replace-range without end_line is a single line."""
        op = make_operation(action=FixAction.REPLACE_RANGE, line=5, new_code="")
        assert normalize_range(op) == LineRange(5, 5)

    @pytest.mark.parametrize(
        "action",
        [FixAction.SPLIT_FILE, FixAction.MOVE_FILE, FixAction.CREATE_BARREL],
    )
    def test_file_level_actions_have_no_range(self, make_operation, action):
        """File-level actions never produce a range, even with a line."""
        op = make_operation(action=action, line=3)
        assert normalize_range(op) is None

    def test_missing_line_has_no_range(self, make_operation):
        """A line action without a line number yields no range."""
        op = make_operation(action=FixAction.DELETE_LINE, line=None)
        assert normalize_range(op) is None


class TestRangeRelations:
    """Tests for overlap, containment, adjacency and identity."""

    def test_overlap_partial(self):
        """Partially overlapping ranges overlap."""
        assert ranges_overlap(LineRange(5, 10), LineRange(8, 15))
        assert ranges_overlap(LineRange(8, 15), LineRange(5, 10))

    def test_overlap_shared_boundary_line(self):
        """Ranges sharing one boundary line overlap."""
        assert ranges_overlap(LineRange(5, 10), LineRange(10, 15))

    def test_no_overlap_when_disjoint(self):
        """Disjoint and strictly adjacent ranges do not overlap."""
        assert not ranges_overlap(LineRange(1, 5), LineRange(10, 15))
        assert not ranges_overlap(LineRange(5, 9), LineRange(10, 15))

    def test_contains(self):
        """Outer range contains inner range, and itself."""
        assert range_contains(LineRange(1, 20), LineRange(5, 10))
        assert range_contains(LineRange(5, 10), LineRange(5, 10))
        assert not range_contains(LineRange(5, 10), LineRange(3, 8))
        assert not range_contains(LineRange(5, 10), LineRange(8, 15))

    def test_adjacent(self):
        """Touching ranges are adjacent in either order."""
        assert ranges_adjacent(LineRange(5, 9), LineRange(10, 15))
        assert ranges_adjacent(LineRange(10, 15), LineRange(5, 9))
        assert not ranges_adjacent(LineRange(5, 10), LineRange(8, 15))
        assert not ranges_adjacent(LineRange(5, 8), LineRange(15, 20))

    def test_identical(self):
        """Identical means same start and same end."""
        assert ranges_identical(LineRange(5, 10), LineRange(5, 10))
        assert not ranges_identical(LineRange(5, 10), LineRange(6, 10))
        assert not ranges_identical(LineRange(5, 10), LineRange(5, 11))

    def test_relations_are_symmetric(self):
        """overlap, adjacent and identical do not depend on argument order."""
        ranges = _all_ranges()
        for a in ranges:
            for b in ranges:
                assert ranges_overlap(a, b) == ranges_overlap(b, a)
                assert ranges_adjacent(a, b) == ranges_adjacent(b, a)
                assert ranges_identical(a, b) == ranges_identical(b, a)

    def test_adjacent_and_overlap_are_exclusive(self):
        """No pair of ranges is both adjacent and overlapping."""
        ranges = _all_ranges()
        for a in ranges:
            for b in ranges:
                assert not (ranges_adjacent(a, b) and ranges_overlap(a, b))
                if range_contains(a, b):
                    assert ranges_overlap(a, b)

    def test_size(self):
        """Size counts both ends."""
        assert LineRange(5, 5).size == 1
        assert LineRange(5, 10).size == 6
