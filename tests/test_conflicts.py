"""Tests for checking manually chosen times."""

import pytest

from smartslots.domain.models import InvalidSchedulingInput, SessionKind
from smartslots.scheduling.conflicts import (
    ConflictChecker,
    ConflictSeverity,
    ConflictType,
    GapSeverity,
)


class TestConflictChecker:
    """Tests for ConflictChecker."""

    @pytest.fixture
    def checker(self):
        return ConflictChecker()

    @pytest.fixture
    def two_bookings(self, make_snapshot):
        return make_snapshot(
            ("Alice", SessionKind.REMOTE, "10:00", 60),
            ("Bob", SessionKind.REMOTE, "13:00", 60),
        )

    def test_free_time(self, checker, two_bookings, target_date):
        """A time well clear of bookings should have no conflict."""
        result = checker.check_conflict(two_bookings, target_date, "16:00")

        assert not result.has_conflict
        assert result.conflict_type == ConflictType.NONE
        assert result.conflicts == []
        assert result.suggestions == []

    def test_exact_conflict(self, checker, two_bookings, target_date):
        """Same start as a booking is an exact conflict."""
        result = checker.check_conflict(two_bookings, target_date, "10:00")

        assert result.conflict_type == ConflictType.EXACT
        assert result.severity == ConflictSeverity.ERROR
        assert result.conflicts[0].message == "Conflicts with Alice at the same time"

    def test_partial_overlap(self, checker, two_bookings, target_date):
        """Overlapping part of a booking is a partial conflict."""
        result = checker.check_conflict(two_bookings, target_date, "10:30")

        assert result.conflict_type == ConflictType.PARTIAL
        assert result.severity == ConflictSeverity.ERROR

    def test_too_close_after(self, checker, two_bookings, target_date):
        """Starting under the minimum gap after a booking is a close warning."""
        result = checker.check_conflict(two_bookings, target_date, "11:15")

        assert result.conflict_type == ConflictType.CLOSE
        assert result.severity == ConflictSeverity.WARNING
        assert result.conflicts[0].gap == 15
        assert result.conflicts[0].message == "Only 15 min gap after Alice"

    def test_touching_end_is_close_not_overlap(self, checker, two_bookings, target_date):
        """Ending exactly at a booking start is close, not an overlap."""
        result = checker.check_conflict(two_bookings, target_date, "12:00")

        assert result.conflict_type == ConflictType.CLOSE
        assert result.conflicts[0].gap == 0
        assert result.conflicts[0].message == "Only 0 min gap before Bob"

    def test_worst_conflict_wins(self, checker, two_bookings, target_date):
        """The most severe of several conflicts decides the result."""
        result = checker.check_conflict(two_bookings, target_date, "10:00", duration_minutes=180)

        assert [c.conflict_type for c in result.conflicts] == [
            ConflictType.EXACT,
            ConflictType.CLOSE,
        ]
        assert result.conflict_type == ConflictType.EXACT
        assert result.severity == ConflictSeverity.ERROR

    def test_suggestions(self, checker, two_bookings, target_date):
        """Alternatives are offered before the first booking and after each one."""
        result = checker.check_conflict(two_bookings, target_date, "10:30")

        assert [(s.time, s.placement) for s in result.suggestions] == [
            ("08:30", "before"),
            ("11:30", "after"),
            ("14:30", "after"),
        ]
        assert result.suggestions[0].time_label == "8:30 AM"

    def test_suggestions_respect_working_hours(self, checker, make_snapshot, target_date):
        """Alternatives never fall outside working hours."""
        snapshot = make_snapshot(
            ("Alice", SessionKind.REMOTE, "08:30", 60),
            ("Bob", SessionKind.REMOTE, "21:00", 60),
        )
        result = checker.check_conflict(snapshot, target_date, "08:30")

        # No room before 08:30 and nothing fits after 22:00
        assert [s.time for s in result.suggestions] == ["10:00"]

    def test_excluded_booking_is_ignored(self, checker, two_bookings, target_date):
        """The booking being moved should not conflict with itself."""
        result = checker.check_conflict(
            two_bookings, target_date, "10:00", exclude_booking_id="B1"
        )

        assert not result.has_conflict

    def test_malformed_time_raises(self, checker, two_bookings, target_date):
        """An out-of-range time should raise."""
        with pytest.raises(InvalidSchedulingInput):
            checker.check_conflict(two_bookings, target_date, "25:00")


class TestSessionsWithGaps:
    """Tests for the day overview with gaps."""

    @pytest.fixture
    def checker(self):
        return ConflictChecker()

    def test_gaps(self, checker, make_snapshot, target_date):
        """Gaps under the minimum are warnings, larger gaps are good."""
        snapshot = make_snapshot(
            ("Alice", SessionKind.REMOTE, "10:00", 60),
            ("Bob", SessionKind.REMOTE, "11:20", 60),
            ("Carol", SessionKind.REMOTE, "14:00", 60),
        )
        gaps = checker.sessions_with_gaps(snapshot, target_date)

        assert [g.gap_after for g in gaps] == [20, 100, None]
        assert [g.gap_severity for g in gaps] == [
            GapSeverity.WARNING,
            GapSeverity.GOOD,
            GapSeverity.GOOD,
        ]
        assert not any(g.has_overlap for g in gaps)

    def test_overlaps(self, checker, make_snapshot, target_date):
        """Overlapping sessions report a negative gap and critical severity."""
        snapshot = make_snapshot(
            ("Alice", SessionKind.REMOTE, "10:00", 60),
            ("Carol", SessionKind.REMOTE, "10:30", 60),
        )
        gaps = checker.sessions_with_gaps(snapshot, target_date)

        assert gaps[0].gap_after == -30
        assert gaps[0].gap_severity == GapSeverity.CRITICAL
        assert [g.overlap_type for g in gaps] == [ConflictType.PARTIAL, ConflictType.PARTIAL]
