"""Tests for the slot scanner and buffer policy."""

import pytest

from smartslots.domain.models import InvalidSchedulingInput, OccupiedInterval, SessionKind
from smartslots.domain.policies import DefaultBufferPolicy
from smartslots.scheduling.slot_scanner import SlotScanner


class TestBufferPolicy:
    """Tests for DefaultBufferPolicy."""

    @pytest.fixture
    def policy(self):
        return DefaultBufferPolicy()

    def test_travel_buffer_between_in_person_sessions(self, policy):
        """In-person next to in-person needs 45 minutes."""
        assert policy.get_buffer(SessionKind.IN_PERSON, SessionKind.IN_PERSON) == 45

    @pytest.mark.parametrize(
        "new_kind,other_kind",
        [
            (SessionKind.IN_PERSON, SessionKind.REMOTE),
            (SessionKind.REMOTE, SessionKind.IN_PERSON),
            (SessionKind.REMOTE, SessionKind.REMOTE),
            (None, SessionKind.IN_PERSON),
            (None, SessionKind.REMOTE),
        ],
    )
    def test_min_gap_for_every_other_pairing(self, policy, new_kind, other_kind):
        """Every other pairing needs 30 minutes."""
        assert policy.get_buffer(new_kind, other_kind) == 30


class TestOccupiedInterval:
    """Tests for interval invariants."""

    @pytest.mark.parametrize("start,end", [(600, 600), (700, 600), (-10, 30), (1400, 1500)])
    def test_rejects_intervals_outside_the_day(self, start, end):
        """Empty, reversed or out-of-day intervals are rejected."""
        with pytest.raises(InvalidSchedulingInput):
            OccupiedInterval(start=start, end=end, session_kind=SessionKind.REMOTE, label="X")


class TestSlotScanner:
    """Tests for SlotScanner."""

    @pytest.fixture
    def scanner(self):
        return SlotScanner()

    def test_candidate_grid_covers_the_window(self, scanner):
        """Candidates start every 30 minutes and fit the window."""
        starts = scanner.candidate_starts(480, 1320, 60)

        assert starts[0] == 480
        assert starts[-1] == 1260
        assert len(starts) == 27

    @pytest.mark.parametrize("duration", [0, -30, 900])
    def test_no_candidates_for_unusable_duration(self, scanner, duration):
        """Non-positive or oversized durations give no candidates."""
        assert list(scanner.candidate_starts(480, 1320, duration)) == []

    def test_invalid_step_raises(self):
        """A non-positive step should raise."""
        with pytest.raises(ValueError):
            SlotScanner(step_minutes=0)

    def test_empty_day_keeps_every_candidate(self, scanner):
        """On an empty day every candidate is free."""
        assert scanner.scan(480, 1320, 60, []) == list(range(480, 1261, 30))

    def test_in_person_travel_buffer(self, scanner, make_interval):
        """In-person requests keep 45 minutes from in-person bookings."""
        occupied = [make_interval("10:00", "11:00", SessionKind.IN_PERSON)]

        starts = scanner.scan(480, 1320, 60, occupied, SessionKind.IN_PERSON)

        assert 480 in starts
        assert 720 in starts
        for blocked in range(510, 720, 30):
            assert blocked not in starts

    def test_remote_uses_min_gap(self, scanner, make_interval):
        """Remote requests keep 30 minutes."""
        occupied = [make_interval("10:00", "11:00", SessionKind.REMOTE)]

        starts = scanner.scan(480, 1320, 60, occupied, SessionKind.REMOTE)

        # 08:30 ends at 09:30, exactly 30 minutes before the booking
        assert 510 in starts
        assert 690 in starts
        for blocked in range(540, 690, 30):
            assert blocked not in starts

    def test_unknown_kind_uses_min_gap_against_in_person(self, scanner, make_interval):
        """An unknown kind keeps only the minimum gap."""
        occupied = [make_interval("10:00", "11:00", SessionKind.IN_PERSON)]

        starts = scanner.scan(480, 1320, 60, occupied, None)

        assert 510 in starts
        assert 690 in starts

    def test_find_conflict_returns_first_match(self, scanner, make_interval):
        """The first conflicting booking is returned."""
        first = make_interval("10:00", "11:00", label="First")
        second = make_interval("11:00", "12:00", label="Second")

        conflict = scanner.find_conflict(630, 60, [first, second])

        assert conflict is first
        assert scanner.find_conflict(900, 60, [first, second]) is None
