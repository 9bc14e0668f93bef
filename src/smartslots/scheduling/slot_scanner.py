"""Slot scanner for finding conflict-free start times.

This module walks the working-hours window at a fixed step and keeps every
candidate span that clears all booked intervals by the applicable buffer.
"""

from typing import Optional

from smartslots.domain.models import OccupiedInterval, SessionKind
from smartslots.domain.policies import BufferPolicy, DefaultBufferPolicy, SLOT_STEP_MINUTES


class SlotScanner:
    """Generates conflict-free candidate start times.

    A candidate [t, t + duration) conflicts with a booked interval s when,
    after widening both sides by the buffer b:

        t < s.end + b  and  t + duration + b > s.start

    The buffer depends on the kinds involved (see BufferPolicy). The first
    conflicting interval found discards the candidate.
    """

    def __init__(
        self,
        buffer_policy: Optional[BufferPolicy] = None,
        step_minutes: int = SLOT_STEP_MINUTES,
    ):
        if step_minutes <= 0:
            raise ValueError(f"step_minutes must be positive, got {step_minutes}")
        self.buffer_policy = buffer_policy or DefaultBufferPolicy()
        self.step_minutes = step_minutes

    def candidate_starts(
        self,
        work_start: int,
        work_end: int,
        duration: int,
    ) -> range:
        """Every start time on the step grid whose span fits the window.

        A non-positive duration yields no candidates.
        """
        if duration <= 0:
            return range(0)
        return range(work_start, work_end - duration + 1, self.step_minutes)

    def find_conflict(
        self,
        start: int,
        duration: int,
        occupied: list[OccupiedInterval],
        new_kind: Optional[SessionKind] = None,
    ) -> Optional[OccupiedInterval]:
        """Return the first interval that conflicts with a candidate, if any."""
        end = start + duration
        for interval in occupied:
            buffer = self.buffer_policy.get_buffer(new_kind, interval.session_kind)
            if start < interval.end + buffer and end + buffer > interval.start:
                return interval
        return None

    def is_free(
        self,
        start: int,
        duration: int,
        occupied: list[OccupiedInterval],
        new_kind: Optional[SessionKind] = None,
    ) -> bool:
        """Check if a candidate clears every booked interval."""
        return self.find_conflict(start, duration, occupied, new_kind) is None

    def scan(
        self,
        work_start: int,
        work_end: int,
        duration: int,
        occupied: list[OccupiedInterval],
        new_kind: Optional[SessionKind] = None,
    ) -> list[int]:
        """Scan the working window for conflict-free start times.

        Args:
            work_start: Minutes from midnight when the working window opens.
            work_end: Minutes from midnight when the working window closes.
            duration: Requested session length in minutes.
            occupied: Booked intervals on the day.
            new_kind: Kind of the session being placed, if known.

        Returns:
            Conflict-free start times in ascending order.
        """
        return [
            start
            for start in self.candidate_starts(work_start, work_end, duration)
            if self.is_free(start, duration, occupied, new_kind)
        ]
