"""Occupancy collection for the target day.

This module normalizes individual and group bookings into a single sorted
list of occupied intervals, resolving every per-booking override against
its owner's defaults.
"""

import logging
from datetime import date
from typing import Optional, Union

from smartslots.domain.models import (
    MINUTES_PER_DAY,
    OccupiedInterval,
    ScheduleSnapshot,
    Session,
    Student,
    StudentGroup,
)
from smartslots.domain.policies import DEFAULT_SESSION_DURATION, DEFAULT_SESSION_TIME
from smartslots.domain.timeutils import time_to_minutes

logger = logging.getLogger(__name__)

GROUP_LABEL_PREFIX = "👥 "

Owner = Union[Student, StudentGroup]


class OccupancyCollector:
    """Collects the occupied intervals of one calendar day.

    A booking is kept when it falls on the target date, its status still
    blocks time (not cancelled or excused), and it is not the booking being
    moved. Each group session becomes a single interval, not one per member.
    """

    def __init__(
        self,
        default_time: str = DEFAULT_SESSION_TIME,
        default_duration: int = DEFAULT_SESSION_DURATION,
    ):
        self.default_time = default_time
        self.default_duration = default_duration

    def collect(
        self,
        snapshot: ScheduleSnapshot,
        target_date: date,
        exclude_booking_id: Optional[str] = None,
    ) -> list[OccupiedInterval]:
        """Collect occupied intervals for a day, sorted by start time.

        Args:
            snapshot: Students and groups with their sessions.
            target_date: Day to collect.
            exclude_booking_id: Session ID to leave out, if any.

        Returns:
            Occupied intervals sorted ascending by start. Ties keep
            individual sessions ahead of group sessions.
        """
        intervals = []

        owners = [(s, False) for s in snapshot.students] + [(g, True) for g in snapshot.groups]
        for owner, is_group in owners:
            for session in self._sessions_on(owner, target_date, exclude_booking_id):
                interval = self._to_interval(owner, session, is_group)
                if interval is not None:
                    intervals.append(interval)

        intervals.sort(key=lambda i: i.start)
        logger.debug("Collected %d occupied intervals on %s", len(intervals), target_date)
        return intervals

    def _sessions_on(
        self,
        owner: Owner,
        target_date: date,
        exclude_booking_id: Optional[str],
    ) -> list[Session]:
        result = []
        for session in owner.sessions:
            if session.session_date != target_date:
                continue
            if not session.status.occupies_time:
                continue
            if exclude_booking_id and session.id == exclude_booking_id:
                continue
            result.append(session)
        return result

    def _to_interval(
        self,
        owner: Owner,
        session: Session,
        is_group: bool,
    ) -> Optional[OccupiedInterval]:
        start = time_to_minutes(self.effective_time(owner, session))
        if start >= MINUTES_PER_DAY:
            logger.debug("Skipping booking %s starting at midnight", session.id)
            return None
        end = min(MINUTES_PER_DAY, start + self.effective_duration(owner, session))
        label = f"{GROUP_LABEL_PREFIX}{owner.name}" if is_group else owner.name

        return OccupiedInterval(
            start=start,
            end=end,
            session_kind=owner.session_kind,
            label=label,
            location=session.location or owner.location,
            booking_id=session.id,
            is_group=is_group,
        )

    def effective_time(self, owner: Owner, session: Session) -> str:
        """Booking override, else owner default, else the fixed default."""
        return session.time or owner.session_time or self.default_time

    def effective_duration(self, owner: Owner, session: Session) -> int:
        """Booking override, else owner default, else the fixed default.

        A zero override counts as unset.
        """
        return session.duration_minutes or owner.session_duration or self.default_duration
