"""Day-level advisory tips.

Tips describe the shape of the whole day and never depend on an individual
candidate slot.
"""

from typing import Optional

from smartslots.domain.messages import DEFAULT_LOCALE, message
from smartslots.domain.models import (
    DayTip,
    Location,
    OccupiedInterval,
    SessionKind,
    TipSeverity,
)
from smartslots.domain.policies import CONSECUTIVE_GAP_MINUTES


class DayTipsGenerator:
    """Generates the ordered list of day tips.

    Order of evaluation:
    - Empty day (short-circuits everything else)
    - Day load (busy or moderate)
    - Kind clustering commentary for the requested kind
    - Location echo for in-person requests
    - Long-day fatigue
    - Consecutive-run warning
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        busy_day_sessions: int = 5,
        moderate_day_sessions: int = 3,
        long_day_sessions: int = 4,
        cluster_min_sessions: int = 2,
        consecutive_gap: int = CONSECUTIVE_GAP_MINUTES,
    ):
        self.locale = locale
        self.busy_day_sessions = busy_day_sessions
        self.moderate_day_sessions = moderate_day_sessions
        self.long_day_sessions = long_day_sessions
        self.cluster_min_sessions = cluster_min_sessions
        self.consecutive_gap = consecutive_gap

    def generate(
        self,
        occupied: list[OccupiedInterval],
        new_kind: Optional[SessionKind] = None,
        new_location: Optional[Location] = None,
    ) -> list[DayTip]:
        """Generate tips for a day.

        Args:
            occupied: Booked intervals on the day.
            new_kind: Kind of the session being placed, if known.
            new_location: Location of the session being placed, if known.

        Returns:
            Tips in a fixed, order-sensitive sequence.
        """
        if not occupied:
            return [self._tip("empty_day", "✨", TipSeverity.SUCCESS)]

        tips = []
        count = len(occupied)

        if count >= self.busy_day_sessions:
            tips.append(self._tip("busy_day", "⚠️", TipSeverity.WARNING, count=count))
        elif count >= self.moderate_day_sessions:
            tips.append(self._tip("moderate_day", "📊", TipSeverity.INFO, count=count))

        cluster_tip = self._kind_cluster_tip(occupied, new_kind)
        if cluster_tip:
            tips.append(cluster_tip)

        if new_kind == SessionKind.IN_PERSON and new_location:
            place = new_location.display_name or message("tip.location_unnamed", self.locale)
            tips.append(self._tip("location", "📍", TipSeverity.INFO, place=place))

        if count >= self.long_day_sessions:
            tips.append(self._tip("long_day", "💪", TipSeverity.INFO))

        longest_run = self.longest_consecutive_run(occupied)
        if longest_run >= 3:
            tips.append(
                self._tip("consecutive_run", "☕", TipSeverity.WARNING, count=longest_run)
            )

        return tips

    def longest_consecutive_run(self, occupied: list[OccupiedInterval]) -> int:
        """Length of the longest chain of sessions separated by short gaps.

        Returns 0 for an empty day and 1 when no two sessions chain.
        """
        if not occupied:
            return 0
        ordered = sorted(occupied, key=lambda i: i.start)
        streak = 0
        longest = 0
        for previous, current in zip(ordered, ordered[1:]):
            if current.start - previous.end < self.consecutive_gap:
                streak += 1
                longest = max(longest, streak)
            else:
                streak = 0
        return longest + 1

    def _kind_cluster_tip(
        self,
        occupied: list[OccupiedInterval],
        new_kind: Optional[SessionKind],
    ) -> Optional[DayTip]:
        in_person = sum(1 for i in occupied if i.session_kind == SessionKind.IN_PERSON)
        remote = len(occupied) - in_person
        minimum = self.cluster_min_sessions

        if new_kind == SessionKind.IN_PERSON:
            if in_person >= minimum and remote == 0:
                return self._tip("in_person_cluster", "🚗", TipSeverity.SUCCESS)
            if remote >= minimum and in_person == 0:
                return self._tip("remote_heavy_for_in_person", "💡", TipSeverity.INFO)
        elif new_kind == SessionKind.REMOTE:
            if remote >= minimum and in_person == 0:
                return self._tip("remote_cluster", "💻", TipSeverity.SUCCESS)
            if in_person >= minimum and remote == 0:
                return self._tip("in_person_heavy_for_remote", "💡", TipSeverity.INFO)
        return None

    def _tip(self, code: str, icon: str, severity: TipSeverity, **kwargs) -> DayTip:
        return DayTip(
            code=code,
            icon=icon,
            text=message(f"tip.{code}", self.locale, **kwargs),
            severity=severity,
        )
