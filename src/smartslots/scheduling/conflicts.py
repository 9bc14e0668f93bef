"""Conflict checking for a manually chosen session time.

Where the recommender proposes times, the conflict checker judges a time
the user typed in: does it collide with, or sit too close to, anything
already booked that day, and what nearby times would work instead.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from smartslots.domain.models import BusinessSettings, OccupiedInterval, ScheduleSnapshot
from smartslots.domain.policies import DEFAULT_SESSION_DURATION, MIN_GAP_MINUTES
from smartslots.domain.timeutils import format_time_12h, minutes_to_time, time_to_minutes
from smartslots.scheduling.occupancy import OccupancyCollector

MAX_SUGGESTIONS = 3


class ConflictSeverity(Enum):
    """Overall severity of a conflict check."""

    NONE = "none"
    WARNING = "warning"
    ERROR = "error"


class ConflictType(Enum):
    """Kind of clash between two sessions, from mildest to worst."""

    NONE = "none"
    CLOSE = "close"  # no overlap, but less than the minimum gap apart
    PARTIAL = "partial"
    EXACT = "exact"  # same start time

    @property
    def rank(self) -> int:
        return list(ConflictType).index(self)

    @property
    def severity(self) -> ConflictSeverity:
        if self in (ConflictType.EXACT, ConflictType.PARTIAL):
            return ConflictSeverity.ERROR
        if self == ConflictType.CLOSE:
            return ConflictSeverity.WARNING
        return ConflictSeverity.NONE


class GapSeverity(Enum):
    """How comfortable the gap after a session is."""

    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class ConflictDetail:
    """One booked session that clashes with the proposed time."""

    interval: OccupiedInterval
    conflict_type: ConflictType
    message: str
    gap: Optional[int] = None


@dataclass
class TimeSuggestion:
    """An alternative start time next to an existing booking.

    Attributes:
        start_minutes: Suggested start in minutes from midnight.
        placement: "before" the first booking or "after" a booking.
        time_label: Localized 12-hour time.
    """

    start_minutes: int
    placement: str
    time_label: str = ""

    @property
    def time(self) -> str:
        return minutes_to_time(self.start_minutes)


@dataclass
class ConflictResult:
    """Outcome of checking a proposed time."""

    severity: ConflictSeverity = ConflictSeverity.NONE
    conflict_type: ConflictType = ConflictType.NONE
    conflicts: list[ConflictDetail] = field(default_factory=list)
    suggestions: list[TimeSuggestion] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return self.severity != ConflictSeverity.NONE

    def record(self, detail: ConflictDetail) -> None:
        """Add a clash and escalate the overall type and severity."""
        self.conflicts.append(detail)
        if detail.conflict_type.rank > self.conflict_type.rank:
            self.conflict_type = detail.conflict_type
            self.severity = detail.conflict_type.severity


@dataclass
class SessionGap:
    """A booked session with the gap that follows it."""

    interval: OccupiedInterval
    gap_after: Optional[int]
    gap_severity: GapSeverity
    overlap_type: ConflictType = ConflictType.NONE

    @property
    def has_overlap(self) -> bool:
        return self.overlap_type != ConflictType.NONE


class ConflictChecker:
    """Checks proposed session times against a day's bookings.

    Example:
        >>> checker = ConflictChecker()
        >>> result = checker.check_conflict(snapshot, date(2026, 3, 2), "16:00")
        >>> if result.has_conflict:
        ...     print([s.time for s in result.suggestions])
    """

    def __init__(
        self,
        min_gap: int = MIN_GAP_MINUTES,
        settings: Optional[BusinessSettings] = None,
        max_suggestions: int = MAX_SUGGESTIONS,
    ):
        self.min_gap = min_gap
        self.settings = settings
        self.max_suggestions = max_suggestions
        self.occupancy_collector = OccupancyCollector()

    def check_conflict(
        self,
        snapshot: ScheduleSnapshot,
        schedule_date: date,
        start_time: str,
        duration_minutes: int = DEFAULT_SESSION_DURATION,
        exclude_booking_id: Optional[str] = None,
    ) -> ConflictResult:
        """Check a proposed start time against every booking on the day.

        Args:
            snapshot: Everything already booked.
            schedule_date: Day of the proposed session.
            start_time: Proposed "HH:MM" start.
            duration_minutes: Proposed length.
            exclude_booking_id: Booking being edited, ignored in the check.

        Returns:
            ConflictResult with every clash, the worst type and severity,
            and up to three alternative times when anything clashes.
        """
        start = time_to_minutes(start_time)
        end = start + duration_minutes
        occupied = self.occupancy_collector.collect(
            snapshot, schedule_date, exclude_booking_id
        )

        result = ConflictResult()
        for interval in occupied:
            detail = self._classify(start, end, interval)
            if detail is not None:
                result.record(detail)

        if result.has_conflict:
            settings = self.settings or snapshot.settings or BusinessSettings()
            result.suggestions = self.suggest_times(occupied, duration_minutes, settings)

        return result

    def _classify(
        self,
        start: int,
        end: int,
        interval: OccupiedInterval,
    ) -> Optional[ConflictDetail]:
        label = interval.label
        if start == interval.start:
            return ConflictDetail(
                interval, ConflictType.EXACT, f"Conflicts with {label} at the same time"
            )
        if start < interval.end and interval.start < end:
            return ConflictDetail(interval, ConflictType.PARTIAL, f"Overlaps with {label}")

        gap_before = interval.start - end
        gap_after = start - interval.end
        if 0 <= gap_before < self.min_gap:
            return ConflictDetail(
                interval,
                ConflictType.CLOSE,
                f"Only {gap_before} min gap before {label}",
                gap=gap_before,
            )
        if 0 <= gap_after < self.min_gap:
            return ConflictDetail(
                interval,
                ConflictType.CLOSE,
                f"Only {gap_after} min gap after {label}",
                gap=gap_after,
            )
        return None

    def suggest_times(
        self,
        occupied: list[OccupiedInterval],
        duration: int,
        settings: BusinessSettings,
    ) -> list[TimeSuggestion]:
        """Suggest starts just before the first booking and after each one."""
        if not occupied:
            return []

        work_start = settings.work_start_minutes
        work_end = settings.work_end_minutes
        suggestions = []

        first = occupied[0]
        if first.start >= duration + self.min_gap:
            before = first.start - duration - self.min_gap
            if before >= work_start:
                suggestions.append(self._suggestion(before, "before", settings))

        for idx, interval in enumerate(occupied):
            following = occupied[idx + 1] if idx + 1 < len(occupied) else None
            after = interval.end + self.min_gap
            fits_before_next = (
                following is None or after + duration + self.min_gap <= following.start
            )
            if fits_before_next and after + duration <= work_end:
                suggestions.append(self._suggestion(after, "after", settings))

        return suggestions[: self.max_suggestions]

    def sessions_with_gaps(
        self,
        snapshot: ScheduleSnapshot,
        schedule_date: date,
    ) -> list[SessionGap]:
        """List the day's sessions with the gap after each and any overlaps."""
        occupied = self.occupancy_collector.collect(snapshot, schedule_date)
        result = []

        for idx, interval in enumerate(occupied):
            gap_after = None
            gap_severity = GapSeverity.GOOD
            if idx + 1 < len(occupied):
                gap_after = occupied[idx + 1].start - interval.end
                if gap_after < 0:
                    gap_severity = GapSeverity.CRITICAL
                elif gap_after < self.min_gap:
                    gap_severity = GapSeverity.WARNING

            overlap_type = ConflictType.NONE
            for other_idx, other in enumerate(occupied):
                if other_idx == idx:
                    continue
                if interval.start == other.start:
                    overlap_type = ConflictType.EXACT
                    break
                if interval.start < other.end and other.start < interval.end:
                    overlap_type = ConflictType.PARTIAL

            result.append(
                SessionGap(
                    interval=interval,
                    gap_after=gap_after,
                    gap_severity=gap_severity,
                    overlap_type=overlap_type,
                )
            )

        return result

    def _suggestion(
        self,
        start: int,
        placement: str,
        settings: BusinessSettings,
    ) -> TimeSuggestion:
        return TimeSuggestion(
            start_minutes=start,
            placement=placement,
            time_label=format_time_12h(start, settings.locale),
        )
