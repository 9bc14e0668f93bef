"""Day-level aggregates derived from the occupied intervals."""

from collections import defaultdict
from dataclasses import dataclass

from smartslots.domain.models import (
    OccupiedInterval,
    SessionKind,
    TimePeriod,
    WorkloadProfile,
)
from smartslots.domain.timeutils import get_time_period, hour_of

PEAK_HOUR_MIN_BOOKINGS = 2


@dataclass(frozen=True)
class DayAnalysis:
    """Occupancy of a day together with its derived aggregates.

    Attributes:
        occupied: Booked intervals sorted by start.
        workload: Bookings per period and the quietest period.
        peak_hours: Hours with two or more bookings starting.
    """

    occupied: tuple[OccupiedInterval, ...]
    workload: WorkloadProfile
    peak_hours: frozenset[int]

    @property
    def booking_count(self) -> int:
        return len(self.occupied)

    def count_kind(self, kind: SessionKind) -> int:
        """Number of bookings of a given kind."""
        return sum(1 for i in self.occupied if i.session_kind == kind)

    def kind_ratio(self, kind: SessionKind) -> float:
        """Share of bookings of a given kind (0.0 on an empty day)."""
        if not self.occupied:
            return 0.0
        return self.count_kind(kind) / len(self.occupied)


def analyze_day(intervals: list[OccupiedInterval]) -> DayAnalysis:
    """Compute workload and peak hours once for a day's occupancy."""
    return DayAnalysis(
        occupied=tuple(intervals),
        workload=compute_workload(intervals),
        peak_hours=compute_peak_hours(intervals),
    )


def compute_workload(intervals: list[OccupiedInterval]) -> WorkloadProfile:
    """Count bookings per period by start time and find the quietest period.

    Ties for the minimum resolve morning first, then afternoon, then evening.
    """
    counts = {period: 0 for period in TimePeriod}
    for interval in intervals:
        counts[get_time_period(interval.start)] += 1

    # min() returns the first minimal key in TimePeriod declaration order
    quietest = min(TimePeriod, key=lambda p: counts[p])

    return WorkloadProfile(
        morning=counts[TimePeriod.MORNING],
        afternoon=counts[TimePeriod.AFTERNOON],
        evening=counts[TimePeriod.EVENING],
        quietest=quietest,
    )


def compute_peak_hours(intervals: list[OccupiedInterval]) -> frozenset[int]:
    """Hours of the day in which two or more bookings start.

    Only start times are bucketed; interval length is ignored.
    """
    hour_counts = defaultdict(int)
    for interval in intervals:
        hour_counts[hour_of(interval.start)] += 1
    return frozenset(
        hour for hour, count in hour_counts.items() if count >= PEAK_HOUR_MIN_BOOKINGS
    )
