"""Domain models for the slot recommendation engine.

This module contains all core data structures used throughout the engine,
including bookings, their owners, occupied intervals, the scheduling
context, and the ranked recommendation output.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

MINUTES_PER_DAY = 1440


class InvalidSchedulingInput(ValueError):
    """Raised when an input cannot be interpreted at all.

    Missing optional data never raises; it falls back to defaults. This is
    reserved for values such as a non-numeric duration or a malformed
    "HH:MM" string.
    """


class SessionKind(Enum):
    """How a session is delivered."""

    IN_PERSON = "in_person"
    REMOTE = "remote"

    @classmethod
    def parse(cls, value: Union[str, "SessionKind"]) -> "SessionKind":
        """Parse a kind, accepting the data-layer aliases onsite/online."""
        if isinstance(value, cls):
            return value
        aliases = {
            "in_person": cls.IN_PERSON,
            "onsite": cls.IN_PERSON,
            "remote": cls.REMOTE,
            "online": cls.REMOTE,
        }
        try:
            return aliases[str(value).strip().lower()]
        except KeyError:
            raise InvalidSchedulingInput(f"Unknown session kind: {value!r}") from None


class SessionStatus(Enum):
    """Lifecycle status of a booked session."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    EXCUSED = "excused"  # "vacation" in the data layer

    @classmethod
    def parse(cls, value: Union[str, "SessionStatus"]) -> "SessionStatus":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "vacation":
            return cls.EXCUSED
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidSchedulingInput(f"Unknown session status: {value!r}") from None

    @property
    def occupies_time(self) -> bool:
        """Whether a session with this status blocks its time span."""
        return self not in (SessionStatus.CANCELLED, SessionStatus.EXCUSED)


class TimePeriod(Enum):
    """Coarse segment of the day used for workload balancing."""

    MORNING = "morning"  # before 12:00
    AFTERNOON = "afternoon"  # 12:00 - 16:59
    EVENING = "evening"  # 17:00 onwards


class SlotPriority(Enum):
    """Display priority of a recommended slot."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SlotTier(Enum):
    """Coarse desirability bucket derived from a slot's score."""

    GOLD = "gold"
    GREEN = "green"
    NEUTRAL = "neutral"

    @property
    def priority(self) -> SlotPriority:
        """Priority that corresponds 1:1 to this tier."""
        return {
            SlotTier.GOLD: SlotPriority.HIGH,
            SlotTier.GREEN: SlotPriority.MEDIUM,
            SlotTier.NEUTRAL: SlotPriority.LOW,
        }[self]


class TipSeverity(Enum):
    """Severity of a day-level tip."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True)
class Location:
    """A resolved geographic point.

    Attributes:
        lat: Latitude in decimal degrees.
        lng: Longitude in decimal degrees.
        address: Optional street address for display.
        name: Optional place name for display.
    """

    lat: float
    lng: float
    address: Optional[str] = None
    name: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        """Best human-readable description, if any."""
        return self.address or self.name


@dataclass
class Session:
    """A single booked session.

    Any field left as None falls back to the owner's default.

    Attributes:
        id: Unique identifier for the booking.
        session_date: Calendar day of the session.
        time: "HH:MM" start time override.
        duration_minutes: Duration override in minutes.
        status: Lifecycle status.
        location: Location override.
    """

    id: str
    session_date: date
    time: Optional[str] = None
    duration_minutes: Optional[int] = None
    status: SessionStatus = SessionStatus.SCHEDULED
    location: Optional[Location] = None


@dataclass
class Student:
    """A student owning individual sessions.

    Attributes:
        id: Unique identifier for the student.
        name: Display name.
        session_kind: Default delivery kind for the student's sessions.
        session_time: Default "HH:MM" start time.
        session_duration: Default duration in minutes.
        location: Default location for in-person sessions.
        sessions: The student's booked sessions.
    """

    id: str
    name: str
    session_kind: SessionKind = SessionKind.REMOTE
    session_time: Optional[str] = None
    session_duration: Optional[int] = None
    location: Optional[Location] = None
    sessions: list[Session] = field(default_factory=list)


@dataclass
class StudentGroup:
    """A group of students sharing group sessions.

    The kind and location are derived from the members by the data layer
    and arrive here already resolved.
    """

    id: str
    name: str
    session_kind: SessionKind = SessionKind.REMOTE
    session_time: Optional[str] = None
    session_duration: Optional[int] = None
    location: Optional[Location] = None
    sessions: list[Session] = field(default_factory=list)


@dataclass
class BusinessSettings:
    """Business-wide settings that bound the recommendation scan.

    Attributes:
        working_hours_start: "HH:MM" start of the working day.
        working_hours_end: "HH:MM" end of the working day.
        locale: Language used for reasons, tags and tips ("en" or "ar").
    """

    working_hours_start: str = "08:00"
    working_hours_end: str = "22:00"
    locale: str = "en"

    @property
    def work_start_minutes(self) -> int:
        from smartslots.domain.timeutils import time_to_minutes

        return time_to_minutes(self.working_hours_start)

    @property
    def work_end_minutes(self) -> int:
        from smartslots.domain.timeutils import time_to_minutes

        return time_to_minutes(self.working_hours_end)


@dataclass
class ScheduleSnapshot:
    """Read-only view of everything booked for one owner.

    Attributes:
        students: Students with their individual sessions.
        groups: Groups with their group sessions.
        settings: Business settings that accompany the snapshot.
    """

    students: list[Student] = field(default_factory=list)
    groups: list[StudentGroup] = field(default_factory=list)
    settings: BusinessSettings = field(default_factory=BusinessSettings)

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleSnapshot":
        """Build a snapshot from a JSON-style dict."""
        from smartslots.domain.snapshot import snapshot_from_dict

        return snapshot_from_dict(data)


@dataclass(frozen=True)
class OccupiedInterval:
    """A booked span on the target day.

    Attributes:
        start: Minutes from midnight when the booking starts.
        end: Minutes from midnight when the booking ends (exclusive).
        session_kind: Delivery kind of the booking.
        label: Display name of the occupying student or group.
        location: Known location, for in-person bookings only.
        booking_id: ID of the underlying session.
        is_group: True for group sessions.
    """

    start: int
    end: int
    session_kind: SessionKind
    label: str
    location: Optional[Location] = None
    booking_id: Optional[str] = None
    is_group: bool = False

    def __post_init__(self):
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise InvalidSchedulingInput(
                f"Occupied interval {self.start}-{self.end} for {self.label!r} "
                f"is outside the day"
            )

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    @property
    def is_in_person(self) -> bool:
        return self.session_kind == SessionKind.IN_PERSON


@dataclass(frozen=True)
class SchedulingContext:
    """Input parameters for one recommendation run.

    Attributes:
        schedule_date: Target day as a date or datetime, a "YYYY-MM-DD"
            string, or None.
        duration_minutes: Requested duration of the new session.
        new_session_kind: Delivery kind of the new session, if known.
        new_location: Location of the new session, if known.
        work_start_minutes: Override for the start of the working window.
        work_end_minutes: Override for the end of the working window.
        exclude_booking_id: Booking to ignore (the one being moved).
    """

    schedule_date: Union[date, datetime, str, None]
    duration_minutes: int
    new_session_kind: Optional[SessionKind] = None
    new_location: Optional[Location] = None
    work_start_minutes: Optional[int] = None
    work_end_minutes: Optional[int] = None
    exclude_booking_id: Optional[str] = None

    def __post_init__(self):
        duration = self.duration_minutes
        # integral floats such as 60.0 are accepted and stored as int
        if isinstance(duration, float) and duration.is_integer():
            object.__setattr__(self, "duration_minutes", int(duration))
        elif isinstance(duration, bool) or not isinstance(duration, int):
            raise InvalidSchedulingInput(
                f"Duration must be a whole number of minutes, got {duration!r}"
            )

    @property
    def target_date(self) -> Optional[date]:
        """The target day, or None when absent or unparseable."""
        if isinstance(self.schedule_date, datetime):
            return self.schedule_date.date()
        if isinstance(self.schedule_date, date):
            return self.schedule_date
        if not self.schedule_date:
            return None
        try:
            return date.fromisoformat(str(self.schedule_date).strip())
        except ValueError:
            return None


@dataclass(frozen=True)
class WorkloadProfile:
    """Counts of bookings starting in each period of the day.

    Attributes:
        morning: Bookings starting before 12:00.
        afternoon: Bookings starting 12:00-16:59.
        evening: Bookings starting from 17:00.
        quietest: Period with the fewest bookings.
    """

    morning: int
    afternoon: int
    evening: int
    quietest: TimePeriod

    def count_for(self, period: TimePeriod) -> int:
        """Number of bookings in a period."""
        return {
            TimePeriod.MORNING: self.morning,
            TimePeriod.AFTERNOON: self.afternoon,
            TimePeriod.EVENING: self.evening,
        }[period]


@dataclass
class CandidateSlot:
    """A scored, conflict-free start time for the new session.

    Attributes:
        start_minutes: Minutes from midnight when the slot starts.
        duration_minutes: Length of the slot.
        score: Desirability score, 0-100.
        tier: Tier derived from the score.
        priority: Priority derived from the tier.
        period: Period of the day the slot starts in.
        reasons: Short explanations, in heuristic order.
        tags: Compact labels for UI badges.
        time_label: Localized 12-hour start time.
    """

    start_minutes: int
    duration_minutes: int
    score: int
    tier: SlotTier
    priority: SlotPriority
    period: TimePeriod
    reasons: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    time_label: str = ""

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_minutes

    @property
    def time(self) -> str:
        """24-hour "HH:MM" start time."""
        from smartslots.domain.timeutils import minutes_to_time

        return minutes_to_time(self.start_minutes)

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "time_label": self.time_label,
            "score": self.score,
            "tier": self.tier.value,
            "priority": self.priority.value,
            "period": self.period.value,
            "reasons": list(self.reasons),
            "tags": list(self.tags),
        }

    def __repr__(self) -> str:
        return f"CandidateSlot({self.time}, score={self.score}, tier={self.tier.value})"


@dataclass(frozen=True)
class DayTip:
    """An advisory message about the day as a whole.

    Attributes:
        code: Stable identifier of the tip.
        icon: Emoji shown next to the text.
        text: Localized message.
        severity: Info, success or warning.
    """

    code: str
    icon: str
    text: str
    severity: TipSeverity

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "icon": self.icon,
            "text": self.text,
            "severity": self.severity.value,
        }


@dataclass
class Recommendations:
    """Complete engine output: ranked slots plus day tips."""

    slots: list[CandidateSlot] = field(default_factory=list)
    tips: list[DayTip] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Recommendations":
        return cls()

    @property
    def best(self) -> Optional[CandidateSlot]:
        """Highest-ranked slot, if any."""
        return self.slots[0] if self.slots else None

    def to_dict(self) -> dict:
        return {
            "slots": [s.to_dict() for s in self.slots],
            "tips": [t.to_dict() for t in self.tips],
        }
