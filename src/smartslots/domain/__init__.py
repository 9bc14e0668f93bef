"""Domain models and business rules for slot recommendation."""

from smartslots.domain.models import (
    BusinessSettings,
    CandidateSlot,
    DayTip,
    InvalidSchedulingInput,
    Location,
    OccupiedInterval,
    Recommendations,
    ScheduleSnapshot,
    SchedulingContext,
    Session,
    SessionKind,
    SessionStatus,
    SlotPriority,
    SlotTier,
    Student,
    StudentGroup,
    TimePeriod,
    TipSeverity,
    WorkloadProfile,
)
from smartslots.domain.policies import (
    BufferPolicy,
    DefaultBufferPolicy,
    DefaultTierPolicy,
    ScoringPolicy,
    TierPolicy,
)

__all__ = [
    # Models
    "BusinessSettings",
    "CandidateSlot",
    "DayTip",
    "InvalidSchedulingInput",
    "Location",
    "OccupiedInterval",
    "Recommendations",
    "ScheduleSnapshot",
    "SchedulingContext",
    "Session",
    "SessionKind",
    "SessionStatus",
    "SlotPriority",
    "SlotTier",
    "Student",
    "StudentGroup",
    "TimePeriod",
    "TipSeverity",
    "WorkloadProfile",
    # Policies
    "BufferPolicy",
    "DefaultBufferPolicy",
    "DefaultTierPolicy",
    "ScoringPolicy",
    "TierPolicy",
]
