"""Policy definitions for slot recommendation rules.

This module contains the named constants and configurable policies that
define buffers, scoring weights and tier cutoffs. Policies are kept
separate from the engine so each heuristic can be tuned and tested
independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from smartslots.domain.models import SessionKind, SlotTier

DEFAULT_SESSION_DURATION = 60
DEFAULT_SESSION_TIME = "16:00"
DEFAULT_WORK_START = "08:00"
DEFAULT_WORK_END = "22:00"

MIN_GAP_MINUTES = 30  # breathing room between any two sessions
TRAVEL_BUFFER_MINUTES = 45  # travel time between two in-person sessions
SLOT_STEP_MINUTES = 30
PROXIMITY_KM = 10.0
MAX_SLOTS = 8

GOLD_THRESHOLD = 75
GREEN_THRESHOLD = 50
MIN_SCORE = 0
MAX_SCORE = 100

CONSECUTIVE_GAP_MINUTES = 45  # gaps shorter than this chain sessions together


class BufferPolicy(ABC):
    """Abstract base class for inter-session buffer rules."""

    @abstractmethod
    def get_buffer(
        self,
        new_kind: Optional[SessionKind],
        other_kind: SessionKind,
    ) -> int:
        """Minimum gap in minutes required between the new session and another.

        Args:
            new_kind: Kind of the session being placed, if known.
            other_kind: Kind of the already-booked session.

        Returns:
            Required buffer in minutes on either side.
        """
        pass


class TierPolicy(ABC):
    """Abstract base class for score-to-tier classification."""

    @abstractmethod
    def classify(self, score: int) -> SlotTier:
        """Map a 0-100 score to a tier."""
        pass


@dataclass
class DefaultBufferPolicy(BufferPolicy):
    """Default buffer policy implementation.

    Buffers:
    - In-person next to in-person: 45 minutes (travel)
    - Any other pairing: 30 minutes
    """

    min_gap: int = MIN_GAP_MINUTES
    travel_buffer: int = TRAVEL_BUFFER_MINUTES

    def get_buffer(
        self,
        new_kind: Optional[SessionKind],
        other_kind: SessionKind,
    ) -> int:
        if new_kind == SessionKind.IN_PERSON and other_kind == SessionKind.IN_PERSON:
            return self.travel_buffer
        return self.min_gap


@dataclass
class DefaultTierPolicy(TierPolicy):
    """Default tier cutoffs: gold at 75, green at 50."""

    gold_threshold: int = GOLD_THRESHOLD
    green_threshold: int = GREEN_THRESHOLD

    def classify(self, score: int) -> SlotTier:
        if score >= self.gold_threshold:
            return SlotTier.GOLD
        elif score >= self.green_threshold:
            return SlotTier.GREEN
        return SlotTier.NEUTRAL


@dataclass
class ScoringPolicy:
    """Weights and thresholds for each scoring heuristic.

    The defaults reproduce the standard scoring table:

    1. Free slot base: +40
    2. Type clustering: +15 at a 60% same-kind ratio, +8 at 40%
    3. Travel awareness (in-person): nearby 15, far 5, unknown 10,
       tight window 3, online-dominant day -5
    3b. Remote clustering: +10 at a 60% remote ratio
    4. Off-peak: +8
    5. Workload balance: +7
    6. Back-to-back flow: +5 within min_gap..min_gap+15 of a neighbor
    7. Preferred window 14:00-20:59: +5
    """

    free_slot_base: int = 40

    same_kind_strong_ratio: float = 0.6
    same_kind_strong_bonus: int = 15
    same_kind_weak_ratio: float = 0.4
    same_kind_weak_bonus: int = 8

    proximity_km: float = PROXIMITY_KM
    travel_near_bonus: int = 15
    travel_far_bonus: int = 5
    travel_unknown_bonus: int = 10
    travel_tight_bonus: int = 3
    online_dominant_penalty: int = 5
    online_dominant_min_sessions: int = 2

    remote_cluster_ratio: float = 0.6
    remote_cluster_bonus: int = 10

    off_peak_bonus: int = 8
    quiet_period_bonus: int = 7

    back_to_back_bonus: int = 5
    back_to_back_slack: int = 15

    preferred_start_hour: int = 14
    preferred_end_hour: int = 20  # inclusive
    preferred_window_bonus: int = 5

    busy_day_sessions: int = 4
    late_session_hour: int = 20
    late_session_min_sessions: int = 3

    def is_preferred_hour(self, hour: int) -> bool:
        """Check if an hour-of-day falls in the preferred teaching window."""
        return self.preferred_start_hour <= hour <= self.preferred_end_hour


def clamp_score(score: int) -> int:
    """Clamp a raw score into the 0-100 range."""
    return max(MIN_SCORE, min(MAX_SCORE, score))
