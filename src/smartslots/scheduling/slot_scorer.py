"""Multi-factor scoring of conflict-free candidate slots.

Each heuristic adds an independent contribution; reasons and tags are
appended in the same fixed order the heuristics run in, so identical inputs
always produce identical output.
"""

from dataclasses import dataclass, field
from typing import Optional

from smartslots.domain.geo import haversine_km
from smartslots.domain.messages import DEFAULT_LOCALE, message
from smartslots.domain.models import (
    CandidateSlot,
    Location,
    SessionKind,
)
from smartslots.domain.policies import (
    BufferPolicy,
    DefaultBufferPolicy,
    DefaultTierPolicy,
    ScoringPolicy,
    TierPolicy,
    clamp_score,
)
from smartslots.domain.timeutils import format_time_12h, get_time_period, hour_of
from smartslots.scheduling.analytics import DayAnalysis


@dataclass
class ScoreBreakdown:
    """Raw result of running every heuristic on one candidate.

    Attributes:
        raw_score: Sum of contributions before clamping.
        contributions: Points per heuristic name, in evaluation order.
        reasons: Localized explanations.
        tags: Localized badge labels.
    """

    raw_score: int = 0
    contributions: dict[str, int] = field(default_factory=dict)
    reasons: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    def add(self, heuristic: str, points: int) -> None:
        self.raw_score += points
        self.contributions[heuristic] = self.contributions.get(heuristic, 0) + points

    def tag(self, label: str) -> None:
        if label not in self.tags:
            self.tags.append(label)


class SlotScorer:
    """Scores candidate slots against a day's occupancy.

    Heuristics, in evaluation order:

    1. Free-slot base
    2. Type clustering
    3. Travel awareness (in-person) / remote clustering
    4. Off-peak
    5. Workload balance
    6. Back-to-back flow
    7. Preferred teaching window

    followed by two informational reasons (busy day, late session) that do
    not affect the score.

    Reasons are recorded once per triggering neighbor, but tags are
    de-duplicated: two nearby in-person sessions give two "Close to ..."
    reasons and a single ``nearby`` tag.
    """

    def __init__(
        self,
        scoring_policy: Optional[ScoringPolicy] = None,
        buffer_policy: Optional[BufferPolicy] = None,
        tier_policy: Optional[TierPolicy] = None,
        locale: str = DEFAULT_LOCALE,
    ):
        self.scoring_policy = scoring_policy or ScoringPolicy()
        self.buffer_policy = buffer_policy or DefaultBufferPolicy()
        self.tier_policy = tier_policy or DefaultTierPolicy()
        self.locale = locale

    def score(
        self,
        start: int,
        duration: int,
        day: DayAnalysis,
        new_kind: Optional[SessionKind] = None,
        new_location: Optional[Location] = None,
    ) -> CandidateSlot:
        """Score a conflict-free candidate and classify it.

        Args:
            start: Candidate start in minutes from midnight.
            duration: Candidate length in minutes.
            day: Occupancy and aggregates of the target day.
            new_kind: Kind of the session being placed, if known.
            new_location: Location of the session being placed, if known.

        Returns:
            CandidateSlot with clamped score, tier, priority and reasons.
        """
        breakdown = self.breakdown(start, duration, day, new_kind, new_location)
        score = clamp_score(breakdown.raw_score)
        tier = self.tier_policy.classify(score)

        return CandidateSlot(
            start_minutes=start,
            duration_minutes=duration,
            score=score,
            tier=tier,
            priority=tier.priority,
            period=get_time_period(start),
            reasons=breakdown.reasons,
            tags=breakdown.tags,
            time_label=format_time_12h(start, self.locale),
        )

    def breakdown(
        self,
        start: int,
        duration: int,
        day: DayAnalysis,
        new_kind: Optional[SessionKind] = None,
        new_location: Optional[Location] = None,
    ) -> ScoreBreakdown:
        """Run every heuristic and return the per-heuristic contributions."""
        result = ScoreBreakdown()
        policy = self.scoring_policy
        hour = hour_of(start)

        result.add("free_slot", policy.free_slot_base)
        self._score_type_clustering(result, day, new_kind)
        if new_kind == SessionKind.IN_PERSON:
            self._score_travel(result, start, duration, day, new_location)
        elif new_kind == SessionKind.REMOTE:
            self._score_remote_clustering(result, day)
        self._score_off_peak(result, hour, day)
        self._score_workload_balance(result, start, day)
        self._score_back_to_back(result, start, duration, day)
        self._score_preferred_window(result, hour)
        self._add_energy_reasons(result, hour, day)

        return result

    def _score_type_clustering(
        self,
        result: ScoreBreakdown,
        day: DayAnalysis,
        new_kind: Optional[SessionKind],
    ) -> None:
        if new_kind is None or not day.occupied:
            return
        policy = self.scoring_policy
        ratio = day.kind_ratio(new_kind)
        if ratio >= policy.same_kind_strong_ratio:
            result.add("type_clustering", policy.same_kind_strong_bonus)
            result.reasons.append(self._msg(f"reason.same_kind.{new_kind.value}"))
            result.tag(self._msg("tag.same_type"))
        elif ratio >= policy.same_kind_weak_ratio:
            result.add("type_clustering", policy.same_kind_weak_bonus)

    def _score_travel(
        self,
        result: ScoreBreakdown,
        start: int,
        duration: int,
        day: DayAnalysis,
        new_location: Optional[Location],
    ) -> None:
        """Reward in-person slots with room to travel from their neighbors."""
        policy = self.scoring_policy
        end = start + duration
        travel_buffer = self.buffer_policy.get_buffer(
            SessionKind.IN_PERSON, SessionKind.IN_PERSON
        )
        min_gap = self.buffer_policy.get_buffer(None, SessionKind.IN_PERSON)

        neighbors = [i for i in day.occupied if i.is_in_person]
        best_bonus = 0

        for neighbor in neighbors:
            gap = max(start - neighbor.end, neighbor.start - end, 0)

            if gap >= travel_buffer:
                if new_location and neighbor.location:
                    distance = haversine_km(new_location, neighbor.location)
                    if distance <= policy.proximity_km:
                        best_bonus = max(best_bonus, policy.travel_near_bonus)
                        result.reasons.append(
                            self._msg("reason.nearby", name=neighbor.label, distance=distance)
                        )
                        result.tag(self._msg("tag.nearby"))
                    else:
                        best_bonus = max(best_bonus, policy.travel_far_bonus)
                else:
                    best_bonus = max(best_bonus, policy.travel_unknown_bonus)
            elif gap >= min_gap:
                best_bonus = max(best_bonus, policy.travel_tight_bonus)

        if best_bonus:
            result.add("travel", best_bonus)

        # Flat penalty, independent of how many remote sessions there are
        if not neighbors and day.booking_count >= policy.online_dominant_min_sessions:
            result.add("travel", -policy.online_dominant_penalty)
            result.reasons.append(self._msg("reason.online_dominant"))

    def _score_remote_clustering(self, result: ScoreBreakdown, day: DayAnalysis) -> None:
        policy = self.scoring_policy
        if day.occupied and day.kind_ratio(SessionKind.REMOTE) >= policy.remote_cluster_ratio:
            result.add("remote_clustering", policy.remote_cluster_bonus)

    def _score_off_peak(self, result: ScoreBreakdown, hour: int, day: DayAnalysis) -> None:
        if hour not in day.peak_hours:
            result.add("off_peak", self.scoring_policy.off_peak_bonus)
            result.reasons.append(self._msg("reason.off_peak"))
            result.tag(self._msg("tag.quiet"))
        else:
            result.reasons.append(self._msg("reason.peak"))

    def _score_workload_balance(
        self,
        result: ScoreBreakdown,
        start: int,
        day: DayAnalysis,
    ) -> None:
        period = get_time_period(start)
        if period == day.workload.quietest:
            result.add("workload_balance", self.scoring_policy.quiet_period_bonus)
            period_name = self._msg(f"period.{period.value}")
            result.reasons.append(self._msg("reason.quiet_period", period=period_name))
            result.tag(self._msg("tag.balanced"))

    def _score_back_to_back(
        self,
        result: ScoreBreakdown,
        start: int,
        duration: int,
        day: DayAnalysis,
    ) -> None:
        """Reward the first neighbor (in start order) sitting a tidy gap away.

        Only one neighbor ever contributes.
        """
        min_gap = self.buffer_policy.get_buffer(None, SessionKind.REMOTE)
        max_gap = min_gap + self.scoring_policy.back_to_back_slack
        end = start + duration

        for interval in day.occupied:
            gap_after_previous = start - interval.end
            if min_gap <= gap_after_previous <= max_gap:
                self._add_back_to_back(result, "reason.after_neighbor", interval.label)
                return
            gap_before_next = interval.start - end
            if min_gap <= gap_before_next <= max_gap:
                self._add_back_to_back(result, "reason.before_neighbor", interval.label)
                return

    def _add_back_to_back(self, result: ScoreBreakdown, reason_key: str, name: str) -> None:
        result.add("back_to_back", self.scoring_policy.back_to_back_bonus)
        result.reasons.append(self._msg(reason_key, name=name))
        result.tag(self._msg("tag.back_to_back"))

    def _score_preferred_window(self, result: ScoreBreakdown, hour: int) -> None:
        if self.scoring_policy.is_preferred_hour(hour):
            result.add("preferred_window", self.scoring_policy.preferred_window_bonus)
            result.reasons.append(self._msg("reason.preferred_window"))

    def _add_energy_reasons(self, result: ScoreBreakdown, hour: int, day: DayAnalysis) -> None:
        policy = self.scoring_policy
        if day.booking_count >= policy.busy_day_sessions:
            result.reasons.append(self._msg("reason.busy_day"))
        if (
            day.booking_count >= policy.late_session_min_sessions
            and hour >= policy.late_session_hour
        ):
            result.reasons.append(self._msg("reason.late_session"))

    def _msg(self, key: str, **kwargs) -> str:
        return message(key, self.locale, **kwargs)
