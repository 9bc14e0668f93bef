"""Main recommendation interface.

This module provides the high-level SlotRecommender class that orchestrates
occupancy collection, day analytics, scanning, scoring and day tips.
"""

import logging
from typing import Optional

from smartslots.domain.messages import DEFAULT_LOCALE
from smartslots.domain.models import (
    BusinessSettings,
    Location,
    Recommendations,
    ScheduleSnapshot,
    SchedulingContext,
    SessionKind,
)
from smartslots.domain.policies import (
    BufferPolicy,
    DefaultBufferPolicy,
    DefaultTierPolicy,
    MAX_SLOTS,
    SLOT_STEP_MINUTES,
    ScoringPolicy,
    TierPolicy,
)
from smartslots.scheduling.analytics import analyze_day
from smartslots.scheduling.day_tips import DayTipsGenerator
from smartslots.scheduling.occupancy import OccupancyCollector
from smartslots.scheduling.slot_scanner import SlotScanner
from smartslots.scheduling.slot_scorer import SlotScorer

logger = logging.getLogger(__name__)


class SlotRecommender:
    """High-level engine for recommending session start times.

    The recommender is stateless between calls: every invocation rebuilds
    the day's occupancy from the snapshot it is given.

    Example:
        >>> recommender = SlotRecommender()
        >>> context = SchedulingContext(
        ...     schedule_date=date(2026, 3, 2),
        ...     duration_minutes=60,
        ...     new_session_kind=SessionKind.IN_PERSON,
        ... )
        >>> result = recommender.recommend(context, snapshot)
    """

    def __init__(
        self,
        scoring_policy: Optional[ScoringPolicy] = None,
        buffer_policy: Optional[BufferPolicy] = None,
        tier_policy: Optional[TierPolicy] = None,
        settings: Optional[BusinessSettings] = None,
        max_slots: int = MAX_SLOTS,
        step_minutes: int = SLOT_STEP_MINUTES,
        locale: Optional[str] = None,
    ):
        """Initialize the recommender with policies.

        Args:
            scoring_policy: Weights for each scoring heuristic.
            buffer_policy: Required gaps between sessions.
            tier_policy: Score cutoffs for gold/green/neutral.
            settings: Business settings. When omitted, the snapshot's own
                settings are used.
            max_slots: Number of top slots to return.
            step_minutes: Granularity of the scan.
            locale: Language for reasons and tips. Defaults to the
                settings' locale.
        """
        self.scoring_policy = scoring_policy or ScoringPolicy()
        self.buffer_policy = buffer_policy or DefaultBufferPolicy()
        self.tier_policy = tier_policy or DefaultTierPolicy()
        self.settings = settings
        self.max_slots = max_slots
        self.locale = locale

        self.occupancy_collector = OccupancyCollector()
        self.scanner = SlotScanner(
            buffer_policy=self.buffer_policy,
            step_minutes=step_minutes,
        )

    def recommend(
        self,
        context: SchedulingContext,
        snapshot: ScheduleSnapshot,
    ) -> Recommendations:
        """Recommend ranked slots and day tips.

        Args:
            context: Target day, duration, and the new session's details.
            snapshot: Everything already booked.

        Returns:
            Top slots by score (ties in scan order) plus day tips. Empty
            when the context carries no usable date.
        """
        result, _ = self.recommend_with_stats(context, snapshot)
        return result

    def recommend_with_stats(
        self,
        context: SchedulingContext,
        snapshot: ScheduleSnapshot,
    ) -> tuple[Recommendations, dict]:
        """Recommend slots and return pipeline statistics.

        Args:
            context: Target day, duration, and the new session's details.
            snapshot: Everything already booked.

        Returns:
            Tuple of (recommendations, stats_dict).
        """
        target_date = context.target_date
        if target_date is None:
            logger.debug("No usable date in context (%r)", context.schedule_date)
            return Recommendations.empty(), {}

        settings = self._resolve_settings(snapshot)
        locale = self.locale or settings.locale or DEFAULT_LOCALE
        work_start, work_end = self.resolve_working_hours(context, settings)

        occupied = self.occupancy_collector.collect(
            snapshot, target_date, context.exclude_booking_id
        )
        day = analyze_day(occupied)

        scorer = SlotScorer(
            scoring_policy=self.scoring_policy,
            buffer_policy=self.buffer_policy,
            tier_policy=self.tier_policy,
            locale=locale,
        )
        duration = context.duration_minutes
        candidate_starts = self.scanner.candidate_starts(work_start, work_end, duration)

        slots = []
        for start in candidate_starts:
            if not self.scanner.is_free(start, duration, occupied, context.new_session_kind):
                continue
            slots.append(
                scorer.score(
                    start,
                    duration,
                    day,
                    context.new_session_kind,
                    context.new_location,
                )
            )

        # sorted() is stable, so equal scores keep earlier times first
        ranked = sorted(slots, key=lambda s: s.score, reverse=True)[: self.max_slots]

        tips = DayTipsGenerator(locale=locale).generate(
            occupied, context.new_session_kind, context.new_location
        )

        logger.debug(
            "%s: %d occupied, %d/%d candidates free, returning %d slots and %d tips",
            target_date,
            len(occupied),
            len(slots),
            len(candidate_starts),
            len(ranked),
            len(tips),
        )

        stats = {
            "date": target_date,
            "work_start": work_start,
            "work_end": work_end,
            "occupied_count": len(occupied),
            "candidates_scanned": len(candidate_starts),
            "conflict_free_count": len(slots),
            "returned_count": len(ranked),
            "workload": day.workload,
            "peak_hours": sorted(day.peak_hours),
            "occupied": occupied,
        }
        return Recommendations(slots=ranked, tips=tips), stats

    def resolve_working_hours(
        self,
        context: SchedulingContext,
        settings: Optional[BusinessSettings] = None,
    ) -> tuple[int, int]:
        """Working window: context override, then settings, then 08:00-22:00."""
        settings = settings or self.settings or BusinessSettings()
        work_start = context.work_start_minutes
        work_end = context.work_end_minutes
        if work_start is None:
            work_start = settings.work_start_minutes
        if work_end is None:
            work_end = settings.work_end_minutes
        return work_start, work_end

    def _resolve_settings(self, snapshot: ScheduleSnapshot) -> BusinessSettings:
        if self.settings is not None:
            return self.settings
        return snapshot.settings or BusinessSettings()


def get_smart_recommendations(
    snapshot: ScheduleSnapshot,
    schedule_date,
    duration_minutes: int,
    new_session_kind: Optional[SessionKind] = None,
    new_location: Optional[Location] = None,
    exclude_booking_id: Optional[str] = None,
    settings: Optional[BusinessSettings] = None,
) -> Recommendations:
    """Free-function surface over SlotRecommender with default policies."""
    context = SchedulingContext(
        schedule_date=schedule_date,
        duration_minutes=duration_minutes,
        new_session_kind=new_session_kind,
        new_location=new_location,
        exclude_booking_id=exclude_booking_id,
    )
    return SlotRecommender(settings=settings).recommend(context, snapshot)
