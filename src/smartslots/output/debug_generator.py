"""Debug text output for recommendation analysis.

This module creates text-based debug output to analyze:
- The day's occupancy and the gaps between bookings
- Workload per period and peak hours
- Why each recommended slot scored what it did
"""

from pathlib import Path
from typing import Optional, Union

from smartslots.domain.models import Recommendations, SchedulingContext, TimePeriod
from smartslots.domain.timeutils import minutes_to_time
from smartslots.scheduling.analytics import analyze_day
from smartslots.scheduling.slot_scorer import SlotScorer


class DebugGenerator:
    """Generates debug text output for recommendation analysis.

    Creates human-readable text files showing:
    - Per-booking occupancy with gaps
    - Workload histogram by period
    - Per-slot score breakdown by heuristic
    """

    def __init__(self, scorer: Optional[SlotScorer] = None):
        self.scorer = scorer or SlotScorer()

    def generate(
        self,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
        output_path: Union[str, Path],
    ) -> str:
        """Generate debug text output and save to file.

        Args:
            recommendations: The engine output to analyze.
            context: The context the output was produced for.
            stats: Statistics from SlotRecommender.recommend_with_stats.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(recommendations, context, stats)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
    ) -> str:
        """Generate debug text output and return as string."""
        return self._generate_content(recommendations, context, stats)

    def _generate_content(
        self,
        recommendations: Recommendations,
        context: SchedulingContext,
        stats: dict,
    ) -> str:
        """Generate the full debug content."""
        lines = []
        occupied = stats.get("occupied", [])

        # Header
        lines.append("=" * 80)
        lines.append(f"RECOMMENDATION DEBUG OUTPUT - {stats.get('date', context.schedule_date)}")
        lines.append("=" * 80)
        lines.append("")

        kind = context.new_session_kind.value if context.new_session_kind else "unknown"
        lines.append(f"Requested: {context.duration_minutes} min, kind {kind}")
        if context.new_location is not None:
            lines.append(
                f"Location: {context.new_location.lat:.4f}, {context.new_location.lng:.4f}"
            )
        if "work_start" in stats:
            lines.append(
                f"Working Window: {minutes_to_time(stats['work_start'])} - "
                f"{minutes_to_time(stats['work_end'])}"
            )
        lines.append(
            f"Candidates: {stats.get('candidates_scanned', 0)} scanned, "
            f"{stats.get('conflict_free_count', 0)} conflict-free, "
            f"{stats.get('returned_count', 0)} returned"
        )
        lines.append("")

        # Occupancy
        lines.append("-" * 80)
        lines.append("OCCUPANCY (sorted by start)")
        lines.append("-" * 80)
        lines.append(f"{'#':>3} {'Label':<24} {'Time':^13} {'Kind':<10} {'Gap After':>10}")
        lines.append("-" * 80)

        for i, interval in enumerate(occupied, 1):
            time_str = f"{minutes_to_time(interval.start)}-{minutes_to_time(interval.end)}"
            if i < len(occupied):
                gap_str = f"{occupied[i].start - interval.end:+d} min"
            else:
                gap_str = "-"
            lines.append(
                f"{i:>3} {interval.label[:24]:<24} {time_str:^13} "
                f"{interval.session_kind.value:<10} {gap_str:>10}"
            )
        if not occupied:
            lines.append("  (no bookings)")
        lines.append("")

        # Workload
        lines.append("-" * 80)
        lines.append("WORKLOAD BY PERIOD")
        lines.append("-" * 80)

        workload = stats.get("workload")
        if workload is not None:
            for period in TimePeriod:
                count = workload.count_for(period)
                bar = "#" * count if count else "."
                marker = "  <- quietest" if period == workload.quietest else ""
                lines.append(f"{period.value:<10}: {bar} ({count}){marker}")
            peak_hours = stats.get("peak_hours", [])
            peaks = ", ".join(f"{h:02d}:00" for h in peak_hours) or "none"
            lines.append(f"Peak hours: {peaks}")
        lines.append("")

        # Ranked slots
        lines.append("-" * 80)
        lines.append("RANKED SLOTS")
        lines.append("-" * 80)

        day = analyze_day(list(occupied))
        for rank, slot in enumerate(recommendations.slots, 1):
            lines.append(
                f"{rank:>2}. {slot.time} ({slot.time_label}) "
                f"score {slot.score:>3} [{slot.tier.value}/{slot.priority.value}]"
            )
            breakdown = self.scorer.breakdown(
                slot.start_minutes,
                slot.duration_minutes,
                day,
                context.new_session_kind,
                context.new_location,
            )
            contributions = ", ".join(
                f"{name} {points:+d}" for name, points in breakdown.contributions.items()
            )
            lines.append(f"    points: {contributions} = {breakdown.raw_score}")
            for reason in slot.reasons:
                lines.append(f"    - {reason}")
            if slot.tags:
                lines.append(f"    tags: {', '.join(slot.tags)}")
        if not recommendations.slots:
            lines.append("  (no conflict-free slots)")
        lines.append("")

        # Tips
        lines.append("-" * 80)
        lines.append("DAY TIPS")
        lines.append("-" * 80)
        for tip in recommendations.tips:
            lines.append(f"{tip.icon} [{tip.severity.value}] {tip.text}")
        if not recommendations.tips:
            lines.append("  (none)")

        lines.append("")
        lines.append("=" * 80)
        lines.append("END OF DEBUG OUTPUT")
        lines.append("=" * 80)

        return "\n".join(lines)
