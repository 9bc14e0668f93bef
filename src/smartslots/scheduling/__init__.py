"""Recommendation engine for finding and ranking free session slots."""

from smartslots.scheduling.analytics import (
    DayAnalysis,
    analyze_day,
    compute_peak_hours,
    compute_workload,
)
from smartslots.scheduling.conflicts import (
    ConflictChecker,
    ConflictResult,
    ConflictSeverity,
    ConflictType,
)
from smartslots.scheduling.day_tips import DayTipsGenerator
from smartslots.scheduling.occupancy import OccupancyCollector
from smartslots.scheduling.recommender import SlotRecommender, get_smart_recommendations
from smartslots.scheduling.slot_scanner import SlotScanner
from smartslots.scheduling.slot_scorer import ScoreBreakdown, SlotScorer

__all__ = [
    # Engine
    "SlotRecommender",
    "get_smart_recommendations",
    # Pipeline stages
    "OccupancyCollector",
    "DayAnalysis",
    "analyze_day",
    "compute_peak_hours",
    "compute_workload",
    "SlotScanner",
    "SlotScorer",
    "ScoreBreakdown",
    "DayTipsGenerator",
    # Conflict checking
    "ConflictChecker",
    "ConflictResult",
    "ConflictSeverity",
    "ConflictType",
]
