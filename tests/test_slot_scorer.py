"""Tests for multi-factor slot scoring."""

import pytest

from smartslots.domain.models import Location, SessionKind, SlotPriority, SlotTier, TimePeriod
from smartslots.domain.policies import DefaultTierPolicy, ScoringPolicy
from smartslots.scheduling.analytics import analyze_day
from smartslots.scheduling.slot_scorer import SlotScorer

LIBRARY = Location(lat=30.0444, lng=31.2357, name="Library")
NEAR_LIBRARY = Location(lat=30.0561, lng=31.2394)  # about 1.3 km away
FAR_AWAY = Location(lat=31.0444, lng=31.2357)  # about 111 km away


class TestTierPolicy:
    """Tests for DefaultTierPolicy."""

    @pytest.mark.parametrize(
        "score,tier",
        [
            (100, SlotTier.GOLD),
            (75, SlotTier.GOLD),
            (74, SlotTier.GREEN),
            (50, SlotTier.GREEN),
            (49, SlotTier.NEUTRAL),
            (0, SlotTier.NEUTRAL),
        ],
    )
    def test_thresholds(self, score, tier):
        """Scores map to gold, green and neutral at 75 and 50."""
        assert DefaultTierPolicy().classify(score) == tier

    def test_priority_follows_tier(self):
        """Priority follows the tier."""
        assert SlotTier.GOLD.priority == SlotPriority.HIGH
        assert SlotTier.GREEN.priority == SlotPriority.MEDIUM
        assert SlotTier.NEUTRAL.priority == SlotPriority.LOW


class TestSlotScorer:
    """Tests for SlotScorer heuristics."""

    @pytest.fixture
    def scorer(self):
        return SlotScorer()

    @pytest.fixture
    def empty_day(self):
        return analyze_day([])

    def test_empty_day_morning(self, scorer, empty_day):
        """An empty morning scores 55 with quiet and balanced reasons."""
        slot = scorer.score(480, 60, empty_day)

        assert slot.score == 55
        assert slot.tier == SlotTier.GREEN
        assert slot.priority == SlotPriority.MEDIUM
        assert slot.period == TimePeriod.MORNING
        assert slot.time == "08:00"
        assert slot.time_label == "8:00 AM"
        assert slot.reasons == ["⏰ Quiet time", "⚖️ Morning is less busy, better balance"]
        assert slot.tags == ["quiet", "balanced"]

    def test_empty_day_preferred_window(self, scorer, empty_day):
        """The preferred window adds 5 points."""
        breakdown = scorer.breakdown(840, 60, empty_day)

        assert breakdown.contributions == {
            "free_slot": 40,
            "off_peak": 8,
            "preferred_window": 5,
        }
        assert breakdown.raw_score == 53
        assert "🌟 Preferred teaching hours" in breakdown.reasons

    @pytest.mark.parametrize("hour,preferred", [(13, False), (14, True), (20, True), (21, False)])
    def test_preferred_window_bounds(self, scorer, empty_day, hour, preferred):
        """Only hours 14 to 20 are preferred."""
        breakdown = scorer.breakdown(hour * 60, 30, empty_day)

        assert ("preferred_window" in breakdown.contributions) == preferred

    def test_strong_type_clustering(self, scorer, make_interval):
        """A 60% same-kind day adds 15 with a reason."""
        day = analyze_day(
            [
                make_interval("09:00", "10:00", SessionKind.IN_PERSON),
                make_interval("13:00", "14:00", SessionKind.IN_PERSON),
                make_interval("17:00", "18:00", SessionKind.REMOTE),
            ]
        )
        breakdown = scorer.breakdown(660, 60, day, SessionKind.IN_PERSON)

        assert breakdown.contributions["type_clustering"] == 15
        assert breakdown.reasons[0] == "🚗 In-person day, good clustering"
        assert breakdown.tags[0] == "same type"

    def test_weak_type_clustering_adds_points_without_reason(self, scorer, make_interval):
        """A 40% same-kind day adds 8 silently."""
        day = analyze_day(
            [
                make_interval("09:00", "10:00", SessionKind.IN_PERSON),
                make_interval("11:00", "12:00", SessionKind.IN_PERSON),
                make_interval("13:00", "14:00", SessionKind.REMOTE),
                make_interval("15:00", "16:00", SessionKind.REMOTE),
            ]
        )
        breakdown = scorer.breakdown(1080, 60, day, SessionKind.REMOTE)

        assert breakdown.contributions["type_clustering"] == 8
        assert "same type" not in breakdown.tags
        assert not any("clustering" in r for r in breakdown.reasons)

    def test_no_type_clustering_without_kind(self, scorer, make_interval):
        """Clustering needs a known kind."""
        day = analyze_day([make_interval("09:00", "10:00", SessionKind.REMOTE)])

        assert "type_clustering" not in scorer.breakdown(660, 60, day).contributions

    def test_travel_nearby_neighbor(self, scorer, make_interval):
        """A neighbor within 10 km adds 15."""
        day = analyze_day(
            [make_interval("09:00", "10:00", SessionKind.IN_PERSON, "Alice", LIBRARY)]
        )
        breakdown = scorer.breakdown(660, 60, day, SessionKind.IN_PERSON, NEAR_LIBRARY)

        assert breakdown.contributions["travel"] == 15
        assert "📍 Close to Alice (1.3 km)" in breakdown.reasons
        assert "nearby" in breakdown.tags

    def test_travel_far_neighbor(self, scorer, make_interval):
        """A distant neighbor adds 5."""
        day = analyze_day(
            [make_interval("09:00", "10:00", SessionKind.IN_PERSON, "Alice", LIBRARY)]
        )
        breakdown = scorer.breakdown(660, 60, day, SessionKind.IN_PERSON, FAR_AWAY)

        assert breakdown.contributions["travel"] == 5
        assert "nearby" not in breakdown.tags

    def test_travel_unknown_location(self, scorer, make_interval):
        """Unknown locations add 10."""
        day = analyze_day([make_interval("09:00", "10:00", SessionKind.IN_PERSON, "Alice")])
        breakdown = scorer.breakdown(660, 60, day, SessionKind.IN_PERSON, NEAR_LIBRARY)

        assert breakdown.contributions["travel"] == 10

    def test_travel_tight_window(self, scorer, make_interval):
        """Too little travel time adds 3."""
        day = analyze_day([make_interval("09:00", "10:00", SessionKind.IN_PERSON, "Alice")])
        # Starts 30 minutes after the neighbor ends: enough gap, not enough travel time
        breakdown = scorer.breakdown(630, 60, day, SessionKind.IN_PERSON)

        assert breakdown.contributions["travel"] == 3

    def test_travel_best_neighbor_wins_and_each_nearby_is_named(self, scorer, make_interval):
        """Each nearby neighbor is named, with one tag."""
        day = analyze_day(
            [
                make_interval("08:00", "09:00", SessionKind.IN_PERSON, "Alice", LIBRARY),
                make_interval("14:00", "15:00", SessionKind.IN_PERSON, "Carol", LIBRARY),
            ]
        )
        breakdown = scorer.breakdown(660, 60, day, SessionKind.IN_PERSON, NEAR_LIBRARY)

        assert breakdown.contributions["travel"] == 15
        assert sum(1 for r in breakdown.reasons if r.startswith("📍")) == 2
        assert breakdown.tags.count("nearby") == 1

    def test_online_dominant_penalty(self, scorer, make_interval):
        """An in-person request on an online day loses 5."""
        day = analyze_day(
            [
                make_interval("09:00", "10:00", SessionKind.REMOTE),
                make_interval("13:00", "14:00", SessionKind.REMOTE),
            ]
        )
        breakdown = scorer.breakdown(660, 60, day, SessionKind.IN_PERSON)

        assert breakdown.contributions["travel"] == -5
        assert (
            "💡 Mostly online sessions, consider a separate in-person day" in breakdown.reasons
        )

    def test_no_online_dominant_penalty_with_single_booking(self, scorer, make_interval):
        """One remote booking does not trigger the penalty."""
        day = analyze_day([make_interval("09:00", "10:00", SessionKind.REMOTE)])

        assert "travel" not in scorer.breakdown(660, 60, day, SessionKind.IN_PERSON).contributions

    def test_remote_clustering(self, scorer, make_interval):
        """A remote day adds the remote clustering bonus."""
        day = analyze_day(
            [
                make_interval("09:00", "10:00", SessionKind.REMOTE),
                make_interval("13:00", "14:00", SessionKind.REMOTE),
            ]
        )
        breakdown = scorer.breakdown(660, 60, day, SessionKind.REMOTE)

        assert breakdown.contributions["remote_clustering"] == 10
        assert breakdown.contributions["type_clustering"] == 15
        assert "💻 Online day, good clustering" in breakdown.reasons
        assert "travel" not in breakdown.contributions

    def test_peak_hour(self, scorer, make_interval):
        """A peak hour gets no off-peak bonus."""
        day = analyze_day(
            [
                make_interval("09:00", "09:15"),
                make_interval("09:30", "09:45"),
            ]
        )
        breakdown = scorer.breakdown(570, 30, day)

        assert "off_peak" not in breakdown.contributions
        assert "⚠️ Peak time" in breakdown.reasons
        assert "quiet" not in breakdown.tags

    def test_workload_balance_names_quietest_period(self, scorer, make_interval):
        """The quietest period adds 7 and is named."""
        day = analyze_day(
            [
                make_interval("09:00", "10:00"),
                make_interval("10:30", "11:00"),
                make_interval("13:00", "14:00"),
            ]
        )
        breakdown = scorer.breakdown(1080, 60, day)

        assert breakdown.contributions["workload_balance"] == 7
        assert "⚖️ Evening is less busy, better balance" in breakdown.reasons
        assert "balanced" in breakdown.tags

    @pytest.mark.parametrize("start,matched", [(690, True), (705, True), (710, False)])
    def test_back_to_back_after_neighbor(self, scorer, make_interval, start, matched):
        """Starting 30 to 45 minutes after a neighbor adds 5."""
        day = analyze_day([make_interval("10:00", "11:00", label="Bob")])
        breakdown = scorer.breakdown(start, 60, day)

        assert ("back_to_back" in breakdown.contributions) == matched
        assert ("⏩ Right after Bob, tidy sequence" in breakdown.reasons) == matched

    def test_back_to_back_before_neighbor(self, scorer, make_interval):
        """Ending 30 minutes before a neighbor adds 5."""
        day = analyze_day([make_interval("10:00", "11:00", label="Bob")])
        breakdown = scorer.breakdown(510, 60, day)

        assert breakdown.contributions["back_to_back"] == 5
        assert "⏩ Right before Bob, tidy sequence" in breakdown.reasons
        assert "back-to-back" in breakdown.tags

    def test_back_to_back_counts_only_first_neighbor(self, scorer, make_interval):
        """Only the first matching neighbor counts."""
        day = analyze_day(
            [
                make_interval("10:00", "11:00", label="Bob"),
                make_interval("12:30", "13:30", label="Dana"),
            ]
        )
        # 11:30-12:00 is 30 minutes after Bob and 30 minutes before Dana
        breakdown = scorer.breakdown(690, 30, day)

        assert breakdown.contributions["back_to_back"] == 5
        assert sum(1 for r in breakdown.reasons if r.startswith("⏩")) == 1
        assert "⏩ Right after Bob, tidy sequence" in breakdown.reasons

    def test_energy_reasons_do_not_change_score(self, scorer, make_interval):
        """Busy-day and late reasons add no points."""
        day = analyze_day(
            [
                make_interval("09:00", "10:00"),
                make_interval("11:00", "12:00"),
                make_interval("13:00", "14:00"),
                make_interval("15:00", "16:00"),
            ]
        )
        breakdown = scorer.breakdown(1200, 60, day)

        assert "💪 Many sessions today, take breaks between them" in breakdown.reasons
        assert "🌙 Late session after a long day, mind your energy" in breakdown.reasons
        assert breakdown.raw_score == sum(breakdown.contributions.values())
        assert set(breakdown.contributions) == {
            "free_slot",
            "off_peak",
            "workload_balance",
            "preferred_window",
        }

    def test_score_is_clamped(self, empty_day):
        """Raw scores outside 0-100 are clamped."""
        high = SlotScorer(scoring_policy=ScoringPolicy(free_slot_base=200))
        low = SlotScorer(scoring_policy=ScoringPolicy(free_slot_base=-100))

        assert high.score(480, 60, empty_day).score == 100
        assert high.score(480, 60, empty_day).tier == SlotTier.GOLD
        assert low.score(480, 60, empty_day).score == 0
        assert low.score(480, 60, empty_day).tier == SlotTier.NEUTRAL

    def test_arabic_locale(self, empty_day):
        """Reasons and labels are localized for Arabic."""
        slot = SlotScorer(locale="ar").score(480, 60, empty_day)

        assert slot.reasons[0] == "⏰ وقت غير مزدحم"
        assert slot.time_label == "8:00 ص"
        assert slot.score == 55
