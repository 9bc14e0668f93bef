"""Validation module for verifying recommendation correctness.

This module re-checks a finished result against the engine's invariants
independently of the code that produced it. Every result handed to a UI
should pass validation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from smartslots.domain.models import (
    BusinessSettings,
    CandidateSlot,
    OccupiedInterval,
    Recommendations,
    SchedulingContext,
)
from smartslots.domain.policies import (
    BufferPolicy,
    DefaultBufferPolicy,
    DefaultTierPolicy,
    MAX_SCORE,
    MAX_SLOTS,
    MIN_SCORE,
    TierPolicy,
)


class ValidationErrorType(Enum):
    """Types of validation errors."""

    SLOT_CONFLICT = "slot_conflict"
    SLOT_OUTSIDE_WORKING_HOURS = "slot_outside_working_hours"
    SCORE_OUT_OF_RANGE = "score_out_of_range"
    TIER_MISMATCH = "tier_mismatch"
    PRIORITY_MISMATCH = "priority_mismatch"
    SLOTS_NOT_RANKED = "slots_not_ranked"
    TOO_MANY_SLOTS = "too_many_slots"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    slot_time: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.slot_time:
            parts.append(f"Slot {self.slot_time}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating recommendations."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


class RecommendationValidator:
    """Validates recommendations against all engine invariants.

    Example:
        >>> validator = RecommendationValidator()
        >>> result = validator.validate(recommendations, context, occupied)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(
        self,
        buffer_policy: Optional[BufferPolicy] = None,
        tier_policy: Optional[TierPolicy] = None,
        settings: Optional[BusinessSettings] = None,
        max_slots: int = MAX_SLOTS,
    ):
        self.buffer_policy = buffer_policy or DefaultBufferPolicy()
        self.tier_policy = tier_policy or DefaultTierPolicy()
        self.settings = settings or BusinessSettings()
        self.max_slots = max_slots

    def validate(
        self,
        recommendations: Recommendations,
        context: SchedulingContext,
        occupied: list[OccupiedInterval],
    ) -> ValidationResult:
        """Validate a complete result.

        Args:
            recommendations: The engine output to check.
            context: The context the output was produced for.
            occupied: The day's booked intervals.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        slots = recommendations.slots

        if len(slots) > self.max_slots:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.TOO_MANY_SLOTS,
                    message=f"{len(slots)} slots returned, limit is {self.max_slots}",
                )
            )

        for slot in slots:
            self._validate_slot(slot, context, occupied, result)

        self._validate_ranking(slots, result)

        starts = [s.start_minutes for s in slots]
        if len(set(starts)) != len(starts):
            result.add_warning("Duplicate start times in recommendations")

        return result

    def _validate_slot(
        self,
        slot: CandidateSlot,
        context: SchedulingContext,
        occupied: list[OccupiedInterval],
        result: ValidationResult,
    ) -> None:
        """Validate a single recommended slot."""
        work_start = context.work_start_minutes
        if work_start is None:
            work_start = self.settings.work_start_minutes
        work_end = context.work_end_minutes
        if work_end is None:
            work_end = self.settings.work_end_minutes

        if slot.start_minutes < work_start or slot.end_minutes > work_end:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.SLOT_OUTSIDE_WORKING_HOURS,
                    message=(
                        f"Slot {slot.start_minutes}-{slot.end_minutes} is outside "
                        f"working hours {work_start}-{work_end}"
                    ),
                    slot_time=slot.time,
                )
            )

        for interval in occupied:
            buffer = self.buffer_policy.get_buffer(
                context.new_session_kind, interval.session_kind
            )
            clear_before = slot.end_minutes + buffer <= interval.start
            clear_after = slot.start_minutes >= interval.end + buffer
            if not (clear_before or clear_after):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.SLOT_CONFLICT,
                        message=(
                            f"Within {buffer} min of {interval.label} "
                            f"({interval.start}-{interval.end})"
                        ),
                        slot_time=slot.time,
                        details={"buffer": buffer, "booking_id": interval.booking_id},
                    )
                )

        if not MIN_SCORE <= slot.score <= MAX_SCORE:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.SCORE_OUT_OF_RANGE,
                    message=f"Score {slot.score} outside {MIN_SCORE}-{MAX_SCORE}",
                    slot_time=slot.time,
                )
            )

        expected_tier = self.tier_policy.classify(slot.score)
        if slot.tier != expected_tier:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.TIER_MISMATCH,
                    message=(
                        f"Tier {slot.tier.value} does not match score {slot.score} "
                        f"(expected {expected_tier.value})"
                    ),
                    slot_time=slot.time,
                )
            )

        if slot.priority != slot.tier.priority:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.PRIORITY_MISMATCH,
                    message=(
                        f"Priority {slot.priority.value} does not match "
                        f"tier {slot.tier.value}"
                    ),
                    slot_time=slot.time,
                )
            )

    def _validate_ranking(
        self,
        slots: list[CandidateSlot],
        result: ValidationResult,
    ) -> None:
        """Scores must not increase; equal scores must keep time order."""
        for previous, current in zip(slots, slots[1:]):
            out_of_order = current.score > previous.score or (
                current.score == previous.score
                and current.start_minutes < previous.start_minutes
            )
            if out_of_order:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.SLOTS_NOT_RANKED,
                        message=(
                            f"{current.time} ({current.score}) ranked after "
                            f"{previous.time} ({previous.score})"
                        ),
                        slot_time=current.time,
                    )
                )
