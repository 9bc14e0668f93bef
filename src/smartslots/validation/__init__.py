"""Validation module for verifying recommendation correctness."""

from smartslots.validation.validator import (
    RecommendationValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    "RecommendationValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
