"""Validation layer for answer sets."""

from sensory_profile.validation.checks import AnswerValidationError, ValidationResult, Validator

__all__ = [
    "AnswerValidationError",
    "ValidationResult",
    "Validator",
]
