"""Scoring layer: per-system subtotals and profile classification."""

from sensory_profile.scoring.classifier import (
    MIXED_PROFILE,
    MIXED_TYPICAL,
    PROFILE_LABELS,
    SENSORY_AVOIDING,
    SENSORY_SEEKING,
    Classifier,
    ProfileLabel,
    SensoryProfileResult,
    avoiding_systems,
    classify_profile,
    seeking_systems,
)
from sensory_profile.scoring.engine import Scorer, SystemScores

__all__ = [
    "Scorer",
    "SystemScores",
    "Classifier",
    "SensoryProfileResult",
    "ProfileLabel",
    "PROFILE_LABELS",
    "SENSORY_SEEKING",
    "SENSORY_AVOIDING",
    "MIXED_PROFILE",
    "MIXED_TYPICAL",
    "classify_profile",
    "seeking_systems",
    "avoiding_systems",
]
