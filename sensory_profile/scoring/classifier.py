"""Classifier mapping per-system subtotals to a sensory profile label.

Total-based buckets are checked first; the mixed-pattern check only runs
for totals strictly between the avoiding and seeking thresholds. All
thresholds are inclusive.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sensory_profile.registry.models import SENSORY_SYSTEMS
from sensory_profile.scoring.engine import SUBTOTAL_MAX, SUBTOTAL_MIN, SystemScores

ProfileLabel = Literal["Sensory Seeking", "Sensory Avoiding", "Mixed Profile", "Mixed/Typical"]

SENSORY_SEEKING: ProfileLabel = "Sensory Seeking"
SENSORY_AVOIDING: ProfileLabel = "Sensory Avoiding"
MIXED_PROFILE: ProfileLabel = "Mixed Profile"
MIXED_TYPICAL: ProfileLabel = "Mixed/Typical"

PROFILE_LABELS: tuple[ProfileLabel, ...] = (
    SENSORY_SEEKING,
    SENSORY_AVOIDING,
    MIXED_PROFILE,
    MIXED_TYPICAL,
)

SEEKING_TOTAL_THRESHOLD = 60
AVOIDING_TOTAL_THRESHOLD = 30
SYSTEM_SEEKING_THRESHOLD = 12
SYSTEM_AVOIDING_THRESHOLD = 6
MIXED_MIN_SYSTEMS = 2


class SensoryProfileResult(BaseModel):
    """Immutable outcome of one assessment: subtotals, total and profile."""

    model_config = ConfigDict(frozen=True)

    tactile: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    auditory: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    visual: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    vestibular: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    proprioceptive: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    total: int
    profile: ProfileLabel

    @model_validator(mode="after")
    def validate_total(self) -> "SensoryProfileResult":
        """Ensure total is the sum of the five subtotals."""
        expected = sum(self.subtotals.values())
        if self.total != expected:
            raise ValueError(f"total {self.total} does not equal sum of subtotals {expected}")
        return self

    @property
    def subtotals(self) -> dict[str, int]:
        """Subtotals keyed by system, in canonical system order."""
        return {system: getattr(self, system) for system in SENSORY_SYSTEMS}

    @property
    def system_scores(self) -> SystemScores:
        return SystemScores(**self.subtotals)


def seeking_systems(subtotals: dict[str, int]) -> list[str]:
    """Systems whose subtotal is at or above the per-system seeking threshold."""
    return [s for s, value in subtotals.items() if value >= SYSTEM_SEEKING_THRESHOLD]


def avoiding_systems(subtotals: dict[str, int]) -> list[str]:
    """Systems whose subtotal is at or below the per-system avoiding threshold."""
    return [s for s, value in subtotals.items() if value <= SYSTEM_AVOIDING_THRESHOLD]


def classify_profile(subtotals: dict[str, int]) -> ProfileLabel:
    """Map five subtotals to a profile label.

    Args:
        subtotals: Subtotal per sensory system.

    Returns:
        One of the four profile labels.
    """
    total = sum(subtotals.values())

    if total >= SEEKING_TOTAL_THRESHOLD:
        return SENSORY_SEEKING
    if total <= AVOIDING_TOTAL_THRESHOLD:
        return SENSORY_AVOIDING

    seeking_count = len(seeking_systems(subtotals))
    avoiding_count = len(avoiding_systems(subtotals))
    if seeking_count >= MIXED_MIN_SYSTEMS and avoiding_count >= MIXED_MIN_SYSTEMS:
        return MIXED_PROFILE
    return MIXED_TYPICAL


class Classifier:
    """Classifies per-system subtotals into a SensoryProfileResult."""

    def classify(self, scores: SystemScores) -> SensoryProfileResult:
        """Compute the total and profile label for a set of subtotals.

        Args:
            scores: Per-system subtotals from the scorer.

        Returns:
            The immutable SensoryProfileResult.
        """
        subtotals = scores.as_dict()
        return SensoryProfileResult(
            **subtotals,
            total=sum(subtotals.values()),
            profile=classify_profile(subtotals),
        )
