"""Scoring engine for computing per-system subtotals.

The engine is generic - it reads which questions belong to which sensory
system from the questionnaire spec. No per-question code is allowed.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from sensory_profile.registry.models import (
    BEHAVIOR_TYPES,
    SENSORY_SYSTEMS,
    QuestionnaireSpec,
)
from sensory_profile.validation import Validator

logger = logging.getLogger(__name__)

SUBTOTAL_MIN = 3
SUBTOTAL_MAX = 15


class SystemScores(BaseModel):
    """Per-system subtotals: the sum of the three scores tagged to each system."""

    model_config = ConfigDict(frozen=True)

    tactile: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    auditory: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    visual: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    vestibular: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)
    proprioceptive: int = Field(ge=SUBTOTAL_MIN, le=SUBTOTAL_MAX)

    @property
    def total(self) -> int:
        """Sum of all five subtotals."""
        return sum(self.as_dict().values())

    def as_dict(self) -> dict[str, int]:
        """Subtotals keyed by system, in canonical system order."""
        return {system: getattr(self, system) for system in SENSORY_SYSTEMS}

    def get(self, system: str) -> int:
        """Subtotal for one system."""
        if system not in SENSORY_SYSTEMS:
            raise KeyError(f"Unknown sensory system: {system}")
        return getattr(self, system)


class Scorer:
    """Sums chosen scores per sensory system.

    The answer set must be complete: missing questions and out-of-range
    scores are rejected before any summing happens.
    """

    def __init__(self, validator: Validator | None = None) -> None:
        self.validator = validator or Validator()

    def score(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
    ) -> SystemScores:
        """Compute per-system subtotals for a complete answer set.

        Args:
            answers: Scores keyed by question id.
            spec: The questionnaire specification.

        Returns:
            SystemScores with one subtotal per system.

        Raises:
            AnswerValidationError: If the answer set is incomplete or out of range.
        """
        self.validator.require_valid(answers, spec)

        subtotals = {
            system: self.score_system(answers, spec, system) for system in SENSORY_SYSTEMS
        }
        logger.debug("Scored %s: %s", spec.ref, subtotals)
        return SystemScores(**subtotals)

    def score_system(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
        system: str,
    ) -> int:
        """Sum the scores of the questions tagged with one system.

        Does not validate; callers scoring a full answer set should use score().
        """
        return sum(answers[q.id] for q in spec.questions_for_system(system) if q.id in answers)

    def score_behaviors(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
    ) -> dict[str, int]:
        """Sum the scores of the questions tagged with each behaviour type.

        Kept alongside the system subtotals; they do not feed the profile
        label. Behaviour types without questions sum to 0.

        Raises:
            AnswerValidationError: If the answer set is incomplete or out of range.
        """
        self.validator.require_valid(answers, spec)
        return {
            behavior: sum(answers[q.id] for q in spec.questions_for_behavior(behavior))
            for behavior in BEHAVIOR_TYPES
        }
