"""Builder for AssessmentRecord JSON structures.

Combines the answers, the classified result and the per-system labels into
a single record. Records are JSON-serializable Pydantic models; storage is
handled by a ResultSink.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from sensory_profile import __version__
from sensory_profile.interpretation.interpreter import InterpretationResult
from sensory_profile.registry.models import QuestionnaireSpec
from sensory_profile.scoring.classifier import SensoryProfileResult

RECORD_NAMESPACE = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")


class Telemetry(BaseModel):
    """Processing provenance for an assessment record."""

    processed_at: str
    engine_version: str
    questionnaire_spec: str
    warnings: list[str] = Field(default_factory=list)


class AssessmentRecord(BaseModel):
    """One completed assessment, as stored and read back."""

    assessment_id: str
    user_id: str
    child_name: str | None = None
    completed_at: str
    questionnaire: str  # id@version
    responses: dict[int, int]
    results: SensoryProfileResult
    behavior_scores: dict[str, int] = Field(default_factory=dict)
    system_labels: dict[str, str | None]
    telemetry: Telemetry

    @field_validator("completed_at", mode="before")
    @classmethod
    def validate_completed_at(cls, value: Any) -> str:
        """Store the completion time as an ISO-8601 UTC string."""
        return to_utc_iso(value)

    @property
    def profile(self) -> str:
        return self.results.profile

    @property
    def completed_datetime(self) -> datetime:
        return datetime.fromisoformat(self.completed_at)


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def to_utc_iso(value: str | datetime) -> str:
    """Normalize a timestamp to an ISO-8601 string in UTC.

    Naive timestamps are taken to be UTC already.

    Raises:
        ValueError: If the value is not a datetime or an ISO-8601 string.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"'completed_at' is not an ISO-8601 timestamp: {value!r}") from e
    if not isinstance(value, datetime):
        raise ValueError(f"'completed_at' must be an ISO-8601 string, got {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class AssessmentRecordBuilder:
    """Builds AssessmentRecord structures from processed data."""

    def __init__(self, deterministic_ids: bool = False) -> None:
        """Initialize the builder.

        Args:
            deterministic_ids: If True, derive the assessment id from the user
                               id and completion time (for testing and replay).
                               If False, use random UUIDs.
        """
        self.deterministic_ids = deterministic_ids

    def _generate_id(self, seed: str) -> str:
        if self.deterministic_ids:
            return str(uuid.uuid5(RECORD_NAMESPACE, seed))
        return str(uuid.uuid4())

    def build(
        self,
        answers: dict[int, int],
        result: SensoryProfileResult,
        interpretation: InterpretationResult,
        spec: QuestionnaireSpec,
        user_id: str,
        completed_at: str | datetime | None = None,
        child_name: str | None = None,
        warnings: list[str] | None = None,
        behavior_scores: dict[str, int] | None = None,
    ) -> AssessmentRecord:
        """Build an AssessmentRecord.

        Args:
            answers: The validated answer set.
            result: The classified result.
            interpretation: Per-system labels for the result.
            spec: The questionnaire spec used for scoring.
            user_id: The parent account the record belongs to.
            completed_at: ISO-8601 completion time, converted to UTC; defaults
                          to now.
            child_name: Optional display name of the child.
            warnings: Optional list of processing warnings.
            behavior_scores: Optional score sums per behaviour type.

        Returns:
            A complete AssessmentRecord ready for JSON serialization.

        Raises:
            ValueError: If completed_at is not a valid timestamp.
        """
        completed_at = to_utc_iso(completed_at) if completed_at else utc_now()

        telemetry = Telemetry(
            processed_at=utc_now(),
            engine_version=__version__,
            questionnaire_spec=spec.ref,
            warnings=warnings or [],
        )

        return AssessmentRecord(
            assessment_id=self._generate_id(f"{user_id}:{completed_at}"),
            user_id=user_id,
            child_name=child_name,
            completed_at=completed_at,
            questionnaire=spec.ref,
            responses=dict(sorted(answers.items())),
            results=result,
            behavior_scores=behavior_scores or {},
            system_labels=interpretation.labels,
            telemetry=telemetry,
        )
