"""Pipeline for assessment processing.

Loads the questionnaire spec and runs a submission through
recode -> validate -> score -> classify -> interpret -> build record,
optionally writing the record to a sink.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from sensory_profile.builders.record import (
    AssessmentRecord,
    AssessmentRecordBuilder,
    to_utc_iso,
)
from sensory_profile.interpretation.interpreter import Interpreter
from sensory_profile.io import ResultSink
from sensory_profile.recoding.recoder import Recoder, RecodingError
from sensory_profile.registry.models import QuestionnaireSpec
from sensory_profile.registry.questionnaires import (
    DEFAULT_REGISTRY_PATH,
    QUESTIONNAIRE_SCHEMA_PATH,
    QuestionnaireRegistry,
)
from sensory_profile.scoring.classifier import Classifier, SensoryProfileResult
from sensory_profile.scoring.engine import Scorer
from sensory_profile.validation.checks import AnswerValidationError, Validator

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONNAIRE_ID = "sensory_profile"


class PipelineConfig(BaseModel):
    """Configuration for the processing pipeline."""

    registry_path: Path = DEFAULT_REGISTRY_PATH
    questionnaire_id: str = DEFAULT_QUESTIONNAIRE_ID
    questionnaire_version: str | None = None
    schema_path: Path | None = QUESTIONNAIRE_SCHEMA_PATH
    deterministic_ids: bool = False


class ProcessingResult(BaseModel):
    """Result of processing one submission."""

    user_id: str | None
    success: bool
    record: AssessmentRecord | None = None
    errors: list[str] = Field(default_factory=list)


class Pipeline:
    """Scores submissions against one questionnaire spec."""

    def __init__(
        self,
        config: PipelineConfig,
        sink: ResultSink | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Pipeline configuration specifying the registry and questionnaire.
            sink: Optional destination for successfully built records.
        """
        self.config = config
        self.sink = sink

        self.registry = QuestionnaireRegistry(
            config.registry_path,
            schema_path=config.schema_path,
        )
        if config.questionnaire_version:
            self.spec: QuestionnaireSpec = self.registry.get(
                config.questionnaire_id,
                config.questionnaire_version,
            )
        else:
            self.spec = self.registry.get_latest(config.questionnaire_id)

        self.recoder = Recoder()
        self.validator = Validator()
        self.scorer = Scorer(self.validator)
        self.classifier = Classifier()
        self.interpreter = Interpreter()
        self.builder = AssessmentRecordBuilder(deterministic_ids=config.deterministic_ids)

    def score(self, answers: dict[Any, Any]) -> SensoryProfileResult:
        """Score a raw answer set.

        Raises:
            RecodingError: If an answer cannot be recoded.
            AnswerValidationError: If the answer set is incomplete or out of range.
        """
        recoded = self.recoder.recode(answers, self.spec)
        return self.classifier.classify(self.scorer.score(recoded.answers, self.spec))

    def process(self, submission: Any) -> ProcessingResult:
        """Process one submission into an AssessmentRecord.

        The submission holds ``user_id`` and ``answers``, and optionally
        ``completed_at`` and ``child_name``. Problems with the input are
        reported in the result instead of raised.
        """
        if not isinstance(submission, dict):
            return ProcessingResult(
                user_id=None, success=False, errors=["submission must be an object"]
            )

        user_id = submission.get("user_id")
        answers = submission.get("answers")
        child_name = submission.get("child_name")
        completed_at = submission.get("completed_at")

        errors: list[str] = []
        if not user_id:
            errors.append("'user_id' is required")
        elif not isinstance(user_id, str):
            errors.append("'user_id' must be a string")
        if not isinstance(answers, dict):
            errors.append("'answers' must be a mapping of question id to answer")
        if child_name is not None and not isinstance(child_name, str):
            errors.append("'child_name' must be a string")
        if completed_at is not None:
            try:
                completed_at = to_utc_iso(completed_at)
            except ValueError as e:
                errors.append(str(e))
        if errors:
            reported_id = user_id if isinstance(user_id, str) else None
            return ProcessingResult(user_id=reported_id, success=False, errors=errors)

        try:
            recoded = self.recoder.recode(answers, self.spec)
            scores = self.scorer.score(recoded.answers, self.spec)
            behavior_scores = self.scorer.score_behaviors(recoded.answers, self.spec)
        except (RecodingError, AnswerValidationError) as e:
            logger.info("Submission for user %s rejected: %s", user_id, e)
            return ProcessingResult(user_id=user_id, success=False, errors=[str(e)])

        result = self.classifier.classify(scores)
        interpretation = self.interpreter.interpret(result, self.spec)
        warnings = [s.error for s in interpretation.scores if s.error]

        record = self.builder.build(
            answers=recoded.answers,
            result=result,
            interpretation=interpretation,
            spec=self.spec,
            user_id=user_id,
            completed_at=completed_at,
            child_name=child_name,
            warnings=warnings,
            behavior_scores=behavior_scores,
        )
        if self.sink is not None:
            self.sink.write(record)

        logger.debug("Scored assessment %s: %s", record.assessment_id, result.profile)
        return ProcessingResult(user_id=user_id, success=True, record=record)

    def process_batch(self, submissions: list[dict[str, Any]]) -> list[ProcessingResult]:
        """Process a batch of submissions."""
        return [self.process(s) for s in submissions]
