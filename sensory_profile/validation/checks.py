"""Validation checks for answer sets.

Validates completeness and range, and flags missing questions.
"""

from pydantic import BaseModel

from sensory_profile.registry.models import QuestionnaireSpec


class AnswerValidationError(ValueError):
    """Raised when an answer set is incomplete or holds out-of-range scores."""

    def __init__(
        self,
        message: str,
        missing_ids: list[int] | None = None,
        out_of_range_ids: list[int] | None = None,
    ) -> None:
        self.missing_ids = missing_ids or []
        self.out_of_range_ids = out_of_range_ids or []
        super().__init__(message)


class ValidationResult(BaseModel):
    """Result of validating an answer set."""

    questionnaire_id: str
    valid: bool
    completeness: float  # 0.0 to 1.0
    missing_ids: list[int]
    out_of_range_ids: list[int]
    errors: list[str]

    @property
    def missing_count(self) -> int:
        """Number of unanswered questions."""
        return len(self.missing_ids)

    @property
    def has_errors(self) -> bool:
        """Whether there are any validation errors."""
        return len(self.errors) > 0 or len(self.out_of_range_ids) > 0


class Validator:
    """Validates answer sets for completeness and correctness.

    Checks:
    1. Completeness: every question in the spec has an answer
    2. Range: every score is one of the question's option scores
    3. Unknown: no answers for questions the spec does not define
    """

    def validate(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
    ) -> ValidationResult:
        """Validate an answer set against the questionnaire spec.

        Args:
            answers: Scores keyed by question id.
            spec: The questionnaire specification.

        Returns:
            ValidationResult with validation status and details.
        """
        return self._check(answers, spec, spec.question_ids)

    def validate_for_system(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
        system: str,
    ) -> ValidationResult:
        """Validate only the questions tagged with one sensory system."""
        system_spec = spec.get_system(system)
        if system_spec is None:
            return ValidationResult(
                questionnaire_id=spec.questionnaire_id,
                valid=False,
                completeness=0.0,
                missing_ids=[],
                out_of_range_ids=[],
                errors=[f"Unknown system: {system}"],
            )

        subset = {qid: answers[qid] for qid in system_spec.questions if qid in answers}
        return self._check(subset, spec, list(system_spec.questions))

    def require_valid(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
    ) -> ValidationResult:
        """Validate an answer set and raise if it cannot be scored.

        Raises:
            AnswerValidationError: If questions are missing or scores are out of range.
        """
        result = self.validate(answers, spec)
        if not result.valid:
            raise AnswerValidationError(
                "; ".join(result.errors),
                missing_ids=result.missing_ids,
                out_of_range_ids=result.out_of_range_ids,
            )
        return result

    def _check(
        self,
        answers: dict[int, int],
        spec: QuestionnaireSpec,
        expected_ids: list[int],
    ) -> ValidationResult:
        errors: list[str] = []
        out_of_range_ids: list[int] = []

        missing_ids = [qid for qid in expected_ids if qid not in answers]
        if missing_ids:
            errors.append(f"Missing answers for questions: {missing_ids}")

        for question_id, score in sorted(answers.items()):
            question = spec.get_question(question_id)
            if question is None:
                errors.append(f"Unknown question: {question_id}")
                continue

            if isinstance(score, bool) or score not in question.scores:
                out_of_range_ids.append(question_id)
                errors.append(
                    f"Question {question_id}: score {score} "
                    f"out of range [{min(question.scores)}, {max(question.scores)}]"
                )

        total = len(expected_ids)
        completeness = (total - len(missing_ids)) / total if total > 0 else 1.0

        return ValidationResult(
            questionnaire_id=spec.questionnaire_id,
            valid=len(errors) == 0,
            completeness=completeness,
            missing_ids=missing_ids,
            out_of_range_ids=out_of_range_ids,
            errors=errors,
        )
