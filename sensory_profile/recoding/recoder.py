"""Recoder for transforming raw answers to numeric scores.

The recoder transforms option labels ("Never", "Often", ...) and numeric
strings into integer scores using each question's options. It does not
perform fuzzy matching - labels must match exactly (after normalization).
Range and completeness are checked later by the validator.
"""

from typing import Any

from pydantic import BaseModel

from sensory_profile.registry.models import Question, QuestionnaireSpec


class RecodingError(ValueError):
    """Raised when a raw answer cannot be recoded."""

    pass


class RecodingResult(BaseModel):
    """Answers recoded to integer scores, keyed by question id."""

    questionnaire_id: str
    questionnaire_version: str
    answers: dict[int, int]
    raw_answers: dict[int, Any]


class Recoder:
    """Recodes raw answers to integer scores using a questionnaire spec.

    The recoder is strict:
    - Keys must be question ids (ints or numeric strings) known to the spec
    - Labels must match an option label exactly (case-insensitive)
    - Blank answers are dropped, leaving the question unanswered
    """

    def recode(
        self,
        raw_answers: dict[Any, Any],
        spec: QuestionnaireSpec,
    ) -> RecodingResult:
        """Recode a mapping of question id -> raw answer.

        Args:
            raw_answers: Answers keyed by question id.
            spec: The questionnaire specification.

        Returns:
            RecodingResult with integer scores for every non-blank answer.

        Raises:
            RecodingError: If a key or answer cannot be recoded.
        """
        answers: dict[int, int] = {}
        raw: dict[int, Any] = {}

        for key, raw_answer in raw_answers.items():
            question_id = self._parse_question_id(key)
            question = spec.get_question(question_id)
            if question is None:
                raise RecodingError(
                    f"Question not found in questionnaire {spec.ref}: {key}"
                )

            raw[question_id] = raw_answer
            if raw_answer is None or raw_answer == "":
                continue

            answers[question_id] = self._recode_answer(raw_answer, question)

        return RecodingResult(
            questionnaire_id=spec.questionnaire_id,
            questionnaire_version=spec.version,
            answers=dict(sorted(answers.items())),
            raw_answers=raw,
        )

    def _parse_question_id(self, key: Any) -> int:
        if isinstance(key, bool):
            raise RecodingError(f"Invalid question id: {key!r}")
        if isinstance(key, int):
            return key
        if isinstance(key, str) and key.strip().isdigit():
            return int(key.strip())
        raise RecodingError(f"Invalid question id: {key!r}")

    def _recode_answer(self, raw_answer: Any, question: Question) -> int:
        if isinstance(raw_answer, bool):
            raise RecodingError(
                f"Unsupported answer type for question {question.id}: bool"
            )
        if isinstance(raw_answer, int):
            return raw_answer
        if isinstance(raw_answer, float):
            return self._whole_number(raw_answer, question)
        if isinstance(raw_answer, str):
            return self._recode_string(raw_answer, question)
        raise RecodingError(
            f"Unsupported answer type for question {question.id}: "
            f"{type(raw_answer).__name__}"
        )

    def _whole_number(self, value: float, question: Question) -> int:
        if not value.is_integer():
            raise RecodingError(
                f"Answer {value} for question {question.id} is not a whole score"
            )
        return int(value)

    def _recode_string(self, raw_answer: str, question: Question) -> int:
        """Recode a string answer: numeric text first, then option labels."""
        try:
            numeric = float(raw_answer)
        except ValueError:
            numeric = None
        if numeric is not None:
            return self._whole_number(numeric, question)

        score = question.score_for_label(raw_answer)
        if score is None:
            valid_labels = [option.label for option in question.options]
            raise RecodingError(
                f"Unknown response '{raw_answer}' for question {question.id}. "
                f"Valid responses: {valid_labels}"
            )
        return score
