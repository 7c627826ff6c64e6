"""Assessment session: collects one child's answers question by question.

A session belongs to a single caller. It is not shared between users or
threads, and it is consumed exactly once by finish().
"""

import logging

from sensory_profile.registry.models import QuestionnaireSpec
from sensory_profile.validation import AnswerValidationError, Validator

logger = logging.getLogger(__name__)


class SessionConsumedError(Exception):
    """Raised when a finished session is used again."""

    pass


class AssessmentSession:
    """Builds an answer set for one questionnaire, one answer at a time."""

    def __init__(self, spec: QuestionnaireSpec, validator: Validator | None = None) -> None:
        self.spec = spec
        self.validator = validator or Validator()
        self._answers: dict[int, int] = {}
        self._position = 0
        self._consumed = False

    @property
    def current_question(self) -> int:
        """Id of the question currently being asked (1-based)."""
        return self.spec.question_ids[self._position]

    @property
    def total_questions(self) -> int:
        return len(self.spec.questions)

    @property
    def answers(self) -> dict[int, int]:
        """Copy of the answers collected so far."""
        return dict(sorted(self._answers.items()))

    @property
    def progress(self) -> float:
        """Fraction of questions answered, 0.0 to 1.0."""
        return len(self._answers) / self.total_questions

    @property
    def is_complete(self) -> bool:
        return len(self._answers) == self.total_questions

    @property
    def consumed(self) -> bool:
        return self._consumed

    def answer(self, score: int) -> None:
        """Record a score for the current question and move to the next one.

        The position stays on the last question once it is answered.
        """
        self.answer_question(self.current_question, score)
        if self._position < self.total_questions - 1:
            self._position += 1

    def answer_question(self, question_id: int, score: int) -> None:
        """Record a score for a specific question.

        Raises:
            SessionConsumedError: If the session was already finished.
            AnswerValidationError: If the question is unknown or the score
                is not one of its option scores.
        """
        self._ensure_open()
        question = self.spec.get_question(question_id)
        if question is None:
            raise AnswerValidationError(f"Unknown question: {question_id}")
        if isinstance(score, bool) or score not in question.scores:
            raise AnswerValidationError(
                f"Question {question_id}: score {score} "
                f"out of range [{min(question.scores)}, {max(question.scores)}]",
                out_of_range_ids=[question_id],
            )
        self._answers[question_id] = score

    def back(self) -> None:
        """Move to the previous question. Does nothing at the first question."""
        self._ensure_open()
        if self._position > 0:
            self._position -= 1

    def finish(self) -> dict[int, int]:
        """Consume the session and return the complete answer set.

        Raises:
            SessionConsumedError: If called more than once.
            AnswerValidationError: If any question is unanswered. The session
                stays open so the missing answers can be supplied.
        """
        self._ensure_open()
        self.validator.require_valid(self._answers, self.spec)
        self._consumed = True
        logger.debug("Session finished for %s", self.spec.ref)
        return self.answers

    def _ensure_open(self) -> None:
        if self._consumed:
            raise SessionConsumedError("Assessment session has already been finished")
