"""Pydantic models for questionnaire and activity specifications."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SensorySystem = Literal["tactile", "auditory", "visual", "vestibular", "proprioceptive"]

SENSORY_SYSTEMS: tuple[SensorySystem, ...] = (
    "tactile",
    "auditory",
    "visual",
    "vestibular",
    "proprioceptive",
)

BehaviorType = Literal["avoiding", "seeking", "sensitive", "low-registration"]

BEHAVIOR_TYPES: tuple[BehaviorType, ...] = (
    "avoiding",
    "seeking",
    "sensitive",
    "low-registration",
)

DEFAULT_CHILD_NAME = "Your child"


class Interpretation(BaseModel):
    """Score interpretation band."""

    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    label: str
    description: str | None = None


class AnswerOption(BaseModel):
    """A single answer option and the score it carries."""

    model_config = ConfigDict(frozen=True)

    label: str
    score: int


class Question(BaseModel):
    """Question definition within a questionnaire."""

    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    system: SensorySystem
    behavior: BehaviorType
    options: tuple[AnswerOption, ...]

    @property
    def scores(self) -> set[int]:
        """The set of scores this question accepts."""
        return {option.score for option in self.options}

    def render(self, child_name: str | None, placeholder: str = DEFAULT_CHILD_NAME) -> str:
        """Substitute the child's name into the question text.

        A missing or blank name is replaced by the placeholder.
        """
        name = child_name.strip() if child_name else ""
        return self.text.format(child_name=name or placeholder)

    def score_for_label(self, label: str) -> int | None:
        """Look up the score for an option label (case-insensitive)."""
        normalized = label.lower().strip()
        for option in self.options:
            if option.label.lower() == normalized:
                return option.score
        return None


class SystemSpec(BaseModel):
    """Sensory system definition: the questions it sums and its label bands."""

    model_config = ConfigDict(frozen=True)

    system: SensorySystem
    name: str
    description: str | None = None
    questions: tuple[int, ...]
    interpretations: tuple[Interpretation, ...]


class QuestionnaireSpec(BaseModel):
    """Complete questionnaire specification."""

    model_config = ConfigDict(frozen=True)

    type: Literal["questionnaire_spec"]
    questionnaire_id: str
    version: str
    name: str
    description: str | None = None
    questions: tuple[Question, ...]
    systems: tuple[SystemSpec, ...]

    @property
    def ref(self) -> str:
        """The `id@version` reference used in records and telemetry."""
        return f"{self.questionnaire_id}@{self.version}"

    @property
    def question_ids(self) -> list[int]:
        """All question ids in presentation order."""
        return [question.id for question in self.questions]

    def get_question(self, question_id: int) -> Question | None:
        """Get a question by its ID."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def get_system(self, system: str) -> SystemSpec | None:
        """Get a system definition by name."""
        for spec in self.systems:
            if spec.system == system:
                return spec
        return None

    def questions_for_system(self, system: str) -> list[Question]:
        """Questions tagged with a sensory system, in order."""
        return [question for question in self.questions if question.system == system]

    def questions_for_behavior(self, behavior: str) -> list[Question]:
        """Questions tagged with a behaviour type, in order."""
        return [question for question in self.questions if question.behavior == behavior]

    def render_questions(
        self, child_name: str | None, placeholder: str = DEFAULT_CHILD_NAME
    ) -> list[str]:
        """Render every question text for a child, in presentation order."""
        return [question.render(child_name, placeholder) for question in self.questions]


class ActivityStep(BaseModel):
    """A single instruction within an activity."""

    step_number: int
    title: str
    description: str
    duration_seconds: int | None = None


class Activity(BaseModel):
    """Activity definition from the activity library."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    context: str | None = None
    duration_minutes: int
    activity_type: str
    difficulty: Literal["beginner", "intermediate", "advanced"] = "beginner"
    sensory_systems: tuple[str, ...] = ("proprioceptive",)
    behavior_types: tuple[str, ...] = ("mixed",)
    description: str | None = None
    benefits: tuple[str, ...] = ()
    when_to_use: str | None = None
    materials: tuple[str, ...] = ()
    steps: tuple[ActivityStep, ...] = ()
    bedtime: bool = False

    @property
    def base_title(self) -> str:
        """Title without its behaviour variant suffix (e.g. ' - Seeking')."""
        return self.title.split(" - ")[0] or self.title


class ActivityLibrary(BaseModel):
    """Versioned collection of activities."""

    type: Literal["activity_library"]
    version: str
    activities: list[Activity] = Field(default_factory=list)

    def get_activity(self, activity_id: str) -> Activity | None:
        """Get an activity by its ID."""
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None
