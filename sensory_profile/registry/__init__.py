"""Registry modules for loading questionnaire and activity specifications."""

from sensory_profile.registry.activities import ActivityLibraryError, load_activity_library
from sensory_profile.registry.models import (
    DEFAULT_CHILD_NAME,
    BEHAVIOR_TYPES,
    SENSORY_SYSTEMS,
    Activity,
    ActivityLibrary,
    ActivityStep,
    AnswerOption,
    Interpretation,
    Question,
    QuestionnaireSpec,
    SystemSpec,
)
from sensory_profile.registry.questionnaires import (
    DEFAULT_REGISTRY_PATH,
    QUESTIONNAIRE_SCHEMA_PATH,
    QuestionnaireNotFoundError,
    QuestionnaireRegistry,
    QuestionnaireValidationError,
    check_structure,
    load_questionnaire,
)

__all__ = [
    "DEFAULT_REGISTRY_PATH",
    "QUESTIONNAIRE_SCHEMA_PATH",
    "DEFAULT_CHILD_NAME",
    "SENSORY_SYSTEMS",
    "BEHAVIOR_TYPES",
    "QuestionnaireRegistry",
    "QuestionnaireNotFoundError",
    "QuestionnaireValidationError",
    "check_structure",
    "load_questionnaire",
    "load_activity_library",
    "ActivityLibraryError",
    "QuestionnaireSpec",
    "Question",
    "AnswerOption",
    "SystemSpec",
    "Interpretation",
    "Activity",
    "ActivityLibrary",
    "ActivityStep",
]
