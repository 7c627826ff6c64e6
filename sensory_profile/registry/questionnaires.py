"""Questionnaire registry for loading and caching questionnaire specifications."""

import json
import logging
from pathlib import Path

import jsonschema
from pydantic import ValidationError

from sensory_profile.registry.models import SENSORY_SYSTEMS, QuestionnaireSpec

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path(__file__).parent / "data"
SCHEMAS_PATH = DEFAULT_REGISTRY_PATH / "schemas"
QUESTIONNAIRE_SCHEMA_PATH = SCHEMAS_PATH / "questionnaire_spec.schema.json"

QUESTIONS_PER_SYSTEM = 3
OPTION_SCORES = {1, 2, 3, 4, 5}


class QuestionnaireNotFoundError(Exception):
    """Raised when a questionnaire specification is not found."""

    pass


class QuestionnaireValidationError(Exception):
    """Raised when a questionnaire specification fails validation."""

    pass


class QuestionnaireRegistry:
    """Registry for loading and caching questionnaire specifications.

    Loads questionnaire specs from a directory structure:
        <registry_path>/questionnaires/<questionnaire_id>/<version>.json

    Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
    """

    def __init__(
        self,
        registry_path: Path | str = DEFAULT_REGISTRY_PATH,
        schema_path: Path | str | None = None,
    ) -> None:
        """Initialize the questionnaire registry.

        Args:
            registry_path: Path to the registry directory.
            schema_path: Optional path to the questionnaire_spec schema for validation.
        """
        self.registry_path = Path(registry_path)
        self.questionnaires_path = self.registry_path / "questionnaires"
        self._cache: dict[tuple[str, str], QuestionnaireSpec] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path) as f:
                self._schema = json.load(f)

    def _version_to_filename(self, version: str) -> str:
        """Convert version string to filename (1.0.0 -> 1-0-0.json)."""
        return version.replace(".", "-") + ".json"

    def _get_spec_path(self, questionnaire_id: str, version: str) -> Path:
        filename = self._version_to_filename(version)
        return self.questionnaires_path / questionnaire_id / filename

    def get(self, questionnaire_id: str, version: str) -> QuestionnaireSpec:
        """Get a questionnaire specification by ID and version.

        Args:
            questionnaire_id: The questionnaire identifier (e.g., 'sensory_profile').
            version: The version string (e.g., '1.0.0').

        Returns:
            The loaded QuestionnaireSpec.

        Raises:
            QuestionnaireNotFoundError: If the spec file doesn't exist.
            QuestionnaireValidationError: If the spec fails schema or structure checks.
        """
        cache_key = (questionnaire_id, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        spec_path = self._get_spec_path(questionnaire_id, version)
        if not spec_path.exists():
            raise QuestionnaireNotFoundError(
                f"Questionnaire spec not found: {questionnaire_id}@{version} "
                f"(expected at {spec_path})"
            )

        spec = load_questionnaire(spec_path, self._schema)
        logger.debug("Loaded questionnaire %s from %s", spec.ref, spec_path)
        self._cache[cache_key] = spec
        return spec

    def list_questionnaires(self) -> list[str]:
        """List all available questionnaire IDs."""
        if not self.questionnaires_path.exists():
            return []
        return sorted(d.name for d in self.questionnaires_path.iterdir() if d.is_dir())

    def list_versions(self, questionnaire_id: str) -> list[str]:
        """List all available versions for a questionnaire, oldest first."""
        questionnaire_path = self.questionnaires_path / questionnaire_id
        if not questionnaire_path.exists():
            return []
        versions = [f.stem.replace("-", ".") for f in questionnaire_path.glob("*.json")]
        return sorted(versions, key=_version_key)

    def get_latest(self, questionnaire_id: str) -> QuestionnaireSpec:
        """Get the latest version of a questionnaire.

        Raises:
            QuestionnaireNotFoundError: If no versions exist.
        """
        versions = self.list_versions(questionnaire_id)
        if not versions:
            raise QuestionnaireNotFoundError(
                f"No versions found for questionnaire: {questionnaire_id}"
            )
        return self.get(questionnaire_id, versions[-1])


def load_questionnaire(
    spec_path: Path | str,
    schema: dict | None = None,
) -> QuestionnaireSpec:
    """Load and check a single questionnaire spec file.

    Args:
        spec_path: Path to the JSON spec.
        schema: Optional JSON schema to validate the raw document against.

    Returns:
        The parsed QuestionnaireSpec.

    Raises:
        QuestionnaireValidationError: If schema or structure checks fail.
    """
    with open(spec_path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise QuestionnaireValidationError(f"Invalid JSON in {spec_path}: {e}") from e

    if schema:
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise QuestionnaireValidationError(
                f"Questionnaire spec validation failed for {spec_path}: {e.message}"
            ) from e

    try:
        spec = QuestionnaireSpec.model_validate(data)
    except ValidationError as e:
        raise QuestionnaireValidationError(
            f"Questionnaire spec {spec_path} does not match the model: {e}"
        ) from e
    errors = check_structure(spec)
    if errors:
        raise QuestionnaireValidationError(
            f"Questionnaire {spec.ref} is malformed: " + "; ".join(errors)
        )
    return spec


def check_structure(spec: QuestionnaireSpec) -> list[str]:
    """Check the structural invariants the scorer and classifier rely on.

    Args:
        spec: The questionnaire specification to check.

    Returns:
        List of error messages (empty if the spec is well formed).
    """
    errors: list[str] = []

    expected_ids = list(range(1, len(spec.questions) + 1))
    if spec.question_ids != expected_ids:
        errors.append(f"Question ids must run 1..{len(spec.questions)} in order")

    for question in spec.questions:
        if len(question.options) != len(OPTION_SCORES):
            errors.append(
                f"Question {question.id} must have {len(OPTION_SCORES)} options, "
                f"has {len(question.options)}"
            )
        elif question.scores != OPTION_SCORES:
            errors.append(f"Question {question.id} option scores must be exactly 1-5")

    for system in SENSORY_SYSTEMS:
        tagged = spec.questions_for_system(system)
        if len(tagged) != QUESTIONS_PER_SYSTEM:
            errors.append(
                f"System {system} must have {QUESTIONS_PER_SYSTEM} questions, "
                f"has {len(tagged)}"
            )

        system_spec = spec.get_system(system)
        if system_spec is None:
            errors.append(f"System {system} has no definition")
            continue
        if sorted(system_spec.questions) != [q.id for q in tagged]:
            errors.append(
                f"System {system} lists questions {list(system_spec.questions)} "
                f"but questions {[q.id for q in tagged]} are tagged with it"
            )

    return errors


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split(".") if part.isdigit())
