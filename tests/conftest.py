"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from sensory_profile.registry import (
    DEFAULT_REGISTRY_PATH,
    QUESTIONNAIRE_SCHEMA_PATH,
    QuestionnaireRegistry,
    QuestionnaireSpec,
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config home at a temp dir so tests never read a real config."""
    home = tmp_path / "home"
    monkeypatch.setenv("SENSORY_PROFILE_HOME", str(home))
    monkeypatch.delenv("SENSORY_PROFILE_REGISTRY", raising=False)
    monkeypatch.delenv("SENSORY_PROFILE_LOG_LEVEL", raising=False)
    return home


@pytest.fixture
def registry_path() -> Path:
    """Return the bundled questionnaire registry path."""
    return DEFAULT_REGISTRY_PATH


@pytest.fixture
def questionnaire_schema_path() -> Path:
    """Return the questionnaire spec schema path."""
    return QUESTIONNAIRE_SCHEMA_PATH


@pytest.fixture
def registry(registry_path: Path, questionnaire_schema_path: Path) -> QuestionnaireRegistry:
    """Create a registry that validates against the schema."""
    return QuestionnaireRegistry(registry_path, schema_path=questionnaire_schema_path)


@pytest.fixture
def spec(registry: QuestionnaireRegistry) -> QuestionnaireSpec:
    """Load the sensory profile questionnaire."""
    return registry.get("sensory_profile", "1.0.0")


@pytest.fixture
def build_answers(spec: QuestionnaireSpec) -> Callable[..., dict[int, int]]:
    """Build an answer set from per-system question scores.

    Systems not given are answered with the ``default`` score.
    """

    def _build(default: int = 3, **per_system: tuple[int, int, int]) -> dict[int, int]:
        answers: dict[int, int] = {}
        for system_spec in spec.systems:
            scores = per_system.get(system_spec.system, (default,) * len(system_spec.questions))
            for question_id, score in zip(system_spec.questions, scores):
                answers[question_id] = score
        return answers

    return _build


@pytest.fixture
def all_fives(build_answers) -> dict[int, int]:
    """Every question answered with score 5."""
    return build_answers(default=5)


@pytest.fixture
def all_ones(build_answers) -> dict[int, int]:
    """Every question answered with score 1."""
    return build_answers(default=1)


@pytest.fixture
def mixed_answers(build_answers) -> dict[int, int]:
    """Two seeking systems, two avoiding systems, one in between."""
    return build_answers(
        tactile=(5, 5, 5),
        auditory=(5, 5, 5),
        visual=(1, 1, 1),
        vestibular=(1, 1, 1),
        proprioceptive=(3, 3, 3),
    )


@pytest.fixture
def submission(all_fives: dict[int, int]) -> dict:
    """A complete submission in the pipeline's input shape."""
    return {
        "user_id": "user-123",
        "child_name": "Zeke",
        "completed_at": "2025-01-15T10:30:00+00:00",
        "answers": {str(qid): score for qid, score in all_fives.items()},
    }
