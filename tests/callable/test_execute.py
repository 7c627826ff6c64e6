"""Tests for the execute() interface."""

from pathlib import Path

import pytest

from sensory_profile import execute
from sensory_profile.callable import CallableResult
from sensory_profile.registry import QuestionnaireNotFoundError


class TestExecuteInterface:
    """Tests for execute() function interface."""

    def test_execute_single_submission(self, submission: dict) -> None:
        """Test that a single submission dict is scored."""
        result = execute({"items": submission, "config": {"deterministic_ids": True}})

        assert result["schema_version"] == "1.0"
        assert "items_ref" not in result
        assert len(result["items"]) == 1
        record = result["items"][0]
        assert record["user_id"] == "user-123"
        assert record["results"]["total"] == 75
        assert record["results"]["profile"] == "Sensory Seeking"
        assert record["questionnaire"] == "sensory_profile@1.0.0"

    def test_execute_batch(self, submission: dict, all_ones: dict[int, int]) -> None:
        """Test scoring a list of submissions."""
        result = execute({
            "items": [submission, {"user_id": "user-2", "answers": all_ones}],
        })

        profiles = [item["results"]["profile"] for item in result["items"]]
        assert profiles == ["Sensory Seeking", "Sensory Avoiding"]
        assert result["stats"] == {"input": 2, "output": 2, "errors": 0}
        assert "errors" not in result

    def test_execute_reports_rejections(self, submission: dict) -> None:
        """Test that invalid submissions are counted and described."""
        del submission["answers"]["7"]
        result = execute({"items": [submission]})

        assert result["items"] == []
        assert result["stats"]["errors"] == 1
        assert any("[7]" in m for m in result["errors"][0]["messages"])

    def test_execute_empty_list(self) -> None:
        """Test that an empty list scores nothing."""
        result = execute({"items": []})

        assert result["items"] == []
        assert result["stats"]["input"] == 0

    def test_execute_is_json_ready(self, submission: dict) -> None:
        """Test that record keys are strings after serialization."""
        result = execute({"items": submission})
        assert set(result["items"][0]["responses"]) == {str(i) for i in range(1, 16)}

    def test_execute_result_validates_as_callable_result(self, submission: dict) -> None:
        """Test that execute result can be validated as CallableResult."""
        result = execute({"items": submission})
        validated = CallableResult(**result)
        assert len(validated.items) == 1

    def test_execute_config_overrides(self, submission: dict, registry_path: Path) -> None:
        """Test pinning the registry and questionnaire version."""
        result = execute({
            "items": submission,
            "config": {
                "registry_path": str(registry_path),
                "questionnaire_id": "sensory_profile",
                "questionnaire_version": "1.0.0",
                "deterministic_ids": True,
            },
        })
        again = execute({
            "items": submission,
            "config": {"registry_path": str(registry_path), "deterministic_ids": True},
        })

        assert result["items"][0]["assessment_id"] == again["items"][0]["assessment_id"]

    def test_execute_uses_configured_registry(
        self, submission: dict, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the registry env override is honoured."""
        monkeypatch.setenv("SENSORY_PROFILE_REGISTRY", str(tmp_path))
        with pytest.raises(QuestionnaireNotFoundError):
            execute({"items": submission})


class TestExecuteErrors:
    """Tests for execute() error handling."""

    def test_execute_missing_items_raises(self) -> None:
        """Test that missing items raises ValueError."""
        with pytest.raises(ValueError, match="'items' is required"):
            execute({})

    def test_execute_invalid_items_raises(self) -> None:
        """Test that items of the wrong shape raise ValueError."""
        with pytest.raises(ValueError, match="must be a submission"):
            execute({"items": "not a submission"})
        with pytest.raises(ValueError, match="must be a submission"):
            execute({"items": [1, 2]})

    def test_execute_unknown_questionnaire_raises(self, submission: dict) -> None:
        """Test that an unknown questionnaire raises."""
        with pytest.raises(QuestionnaireNotFoundError):
            execute({"items": submission, "config": {"questionnaire_id": "nope"}})
