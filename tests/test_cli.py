"""Tests for the sensory-profile CLI."""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sensory_profile import __version__
from sensory_profile.cli import app
from sensory_profile.config import load_global_config
from sensory_profile.logging import PACKAGE_LOGGER

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs on streams the runner closes."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    yield
    logger.handlers = handlers
    logger.propagate = True


@pytest.fixture
def submissions_file(tmp_path: Path, submission: dict, all_ones: dict[int, int]) -> Path:
    """A JSONL file with two valid submissions, one incomplete and one bad line."""
    incomplete = dict(submission, user_id="user-3")
    incomplete["answers"] = {k: v for k, v in submission["answers"].items() if k != "7"}

    path = tmp_path / "submissions.jsonl"
    lines = [
        json.dumps(submission),
        json.dumps({"user_id": "user-2", "answers": all_ones}),
        json.dumps(incomplete),
        "{not json",
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


class TestVersion:
    def test_version(self) -> None:
        """Test that --version prints the engine version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_config(self, isolated_home: Path) -> None:
        """Test that init writes the config file."""
        result = runner.invoke(app, ["init", "--child-name", "Your kid"])

        assert result.exit_code == 0
        assert (isolated_home / "config.yaml").exists()
        assert load_global_config().default_child_name == "Your kid"

    def test_refuses_overwrite(self) -> None:
        """Test that an existing config is kept without --force."""
        runner.invoke(app, ["init"])
        result = runner.invoke(app, ["init", "--child-name", "Sam"])

        assert result.exit_code == 1
        assert "already exists" in result.output

        forced = runner.invoke(app, ["init", "--child-name", "Sam", "--force"])
        assert forced.exit_code == 0
        assert load_global_config().default_child_name == "Sam"

    def test_missing_registry(self, tmp_path: Path) -> None:
        """Test that a registry path that does not exist is rejected."""
        result = runner.invoke(app, ["init", "--registry", str(tmp_path / "missing")])
        assert result.exit_code == 1


class TestQuestions:
    """Tests for the questions command."""

    def test_lists_questions(self) -> None:
        """Test that the question bank is printed with the child's name."""
        result = runner.invoke(app, ["questions", "--child-name", "Zeke"])

        assert result.exit_code == 0
        assert "Zeke" in result.output
        assert "{child_name}" not in result.output
        assert "Never / Rarely / Sometimes / Often / Always" in result.output

    def test_unknown_version(self) -> None:
        """Test that an unknown questionnaire version fails cleanly."""
        result = runner.invoke(app, ["questions", "--questionnaire-version", "9.9.9"])
        assert result.exit_code == 1

    def test_missing_registry(self, tmp_path: Path) -> None:
        """Test that a missing registry fails cleanly."""
        result = runner.invoke(app, ["questions", "--registry", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Registry not found" in result.output


class TestScore:
    """Tests for the score command."""

    def test_scores_file(self, tmp_path: Path, submissions_file: Path) -> None:
        """Test that valid submissions are written and failures reported."""
        out = tmp_path / "records.jsonl"

        result = runner.invoke(
            app,
            ["score", "--in", str(submissions_file), "--out", str(out), "--deterministic-ids"],
        )

        assert result.exit_code == 0
        records = [json.loads(line) for line in out.read_text().splitlines()]
        assert [r["user_id"] for r in records] == ["user-123", "user-2"]
        assert [r["results"]["profile"] for r in records] == [
            "Sensory Seeking",
            "Sensory Avoiding",
        ]
        assert "Invalid JSON on line 4" in result.output
        assert "Failed:" in result.output

    def test_non_object_lines_reported(self, tmp_path: Path, submission: dict) -> None:
        """Test that JSON lines that are not objects are skipped with a warning."""
        path = tmp_path / "submissions.jsonl"
        path.write_text(
            "\n".join(["[1, 2]", '"x"', json.dumps(dict(submission, user_id=42)),
                       json.dumps(submission)]) + "\n"
        )
        out = tmp_path / "records.jsonl"

        result = runner.invoke(app, ["score", "--in", str(path), "--out", str(out)])

        assert result.exit_code == 0
        assert "Line 1:" in result.output
        assert "submission must be an object" in result.output
        assert "'user_id' must be a string" in result.output
        records = [json.loads(line) for line in out.read_text().splitlines()]
        assert [r["user_id"] for r in records] == ["user-123"]

    def test_save_appends_to_results(
        self, tmp_path: Path, isolated_home: Path, submissions_file: Path
    ) -> None:
        """Test that --save also appends records to the results file."""
        out = tmp_path / "records.jsonl"

        result = runner.invoke(
            app, ["score", "--in", str(submissions_file), "--out", str(out), "--save"]
        )

        assert result.exit_code == 0
        saved = (isolated_home / "results.jsonl").read_text().splitlines()
        assert len(saved) == 2

    def test_missing_input(self, tmp_path: Path) -> None:
        """Test that a missing input file fails cleanly."""
        result = runner.invoke(
            app,
            ["score", "--in", str(tmp_path / "nope.jsonl"), "--out", str(tmp_path / "o.jsonl")],
        )

        assert result.exit_code == 1
        assert "Input file not found" in result.output


class TestActivities:
    """Tests for the activities command."""

    def test_without_user(self) -> None:
        """Test suggestions for an unassessed child."""
        result = runner.invoke(app, ["activities", "--hour", "7"])

        assert result.exit_code == 0
        assert "Activities for before-breakfast" in result.output

    def test_uses_latest_record(self, tmp_path: Path, submissions_file: Path) -> None:
        """Test that the user's saved record shapes the suggestions."""
        runner.invoke(
            app,
            [
                "score", "--in", str(submissions_file),
                "--out", str(tmp_path / "records.jsonl"), "--save",
            ],
        )

        result = runner.invoke(app, ["activities", "--hour", "23", "--user", "user-123"])

        assert result.exit_code == 0
        assert "Sensory Seeking" in result.output
        assert "Activities for bedtime" in result.output

    def test_unknown_user(self) -> None:
        """Test that a user without records still gets suggestions."""
        result = runner.invoke(app, ["activities", "--hour", "9", "--user", "nobody"])

        assert result.exit_code == 0
        assert "No assessment found" in result.output

    def test_invalid_hour(self) -> None:
        """Test that an hour outside 0-23 fails cleanly."""
        result = runner.invoke(app, ["activities", "--hour", "25"])
        assert result.exit_code == 1


class TestValidate:
    """Tests for the validate command."""

    def test_bundled_spec_is_valid(self, registry_path: Path) -> None:
        """Test that the bundled questionnaire validates."""
        spec_path = registry_path / "questionnaires" / "sensory_profile" / "1-0-0.json"

        result = runner.invoke(app, ["validate", str(spec_path)])

        assert result.exit_code == 0
        assert "Valid:" in result.output

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that a broken file is reported invalid."""
        spec_path = tmp_path / "broken.json"
        spec_path.write_text("{not json")

        result = runner.invoke(app, ["validate", str(spec_path)])

        assert result.exit_code == 1
        assert "Invalid:" in result.output

    def test_schema_violation(self, tmp_path: Path) -> None:
        """Test that a document failing the schema is reported invalid."""
        spec_path = tmp_path / "empty.json"
        spec_path.write_text(json.dumps({"type": "questionnaire_spec"}))

        result = runner.invoke(app, ["validate", str(spec_path)])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing spec file fails cleanly."""
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
