"""Tests for coach chat support."""

import threading
from datetime import date

import pytest

from sensory_profile.builders import AssessmentRecord
from sensory_profile.coach import (
    FALLBACK_RESPONSE,
    ChatLimitExceededError,
    ChatUsageTracker,
    CoachContext,
)
from sensory_profile.pipeline import Pipeline, PipelineConfig

TODAY = date(2025, 1, 15)


@pytest.fixture
def record(mixed_answers: dict[int, int]) -> AssessmentRecord:
    """A scored Mixed Profile record for Zeke."""
    result = Pipeline(PipelineConfig(deterministic_ids=True)).process({
        "user_id": "user-123",
        "child_name": "Zeke",
        "completed_at": "2025-01-15T10:30:00+00:00",
        "answers": mixed_answers,
    })
    assert result.success
    return result.record


class TestChatUsageTracker:
    """Tests for ChatUsageTracker."""

    def test_counts_down(self) -> None:
        """Test that each message uses up one of the daily allowance."""
        tracker = ChatUsageTracker(daily_limit=3)

        assert tracker.record("user-1", TODAY) == 2
        assert tracker.record("user-1", TODAY) == 1
        assert tracker.used("user-1", TODAY) == 2
        assert tracker.remaining("user-1", TODAY) == 1

    def test_limit_reached(self) -> None:
        """Test that the message after the limit is refused."""
        tracker = ChatUsageTracker(daily_limit=2)
        tracker.record("user-1", TODAY)
        tracker.record("user-1", TODAY)

        with pytest.raises(ChatLimitExceededError) as exc_info:
            tracker.record("user-1", TODAY)

        assert exc_info.value.limit == 2
        assert exc_info.value.user_id == "user-1"
        assert tracker.used("user-1", TODAY) == 2

    def test_counts_are_per_user_and_day(self) -> None:
        """Test that users and days are counted separately."""
        tracker = ChatUsageTracker(daily_limit=1)
        tracker.record("user-1", TODAY)

        assert tracker.remaining("user-2", TODAY) == 1
        assert tracker.remaining("user-1", date(2025, 1, 16)) == 1

    def test_zero_limit(self) -> None:
        """Test that a zero limit refuses every message."""
        with pytest.raises(ChatLimitExceededError):
            ChatUsageTracker(daily_limit=0).record("user-1", TODAY)

    def test_negative_limit(self) -> None:
        """Test that a negative limit is rejected."""
        with pytest.raises(ValueError):
            ChatUsageTracker(daily_limit=-1)

    def test_concurrent_records(self) -> None:
        """Test that concurrent messages never exceed the limit."""
        tracker = ChatUsageTracker(daily_limit=20)
        refused: list[int] = []

        def send() -> None:
            try:
                tracker.record("user-1", TODAY)
            except ChatLimitExceededError:
                refused.append(1)

        threads = [threading.Thread(target=send) for _ in range(30)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tracker.used("user-1", TODAY) == 20
        assert len(refused) == 10


class TestCoachContext:
    """Tests for CoachContext."""

    def test_from_record(self, record: AssessmentRecord) -> None:
        """Test that the context is built from the latest record."""
        context = CoachContext.from_record(record, child_age="6")

        assert context.child_name == "Zeke"
        assert context.profile == "Mixed Profile"
        assert context.subtotals["tactile"] == 15

    def test_render(self, record: AssessmentRecord) -> None:
        """Test rendering a full context block."""
        text = CoachContext.from_record(record, child_age="6").render()

        assert "- Child's name: Zeke" in text
        assert "- Child's age: 6" in text
        assert "- Sensory profile type: Mixed Profile" in text
        assert "- Assessment completed: 2025-01-15" in text
        assert "  - Touch: 15/15 (Seeking)" in text
        assert "  - Sight: 3/15 (Avoiding)" in text
        assert "  - Body Awareness: 9/15 (Sensitive)" in text

    def test_explicit_name_wins(self, record: AssessmentRecord) -> None:
        """Test that a given child name overrides the record's."""
        assert CoachContext.from_record(record, child_name="Ada").child_name == "Ada"

    def test_render_without_record(self) -> None:
        """Test the defaults used before any assessment."""
        text = CoachContext.from_record(None).render()

        assert text.splitlines() == [
            "- Child's name: the child",
            "- Child's age: not specified",
            "- Sensory profile type: mixed sensory needs",
            "- Assessment completed: recently",
            "- Assessment data not yet available",
        ]

    def test_fallback_response(self) -> None:
        """Test that the fallback reply lists general strategies."""
        assert FALLBACK_RESPONSE.startswith("I'm having trouble connecting right now")
        assert "Deep pressure activities" in FALLBACK_RESPONSE

    def test_completed_at_normalized(self) -> None:
        """Test that the completion date is rendered in UTC."""
        context = CoachContext(completed_at="2025-01-15T01:00:00+05:00")
        assert "- Assessment completed: 2025-01-14" in context.render()

    def test_invalid_completed_at(self) -> None:
        """Test that an unparseable completion time is rejected up front."""
        with pytest.raises(ValueError):
            CoachContext(completed_at="yesterday")
