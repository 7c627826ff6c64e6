"""Activity completion log entries."""

from datetime import datetime, timedelta, timezone
from typing import Literal

from pydantic import BaseModel, Field

Rating = Literal["loved", "neutral", "disliked"]


class ActivityCompletion(BaseModel):
    """One finished activity, as logged by the parent."""

    activity_name: str
    activity_type: str | None = None
    rating: Rating
    duration_minutes: int | None = Field(default=None, ge=0)
    notes: str | None = None
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def recent_titles(
    completions: list[ActivityCompletion],
    hours: int = 4,
    now: datetime | None = None,
) -> list[str]:
    """Titles of activities completed within the last ``hours`` hours."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(hours=hours)
    return [c.activity_name for c in completions if c.completed_at >= cutoff]
