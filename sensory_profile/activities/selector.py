"""Activity suggestions tailored to a child's sensory profile.

Each activity gets a personality score from the child's profile, a small
bonus when its type suits the time of day, and optional random jitter.
Repeated base activities (variants of the same title) are then pushed down
the list so the suggestions stay varied.
"""

import logging
import random
from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel

from sensory_profile.activities.time_slots import BEDTIME, preferred_types, time_slot_for
from sensory_profile.registry.activities import load_activity_library
from sensory_profile.registry.models import Activity, ActivityLibrary
from sensory_profile.scoring.classifier import (
    SENSORY_AVOIDING,
    SENSORY_SEEKING,
    SensoryProfileResult,
)

logger = logging.getLogger(__name__)

BEHAVIOR_MATCH_BONUS = 20
MIXED_BEHAVIOR_BONUS = 10
SYSTEM_MATCH_BONUS = 15
DIFFICULTY_MATCH_BONUS = 8
INTENSITY_MATCH_BONUS = 8
TIME_SLOT_BONUS = 5
VARIETY_BONUS = 5
REPEAT_PENALTY = 15
MAX_JITTER = 2.0

CHALLENGING_LABELS = ("Seeking", "Avoiding")


class ChildProfile(BaseModel):
    """What the selector needs to know about a child."""

    dominant_behavior: Literal["seeking", "avoiding", "mixed"]
    challenging_systems: list[str]
    intensity_level: Literal["low", "medium", "high"]
    preferred_difficulty: Literal["beginner", "intermediate"]

    @classmethod
    def from_result(
        cls,
        result: SensoryProfileResult,
        labels: dict[str, str | None] | None = None,
    ) -> "ChildProfile":
        """Derive a child profile from a scored assessment.

        Args:
            result: The classified result.
            labels: Per-system labels. Without labels no system counts as
                challenging.
        """
        if result.profile == SENSORY_SEEKING:
            dominant, intensity = "seeking", "high"
        elif result.profile == SENSORY_AVOIDING:
            dominant, intensity = "avoiding", "low"
        else:
            dominant, intensity = "mixed", "medium"

        challenging = [
            system for system, label in (labels or {}).items() if label in CHALLENGING_LABELS
        ]
        return cls(
            dominant_behavior=dominant,
            challenging_systems=challenging,
            intensity_level=intensity,
            preferred_difficulty="intermediate" if intensity == "high" else "beginner",
        )


def apply_diversity_penalty(activities: list[Activity]) -> list[Activity]:
    """Move repeats of the same base title behind first occurrences.

    Order among activities with the same penalty is preserved.
    """
    counts: dict[str, int] = {}
    penalized: list[tuple[int, Activity]] = []
    for activity in activities:
        seen = counts.get(activity.base_title, 0)
        penalized.append((seen * REPEAT_PENALTY, activity))
        counts[activity.base_title] = seen + 1
    penalized.sort(key=lambda item: item[0])
    return [activity for _, activity in penalized]


class ActivitySelector:
    """Suggests activities from the activity library."""

    def __init__(
        self,
        library: ActivityLibrary | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the selector.

        Args:
            library: Activity library; defaults to the bundled library.
            rng: Optional random source for tie-breaking jitter. Without one
                 the ranking is fully deterministic.
        """
        self.library = library or load_activity_library()
        self.rng = rng

    @property
    def daytime_activities(self) -> list[Activity]:
        return [a for a in self.library.activities if not a.bedtime]

    @property
    def bedtime_activities(self) -> list[Activity]:
        return [a for a in self.library.activities if a.bedtime]

    def score_activity(self, activity: Activity, profile: ChildProfile) -> float:
        """Personality score of one activity for a child, plus jitter."""
        score = 0.0

        if profile.dominant_behavior in activity.behavior_types:
            score += BEHAVIOR_MATCH_BONUS
        elif "mixed" in activity.behavior_types:
            score += MIXED_BEHAVIOR_BONUS

        matching = [s for s in activity.sensory_systems if s in profile.challenging_systems]
        score += len(matching) * SYSTEM_MATCH_BONUS

        if activity.difficulty == profile.preferred_difficulty:
            score += DIFFICULTY_MATCH_BONUS

        if profile.intensity_level == "high" and activity.activity_type == "heavy-work":
            score += INTENSITY_MATCH_BONUS
        elif profile.intensity_level == "low" and activity.activity_type == "calming":
            score += INTENSITY_MATCH_BONUS

        if self.rng is not None:
            score += self.rng.random() * MAX_JITTER
        return score

    def suggest(
        self,
        result: SensoryProfileResult | None,
        labels: dict[str, str | None] | None,
        hour: int,
        limit: int = 6,
    ) -> list[Activity]:
        """Suggest up to ``limit`` activities for a child at a given hour.

        Args:
            result: The child's latest result, or None if not assessed yet.
            labels: Per-system labels for the result.
            hour: Hour of the day (0-23).
            limit: Maximum number of suggestions.

        Returns:
            Activities in suggestion order.
        """
        slot = time_slot_for(hour)
        if slot == BEDTIME:
            return self.bedtime_activities[:limit]

        candidates = self.daytime_activities
        preferred = preferred_types(slot)

        if result is None:
            timed = [a for a in candidates if a.activity_type in preferred]
            others = [a for a in candidates if a.activity_type not in preferred]
            return (timed + others)[:limit]

        profile = ChildProfile.from_result(result, labels)
        scored = [
            (
                self.score_activity(activity, profile)
                + (TIME_SLOT_BONUS if activity.activity_type in preferred else 0),
                activity,
            )
            for activity in candidates
        ]
        scored.sort(key=lambda item: item[0], reverse=True)
        ranked = apply_diversity_penalty([activity for _, activity in scored])

        logger.debug(
            "Suggested activities for %s at %s: %s",
            result.profile,
            slot,
            [a.id for a in ranked[:limit]],
        )
        return ranked[:limit]

    def next_activity(
        self,
        current: Iterable[Activity],
        just_completed: Activity,
        result: SensoryProfileResult | None,
        labels: dict[str, str | None] | None,
        hour: int,
        recent_titles: Iterable[str] = (),
    ) -> Activity | None:
        """Pick a replacement after an activity is completed.

        Excludes the activities on screen, the one just completed and
        anything completed recently. Activities of a different type than the
        one just completed get a variety bonus.

        Returns:
            The next activity, or None if nothing is left to suggest.
        """
        if time_slot_for(hour) == BEDTIME:
            bedtime = self.bedtime_activities
            others = [a for a in bedtime if a.id != just_completed.id]
            if others:
                return others[0]
            return bedtime[0] if bedtime else None

        excluded_ids = {a.id for a in current} | {just_completed.id}
        recent = set(recent_titles)
        available = [
            a
            for a in self.daytime_activities
            if a.id not in excluded_ids and a.title not in recent
        ]
        if not available:
            return None

        if result is None:
            return self.rng.choice(available) if self.rng is not None else available[0]

        profile = ChildProfile.from_result(result, labels)
        best_score = None
        best: Activity | None = None
        for activity in available:
            score = self.score_activity(activity, profile)
            if activity.activity_type != just_completed.activity_type:
                score += VARIETY_BONUS
            if best_score is None or score > best_score:
                best_score, best = score, activity
        return best
