"""Activity suggestions and completion logging."""

from sensory_profile.activities.completion import ActivityCompletion, Rating, recent_titles
from sensory_profile.activities.selector import (
    ActivitySelector,
    ChildProfile,
    apply_diversity_penalty,
)
from sensory_profile.activities.time_slots import (
    BEDTIME,
    TIME_PREFERENCES,
    TimeSlot,
    preferred_types,
    time_slot_for,
)

__all__ = [
    "ActivitySelector",
    "ChildProfile",
    "ActivityCompletion",
    "Rating",
    "TimeSlot",
    "BEDTIME",
    "TIME_PREFERENCES",
    "apply_diversity_penalty",
    "preferred_types",
    "recent_titles",
    "time_slot_for",
]
