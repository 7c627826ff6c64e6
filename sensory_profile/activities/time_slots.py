"""Time-of-day slots used to nudge activity suggestions."""

from typing import Literal

TimeSlot = Literal[
    "before-breakfast",
    "mid-morning",
    "before-lunch",
    "lunch",
    "mid-afternoon",
    "before-dinner",
    "dinner",
    "evening",
    "bedtime",
]

BEDTIME: TimeSlot = "bedtime"

# (start hour inclusive, end hour exclusive, slot); anything else is bedtime
_SLOTS: tuple[tuple[int, int, TimeSlot], ...] = (
    (6, 8, "before-breakfast"),
    (8, 10, "mid-morning"),
    (10, 12, "before-lunch"),
    (12, 14, "lunch"),
    (14, 16, "mid-afternoon"),
    (16, 18, "before-dinner"),
    (18, 20, "dinner"),
    (20, 22, "evening"),
)

TIME_PREFERENCES: dict[str, tuple[str, ...]] = {
    "before-breakfast": ("proprioceptive", "heavy-work"),
    "mid-morning": ("visual", "tactile"),
    "before-lunch": ("calming", "tactile"),
    "lunch": ("tactile", "olfactory"),
    "mid-afternoon": ("vestibular", "proprioceptive"),
    "before-dinner": ("calming", "visual"),
    "dinner": ("tactile", "olfactory"),
    "evening": ("calming", "auditory"),
}


def time_slot_for(hour: int) -> TimeSlot:
    """Map an hour of the day (0-23) to its time slot.

    Raises:
        ValueError: If the hour is outside 0-23.
    """
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise ValueError(f"Hour must be an integer between 0 and 23, got {hour!r}")
    for start, end, slot in _SLOTS:
        if start <= hour < end:
            return slot
    return BEDTIME


def preferred_types(slot: str) -> tuple[str, ...]:
    """Activity types favoured in a time slot."""
    return TIME_PREFERENCES.get(slot, ())
