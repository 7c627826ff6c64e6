"""Coach chat support: usage limits, context and fallback reply."""

from sensory_profile.coach.context import FALLBACK_RESPONSE, CoachContext
from sensory_profile.coach.usage import ChatLimitExceededError, ChatUsageTracker

__all__ = [
    "ChatUsageTracker",
    "ChatLimitExceededError",
    "CoachContext",
    "FALLBACK_RESPONSE",
]
