"""Per-user daily message counting for the coach chat."""

import threading
from datetime import date


class ChatLimitExceededError(Exception):
    """Raised when a user has used up their messages for the day."""

    def __init__(self, user_id: str, day: date, limit: int) -> None:
        self.user_id = user_id
        self.day = day
        self.limit = limit
        super().__init__(f"Daily chat limit of {limit} reached for {user_id} on {day.isoformat()}")


class ChatUsageTracker:
    """Counts coach messages per user per day.

    One tracker is owned by the caller (a process or a session); counts are
    not persisted.
    """

    def __init__(self, daily_limit: int) -> None:
        if daily_limit < 0:
            raise ValueError(f"daily_limit must be >= 0, got {daily_limit}")
        self.daily_limit = daily_limit
        self._counts: dict[tuple[str, date], int] = {}
        self._lock = threading.Lock()

    def used(self, user_id: str, day: date) -> int:
        with self._lock:
            return self._counts.get((user_id, day), 0)

    def remaining(self, user_id: str, day: date) -> int:
        """Messages the user may still send on ``day``."""
        return max(self.daily_limit - self.used(user_id, day), 0)

    def record(self, user_id: str, day: date) -> int:
        """Count one message and return how many remain.

        Raises:
            ChatLimitExceededError: If the limit is already reached.
        """
        with self._lock:
            used = self._counts.get((user_id, day), 0)
            if used >= self.daily_limit:
                raise ChatLimitExceededError(user_id, day, self.daily_limit)
            self._counts[(user_id, day)] = used + 1
            return self.daily_limit - used - 1
