"""Countdown timer for timed activities.

The timer holds state only; the caller drives it by calling tick() once per
elapsed second (or with a larger step).
"""

from enum import Enum

MIN_MINUTES = 1
MAX_MINUTES = 120
PRESET_MINUTES = (5, 10, 15, 20, 30, 45, 60)


class TimerStateError(Exception):
    """Raised for a transition the timer's current state does not allow."""

    pass


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


class CountdownTimer:
    """Countdown for one task, in whole seconds."""

    def __init__(self) -> None:
        self.state = TimerState.IDLE
        self.task_name: str | None = None
        self.total_seconds = 0
        self.remaining_seconds = 0

    @property
    def is_running(self) -> bool:
        return self.state == TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state == TimerState.PAUSED

    @property
    def is_complete(self) -> bool:
        return self.state == TimerState.COMPLETE

    def start(self, minutes: int, task_name: str | None = None) -> None:
        """Start a countdown of ``minutes`` minutes.

        Raises:
            ValueError: If minutes is not a whole number from 1 to 120.
            TimerStateError: If a countdown is already running or paused.
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise ValueError(f"Minutes must be a whole number, got {minutes!r}")
        if not MIN_MINUTES <= minutes <= MAX_MINUTES:
            raise ValueError(
                f"Minutes must be between {MIN_MINUTES} and {MAX_MINUTES}, got {minutes}"
            )
        if self.state in (TimerState.RUNNING, TimerState.PAUSED):
            raise TimerStateError(f"Cannot start a timer that is {self.state.value}")

        self.task_name = task_name
        self.total_seconds = minutes * 60
        self.remaining_seconds = self.total_seconds
        self.state = TimerState.RUNNING

    def pause(self) -> None:
        if self.state != TimerState.RUNNING:
            raise TimerStateError(f"Cannot pause a timer that is {self.state.value}")
        self.state = TimerState.PAUSED

    def resume(self) -> None:
        if self.state != TimerState.PAUSED:
            raise TimerStateError(f"Cannot resume a timer that is {self.state.value}")
        self.state = TimerState.RUNNING

    def restart(self) -> None:
        """Run the same countdown again from the full duration."""
        if self.state == TimerState.IDLE:
            raise TimerStateError("Cannot restart a timer that was never started")
        self.remaining_seconds = self.total_seconds
        self.state = TimerState.RUNNING

    def reset(self) -> None:
        """Stop the countdown and clear it."""
        self.state = TimerState.IDLE
        self.task_name = None
        self.total_seconds = 0
        self.remaining_seconds = 0

    def tick(self, seconds: int = 1) -> int:
        """Advance the countdown and return the seconds remaining.

        Does nothing unless the timer is running. Reaching zero completes it.
        """
        if seconds < 0:
            raise ValueError(f"seconds must be >= 0, got {seconds}")
        if self.state != TimerState.RUNNING:
            return self.remaining_seconds

        self.remaining_seconds = max(self.remaining_seconds - seconds, 0)
        if self.remaining_seconds == 0:
            self.state = TimerState.COMPLETE
        return self.remaining_seconds

    @property
    def remaining_display(self) -> str:
        """Remaining time as MM:SS."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def progress(self) -> float:
        """Elapsed fraction of the countdown, 0.0 to 1.0."""
        if self.total_seconds == 0:
            return 0.0
        return (self.total_seconds - self.remaining_seconds) / self.total_seconds
