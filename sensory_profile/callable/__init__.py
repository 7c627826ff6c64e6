"""Callable protocol for sensory_profile."""

from sensory_profile.callable.execute import execute
from sensory_profile.callable.result import CallableResult

__all__ = ["CallableResult", "execute"]
