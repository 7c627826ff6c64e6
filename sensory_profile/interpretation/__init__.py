"""Interpretation layer for system labels and profile descriptions."""

from sensory_profile.interpretation.interpreter import (
    InterpretationResult,
    InterpretedScore,
    Interpreter,
)
from sensory_profile.interpretation.profiles import (
    SYSTEM_DISPLAY_NAMES,
    ProfileDescription,
    describe_profile,
)

__all__ = [
    "Interpreter",
    "InterpretedScore",
    "InterpretationResult",
    "ProfileDescription",
    "SYSTEM_DISPLAY_NAMES",
    "describe_profile",
]
