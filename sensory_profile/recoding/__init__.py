"""Recoding layer for converting raw answers to scores."""

from sensory_profile.recoding.recoder import Recoder, RecodingError, RecodingResult

__all__ = [
    "Recoder",
    "RecodingError",
    "RecodingResult",
]
