"""Builders for assessment record output structures."""

from sensory_profile.builders.record import (
    AssessmentRecord,
    AssessmentRecordBuilder,
    Telemetry,
    to_utc_iso,
    utc_now,
)

__all__ = [
    "AssessmentRecord",
    "AssessmentRecordBuilder",
    "Telemetry",
    "to_utc_iso",
    "utc_now",
]
