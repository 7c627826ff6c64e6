"""Assessment context handed to the coach chat backend."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from sensory_profile.builders.record import AssessmentRecord, to_utc_iso
from sensory_profile.interpretation.profiles import SYSTEM_DISPLAY_NAMES

FALLBACK_RESPONSE = """I'm having trouble connecting right now, but here are some general sensory strategies that might help:

1. **Deep pressure activities** - Try bear hugs, weighted blankets, or gentle compressions
2. **Calming sensory input** - Soft music, dim lighting, or a quiet space
3. **Movement breaks** - Jumping jacks, wall pushes, or spinning in a chair
4. **Breathing exercises** - Deep belly breaths or blowing bubbles

Would you like to try asking your question again?"""


class CoachContext(BaseModel):
    """What the coach knows about a child."""

    child_name: str | None = None
    child_age: str | None = None
    profile: str | None = None
    completed_at: str | None = None
    subtotals: dict[str, int] | None = None
    system_labels: dict[str, str | None] | None = None

    @field_validator("completed_at", mode="before")
    @classmethod
    def validate_completed_at(cls, value):
        return None if value is None else to_utc_iso(value)

    @classmethod
    def from_record(
        cls,
        record: AssessmentRecord | None,
        child_name: str | None = None,
        child_age: str | None = None,
    ) -> "CoachContext":
        """Build the context from the child's latest record, if there is one."""
        if record is None:
            return cls(child_name=child_name, child_age=child_age)
        return cls(
            child_name=child_name or record.child_name,
            child_age=child_age,
            profile=record.results.profile,
            completed_at=record.completed_at,
            subtotals=record.results.subtotals,
            system_labels=record.system_labels,
        )

    def render(self) -> str:
        """Render the context block for the coach system prompt."""
        completed = "recently"
        if self.completed_at:
            completed = datetime.fromisoformat(self.completed_at).date().isoformat()

        lines = [
            f"- Child's name: {self.child_name or 'the child'}",
            f"- Child's age: {self.child_age or 'not specified'}",
            f"- Sensory profile type: {self.profile or 'mixed sensory needs'}",
            f"- Assessment completed: {completed}",
        ]
        if self.subtotals:
            lines.append("- Sensory system scores:")
            for system, value in self.subtotals.items():
                name = SYSTEM_DISPLAY_NAMES.get(system, system)
                label = (self.system_labels or {}).get(system)
                suffix = f" ({label})" if label else ""
                lines.append(f"  - {name}: {value}/15{suffix}")
        else:
            lines.append("- Assessment data not yet available")
        return "\n".join(lines)
