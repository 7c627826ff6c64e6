"""Interpreter for applying per-system label bands.

Looks up the label for each system subtotal from the interpretation bands
in the questionnaire spec. One band table is used for every display surface.
"""

from pydantic import BaseModel

from sensory_profile.registry.models import QuestionnaireSpec
from sensory_profile.scoring.classifier import SensoryProfileResult


class InterpretedScore(BaseModel):
    """A system subtotal with its interpretation label."""

    system: str
    name: str
    value: int
    label: str | None
    interpretation_min: int | None = None
    interpretation_max: int | None = None
    error: str | None = None


class InterpretationResult(BaseModel):
    """Result of interpreting all system subtotals."""

    questionnaire_id: str
    questionnaire_version: str
    scores: list[InterpretedScore]

    def get_score(self, system: str) -> InterpretedScore | None:
        """Get an interpreted score by system."""
        for score in self.scores:
            if score.system == system:
                return score
        return None

    @property
    def labels(self) -> dict[str, str | None]:
        """Label per system."""
        return {score.system: score.label for score in self.scores}


class Interpreter:
    """Applies interpretation bands to system subtotals."""

    def interpret(
        self,
        result: SensoryProfileResult,
        spec: QuestionnaireSpec,
    ) -> InterpretationResult:
        """Interpret every system subtotal in a result.

        Args:
            result: The classified assessment result.
            spec: The questionnaire specification.

        Returns:
            InterpretationResult with a label for each system.
        """
        scores = [
            self._interpret_system(system, value, spec)
            for system, value in result.subtotals.items()
        ]
        return InterpretationResult(
            questionnaire_id=spec.questionnaire_id,
            questionnaire_version=spec.version,
            scores=scores,
        )

    def _interpret_system(
        self,
        system: str,
        value: int,
        spec: QuestionnaireSpec,
    ) -> InterpretedScore:
        system_spec = spec.get_system(system)
        if system_spec is None:
            return InterpretedScore(
                system=system,
                name=system,
                value=value,
                label=None,
                error=f"System not found in questionnaire spec: {system}",
            )

        for interp in system_spec.interpretations:
            if interp.min <= value <= interp.max:
                return InterpretedScore(
                    system=system,
                    name=system_spec.name,
                    value=value,
                    label=interp.label,
                    interpretation_min=interp.min,
                    interpretation_max=interp.max,
                )

        return InterpretedScore(
            system=system,
            name=system_spec.name,
            value=value,
            label=None,
            error=f"Score {value} does not match any interpretation range",
        )

    def get_label(
        self,
        system: str,
        value: int,
        spec: QuestionnaireSpec,
    ) -> str | None:
        """Get the interpretation label for a single subtotal.

        Args:
            system: The sensory system.
            value: The subtotal.
            spec: The questionnaire specification.

        Returns:
            The interpretation label, or None if not found.
        """
        return self._interpret_system(system, value, spec).label
