"""Parent-facing descriptions for each profile label."""

from pydantic import BaseModel

from sensory_profile.registry.models import DEFAULT_CHILD_NAME
from sensory_profile.scoring.classifier import (
    MIXED_PROFILE,
    MIXED_TYPICAL,
    SENSORY_AVOIDING,
    SENSORY_SEEKING,
)

SYSTEM_DISPLAY_NAMES = {
    "tactile": "Touch",
    "auditory": "Hearing",
    "visual": "Sight",
    "vestibular": "Movement",
    "proprioceptive": "Body Awareness",
}


class ProfileDescription(BaseModel):
    """Title, description and recommendations shown with a result."""

    title: str
    description: str
    recommendations: list[str]


_DESCRIPTIONS: dict[str, tuple[str, list[str]]] = {
    SENSORY_SEEKING: (
        "{child_name} tends to seek out sensory experiences and may need more intense "
        "sensory input to feel regulated.",
        [
            "Provide heavy work activities (pushing, pulling, carrying)",
            "Offer movement breaks throughout the day",
            "Include textured materials in play",
            "Use firm pressure for comfort (weighted blankets, tight hugs)",
        ],
    ),
    SENSORY_AVOIDING: (
        "{child_name} tends to be sensitive to sensory input and may become "
        "overwhelmed easily.",
        [
            "Create calm, quiet spaces for breaks",
            "Use gentle, predictable touch",
            "Provide advance warning for sensory experiences",
            "Offer noise-canceling headphones in loud environments",
        ],
    ),
    MIXED_PROFILE: (
        "{child_name} shows both seeking and avoiding patterns across different "
        "sensory systems.",
        [
            "Tailor activities to specific sensory needs",
            "Provide choices in sensory experiences",
            "Monitor for signs of overwhelm or under-stimulation",
            "Create a flexible sensory toolkit",
        ],
    ),
    MIXED_TYPICAL: (
        "{child_name} shows typical sensory responses with some variation across "
        "different situations.",
        [
            "Continue providing varied sensory experiences",
            "Watch for changes in sensory needs over time",
            "Maintain a balanced approach to sensory activities",
            "Be responsive to daily variations in sensory tolerance",
        ],
    ),
}


def describe_profile(
    profile: str,
    child_name: str | None,
    placeholder: str = DEFAULT_CHILD_NAME,
) -> ProfileDescription:
    """Build the description for a profile label.

    Unknown labels get the Mixed/Typical description.
    """
    title = profile if profile in _DESCRIPTIONS else MIXED_TYPICAL
    template, recommendations = _DESCRIPTIONS[title]
    name = child_name.strip() if child_name else ""
    return ProfileDescription(
        title=title,
        description=template.format(child_name=name or placeholder),
        recommendations=list(recommendations),
    )
