"""Loader for the activity library."""

import json
from pathlib import Path

import jsonschema

from sensory_profile.registry.models import ActivityLibrary
from sensory_profile.registry.questionnaires import DEFAULT_REGISTRY_PATH, SCHEMAS_PATH

ACTIVITY_LIBRARY_PATH = DEFAULT_REGISTRY_PATH / "activities" / "library.json"
ACTIVITY_SCHEMA_PATH = SCHEMAS_PATH / "activity_library.schema.json"


class ActivityLibraryError(Exception):
    """Raised when the activity library cannot be loaded."""

    pass


def load_activity_library(
    library_path: Path | str = ACTIVITY_LIBRARY_PATH,
    schema_path: Path | str | None = ACTIVITY_SCHEMA_PATH,
) -> ActivityLibrary:
    """Load the activity library, validating it against its schema.

    Args:
        library_path: Path to the library JSON file.
        schema_path: Path to the activity_library schema, or None to skip validation.

    Returns:
        The parsed ActivityLibrary.

    Raises:
        ActivityLibraryError: If the file is missing or fails validation.
    """
    library_path = Path(library_path)
    if not library_path.exists():
        raise ActivityLibraryError(f"Activity library not found: {library_path}")

    with open(library_path) as f:
        data = json.load(f)

    if schema_path:
        with open(schema_path) as f:
            schema = json.load(f)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ActivityLibraryError(
                f"Activity library validation failed: {e.message}"
            ) from e

    library = ActivityLibrary.model_validate(data)

    seen: set[str] = set()
    for activity in library.activities:
        if activity.id in seen:
            raise ActivityLibraryError(f"Duplicate activity id: {activity.id}")
        seen.add(activity.id)

    return library
