"""Execute interface for the sensory_profile callable protocol.

Provides the in-process execute() function for hosts that embed the
scoring engine without going through the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sensory_profile.callable.result import CallableResult
from sensory_profile.config import get_registry_path
from sensory_profile.pipeline import Pipeline, PipelineConfig

logger = logging.getLogger(__name__)


def execute(params: dict[str, Any]) -> dict[str, Any]:
    """Score assessment submissions into assessment records.

    Args:
        params: Dictionary containing:
            - items: dict | list[dict] - One submission or a list of them.
              Each submission holds ``user_id`` and ``answers`` and optionally
              ``completed_at`` and ``child_name``.
            - config: dict - Optional configuration overrides:
                - registry_path: str - Override the questionnaire registry path
                - questionnaire_id: str - Questionnaire to score against
                - questionnaire_version: str - Specific version (default: latest)
                - deterministic_ids: bool - Use deterministic IDs for testing

    Returns:
        CallableResult dict with:
            - schema_version: "1.0"
            - items: list[dict] - Assessment records, JSON-ready
            - stats: dict - Processing statistics
            - errors: list[dict] - Rejected submissions, when there are any

    Raises:
        ValueError: If required parameters are missing or invalid.
        QuestionnaireNotFoundError: If the questionnaire is not in the registry.
    """
    items = params.get("items")
    if items is None:
        raise ValueError("'items' is required in params")

    if isinstance(items, dict):
        submissions = [items]
    elif isinstance(items, list) and all(isinstance(i, dict) for i in items):
        submissions = items
    else:
        raise ValueError("'items' must be a submission dict or list of submissions")

    config = params.get("config", {})
    pipeline_kwargs: dict[str, Any] = {
        "registry_path": Path(config.get("registry_path", get_registry_path())),
        "deterministic_ids": config.get("deterministic_ids", False),
    }
    if config.get("questionnaire_id"):
        pipeline_kwargs["questionnaire_id"] = config["questionnaire_id"]
    if config.get("questionnaire_version"):
        pipeline_kwargs["questionnaire_version"] = config["questionnaire_version"]

    pipeline = Pipeline(PipelineConfig(**pipeline_kwargs))
    results = pipeline.process_batch(submissions)
    logger.info(
        "Scored %d of %d submissions against %s",
        sum(r.success for r in results),
        len(results),
        pipeline.spec.ref,
    )
    return CallableResult.from_processing_results(results).to_dict()
