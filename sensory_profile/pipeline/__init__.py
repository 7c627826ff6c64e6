"""Pipeline for assessment processing."""

from sensory_profile.pipeline.orchestrator import Pipeline, PipelineConfig, ProcessingResult

__all__ = [
    "Pipeline",
    "PipelineConfig",
    "ProcessingResult",
]
