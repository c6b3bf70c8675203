"""Pipeline for batch scoring."""

from neuroscale.pipeline.orchestrator import Pipeline, PipelineConfig, ProcessingResult

__all__ = [
    "Pipeline",
    "PipelineConfig",
    "ProcessingResult",
]
