"""Pipeline for batch scoring of submissions.

Loads the scale catalog, scores each submission, and attaches diagnostics.
A failing submission never stops the batch: its error is recorded in the
diagnostics and processing continues.
"""

import json
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from neuroscale.config import get_schema_path, load_global_config
from neuroscale.diagnostics import DiagnosticsCollector, SubmissionDiagnostic
from neuroscale.exceptions import ScoringError
from neuroscale.registry import ScaleCatalog, ScaleNotFoundError, ScaleRegistry, default_catalog
from neuroscale.scoring import ScoreResult, ScoringEngine

# Namespace for deterministic submission ids
SUBMISSION_NAMESPACE = uuid.UUID("6f1c2f4e-8a1d-4b7e-9a53-3c0d6e2b91a7")


class PipelineConfig(BaseModel):
    """Configuration for the scoring pipeline."""

    scale_registry_path: Path | None = None
    scale_schema_path: Path | None = None
    approved_scale_types: list[str] | None = None
    deterministic_ids: bool = False


class ProcessingResult(BaseModel):
    """Result of processing a single submission."""

    submission_id: str
    result: ScoreResult | None
    diagnostics: SubmissionDiagnostic
    success: bool

    def to_record(self) -> dict[str, Any]:
        """Serialize a successful result as a flat JSON-ready record."""
        if self.result is None:
            raise ValueError(f"Submission {self.submission_id} has no score result")
        return {"submission_id": self.submission_id, **self.result.model_dump(mode="json")}


class Pipeline:
    """Scores submissions against the scale catalog.

    A submission is a dict with:
        - submission_id: str (generated if absent)
        - scale_id: str - scale id or alias
        - responses: dict - item_id -> response
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        catalog: ScaleCatalog | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Pipeline configuration. Defaults load the configured
                registry and allow-list.
            catalog: Optional pre-built catalog; overrides the registry path.
        """
        self.config = config or PipelineConfig()

        if catalog is None:
            if self.config.scale_registry_path is None:
                catalog = default_catalog()
            else:
                registry = ScaleRegistry(
                    self.config.scale_registry_path,
                    schema_path=self.config.scale_schema_path or get_schema_path(),
                )
                catalog = ScaleCatalog.from_registry(registry)
        self.catalog = catalog
        self.engine = ScoringEngine(catalog)

        if self.config.approved_scale_types is not None:
            self.approved_scale_types = list(self.config.approved_scale_types)
        else:
            self.approved_scale_types = load_global_config().approved_scale_types

    def _submission_id(self, submission: Any) -> str:
        if isinstance(submission, Mapping) and submission.get("submission_id"):
            return str(submission["submission_id"])
        if self.config.deterministic_ids:
            payload = json.dumps(submission, sort_keys=True, default=str)
            return str(uuid.uuid5(SUBMISSION_NAMESPACE, payload))
        return str(uuid.uuid4())

    def process(self, submission: Mapping[str, Any]) -> ProcessingResult:
        """Score a single submission.

        Args:
            submission: Submission dict with scale_id and responses. Anything
                that is not an object fails with MALFORMED_SUBMISSION.

        Returns:
            ProcessingResult with the score (if successful) and diagnostics.
        """
        submission_id = self._submission_id(submission)

        if not isinstance(submission, Mapping):
            collector = DiagnosticsCollector(submission_id, "")
            collector.add_error(
                stage="validation",
                code="MALFORMED_SUBMISSION",
                message=f"Submission must be an object, got {type(submission).__name__}",
            )
            return self._finish(submission_id, collector, None)

        scale_id = str(submission.get("scale_id") or "")
        responses = submission.get("responses")

        collector = DiagnosticsCollector(submission_id, scale_id)
        result: ScoreResult | None = None

        if not isinstance(responses, Mapping):
            collector.add_error(
                stage="validation",
                code="MALFORMED_SUBMISSION",
                message="Submission 'responses' must be an object of item_id -> response",
            )
            return self._finish(submission_id, collector, None)

        try:
            scale = self.catalog.get_scale(scale_id)
        except ScaleNotFoundError as e:
            collector.collect_from_error(e)
            return self._finish(submission_id, collector, None)

        collector.set_scale(scale)
        if scale.scale_id not in self.approved_scale_types:
            collector.add_warning(
                stage="lookup",
                code="UNAPPROVED_SCALE_TYPE",
                message=f"Scale {scale.scale_id} is not in the approved scale types",
            )

        try:
            result = self.engine.score_scale(scale, responses)
        except ScoringError as e:
            collector.collect_from_error(e, scale)
        else:
            collector.collect_from_result(result)

        return self._finish(submission_id, collector, result)

    def _finish(
        self,
        submission_id: str,
        collector: DiagnosticsCollector,
        result: ScoreResult | None,
    ) -> ProcessingResult:
        diagnostics = collector.finalize()
        return ProcessingResult(
            submission_id=submission_id,
            result=result,
            diagnostics=diagnostics,
            success=result is not None,
        )

    def process_batch(self, submissions: list[Mapping[str, Any]]) -> list[ProcessingResult]:
        """Score a batch of submissions."""
        return [self.process(submission) for submission in submissions]
