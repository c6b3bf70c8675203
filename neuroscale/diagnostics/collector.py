"""Collector for scoring diagnostics.

Collects errors, warnings, and quality metrics while a submission is scored
and produces a complete diagnostic report for it.
"""

from typing import Any

from neuroscale.diagnostics.models import (
    DiagnosticError,
    DiagnosticWarning,
    ProcessingStatus,
    QualityMetrics,
    Stage,
    SubmissionDiagnostic,
)
from neuroscale.exceptions import (
    IncompleteSubmissionError,
    InterpretationGapError,
    InvalidResponseError,
    ScoringError,
)
from neuroscale.registry.models import ScaleDefinition
from neuroscale.registry.scales import ScaleNotFoundError
from neuroscale.scoring.engine import ScoreResult


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


class DiagnosticsCollector:
    """Collects diagnostics for a single submission.

    Tracks errors, warnings, and quality metrics and produces a structured
    SubmissionDiagnostic.
    """

    def __init__(self, submission_id: str, scale_id: str) -> None:
        """Initialize the collector for a submission.

        Args:
            submission_id: Unique identifier for the submission.
            scale_id: The scale id requested by the submission.
        """
        self.submission_id = submission_id
        self.scale_id = scale_id
        self.scale_version: str | None = None

        self._errors: list[DiagnosticError] = []
        self._warnings: list[DiagnosticWarning] = []
        self._quality: QualityMetrics | None = None

    def add_error(
        self,
        stage: Stage,
        code: str,
        message: str,
        item_id: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add an error to the diagnostics.

        Args:
            stage: Processing stage where the error occurred.
            code: Error code (e.g., "INVALID_RESPONSE").
            message: Human-readable error message.
            item_id: Optional item ID the error relates to.
            details: Optional additional details.
        """
        self._errors.append(
            DiagnosticError(
                stage=stage,
                code=code,
                message=message,
                item_id=item_id,
                details=details,
            )
        )

    def add_warning(
        self,
        stage: Stage,
        code: str,
        message: str,
        item_id: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add a warning to the diagnostics."""
        self._warnings.append(
            DiagnosticWarning(
                stage=stage,
                code=code,
                message=message,
                item_id=item_id,
                details=details,
            )
        )

    def set_scale(self, scale: ScaleDefinition) -> None:
        """Record the resolved scale (canonical id and version)."""
        self.scale_id = scale.scale_id
        self.scale_version = scale.version

    def set_quality(
        self,
        items_total: int,
        missing_items: list[str],
        unscoreable_items: list[str],
    ) -> None:
        """Set quality metrics for the submission."""
        items_answered = items_total - len(missing_items)
        self._quality = QualityMetrics(
            completeness=items_answered / items_total if items_total > 0 else 0.0,
            items_total=items_total,
            items_answered=items_answered,
            missing_items=missing_items,
            unscoreable_items=unscoreable_items,
        )

    def collect_from_result(self, result: ScoreResult) -> None:
        """Collect diagnostics from a successful score result."""
        self.scale_id = result.scale_id
        self.scale_version = result.scale_version

        unscoreable = result.unscoreable_items
        for item_id in unscoreable:
            self.add_warning(
                stage="scoring",
                code="UNSCOREABLE_ITEM",
                message=f"Item {item_id} was not evaluable and contributed 0 points",
                item_id=item_id,
            )

        self.set_quality(
            items_total=len(result.breakdown),
            missing_items=[],
            unscoreable_items=unscoreable,
        )

    def collect_from_error(
        self,
        error: ScaleNotFoundError | ScoringError,
        scale: ScaleDefinition | None = None,
    ) -> None:
        """Collect diagnostics from a scoring failure.

        Args:
            error: The exception raised by the catalog or the engine.
            scale: The resolved scale, if lookup succeeded.
        """
        if isinstance(error, ScaleNotFoundError):
            self.add_error(
                stage="lookup",
                code="SCALE_NOT_FOUND",
                message=str(error),
                details={"scale_id": error.scale_id},
            )
        elif isinstance(error, IncompleteSubmissionError):
            self.add_error(
                stage="validation",
                code="INCOMPLETE_SUBMISSION",
                message=str(error),
                details={"missing_items": error.missing_item_ids},
            )
            if scale is not None:
                self.set_quality(
                    items_total=len(scale.items),
                    missing_items=error.missing_item_ids,
                    unscoreable_items=[],
                )
        elif isinstance(error, InvalidResponseError):
            self.add_error(
                stage="validation",
                code="INVALID_RESPONSE",
                message=str(error),
                item_id=error.item_id,
                details={"value": _json_safe(error.value)},
            )
        elif isinstance(error, InterpretationGapError):
            self.add_error(
                stage="interpretation",
                code="INTERPRETATION_GAP",
                message=str(error),
                details={"score": error.score, "matched_labels": error.matched_labels},
            )
        else:
            self.add_error(stage="scoring", code="SCORING_ERROR", message=str(error))

    def finalize(self) -> SubmissionDiagnostic:
        """Finalize and return the diagnostic report.

        Status is FAILED with any error, PARTIAL with only warnings, and
        SUCCESS otherwise.
        """
        if self._errors:
            status = ProcessingStatus.FAILED
        elif self._warnings:
            status = ProcessingStatus.PARTIAL
        else:
            status = ProcessingStatus.SUCCESS

        return SubmissionDiagnostic(
            submission_id=self.submission_id,
            scale_id=self.scale_id,
            scale_version=self.scale_version,
            status=status,
            errors=self._errors,
            warnings=self._warnings,
            quality=self._quality,
        )
