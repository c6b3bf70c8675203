"""Data models for scoring diagnostics.

Tracks processing status, errors, warnings, and quality metrics for each
submission scored by the pipeline.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

Stage = Literal["lookup", "validation", "scoring", "interpretation"]


class ProcessingStatus(str, Enum):
    """Status of submission processing."""

    SUCCESS = "success"  # Scored, every item evaluable
    PARTIAL = "partial"  # Scored, with warnings (e.g. unscoreable items)
    FAILED = "failed"  # Not scored


class DiagnosticError(BaseModel):
    """An error that prevented scoring."""

    stage: Stage
    code: str  # Error code like "INCOMPLETE_SUBMISSION"
    message: str
    item_id: str | None = None
    details: dict | None = None


class DiagnosticWarning(BaseModel):
    """A warning raised while scoring."""

    stage: Stage
    code: str  # Warning code like "UNSCOREABLE_ITEM"
    message: str
    item_id: str | None = None
    details: dict | None = None


class QualityMetrics(BaseModel):
    """Quality metrics for a scored submission."""

    completeness: float = Field(ge=0.0, le=1.0)  # Fraction of items answered
    items_total: int = 0
    items_answered: int = 0
    missing_items: list[str] = Field(default_factory=list)
    unscoreable_items: list[str] = Field(default_factory=list)


class SubmissionDiagnostic(BaseModel):
    """Diagnostics for a single scored submission."""

    submission_id: str
    scale_id: str
    scale_version: str | None = None
    status: ProcessingStatus
    errors: list[DiagnosticError] = Field(default_factory=list)
    warnings: list[DiagnosticWarning] = Field(default_factory=list)
    quality: QualityMetrics | None = None
