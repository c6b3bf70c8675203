"""Diagnostics collection for the scoring pipeline.

Tracks errors, warnings, and quality metrics for every scored submission.
"""

from neuroscale.diagnostics.collector import DiagnosticsCollector
from neuroscale.diagnostics.models import (
    DiagnosticError,
    DiagnosticWarning,
    ProcessingStatus,
    QualityMetrics,
    SubmissionDiagnostic,
)

__all__ = [
    "DiagnosticsCollector",
    "DiagnosticError",
    "DiagnosticWarning",
    "ProcessingStatus",
    "QualityMetrics",
    "SubmissionDiagnostic",
]
