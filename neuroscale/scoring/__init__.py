"""Scoring engine for clinical scales."""

from neuroscale.exceptions import (
    IncompleteSubmissionError,
    InterpretationGapError,
    InvalidResponseError,
    ScoringError,
)
from neuroscale.scoring.engine import BreakdownEntry, ScoreResult, ScoringEngine
from neuroscale.scoring.responses import decode_response

__all__ = [
    "ScoringEngine",
    "ScoreResult",
    "BreakdownEntry",
    "decode_response",
    "ScoringError",
    "IncompleteSubmissionError",
    "InvalidResponseError",
    "InterpretationGapError",
]
