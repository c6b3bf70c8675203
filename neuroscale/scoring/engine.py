"""Scoring engine for computing clinical scale scores.

The engine is generic - it reads all scoring rules from the scale spec.
No per-scale code is allowed.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from neuroscale.exceptions import IncompleteSubmissionError, InvalidResponseError
from neuroscale.interpretation.interpreter import Interpreter
from neuroscale.registry.catalog import ScaleCatalog, default_catalog
from neuroscale.registry.models import (
    UNSCOREABLE,
    UNSCOREABLE_DISPLAY,
    ResponseValue,
    ScaleDefinition,
)
from neuroscale.scoring.responses import decode_response
from neuroscale.validation.checks import find_missing_items, find_unknown_items


class BreakdownEntry(BaseModel):
    """Scored response of a single item."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    item_label: str
    response: ResponseValue
    points: int
    response_display: str


class ScoreResult(BaseModel):
    """Result of scoring a complete response set."""

    model_config = ConfigDict(frozen=True)

    scale_id: str
    scale_version: str
    scale_name: str
    total_score: int
    max_possible_score: int
    interpretation: str
    severity: str | None = None
    breakdown: tuple[BreakdownEntry, ...]

    @property
    def unscoreable_items(self) -> list[str]:
        """Item ids answered with the unscoreable sentinel."""
        return [entry.item_id for entry in self.breakdown if entry.response == UNSCOREABLE]

    def get_entry(self, item_id: str) -> BreakdownEntry | None:
        """Get a breakdown entry by item ID."""
        for entry in self.breakdown:
            if entry.item_id == item_id:
                return entry
        return None


class ScoringEngine:
    """Generic scoring engine that turns a response set into a ScoreResult.

    The engine reads all scoring rules from the scale specification:
    - Which items exist and in which order
    - Which response values each item allows, and their points
    - Which responses are unscoreable (contribute 0 points)
    - The interpretation bands of the total score

    Scoring is a pure function of the scale and the responses; the engine
    keeps no state between calls and may be shared between threads.
    """

    def __init__(
        self,
        catalog: ScaleCatalog | None = None,
        interpreter: Interpreter | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            catalog: Scale catalog to resolve ids against. Defaults to the
                process-wide catalog.
            interpreter: Optional interpreter for severity bands.
        """
        self.catalog = catalog if catalog is not None else default_catalog()
        self.interpreter = interpreter or Interpreter()

    def score(self, scale_id: str, responses: Mapping[str, Any]) -> ScoreResult:
        """Score a response set for a registered scale.

        Args:
            scale_id: Scale id or alias (e.g., 'NIHSS').
            responses: Mapping of item_id to the selected response.

        Returns:
            ScoreResult with total, interpretation and ordered breakdown.

        Raises:
            ScaleNotFoundError: If the scale is not in the catalog.
            IncompleteSubmissionError: If any item lacks a response.
            InvalidResponseError: If a response is not allowed for its item.
            InterpretationGapError: If the total matches no single band.
        """
        scale = self.catalog.get_scale(scale_id)
        return self.score_scale(scale, responses)

    def score_scale(
        self,
        scale: ScaleDefinition,
        responses: Mapping[str, Any],
    ) -> ScoreResult:
        """Score a response set against a scale definition."""
        missing = find_missing_items(scale, responses)
        if missing:
            raise IncompleteSubmissionError(scale.scale_id, missing)

        unknown = find_unknown_items(scale, responses)
        if unknown:
            item_id = unknown[0]
            raise InvalidResponseError(scale.scale_id, item_id, responses[item_id])

        total = 0
        breakdown: list[BreakdownEntry] = []
        for item in scale.items:
            value = decode_response(scale.scale_id, item, responses[item.item_id])
            if value == UNSCOREABLE:
                points = 0
                display = UNSCOREABLE_DISPLAY
            else:
                points = value
                display = str(value)
            total += points
            breakdown.append(
                BreakdownEntry(
                    item_id=item.item_id,
                    item_label=item.label,
                    response=value,
                    points=points,
                    response_display=display,
                )
            )

        band = self.interpreter.resolve(scale, total)

        return ScoreResult(
            scale_id=scale.scale_id,
            scale_version=scale.version,
            scale_name=scale.name,
            total_score=total,
            max_possible_score=scale.max_possible_score,
            interpretation=band.label,
            severity=band.severity,
            breakdown=tuple(breakdown),
        )
