"""Interpretation band coverage check.

Every scale in the catalog must cover each integer score from 0 to the
scale's maximum possible score with exactly one interpretation band.
"""

from pydantic import BaseModel

from neuroscale.registry.models import ScaleDefinition


class CoverageReport(BaseModel):
    """Result of checking interpretation band coverage for a scale."""

    scale_id: str
    max_possible_score: int
    gaps: list[int]
    overlaps: list[int]

    @property
    def valid(self) -> bool:
        return not self.gaps and not self.overlaps

    @property
    def errors(self) -> list[str]:
        """Human-readable description of coverage problems."""
        errors: list[str] = []
        if self.gaps:
            errors.append(
                f"Scores not covered by any band: {_format_scores(self.gaps)}"
            )
        if self.overlaps:
            errors.append(
                f"Scores covered by more than one band: {_format_scores(self.overlaps)}"
            )
        return errors


def _format_scores(scores: list[int]) -> str:
    """Collapse a sorted score list into ranges (1, 2, 3, 7 -> 1-3, 7)."""
    ranges: list[str] = []
    start = prev = scores[0]
    for score in scores[1:]:
        if score == prev + 1:
            prev = score
            continue
        ranges.append(f"{start}-{prev}" if start != prev else str(start))
        start = prev = score
    ranges.append(f"{start}-{prev}" if start != prev else str(start))
    return ", ".join(ranges)


def check_band_coverage(scale: ScaleDefinition) -> CoverageReport:
    """Check that interpretation bands cover [0, max_possible_score] exactly once.

    Args:
        scale: The scale specification to check.

    Returns:
        CoverageReport listing uncovered and doubly-covered scores.
    """
    max_score = scale.max_possible_score
    gaps: list[int] = []
    overlaps: list[int] = []

    for score in range(max_score + 1):
        matches = sum(1 for band in scale.interpretation_bands if band.contains(score))
        if matches == 0:
            gaps.append(score)
        elif matches > 1:
            overlaps.append(score)

    return CoverageReport(
        scale_id=scale.scale_id,
        max_possible_score=max_score,
        gaps=gaps,
        overlaps=overlaps,
    )
