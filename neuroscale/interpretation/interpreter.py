"""Interpreter for applying score interpretation bands.

Looks up the severity band of a total score from the scale spec.
"""

from neuroscale.exceptions import InterpretationGapError
from neuroscale.registry.models import InterpretationBand, ScaleDefinition


class Interpreter:
    """Applies interpretation bands to total scores.

    Band coverage is verified when a scale is loaded, so a failed lookup here
    means the catalog was built from an unchecked definition. It is reported
    as an InterpretationGapError instead of an empty label.
    """

    def resolve(self, scale: ScaleDefinition, score: int) -> InterpretationBand:
        """Find the single band containing a score.

        Args:
            scale: The scale specification.
            score: The total score.

        Returns:
            The matching InterpretationBand.

        Raises:
            InterpretationGapError: If no band, or more than one band, matches.
        """
        matches = [band for band in scale.interpretation_bands if band.contains(score)]
        if len(matches) != 1:
            raise InterpretationGapError(
                scale.scale_id, score, [band.label for band in matches]
            )
        return matches[0]

    def get_label(self, scale: ScaleDefinition, score: int) -> str | None:
        """Get the interpretation label for a score, or None if unresolved."""
        try:
            return self.resolve(scale, score).label
        except InterpretationGapError:
            return None
