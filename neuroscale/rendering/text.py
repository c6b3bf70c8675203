"""Plain-text rendering of a ScoreResult for clinical notes.

The block layout is fixed: scale title, total score with interpretation,
then one line per item in catalog order.
"""

from neuroscale.scoring.engine import ScoreResult


def render_details(result: ScoreResult) -> list[str]:
    """Render the itemized breakdown lines."""
    return [f"  • {entry.item_label}: {entry.response_display}" for entry in result.breakdown]


def render_text(result: ScoreResult) -> str:
    """Render a result as the text block inserted into clinical notes.

    Example:
        ESCALA NIHSS (National Institutes of Health Stroke Scale):
        - Puntuación total: 0 - Sin síntomas de ictus.
        - Desglose por ítems:
          • Nivel de consciencia: 0
    """
    lines = [
        f"ESCALA {result.scale_name}:",
        f"- Puntuación total: {result.total_score} - {result.interpretation}",
        "- Desglose por ítems:",
        *render_details(result),
    ]
    return "".join(f"{line}\n" for line in lines)
