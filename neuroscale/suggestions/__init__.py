"""Scale suggestions from clinical free text."""

from neuroscale.suggestions.analyzer import ScaleSuggestion, normalize_text, suggest_scales

__all__ = [
    "ScaleSuggestion",
    "normalize_text",
    "suggest_scales",
]
