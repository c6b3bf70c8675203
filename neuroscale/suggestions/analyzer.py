"""Keyword-based scale suggestions from clinical free text.

Each scale spec may carry a suggestion pattern (keywords, reason and base
confidence). The analyzer matches normalized keywords as substrings of the
normalized text and ranks the scales by confidence.
"""

import re
import unicodedata

from pydantic import BaseModel

from neuroscale.registry.catalog import ScaleCatalog, default_catalog
from neuroscale.registry.models import SuggestionPattern

MIN_TEXT_LENGTH = 10
MIN_CONFIDENCE = 0.1
DEFAULT_LIMIT = 5

# Words counted to saturate the text length factor
FULL_CONTEXT_WORDS = 50
MULTI_MATCH_BOOST = 1.3
IMPORTANT_KEYWORD_BOOST = 1.5
IMPORTANT_KEYWORDS: tuple[str, ...] = (
    "temblor",
    "hemiparesia",
    "disartria",
    "glasgow",
    "ictus",
    "debilidad",
)


class ScaleSuggestion(BaseModel):
    """A scale suggested for a clinical text."""

    scale_id: str
    confidence: float
    keywords: list[str]
    reason: str


def normalize_text(text: str) -> str:
    """Lowercase, strip accents, and collapse punctuation and whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    stripped = re.sub(r"[^\w\s]", " ", stripped)
    return re.sub(r"\s+", " ", stripped).strip()


def match_keywords(normalized_text: str, pattern: SuggestionPattern) -> list[str]:
    """List the pattern keywords found in an already normalized text."""
    return [kw for kw in pattern.keywords if normalize_text(kw) in normalized_text]


def compute_confidence(normalized_text: str, pattern: SuggestionPattern) -> float:
    """Compute the confidence that a pattern applies to a text.

    confidence = base * matched_ratio * (0.5 + 0.5 * length_factor), boosted
    when several keywords match or an important keyword matches, capped at 1.
    """
    matched = match_keywords(normalized_text, pattern)
    if not matched:
        return 0.0

    word_count = len(normalized_text.split(" "))
    keyword_ratio = len(matched) / len(pattern.keywords)
    length_factor = min(word_count / FULL_CONTEXT_WORDS, 1.0)

    confidence = pattern.base_confidence * keyword_ratio * (0.5 + 0.5 * length_factor)

    if len(matched) >= 2:
        confidence *= MULTI_MATCH_BOOST

    if any(imp in normalize_text(kw) for kw in matched for imp in IMPORTANT_KEYWORDS):
        confidence *= IMPORTANT_KEYWORD_BOOST

    return min(confidence, 1.0)


def suggest_scales(
    text: str,
    catalog: ScaleCatalog | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[ScaleSuggestion]:
    """Suggest scales relevant to a clinical text.

    Args:
        text: Free clinical text (e.g., an evolution note).
        catalog: Catalog to draw suggestion patterns from.
        limit: Maximum number of suggestions.

    Returns:
        Suggestions sorted by descending confidence. Empty for texts shorter
        than MIN_TEXT_LENGTH characters.
    """
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        return []

    catalog = catalog if catalog is not None else default_catalog()
    normalized = normalize_text(text)
    suggestions: list[ScaleSuggestion] = []

    for scale in catalog:
        pattern = scale.suggestion
        if pattern is None:
            continue

        confidence = compute_confidence(normalized, pattern)
        if confidence < MIN_CONFIDENCE:
            continue

        suggestions.append(
            ScaleSuggestion(
                scale_id=scale.scale_id,
                confidence=confidence,
                keywords=match_keywords(normalized, pattern),
                reason=pattern.reason,
            )
        )

    suggestions.sort(key=lambda s: s.confidence, reverse=True)
    return suggestions[:limit]
