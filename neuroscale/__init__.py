"""neuroscale: Scoring engine for neurological clinical scales."""

__version__ = "0.1.0"

# These imports must come after __version__ to avoid circular import
from neuroscale.callable import CallableResult, execute
from neuroscale.registry import ScaleCatalog, default_catalog
from neuroscale.rendering import render_text
from neuroscale.scoring import ScoreResult, ScoringEngine
from neuroscale.suggestions import suggest_scales

__all__ = [
    "__version__",
    "CallableResult",
    "execute",
    "ScaleCatalog",
    "default_catalog",
    "ScoringEngine",
    "ScoreResult",
    "render_text",
    "suggest_scales",
]
