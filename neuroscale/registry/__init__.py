"""Registry modules for loading scale specifications."""

from neuroscale.registry.catalog import ScaleCatalog, default_catalog
from neuroscale.registry.coverage import CoverageReport, check_band_coverage
from neuroscale.registry.models import (
    UNSCOREABLE,
    UNSCOREABLE_DISPLAY,
    InterpretationBand,
    ItemDefinition,
    ItemOption,
    ScaleDefinition,
    SuggestionPattern,
)
from neuroscale.registry.scales import (
    ScaleNotFoundError,
    ScaleRegistry,
    ScaleValidationError,
    load_spec,
)

__all__ = [
    "ScaleRegistry",
    "ScaleCatalog",
    "default_catalog",
    "load_spec",
    "check_band_coverage",
    "CoverageReport",
    "ScaleNotFoundError",
    "ScaleValidationError",
    "ScaleDefinition",
    "ItemDefinition",
    "ItemOption",
    "InterpretationBand",
    "SuggestionPattern",
    "UNSCOREABLE",
    "UNSCOREABLE_DISPLAY",
]
