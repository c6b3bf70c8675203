"""Immutable catalog of the scales available for scoring.

The catalog is built once from a registry snapshot and never mutated
afterwards, so it can be shared freely between concurrent scoring calls.
"""

from collections.abc import Iterable
from functools import lru_cache
from types import MappingProxyType

from neuroscale.config import get_scale_registry_path, get_schema_path
from neuroscale.registry.coverage import check_band_coverage
from neuroscale.registry.models import ScaleDefinition
from neuroscale.registry.scales import ScaleNotFoundError, ScaleRegistry, ScaleValidationError


class ScaleCatalog:
    """Read-only lookup of scale definitions by id or alias."""

    def __init__(self, scales: Iterable[ScaleDefinition]) -> None:
        """Build the catalog.

        Args:
            scales: Scale definitions to register, in listing order.

        Raises:
            ScaleValidationError: If a scale's bands do not cover its score
                domain, or two scales share an id or alias.
        """
        by_id: dict[str, ScaleDefinition] = {}
        by_key: dict[str, str] = {}

        for scale in scales:
            report = check_band_coverage(scale)
            if not report.valid:
                raise ScaleValidationError(
                    f"Interpretation bands of {scale.scale_id} are invalid: "
                    + "; ".join(report.errors)
                )

            if scale.scale_id in by_id:
                raise ScaleValidationError(f"Duplicate scale id: {scale.scale_id}")
            by_id[scale.scale_id] = scale

            for key in (scale.scale_id, *scale.aliases):
                normalized = key.casefold()
                owner = by_key.get(normalized)
                if owner is not None and owner != scale.scale_id:
                    raise ScaleValidationError(
                        f"Key '{key}' of {scale.scale_id} already used by {owner}"
                    )
                by_key[normalized] = scale.scale_id

        self._scales = MappingProxyType(by_id)
        self._keys = MappingProxyType(by_key)

    @classmethod
    def from_registry(cls, registry: ScaleRegistry) -> "ScaleCatalog":
        """Build a catalog from the latest version of every registered scale."""
        return cls(registry.get_latest(scale_id) for scale_id in registry.list_scales())

    def get_scale(self, scale_id: str) -> ScaleDefinition:
        """Get a scale by canonical id or alias (case-insensitive).

        Raises:
            ScaleNotFoundError: If no scale matches.
        """
        canonical = self._keys.get(scale_id.casefold())
        if canonical is None:
            raise ScaleNotFoundError(scale_id)
        return self._scales[canonical]

    def list_scales(self) -> tuple[str, ...]:
        """List canonical ids of all registered scales."""
        return tuple(self._scales)

    def has_scale(self, scale_id: str) -> bool:
        return scale_id.casefold() in self._keys

    def unapproved(self, approved: Iterable[str]) -> list[str]:
        """List catalog ids missing from an external allow-list of scale types."""
        allowed = set(approved)
        return [scale_id for scale_id in self._scales if scale_id not in allowed]

    def __iter__(self):
        return iter(self._scales.values())

    def __len__(self) -> int:
        return len(self._scales)


@lru_cache(maxsize=1)
def default_catalog() -> ScaleCatalog:
    """Get the process-wide catalog loaded from the configured registry."""
    registry = ScaleRegistry(get_scale_registry_path(), schema_path=get_schema_path())
    return ScaleCatalog.from_registry(registry)
