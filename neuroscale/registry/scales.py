"""Scale registry for loading and caching scale specifications."""

import json
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import ValidationError

from neuroscale.registry.coverage import check_band_coverage
from neuroscale.registry.models import ScaleDefinition


class ScaleNotFoundError(Exception):
    """Raised when a scale specification is not found."""

    def __init__(self, scale_id: str, detail: str | None = None) -> None:
        self.scale_id = scale_id
        message = f"Scale not found: {scale_id}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ScaleValidationError(Exception):
    """Raised when a scale specification fails validation."""

    pass


def load_spec(path: Path | str, schema: dict[str, Any] | None = None) -> ScaleDefinition:
    """Load and fully validate a single scale spec file.

    Validation runs the JSON Schema (if given), the pydantic model, and the
    interpretation band coverage check, in that order.

    Args:
        path: Path to the scale spec JSON file.
        schema: Optional parsed scale_spec JSON Schema.

    Returns:
        The validated ScaleDefinition.

    Raises:
        ScaleValidationError: If any validation step fails.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ScaleValidationError(f"Invalid JSON in {path}: {e}") from e

    if schema:
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ScaleValidationError(
                f"Scale spec validation failed for {path}: {e.message}"
            ) from e

    try:
        spec = ScaleDefinition.model_validate(data)
    except ValidationError as e:
        raise ScaleValidationError(f"Scale spec model invalid for {path}: {e}") from e

    report = check_band_coverage(spec)
    if not report.valid:
        raise ScaleValidationError(
            f"Interpretation bands of {spec.scale_id}@{spec.version} do not cover "
            f"[0, {report.max_possible_score}] exactly once: " + "; ".join(report.errors)
        )
    return spec


class ScaleRegistry:
    """Registry for loading and caching scale specifications.

    Loads scale specs from a directory structure:
        <registry_path>/scales/<scale_id>/<version>.json

    Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
    """

    def __init__(
        self,
        registry_path: Path | str,
        schema_path: Path | str | None = None,
    ) -> None:
        """Initialize the scale registry.

        Args:
            registry_path: Path to the scale registry directory.
            schema_path: Optional path to the scale_spec schema for validation.
        """
        self.registry_path = Path(registry_path)
        self.scales_path = self.registry_path / "scales"
        self._cache: dict[tuple[str, str], ScaleDefinition] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path, encoding="utf-8") as f:
                self._schema = json.load(f)

    def _version_to_filename(self, version: str) -> str:
        """Convert version string to filename (1.0.0 -> 1-0-0.json)."""
        return version.replace(".", "-") + ".json"

    def _get_spec_path(self, scale_id: str, version: str) -> Path:
        return self.scales_path / scale_id / self._version_to_filename(version)

    def get(self, scale_id: str, version: str) -> ScaleDefinition:
        """Get a scale specification by ID and version.

        Args:
            scale_id: The scale identifier (e.g., 'NIHSS').
            version: The version string (e.g., '1.0.0').

        Returns:
            The loaded ScaleDefinition.

        Raises:
            ScaleNotFoundError: If the scale spec file doesn't exist.
            ScaleValidationError: If the spec fails validation.
        """
        cache_key = (scale_id, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        spec_path = self._get_spec_path(scale_id, version)
        if not spec_path.exists():
            raise ScaleNotFoundError(
                scale_id, detail=f"version {version} expected at {spec_path}"
            )

        spec = load_spec(spec_path, self._schema)
        if spec.scale_id != scale_id or spec.version != version:
            raise ScaleValidationError(
                f"Spec at {spec_path} declares {spec.scale_id}@{spec.version}, "
                f"expected {scale_id}@{version}"
            )

        self._cache[cache_key] = spec
        return spec

    def list_scales(self) -> list[str]:
        """List all available scale IDs."""
        if not self.scales_path.exists():
            return []
        return sorted(d.name for d in self.scales_path.iterdir() if d.is_dir())

    def list_versions(self, scale_id: str) -> list[str]:
        """List all available versions for a scale."""
        scale_path = self.scales_path / scale_id
        if not scale_path.exists():
            return []
        versions = []
        for f in scale_path.glob("*.json"):
            # 1-0-0.json -> 1.0.0
            versions.append(f.stem.replace("-", "."))
        return sorted(versions, key=_version_key)

    def get_latest(self, scale_id: str) -> ScaleDefinition:
        """Get the latest version of a scale.

        Raises:
            ScaleNotFoundError: If no versions exist.
        """
        versions = self.list_versions(scale_id)
        if not versions:
            raise ScaleNotFoundError(scale_id, detail="no versions in registry")
        return self.get(scale_id, versions[-1])


def _version_key(version: str) -> tuple:
    """Sort key comparing dotted versions numerically where possible."""
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in version.split(".")
    )
