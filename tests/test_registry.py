"""Tests for the scale registry."""

import json
from pathlib import Path

import pytest

from neuroscale.registry import (
    ScaleNotFoundError,
    ScaleRegistry,
    ScaleValidationError,
    load_spec,
)


def _write_spec(registry_path: Path, data: dict, filename: str | None = None) -> Path:
    version_file = filename or data["version"].replace(".", "-") + ".json"
    spec_dir = registry_path / "scales" / data["scale_id"]
    spec_dir.mkdir(parents=True, exist_ok=True)
    path = spec_dir / version_file
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def schema(scale_schema_path: Path) -> dict:
    """Load the scale spec JSON Schema."""
    with open(scale_schema_path, encoding="utf-8") as f:
        return json.load(f)


class TestScaleRegistry:
    """Tests for ScaleRegistry."""

    def test_load_nihss(self, registry: ScaleRegistry) -> None:
        """Test loading the NIHSS spec."""
        spec = registry.get("NIHSS", "1.0.0")

        assert spec.scale_id == "NIHSS"
        assert spec.version == "1.0.0"
        assert spec.name == "NIHSS (National Institutes of Health Stroke Scale)"
        assert len(spec.items) == 15
        assert spec.max_possible_score == 42

    def test_list_scales(self, registry: ScaleRegistry) -> None:
        """Test listing the bundled scales."""
        scales = registry.list_scales()

        assert "NIHSS" in scales
        assert "Glasgow" in scales
        assert len(scales) == 10
        assert scales == sorted(scales)

    def test_list_versions(self, registry: ScaleRegistry) -> None:
        """Test listing versions for a scale."""
        assert registry.list_versions("NIHSS") == ["1.0.0"]
        assert registry.list_versions("missing") == []

    def test_get_latest(self, registry: ScaleRegistry) -> None:
        """Test getting the latest version."""
        assert registry.get_latest("NIHSS").version == "1.0.0"

    def test_cache(self, registry: ScaleRegistry) -> None:
        """Test that specs are cached."""
        assert registry.get("NIHSS", "1.0.0") is registry.get("NIHSS", "1.0.0")

    def test_not_found(self, registry: ScaleRegistry) -> None:
        """Test that a missing spec raises ScaleNotFoundError."""
        with pytest.raises(ScaleNotFoundError) as exc_info:
            registry.get("nonexistent", "1.0.0")
        assert exc_info.value.scale_id == "nonexistent"

    def test_missing_version(self, registry: ScaleRegistry) -> None:
        """Test that a missing version raises ScaleNotFoundError."""
        with pytest.raises(ScaleNotFoundError, match="version 9.9.9"):
            registry.get("NIHSS", "9.9.9")

    def test_get_latest_without_versions(self, tmp_path: Path) -> None:
        """Test get_latest on an unknown scale."""
        registry = ScaleRegistry(tmp_path)
        with pytest.raises(ScaleNotFoundError, match="no versions"):
            registry.get_latest("NIHSS")

    def test_empty_registry(self, tmp_path: Path) -> None:
        """Test listing an empty registry."""
        assert ScaleRegistry(tmp_path).list_scales() == []

    def test_versions_sorted_numerically(self, tmp_path: Path, scale_data_factory) -> None:
        """Test that 1.10.0 sorts after 1.2.0."""
        for version in ("1.2.0", "1.10.0", "1.0.0"):
            _write_spec(tmp_path, scale_data_factory(version=version))

        registry = ScaleRegistry(tmp_path)
        assert registry.list_versions("TEST") == ["1.0.0", "1.2.0", "1.10.0"]
        assert registry.get_latest("TEST").version == "1.10.0"

    def test_declared_id_mismatch(self, tmp_path: Path, scale_data_factory) -> None:
        """Test a spec stored under the wrong directory is rejected."""
        data = scale_data_factory(scale_id="OTHER")
        spec_dir = tmp_path / "scales" / "TEST"
        spec_dir.mkdir(parents=True)
        (spec_dir / "1-0-0.json").write_text(json.dumps(data), encoding="utf-8")

        registry = ScaleRegistry(tmp_path)
        with pytest.raises(ScaleValidationError, match="declares OTHER@1.0.0"):
            registry.get("TEST", "1.0.0")

    def test_coverage_gap_rejected_at_load(self, tmp_path: Path, scale_data_factory) -> None:
        """Test a spec whose bands leave a gap fails to load."""
        data = scale_data_factory(
            bands=[
                {"min_score": 0, "max_score": 1, "label": "Bajo"},
                {"min_score": 3, "max_score": 4, "label": "Alto"},
            ]
        )
        _write_spec(tmp_path, data)

        registry = ScaleRegistry(tmp_path)
        with pytest.raises(ScaleValidationError, match="not covered by any band: 2"):
            registry.get("TEST", "1.0.0")


class TestLoadSpec:
    """Tests for load_spec."""

    def test_valid_spec(self, tmp_path: Path, scale_data_factory, schema: dict) -> None:
        """Test loading a valid spec file."""
        path = _write_spec(tmp_path, scale_data_factory())

        spec = load_spec(path, schema)
        assert spec.scale_id == "TEST"
        assert spec.max_possible_score == 4

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that malformed JSON raises ScaleValidationError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ScaleValidationError, match="Invalid JSON"):
            load_spec(path)

    def test_schema_violation(self, tmp_path: Path, scale_data_factory, schema: dict) -> None:
        """Test that a schema violation raises ScaleValidationError."""
        data = scale_data_factory()
        del data["interpretation_bands"]
        path = _write_spec(tmp_path, data)

        with pytest.raises(ScaleValidationError, match="Scale spec validation failed"):
            load_spec(path, schema)

    def test_model_violation_without_schema(self, tmp_path: Path, scale_data_factory) -> None:
        """Test that model errors are reported when no schema is given."""
        data = scale_data_factory()
        data["interpretation_bands"][0]["max_score"] = -1
        path = _write_spec(tmp_path, data)

        with pytest.raises(ScaleValidationError, match="model invalid"):
            load_spec(path)

    def test_fractional_value_rejected_by_schema(
        self, tmp_path: Path, scale_data_factory, schema: dict
    ) -> None:
        """Test that fractional point values are rejected."""
        data = scale_data_factory()
        data["items"][0]["options"][1]["value"] = 1.5
        path = _write_spec(tmp_path, data)

        with pytest.raises(ScaleValidationError):
            load_spec(path, schema)
