"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from neuroscale.config import (
    ENV_HOME,
    ENV_SCALE_REGISTRY,
    get_bundled_registry_path,
    get_schema_path,
)
from neuroscale.registry import ScaleCatalog, ScaleDefinition, ScaleRegistry, default_catalog
from neuroscale.scoring import ScoringEngine

NIHSS_ITEM_IDS = (
    "loc",
    "loc-questions",
    "loc-commands",
    "gaze",
    "visual",
    "facial",
    "motor-left-arm",
    "motor-right-arm",
    "motor-left-leg",
    "motor-right-leg",
    "ataxia",
    "sensory",
    "language",
    "dysarthria",
    "neglect",
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the neuroscale home at a temp dir and reset the process catalog."""
    home = tmp_path / "neuroscale-home"
    monkeypatch.setenv(ENV_HOME, str(home))
    monkeypatch.delenv(ENV_SCALE_REGISTRY, raising=False)
    default_catalog.cache_clear()
    yield home
    default_catalog.cache_clear()


@pytest.fixture
def scale_registry_path() -> Path:
    """Return the bundled scale registry path."""
    return get_bundled_registry_path()


@pytest.fixture
def scale_schema_path() -> Path:
    """Return the scale spec schema path."""
    return get_schema_path()


@pytest.fixture
def registry(scale_registry_path: Path, scale_schema_path: Path) -> ScaleRegistry:
    """Create a registry over the bundled scales."""
    return ScaleRegistry(scale_registry_path, schema_path=scale_schema_path)


@pytest.fixture
def catalog(registry: ScaleRegistry) -> ScaleCatalog:
    """Build a catalog from the bundled registry."""
    return ScaleCatalog.from_registry(registry)


@pytest.fixture
def engine(catalog: ScaleCatalog) -> ScoringEngine:
    """Create a scoring engine over the bundled catalog."""
    return ScoringEngine(catalog)


@pytest.fixture
def nihss(catalog: ScaleCatalog) -> ScaleDefinition:
    """Return the NIHSS scale definition."""
    return catalog.get_scale("NIHSS")


@pytest.fixture
def nihss_zero() -> dict:
    """A complete NIHSS response set with every item at 0."""
    return {item_id: 0 for item_id in NIHSS_ITEM_IDS}


def make_scale_data(
    bands: list[dict] | None = None,
    items: list[dict] | None = None,
    scale_id: str = "TEST",
    version: str = "1.0.0",
) -> dict:
    """Build a raw scale spec dict (two 0-2 items, max score 4)."""
    if items is None:
        items = [
            {
                "item_id": f"item{i}",
                "position": i,
                "label": f"Item {i}",
                "options": [
                    {"value": 0, "text": "Nada"},
                    {"value": 1, "text": "Algo"},
                    {"value": 2, "text": "Mucho"},
                ],
            }
            for i in (1, 2)
        ]
    if bands is None:
        bands = [
            {"min_score": 0, "max_score": 1, "label": "Bajo"},
            {"min_score": 2, "max_score": 4, "label": "Alto"},
        ]
    return {
        "type": "scale_spec",
        "scale_id": scale_id,
        "version": version,
        "name": f"Escala {scale_id}",
        "category": "Test",
        "items": items,
        "interpretation_bands": bands,
    }


@pytest.fixture
def scale_factory():
    """Build ScaleDefinition objects from raw spec pieces."""

    def factory(**kwargs) -> ScaleDefinition:
        return ScaleDefinition.model_validate(make_scale_data(**kwargs))

    return factory


@pytest.fixture
def scale_data_factory():
    """Build raw scale spec dicts."""
    return make_scale_data
