"""Global configuration for neuroscale.

Configuration lives in ``~/.config/neuroscale/config.yaml`` (the home
directory can be moved with ``NEUROSCALE_HOME``). The scale registry path is
resolved from, in order: ``NEUROSCALE_SCALE_REGISTRY``, the config file, and
the registry bundled with the package.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

ENV_HOME = "NEUROSCALE_HOME"
ENV_SCALE_REGISTRY = "NEUROSCALE_SCALE_REGISTRY"

# Scale types accepted by the patient assessment records
DEFAULT_APPROVED_SCALE_TYPES: tuple[str, ...] = (
    "NIHSS",
    "Glasgow",
    "UPDRS-I",
    "UPDRS-II",
    "UPDRS-III",
    "UPDRS-IV",
    "MDS-Parkinson-2015",
    "Ashworth",
    "mRS",
    "ASPECTS",
    "CHA2DS2-VASc",
    "HAS-BLED",
    "ICH",
    "Hunt-Hess",
    "McDonald-2024",
    "MMSE",
    "MoCA",
    "MIDAS",
    "HIT-6",
    "Hoehn-Yahr",
    "EDSS",
    "Engel",
    "mICH",
)


class GlobalConfig(BaseModel):
    """Contents of config.yaml."""

    default_scale_registry_path: str | None = None
    approved_scale_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_APPROVED_SCALE_TYPES)
    )


def get_neuroscale_home() -> Path:
    """Return the neuroscale configuration directory."""
    env_home = os.environ.get(ENV_HOME)
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "neuroscale"


def get_config_path() -> Path:
    return get_neuroscale_home() / "config.yaml"


def get_registry_root() -> Path:
    """Return the directory holding registries synced by ``neuroscale init``."""
    return get_neuroscale_home() / "registry"


def get_bundled_registry_path() -> Path:
    """Return the scale registry shipped inside the package."""
    return Path(__file__).parent / "registry" / "data"


def get_schema_path() -> Path:
    """Return the scale_spec JSON Schema shipped inside the package."""
    return Path(__file__).parent / "schemas" / "scale_spec.schema.json"


def load_global_config() -> GlobalConfig:
    """Load config.yaml, falling back to defaults if it does not exist."""
    config_path = get_config_path()
    if not config_path.exists():
        return GlobalConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return GlobalConfig.model_validate(data)


def save_global_config(config: GlobalConfig) -> Path:
    """Write config.yaml and return its path."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(), f, sort_keys=False, allow_unicode=True)
    return config_path


def get_scale_registry_path() -> Path:
    """Resolve the scale registry path (env var, config file, bundled)."""
    env_path = os.environ.get(ENV_SCALE_REGISTRY)
    if env_path:
        return Path(env_path)

    global_config = load_global_config()
    if global_config.default_scale_registry_path:
        return Path(global_config.default_scale_registry_path)

    return get_bundled_registry_path()
