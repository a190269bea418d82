"""YAML config loader with environment overrides and runtime get/set."""

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ledmap.config.defaults import DEFAULT_LOCATIONS
from ledmap.config.schema import MapConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "OWM_API_KEY"


def load_config(path: str | Path) -> MapConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. If no locations are specified,
    injects DEFAULT_LOCATIONS. The OWM_API_KEY environment variable takes
    precedence over `owm.api_key`.
    """
    path = Path(path)
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        logger.info("Config %s not found, using defaults", path)
        raw = {}

    if "locations" not in raw or not raw["locations"]:
        raw["locations"] = [loc.model_dump() for loc in DEFAULT_LOCATIONS]

    api_key = os.environ.get(API_KEY_ENV)
    if api_key:
        owm = raw.get("owm") or {}
        owm["api_key"] = api_key
        raw["owm"] = owm

    return MapConfig(**raw)


def config_hash(config: MapConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: MapConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'render.fade_steps'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: MapConfig, dotted_key: str, value: Any) -> MapConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new MapConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[int(part)] if isinstance(target, list) else target[part]
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return MapConfig(**data)
