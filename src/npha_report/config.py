from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_PATH = Path("config.yaml")

DEFAULTS: Dict[str, Any] = {
    "paths": {"raw": "data/raw", "outputs": "outputs"},
    "data": {"file": "NPHA-doctor-visits.csv"},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | os.PathLike | None = None) -> Dict[str, Any]:
    """Read the report run settings; keys absent from the file fall back to DEFAULTS."""
    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    with open(cfg_path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {cfg_path} must hold a mapping at top level.")
    return _merge(DEFAULTS, loaded)


__all__ = ["load_config", "DEFAULT_CONFIG_PATH", "DEFAULTS"]
