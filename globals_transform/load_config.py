"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from globals_transform.deep_merge import deep_merge
from globals_transform.errors import ConfigurationError

DEFAULT_CONFIG: dict[str, Any] = {
    "namespace_root": None,
    "naming_policy": None,
    "externals": {},
    "transform_only_modules": False,
    "export_all": "copy",
    "extensions": [".js", ".mjs", ".es6"],
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if not p.exists():
            msg = f"Config file not found: {path}"
            raise ConfigurationError(msg)
        try:
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise ConfigurationError(msg) from e
        if not isinstance(user_config, dict):
            msg = f"Config file {path} must contain a mapping"
            raise ConfigurationError(msg)
        config = deep_merge(config, user_config)
    return config
