"""YAML config loader with dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from climascrape.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing path (None) or an empty file yields the defaults.
    """
    if path is None:
        return AppConfig()
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    # Drop empty sections ("http:" with no keys parses as None)
    raw = {k: v for k, v in raw.items() if v is not None}
    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'http.max_retries'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
