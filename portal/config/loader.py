"""YAML config loader with environment override and dotted-key lookup."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from portal.config.schema import PortalConfig

BASE_URL_ENV = "WEATHER_API_BASE_URL"


def load_config(path: str | Path | None = None) -> PortalConfig:
    """Load and validate config from a YAML file.

    A missing path or empty file yields the defaults. ``WEATHER_API_BASE_URL``
    in the environment wins over the file's ``weather_api.base_url``.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    base_url = os.environ.get(BASE_URL_ENV)
    if base_url:
        raw["weather_api"] = raw.get("weather_api") or {}
        raw["weather_api"]["base_url"] = base_url

    return PortalConfig(**raw)


def get_config_value(config: PortalConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'weather_api.base_url'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, BaseModel) and part in type(obj).model_fields:
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
