"""Application configuration read from a YAML file."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "app-config.yaml"


@dataclass(frozen=True)
class AppConfig:
    """Settings the scraper needs to run."""

    browser_ws_url: str
    log_level: str
    database_url: str


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Read an AppConfig from the YAML file at ``path``.

    A missing file counts as empty, so it is reported as missing fields.
    Raises ValueError when a field is missing or is not a string.
    """
    config_path = Path(path)
    if config_path.is_file():
        with config_path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    else:
        data = None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"invalid configuration in {config_path}: expected a mapping")

    values = {}
    for field in fields(AppConfig):
        if field.name not in data:
            raise ValueError(f"missing field '{field.name}'")
        value = data[field.name]
        if not isinstance(value, str):
            raise ValueError(f"invalid type for field '{field.name}': expected a string")
        values[field.name] = value
    return AppConfig(**values)