"""Configuration loader for Legosigno."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from legosigno.config.schema import DEFAULT_STORAGE_DIR, LegosignoConfig

STORAGE_ENV = "LEGOSIGNO_CONF"
CONFIG_FILENAME = "config.yaml"


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> LegosignoConfig:
    """Load configuration from a YAML file and the environment.

    Without an explicit path, ``config.yaml`` inside the storage directory is
    used when present. ``LEGOSIGNO_CONF`` always wins for ``storage_dir``.
    Raises ValueError for malformed YAML.
    """
    env = os.environ if environ is None else environ
    storage_override = env.get(STORAGE_ENV)

    if path is None:
        base = storage_override or DEFAULT_STORAGE_DIR
        path = Path(base).expanduser() / CONFIG_FILENAME

    data = _read_yaml(Path(path).expanduser())
    if storage_override:
        data["storage_dir"] = storage_override
    return LegosignoConfig(**data)


def _read_yaml(path: Path) -> dict:
    if not path.is_file():
        return {}

    text = path.read_text()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {path}: {e}") from e

    if data is None or not isinstance(data, dict):
        return {}
    return data
