"""Shared test fixtures."""

import logging
from pathlib import Path

import pytest

from legosigno.config.schema import LegosignoConfig
from legosigno.operations import RunContext


@pytest.fixture
def config(tmp_path: Path) -> LegosignoConfig:
    """Config whose storage lives under tmp_path."""
    return LegosignoConfig(storage_dir=str(tmp_path / "store"))


@pytest.fixture
def run_ctx(config: LegosignoConfig) -> RunContext:
    return RunContext(config=config, log=logging.getLogger("legosigno.test"))


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    """Create a minimal valid config YAML file."""
    config = tmp_path / "config.yaml"
    config.write_text(
        """\
storage_dir: "/tmp/legosigno-test"
max_visited_folders: 20
listed_visits: 5
"""
    )
    return config
