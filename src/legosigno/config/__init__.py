"""Configuration system for Legosigno."""

from legosigno.config.loader import load_config
from legosigno.config.schema import LegosignoConfig

__all__ = ["load_config", "LegosignoConfig"]
