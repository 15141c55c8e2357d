"""Configuration management: profiles, TOML loading, and config models.

Usage:
    >>> from pg_fx.config import load_fx_config, DatabaseProfile, FxConfig
"""

from pg_fx.config.loader import load_fx_config
from pg_fx.config.models import DatabaseProfile, FxConfig

__all__ = ["load_fx_config", "FxConfig", "DatabaseProfile"]
