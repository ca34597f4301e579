# tersify/config/__init__.py
"""Configuration for plugin discovery, read from TOML files."""
from .settings import TersifyConfig, ENTRY_POINT_GROUP
from .loader import load_config, load_and_merge_configs, build_config

__all__ = ["TersifyConfig", "ENTRY_POINT_GROUP", "load_config", "load_and_merge_configs", "build_config"]
