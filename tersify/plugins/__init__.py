# tersify/plugins/__init__.py
"""
Plugin contract, registry, and the discovery that feeds the default registry.
"""
from .base import TersifyPlugin
from .registry import PluginRegistry, get_default_registry, reset_default_registry

__all__ = ["TersifyPlugin", "PluginRegistry", "get_default_registry", "reset_default_registry"]
