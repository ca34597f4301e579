# tersify/__init__.py
"""
tersify: replace verbose objects buried in data structures with short,
clearly-marked summaries before dumping them.
"""
__version__ = "0.1.0"

from .engine import Tersifier, tersify
from .exceptions import ConfigError, PluginError, TersifyError
from .introspection import SequentialIdentity, address_identity, type_name_of
from .plugins import PluginRegistry, TersifyPlugin, get_default_registry, reset_default_registry
from .summary import MappingSummary, SequenceSummary, StructuralSummary, Summary, is_summary

__all__ = [
    "tersify",
    "Tersifier",
    "PluginRegistry",
    "TersifyPlugin",
    "get_default_registry",
    "reset_default_registry",
    "Summary",
    "StructuralSummary",
    "MappingSummary",
    "SequenceSummary",
    "is_summary",
    "SequentialIdentity",
    "address_identity",
    "type_name_of",
    "TersifyError",
    "ConfigError",
    "PluginError",
]
