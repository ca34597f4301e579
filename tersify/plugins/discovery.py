# tersify/plugins/discovery.py
"""
Finds the plugins the default registry is built from. Sources are returned in
override order: built-ins, then installed entry points, then plugins named in
configuration, so a configured plugin can replace any earlier claim.
"""
import importlib
from importlib.metadata import entry_points
from typing import Any, List, Optional

import structlog

from tersify.config import ENTRY_POINT_GROUP, TersifyConfig, load_config
from tersify.exceptions import PluginError

from .builtin import builtin_plugins

log = structlog.get_logger(__name__)


def _instantiate(loaded: Any) -> Any:
    # entry points and import paths may name a plugin class or an instance.
    return loaded() if isinstance(loaded, type) else loaded


def load_plugin_from_path(import_path: str) -> Any:
    """Imports ``package.module:ClassName`` and returns a plugin instance."""
    module_name, sep, attr_path = import_path.partition(":")
    if not sep or not module_name or not attr_path:
        raise PluginError(f"plugin path '{import_path}' is not of the form 'module:ClassName'")
    try:
        target = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as e:
        raise PluginError(f"could not load plugin '{import_path}': {e}") from e
    return _instantiate(target)


def entry_point_plugins(group: str = ENTRY_POINT_GROUP) -> List[Any]:
    plugins: List[Any] = []
    for ep in entry_points(group=group):
        try:
            plugins.append(_instantiate(ep.load()))
            log.debug("entry_point_plugin_loaded", name=ep.name, value=ep.value)
        except Exception as e:
            log.warning("entry_point_plugin_load_failed", name=ep.name, value=ep.value, error=str(e))
    return plugins


def discover_plugins(config: Optional[TersifyConfig] = None) -> List[Any]:
    config = config if config is not None else load_config()
    plugins: List[Any] = []
    if config.builtin_plugins:
        plugins.extend(builtin_plugins())
    if config.entry_points:
        plugins.extend(entry_point_plugins())
    for import_path in config.plugins:
        plugins.append(load_plugin_from_path(import_path))
    log.debug("plugins_discovered", count=len(plugins),
              builtins=config.builtin_plugins, entry_points=config.entry_points,
              configured=len(config.plugins))
    return plugins
