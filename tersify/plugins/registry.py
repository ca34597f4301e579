# tersify/plugins/registry.py
"""
Maps exact type names to the plugin that summarizes instances of that type.

The registry is populated once, on first use, from a discovery callable; it is
not modified afterwards. When two plugins claim the same type name the one
discovered later wins.
"""
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

import structlog

from tersify.exceptions import PluginError
from tersify.introspection import address_identity, type_name_of
from tersify.summary import Summary

from .discovery import discover_plugins

log = structlog.get_logger(__name__)

IdentitySource = Callable[[Any], str]
PluginSource = Callable[[], Iterable[Any]]


def _normalize_handled(plugin: Any) -> List[str]:
    handles = plugin.handles()
    if isinstance(handles, (str, type)):
        handles = [handles]
    elif not isinstance(handles, (list, tuple)):
        raise PluginError(
            f"plugin {plugin!r} returned {type(handles).__name__} from handles(); "
            "expected a type name, a class, or a list of them"
        )

    names: List[str] = []
    for handled in handles:
        if isinstance(handled, type):
            names.append(type_name_of(handled))
        elif isinstance(handled, str) and handled:
            names.append(handled)
        else:
            raise PluginError(f"plugin {plugin!r} declared an invalid handled type: {handled!r}")
    return names


class PluginRegistry:
    """Type name -> plugin lookup, built lazily and exactly once."""

    def __init__(self, discover: Optional[PluginSource] = None):
        self._discover = discover if discover is not None else (lambda: [])
        self._handled_by_plugin: Dict[str, Any] = {}
        self._initialized = False
        self._lock = threading.Lock()

    @classmethod
    def from_plugins(cls, plugins: Iterable[Any]) -> "PluginRegistry":
        plugins = list(plugins)
        return cls(discover=lambda: plugins)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            handled_by_plugin: Dict[str, Any] = {}
            plugin_count = 0
            for plugin in self._discover():
                if not (callable(getattr(plugin, "handles", None)) and callable(getattr(plugin, "describe", None))):
                    raise PluginError(f"{plugin!r} does not implement handles() and describe()")
                plugin_count += 1
                for name in _normalize_handled(plugin):
                    previous = handled_by_plugin.get(name)
                    if previous is not None and previous is not plugin:
                        log.debug("plugin_type_claim_overridden", type_name=name,
                                  previous=type(previous).__name__, plugin=type(plugin).__name__)
                    handled_by_plugin[name] = plugin
            self._handled_by_plugin = handled_by_plugin
            self._initialized = True
        log.info("plugin_registry_initialized", plugins=plugin_count, types=len(handled_by_plugin))

    def resolve(self, type_name: str) -> Optional[Any]:
        # exact type name match only; no subclass or prefix matching.
        self.initialize()
        return self._handled_by_plugin.get(type_name)

    def resolve_for(self, obj: Any) -> Optional[Any]:
        return self.resolve(type_name_of(obj))

    def summarize(self, obj: Any, identity: IdentitySource = address_identity) -> Optional[Summary]:
        """
        Summarizes ``obj`` via its plugin, or returns None if no plugin
        handles its exact type. Errors raised by the plugin propagate.
        """
        type_name = type_name_of(obj)
        plugin = self.resolve(type_name)
        if plugin is None:
            return None
        description = plugin.describe(obj)
        return Summary(f"{type_name} ({identity(obj)}) {description}")

    def handled_types(self) -> Dict[str, Any]:
        self.initialize()
        return dict(sorted(self._handled_by_plugin.items()))

    def __contains__(self, type_name: str) -> bool:
        return self.resolve(type_name) is not None

    def __repr__(self) -> str:
        state = f"{len(self._handled_by_plugin)} types" if self._initialized else "uninitialized"
        return f"<PluginRegistry {state}>"


_default_registry: Optional[PluginRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> PluginRegistry:
    """The process-wide registry, fed by the configured discovery sources."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = PluginRegistry(discover=discover_plugins)
    return _default_registry


def reset_default_registry(registry: Optional[PluginRegistry] = None) -> None:
    # replaces (or drops, for lazy rebuild) the process-wide registry.
    global _default_registry
    with _default_registry_lock:
        _default_registry = registry
