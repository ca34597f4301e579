# tersify/engine.py
"""
The traversal engine: walks a data structure and replaces complex objects
found below the root with summaries, copying only the containers on the path
to something that changed.
"""
from typing import Any, Dict, List, Optional, Set, Tuple

import structlog

from tersify.introspection import (
    address_identity,
    internal_shape,
    is_mapping,
    is_scalar,
    is_sequence,
    type_name_of,
)
from tersify.plugins.registry import IdentitySource, PluginRegistry, get_default_registry
from tersify.summary import MappingSummary, SequenceSummary, is_summary

log = structlog.get_logger(__name__)


class Tersifier:
    """
    Tersifies values against one plugin registry.

    ``identity`` produces the identity token embedded in summaries; pass a
    ``SequentialIdentity`` for reproducible output.
    """

    def __init__(self, registry: Optional[PluginRegistry] = None,
                 identity: IdentitySource = address_identity):
        self._registry = registry
        self.identity = identity

    @property
    def registry(self) -> PluginRegistry:
        # resolved late so the default registry reflects the current config.
        return self._registry if self._registry is not None else get_default_registry()

    def tersify(self, value: Any) -> Any:
        """
        Returns ``value`` with every summarizable object below it replaced by
        a summary. The root itself is never summarized, and anything that did
        not change is returned as the same object.
        """
        new_value, _ = self._tersify(value, set(), is_root=True)
        return new_value

    def _tersify(self, value: Any, path: Set[int], is_root: bool = False) -> Tuple[Any, bool]:
        if is_scalar(value) or is_summary(value):
            return value, False
        # a back-reference to a container or object still being walked is left as-is.
        if id(value) in path:
            log.debug("cycle_left_unchanged", type_name=type_name_of(value))
            return value, False
        path.add(id(value))
        try:
            if is_sequence(value):
                return self._tersify_sequence(value, path)
            if is_mapping(value):
                return self._tersify_mapping(value, path)
            return self._tersify_object(value, path, is_root)
        finally:
            path.discard(id(value))

    def _tersify_sequence(self, sequence: Any, path: Set[int]) -> Tuple[Any, bool]:
        changed = False
        new_items: List[Any] = []
        for item in sequence:
            new_item, item_changed = self._tersify(item, path)
            changed = changed or item_changed
            new_items.append(new_item)
        if not changed:
            return sequence, False
        return (tuple(new_items) if isinstance(sequence, tuple) else new_items), True

    def _tersify_mapping(self, mapping: Dict[Any, Any], path: Set[int]) -> Tuple[Any, bool]:
        changed = False
        new_mapping: Dict[Any, Any] = {}
        for key, old_value in mapping.items():
            new_value, value_changed = self._tersify(old_value, path)
            changed = changed or value_changed
            new_mapping[key] = new_value
        if not changed:
            return mapping, False
        return new_mapping, True

    def _tersify_object(self, obj: Any, path: Set[int], is_root: bool) -> Tuple[Any, bool]:
        # the caller asked to see this object; only deeper objects get summarized.
        if is_root:
            return obj, False

        summary = self.registry.summarize(obj, identity=self.identity)
        if summary is not None:
            log.debug("object_summarized_via_plugin", type_name=type_name_of(obj))
            return summary, True

        contents = internal_shape(obj)
        if contents is None:
            return obj, False
        new_contents, changed = self._tersify(contents, path)
        if not changed:
            return obj, False

        type_name = type_name_of(obj)
        log.debug("object_summarized_structurally", type_name=type_name)
        if isinstance(new_contents, dict):
            return MappingSummary(new_contents, type_name, self.identity(obj)), True
        return SequenceSummary(new_contents, type_name, self.identity(obj)), True


def tersify(value: Any) -> Any:
    """
    Returns a terse equivalent of ``value`` for dumping or logging, using the
    process-wide plugin registry. Lossy by design: never use the result to
    reconstruct the original data.
    """
    return Tersifier().tersify(value)
