# tersify/introspection.py
"""
Classification helpers: what kind of node a value is, what its type is called,
which identity token it gets, and what internal state an object exposes.
"""
import itertools
import threading
import types
import weakref
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import structlog

log = structlog.get_logger(__name__)

SCALAR_TYPES = frozenset({
    type(None), bool, int, float, complex, str, bytes, bytearray, range,
    type(Ellipsis), set, frozenset,
})
SEQUENCE_TYPES = (list, tuple)

# objects whose attribute state is namespace machinery rather than data.
OPAQUE_TYPES = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.CodeType,
    types.FrameType,
    types.TracebackType,
)


def is_scalar(value: Any) -> bool:
    return type(value) in SCALAR_TYPES


def is_sequence(value: Any) -> bool:
    return type(value) in SEQUENCE_TYPES


def is_mapping(value: Any) -> bool:
    return type(value) is dict


def type_name_of(obj_or_type: Any) -> str:
    """
    Qualified name used to match plugins, e.g. ``datetime.datetime``.
    Accepts either a class or an instance; builtins are left unprefixed.
    """
    cls = obj_or_type if issubclass(type(obj_or_type), type) else type(obj_or_type)
    module = getattr(cls, "__module__", None)
    if not module or module == "builtins":
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


def address_identity(obj: Any) -> str:
    # the platform's own object identity, rendered as hex.
    return f"0x{id(obj):x}"


class SequentialIdentity:
    """
    Identity source handing out ``0x1``, ``0x2``, ... in first-seen order.

    Labels are never reused, even when a later object gets the ``id()`` of a
    collected one. Objects that support weak references are tracked weakly
    and forgotten once collected; objects that don't (plain ints, tuples,
    ``__slots__`` classes without ``__weakref__``) are kept alive for the
    lifetime of this identity source.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._seen: Dict[int, Tuple[Callable[[], Any], str]] = {}
        # reentrant: a weakref callback can fire while a label is being issued.
        self._lock = threading.RLock()

    def _forget(self, key: int, ref: "weakref.ref") -> None:
        with self._lock:
            entry = self._seen.get(key)
            if entry is not None and entry[0] is ref:
                del self._seen[key]

    def _reference(self, obj: Any) -> Callable[[], Any]:
        key = id(obj)
        try:
            return weakref.ref(obj, lambda ref: self._forget(key, ref))
        except TypeError:
            return lambda: obj

    def __call__(self, obj: Any) -> str:
        with self._lock:
            entry = self._seen.get(id(obj))
            if entry is None or entry[0]() is not obj:
                entry = (self._reference(obj), f"0x{next(self._counter):x}")
                self._seen[id(obj)] = entry
            return entry[1]


def _slot_values(obj: Any) -> Dict[str, Any]:
    # reads slots through their descriptors so __getattr__ hooks never run.
    values: Dict[str, Any] = {}
    for klass in type(obj).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__") or slot in values:
                continue
            # private slots are stored under their mangled name.
            attr = f"_{klass.__name__.lstrip('_')}{slot}" if slot.startswith("__") and not slot.endswith("__") else slot
            descriptor = klass.__dict__.get(attr)
            if descriptor is None or not hasattr(descriptor, "__get__"):
                continue
            try:
                values[slot] = descriptor.__get__(obj, type(obj))
            except AttributeError:
                continue
    return values


def _instance_dict(obj: Any) -> Optional[Dict[str, Any]]:
    try:
        instance_dict = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        return None
    return instance_dict if isinstance(instance_dict, dict) else None


def internal_shape(obj: Any) -> Optional[Union[List[Any], Dict[Any, Any]]]:
    """
    Returns a shallow copy of an object's internal container: a list for
    list-like objects, a dict for map-like ones, or None when the object is
    opaque. The object itself is never modified, and none of its own
    attribute, iteration or mapping hooks are called; state that can only be
    reached through them makes the object opaque.
    """
    cls = type(obj)
    if issubclass(cls, OPAQUE_TYPES):
        return None
    try:
        if issubclass(cls, dict):
            return dict(dict.items(obj))
        if issubclass(cls, list):
            return list(list.__iter__(obj))
        if issubclass(cls, tuple):
            return list(tuple.__iter__(obj))

        instance_dict = _instance_dict(obj)
        slot_state = _slot_values(obj)
    except Exception as e:
        log.debug("object_state_unreadable", type_name=type_name_of(cls), error=str(e))
        return None

    if instance_dict is None and not slot_state:
        return None
    state: Dict[str, Any] = dict(instance_dict or {})
    state.update(slot_state)
    return state
