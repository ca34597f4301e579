# tersify/plugins/base.py
"""
The plugin contract: a plugin says which types it handles and how to describe
one instance of them in a single short line.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Union

HandledTypes = Union[str, type, List[Union[str, type]]]


class TersifyPlugin(ABC):
    """
    Base class for plugins. Subclassing is a convenience, not a requirement:
    the registry accepts any object with ``handles`` and ``describe``.
    """

    @abstractmethod
    def handles(self) -> HandledTypes:
        """
        The exact type(s) this plugin summarizes, as qualified type names
        (``"datetime.datetime"``) or class objects, alone or in a list.
        Subclasses are not matched unless listed explicitly.
        """

    @abstractmethod
    def describe(self, obj: Any) -> str:
        """A short, human-readable description of ``obj``."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
