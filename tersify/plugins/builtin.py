# tersify/plugins/builtin.py
"""Plugins for standard-library types that tend to bloat debug dumps."""
import datetime
import decimal
import pathlib
import re
import uuid
from typing import Any, List

from .base import TersifyPlugin


class DateTimePlugin(TersifyPlugin):
    def handles(self) -> List[type]:
        return [datetime.datetime, datetime.date, datetime.time, datetime.timedelta]

    def describe(self, obj: Any) -> str:
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        return obj.isoformat()


class PathPlugin(TersifyPlugin):
    def handles(self) -> List[type]:
        return [pathlib.PosixPath, pathlib.WindowsPath, pathlib.PurePosixPath, pathlib.PureWindowsPath]

    def describe(self, obj: Any) -> str:
        return str(obj)


class UUIDPlugin(TersifyPlugin):
    def handles(self) -> type:
        return uuid.UUID

    def describe(self, obj: Any) -> str:
        return str(obj)


class PatternPlugin(TersifyPlugin):
    def handles(self) -> type:
        return re.Pattern

    def describe(self, obj: Any) -> str:
        # the implicit UNICODE flag on str patterns is noise.
        flags = obj.flags & ~re.UNICODE if isinstance(obj.pattern, str) else obj.flags
        if flags:
            return f"{obj.pattern!r} flags={re.RegexFlag(flags)!r}"
        return repr(obj.pattern)


class DecimalPlugin(TersifyPlugin):
    def handles(self) -> type:
        return decimal.Decimal

    def describe(self, obj: Any) -> str:
        return str(obj)


BUILTIN_PLUGINS = (DateTimePlugin, PathPlugin, UUIDPlugin, PatternPlugin, DecimalPlugin)


def builtin_plugins() -> List[TersifyPlugin]:
    return [plugin_cls() for plugin_cls in BUILTIN_PLUGINS]
