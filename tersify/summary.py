# tersify/summary.py
"""
Placeholder types substituted for complex objects during tersification.

A Summary is never original data: it exists only so that a human reading a
dump can see that an object was there, what it was, and roughly what it held.
"""
from typing import Any


class Summary(str):
    """One-line summary of an object, e.g. ``datetime.date (0x7f...) 2018-08-12``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Summary({str.__repr__(self)})"


class StructuralSummary:
    """
    Mixin for summaries that keep the container shape of the object they
    replace. ``type_name`` is the class the object originally belonged to,
    ``identity`` the identity token of that specific instance.
    """

    type_name: str
    identity: str

    def _tag(self) -> str:
        return f"Summary[{self.type_name} ({self.identity})]"


class MappingSummary(StructuralSummary, dict):
    # copy of an object's attribute/mapping state with sub-objects tersified.

    def __init__(self, contents: Any, type_name: str, identity: str):
        super().__init__(contents)
        self.type_name = type_name
        self.identity = identity

    def __repr__(self) -> str:
        return f"{self._tag()}{dict.__repr__(self)}"


class SequenceSummary(StructuralSummary, list):
    # copy of a list-like object's items with sub-objects tersified.

    def __init__(self, contents: Any, type_name: str, identity: str):
        super().__init__(contents)
        self.type_name = type_name
        self.identity = identity

    def __repr__(self) -> str:
        return f"{self._tag()}{list.__repr__(self)}"


SUMMARY_TYPES = (Summary, MappingSummary, SequenceSummary)


def is_summary(value: Any) -> bool:
    return issubclass(type(value), SUMMARY_TYPES)
