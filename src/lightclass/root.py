# lightclass/root.py
"""The implicit root class at the top of every inheritance chain."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .meta import MetaSlot

__all__ = ["RootClass", "ROOT"]


def _construct(cls: Any, *args: Any, **kwargs: Any) -> Any:
    from .factory import new_instance

    return new_instance(cls, *args, **kwargs)


class RootClass:
    """
    Unnamed, unregistered bootstrap class.

    It has an empty, read-only body and defines a single meta-method, CALL,
    which routes a class call to the instance factory. It carries no
    descriptor, so chain walks stop here.
    """

    __slots__ = ("_attributes", "_meta_slots")

    def __init__(self) -> None:
        self._attributes: Mapping[str, Any] = MappingProxyType({})
        self._meta_slots: Mapping[MetaSlot, Any] = MappingProxyType({MetaSlot.CALL: _construct})

    @property
    def meta_slots(self) -> Mapping[MetaSlot, Any]:
        return self._meta_slots

    def __repr__(self) -> str:
        return "<lightclass root>"


ROOT = RootClass()
