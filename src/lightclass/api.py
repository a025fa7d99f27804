# lightclass/api.py
"""
Public class API.

Every function takes an optional ``registry=``; by default the active
registry from :mod:`lightclass._state` is used.
"""

from __future__ import annotations

from typing import Any, Iterator

from ._state import get_current_registry
from .exceptions import InvalidArgumentError
from .factory import new_class
from .records import ClassRecord
from .registry import ClassRegistry

__all__ = [
    "ClassNamespace",
    "classes",
    "create_class",
    "extend_class",
    "lookup_class",
    "try_lookup_class",
]


def _registry(registry: ClassRegistry | None) -> ClassRegistry:
    return registry if registry is not None else get_current_registry()


def create_class(name: str, *, registry: ClassRegistry | None = None) -> ClassRecord:
    """Create and register a new root-level class.

    :raises InvalidArgumentError: If `name` is not a valid class name.
    :raises DuplicateNameError: If `name` is already defined.
    """
    return new_class(name, registry=_registry(registry))


def extend_class(name: str, superclass: ClassRecord, *, registry: ClassRegistry | None = None) -> ClassRecord:
    """Create and register a class extending `superclass`.

    :raises InvalidArgumentError: If `name` is invalid or `superclass` is not a class.
    :raises DuplicateNameError: If `name` is already defined.
    """
    if superclass is None:
        raise InvalidArgumentError("extend_class requires a superclass")
    return new_class(name, superclass, registry=_registry(registry))


def lookup_class(name: str, *, registry: ClassRegistry | None = None) -> ClassRecord:
    """Return the class defined under `name`.

    :raises NotFoundError: If `name` is not defined.
    """
    return _registry(registry).get(name)


def try_lookup_class(name: str, *, registry: ClassRegistry | None = None) -> ClassRecord | None:
    """Return the class defined under `name`, or None when it is not defined."""
    return _registry(registry).try_get(name)


class ClassNamespace:
    """Attribute view of a registry: ``classes.Animal`` looks up ``"Animal"``.

    Without an explicit registry the active one is resolved on every access.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: ClassRegistry | None = None) -> None:
        self._registry = registry

    def __getattr__(self, name: str) -> ClassRecord:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return lookup_class(name, registry=self._registry)

    def __getitem__(self, name: str) -> ClassRecord:
        return lookup_class(name, registry=self._registry)

    def __contains__(self, name: object) -> bool:
        return name in _registry(self._registry)

    def __iter__(self) -> Iterator[str]:
        return iter(_registry(self._registry))

    def __dir__(self) -> list[str]:
        return list(_registry(self._registry).names())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ClassNamespace({_registry(self._registry)!r})"


classes: Any = ClassNamespace()
