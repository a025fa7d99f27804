# lightclass/introspection.py
"""
Run-time classification of lightclass records.

Every function accepts arbitrary values, including None and builtins; a
value without a descriptor is simply not a class or instance.
"""

from __future__ import annotations

from typing import Any

from .meta import Role
from .prototype import Prototype
from .records import ClassRecord, InstanceRecord

__all__ = [
    "prototype_of",
    "is_class",
    "is_instance",
    "is_instance_of",
    "kind_of",
    "name_of",
    "role_of",
]


def prototype_of(obj: Any) -> Prototype | None:
    """Return the resolution descriptor of `obj`, or None."""
    if isinstance(obj, (ClassRecord, InstanceRecord)):
        return obj._prototype
    return None


def role_of(obj: Any) -> Role:
    proto = prototype_of(obj)
    return proto.role if proto is not None else Role.PLAIN


def is_class(obj: Any) -> bool:
    return role_of(obj) is Role.CLASS


def is_instance(obj: Any) -> bool:
    return role_of(obj) is Role.INSTANCE


def is_instance_of(obj: Any, cls: Any) -> bool:
    """
    Return True if `obj` is an instance of `cls` or of a subclass of it.

    Walks descriptors from `obj` through each `lookup_target`; the walk
    ends at the first target without a descriptor, which is the root class.
    """
    if not is_instance(obj) or not is_class(cls):
        return False

    target = cls._prototype
    proto = prototype_of(obj)
    while proto is not None:
        if proto is target:
            return True
        proto = prototype_of(proto.lookup_target)
    return False


def kind_of(obj: Any) -> str:
    """Return ``"class"``, ``"instance"``, or the builtin type name of `obj`."""
    role = role_of(obj)
    if role is Role.PLAIN:
        return type(obj).__name__
    return role.value


def name_of(obj: Any) -> str | None:
    """Return the class name carried by `obj`'s descriptor, or None."""
    proto = prototype_of(obj)
    return proto.name if proto is not None else None
