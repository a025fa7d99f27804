# lightclass/factory.py
"""
Class and instance factories.

Meta-method inheritance is eager. `new_class` resolves every slot from the
superclass when the class is created; `new_instance` snapshots the class's
slots when the instance is created. Changing a class body afterwards only
affects classes and instances created later.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .exceptions import InvalidArgumentError, InvalidOperationError
from .meta import INITIALIZER_KEY, MetaSlot, Role
from .prototype import Prototype
from .records import ClassRecord, InstanceRecord, chain_lookup
from .registry.base import ClassRegistry
from .root import ROOT, RootClass

logger = logging.getLogger(__name__)

__all__ = ["new_class", "new_instance", "resolve_meta_slots"]


def resolve_meta_slots(cls: ClassRecord | RootClass) -> dict[MetaSlot, Any]:
    """
    Return the resolved meta-method slots of `cls`.

    For each slot, a value defined in the class body wins over the value in
    the class descriptor, which already holds the nearest ancestor's
    definition. `None` counts as undefined. CALL is always taken from the
    descriptor: on a class it is the construction hook.
    """
    if isinstance(cls, RootClass):
        return dict(cls.meta_slots)

    body = cls._attributes
    inherited = cls._prototype.meta_slots
    resolved: dict[MetaSlot, Any] = {}
    for slot in MetaSlot:
        value = None
        if slot is not MetaSlot.CALL:
            value = body.get(slot.key)
        if value is None:
            value = inherited.get(slot)
        if value is not None:
            resolved[slot] = value
    return resolved


def new_class(
    name: Any,
    superclass: ClassRecord | None = None,
    *,
    registry: ClassRegistry,
) -> ClassRecord:
    """Create a class named `name` extending `superclass` (or the root) and register it."""
    key = registry.coerce_name(name)

    if superclass is None:
        parent: ClassRecord | RootClass = ROOT
    elif isinstance(superclass, ClassRecord) and superclass._prototype.role is Role.CLASS:
        parent = superclass
    else:
        raise InvalidArgumentError(
            f"superclass must be a class record (got {type(superclass).__name__})"
        )

    if isinstance(parent, ClassRecord):
        with parent._lock:
            slots = resolve_meta_slots(parent)
    else:
        slots = resolve_meta_slots(parent)

    prototype = Prototype(name=key, role=Role.CLASS, lookup_target=parent, meta_slots=slots)
    cls = ClassRecord(prototype)
    registry.register(key, cls)

    logger.debug(
        "Created class %r (super=%s, meta=%s)",
        key,
        parent._prototype.name if isinstance(parent, ClassRecord) else "<root>",
        ",".join(s.name.lower() for s in slots) or "-",
    )
    return cls


def _reject_call(instance: InstanceRecord, *args: Any, **kwargs: Any) -> Any:
    raise InvalidOperationError(
        f"Cannot call {instance._prototype.name!r} instance directly. "
        "Create a new instance from the class."
    )


def _snapshot(cls: ClassRecord) -> Mapping[MetaSlot, Any]:
    with cls._lock:
        slots = resolve_meta_slots(cls)
    slots[MetaSlot.CALL] = _reject_call
    return slots


def new_instance(cls: ClassRecord, *args: Any, **kwargs: Any) -> InstanceRecord:
    """
    Construct an instance of `cls`.

    The initializer (``__init__``, resolved through the class chain) runs
    once with the new instance and the forwarded arguments before this
    returns; its return value is discarded.
    """
    if not isinstance(cls, ClassRecord) or cls._prototype.role is not Role.CLASS:
        raise InvalidArgumentError(f"expected a class record (got {type(cls).__name__})")

    prototype = Prototype(
        name=cls._prototype.name,
        role=Role.INSTANCE,
        lookup_target=cls,
        meta_slots=_snapshot(cls),
    )
    instance = InstanceRecord(prototype)

    initializer = chain_lookup(cls, INITIALIZER_KEY, None)
    if callable(initializer):
        initializer(instance, *args, **kwargs)

    logger.debug("Constructed %s instance", prototype.name)
    return instance
