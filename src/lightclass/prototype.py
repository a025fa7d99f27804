# lightclass/prototype.py
"""Resolution descriptor shared by class and instance records."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .meta import MetaSlot, Role

__all__ = ["Prototype"]


@dataclass(frozen=True, slots=True, eq=False)
class Prototype:
    """
    Per-record descriptor controlling lookup fallback and meta-method dispatch.

    `lookup_target` is the record consulted when a read misses on the owner:
    the superclass (or the root class) for a class, the owning class for an
    instance. `meta_slots` is resolved once when the owner is created and is
    exposed read-only.

    Descriptors compare by identity; `is_instance_of` relies on it.
    """

    name: str
    role: Role
    lookup_target: Any
    meta_slots: Mapping[MetaSlot, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta_slots", MappingProxyType(dict(self.meta_slots)))

    @property
    def is_class(self) -> bool:
        return self.role is Role.CLASS

    @property
    def is_instance(self) -> bool:
        return self.role is Role.INSTANCE

    def get_meta(self, slot: MetaSlot, default: Any = None) -> Any:
        """Return the resolved value of `slot`, or `default` when absent."""
        return self.meta_slots.get(slot, default)

    def has_meta(self, slot: MetaSlot) -> bool:
        return slot in self.meta_slots

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        slots = ",".join(s.name.lower() for s in self.meta_slots)
        return f"Prototype(name={self.name!r}, role={self.role.value}, slots=[{slots}])"
