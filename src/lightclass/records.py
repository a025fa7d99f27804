# lightclass/records.py
"""
Host types for class and instance records.

`ClassRecord` and `InstanceRecord` are the only Python types lightclass
creates. Both keep their members in an insertion-ordered `_attributes`
dict and a `Prototype` descriptor; everything else is dispatch:

- attribute reads that miss on the record walk `lookup_target` links up to
  the root class;
- Python's operator protocol on instances is mapped onto `MetaSlot` values
  from the instance's snapshot, so ``a + b`` calls the ``ADD`` hook.

Binary hooks receive operands in source order whichever side defines the
hook, so ``1 + point`` calls ``Point.__add__(1, point)``.
"""

from __future__ import annotations

import logging
from threading import RLock
from types import FunctionType, MethodType
from typing import Any, Callable, Iterator

from .exceptions import InvalidArgumentError, InvalidOperationError
from .meta import INITIALIZER_KEY, MetaSlot
from .prototype import Prototype

logger = logging.getLogger(__name__)

__all__ = [
    "ClassRecord",
    "InstanceRecord",
    "chain_lookup",
    "default_tostring",
]

_MISSING = object()
_ABSENT = object()
_INTERNAL = frozenset({"_prototype", "_attributes", "_lock"})
# Body keys that shadow ClassRecord's own dunders on attribute reads.
_BODY_KEYS = frozenset({INITIALIZER_KEY, *(slot.key for slot in MetaSlot)})


def default_tostring(record: Any) -> str:
    """Display used when no TOSTRING hook applies: ``"<name>: 0x<address>"``."""
    proto = record._prototype
    return f"{proto.name}: {id(record):#x}"


def chain_lookup(record: Any, key: str, default: Any = _MISSING) -> Any:
    """
    Resolve `key` starting at `record` and following `lookup_target` links.

    The walk ends after the first record without a descriptor (the root
    class). Raises KeyError when no record on the chain defines `key` and
    no `default` is supplied.
    """
    current = record
    while current is not None:
        body = current._attributes
        if key in body:
            return body[key]
        proto = getattr(current, "_prototype", None)
        current = proto.lookup_target if proto is not None else None
    if default is _MISSING:
        raise KeyError(key)
    return default


def _reject_internal(record: Any, name: str) -> None:
    if name in _INTERNAL:
        raise InvalidArgumentError(
            f"{name!r} is reserved on {record._prototype.name!r} records"
        )


# -----------------------------------------------------------------------------
# Class records
# -----------------------------------------------------------------------------

class ClassRecord:
    """
    A named class: an open member mapping plus a CLASS-role descriptor.

    Members are read and written as attributes (``Animal.speak = fn``) or
    items (``Animal["speak"]``). Reads fall through to the superclass chain.
    Calling the record dispatches its CALL slot, which the root class
    supplies as the construction hook.
    """

    __slots__ = ("_prototype", "_attributes", "_lock", "__weakref__")

    def __init__(self, prototype: Prototype) -> None:
        object.__setattr__(self, "_prototype", prototype)
        object.__setattr__(self, "_attributes", {})
        object.__setattr__(self, "_lock", RLock())

    # Member access ----------------------------------------------------
    def __getattribute__(self, name: str) -> Any:
        # ``Animal.__init__`` reads the body, not ClassRecord.__init__.
        if name in _BODY_KEYS:
            value = chain_lookup(self, name, _ABSENT)
            if value is not _ABSENT:
                return value
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        if name in _INTERNAL:
            raise AttributeError(name)
        try:
            return chain_lookup(self, name)
        except KeyError:
            raise AttributeError(
                f"class {self._prototype.name!r} has no attribute {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        _reject_internal(self, name)
        with self._lock:
            self._attributes[name] = value

    def __delattr__(self, name: str) -> None:
        with self._lock:
            try:
                del self._attributes[name]
            except KeyError:
                raise AttributeError(name) from None

    def __getitem__(self, key: str) -> Any:
        return chain_lookup(self, key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.__setattr__(key, value)

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._attributes[key]

    def __contains__(self, key: object) -> bool:
        try:
            return chain_lookup(self, key, _ABSENT) is not _ABSENT
        except TypeError:  # unhashable key
            return False

    # Not a container: keep the legacy __getitem__ iteration protocol off.
    __iter__ = None

    def __dir__(self) -> list[str]:
        names: dict[str, None] = {}
        current = self
        while current is not None:
            names.update(dict.fromkeys(current._attributes))
            proto = getattr(current, "_prototype", None)
            current = proto.lookup_target if proto is not None else None
        return list(names)

    # Construction -----------------------------------------------------
    def __call__(self, *args: Any, **kwargs: Any) -> InstanceRecord:
        hook = self._prototype.get_meta(MetaSlot.CALL)
        if hook is None:
            raise InvalidOperationError(f"class {self._prototype.name!r} is not constructible")
        return hook(self, *args, **kwargs)

    def __repr__(self) -> str:
        return default_tostring(self)

    __str__ = __repr__


# -----------------------------------------------------------------------------
# Instance records
# -----------------------------------------------------------------------------

def _hook(record: Any, slot: MetaSlot) -> Callable[..., Any] | None:
    if isinstance(record, InstanceRecord):
        return record._prototype.meta_slots.get(slot)
    return None


def _either_hook(left: Any, right: Any, slot: MetaSlot) -> Callable[..., Any] | None:
    return _hook(left, slot) or _hook(right, slot)


def _binary(slot: MetaSlot) -> tuple[Callable[[Any, Any], Any], Callable[[Any, Any], Any]]:
    """Build the forward and reflected dunders dispatching `slot`."""

    def forward(self, other):
        hook = _either_hook(self, other, slot)
        if hook is None:
            return NotImplemented
        return hook(self, other)

    def reflected(self, other):
        hook = _either_hook(self, other, slot)
        if hook is None:
            return NotImplemented
        return hook(other, self)

    forward.__name__ = slot.key
    reflected.__name__ = f"__r{slot.key[2:]}"
    return forward, reflected


def _unary(slot: MetaSlot) -> Callable[[Any], Any]:
    def dispatch(self):
        hook = _hook(self, slot)
        if hook is None:
            raise TypeError(
                f"bad operand type for {slot.name.lower()}: {self._prototype.name!r} instance"
            )
        return hook(self)

    dispatch.__name__ = slot.key
    return dispatch


def _ordering(slot: MetaSlot, *, swapped: bool) -> Callable[[Any, Any], Any]:
    # `a > b` is `b < a`; `a >= b` is `b <= a`, with `b`'s hook tried first.
    def compare(self, other):
        left, right = (other, self) if swapped else (self, other)
        hook = _either_hook(left, right, slot)
        if hook is None:
            return NotImplemented
        return bool(hook(left, right))

    return compare


class InstanceRecord:
    """
    An object constructed from a `ClassRecord`.

    Own fields live in `_attributes`; missing reads resolve through the
    owning class and its ancestors, binding plain functions to the
    instance. Assigning a field that is not yet present dispatches the
    NEWINDEX hook when the class defines one.
    """

    __slots__ = ("_prototype", "_attributes", "__weakref__")

    def __init__(self, prototype: Prototype) -> None:
        object.__setattr__(self, "_prototype", prototype)
        object.__setattr__(self, "_attributes", {})

    # Member access ----------------------------------------------------
    def __getattr__(self, name: str) -> Any:
        if name in _INTERNAL:
            raise AttributeError(name)
        body = self._attributes
        if name in body:
            return body[name]
        try:
            value = chain_lookup(self._prototype.lookup_target, name)
        except KeyError:
            raise AttributeError(
                f"{self._prototype.name!r} instance has no attribute {name!r}"
            ) from None
        if isinstance(value, FunctionType):
            return MethodType(value, self)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        _reject_internal(self, name)
        body = self._attributes
        if name not in body:
            hook = self._prototype.meta_slots.get(MetaSlot.NEWINDEX)
            if hook is not None:
                hook(self, name, value)
                return
        body[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._attributes[name]
        except KeyError:
            raise AttributeError(name) from None

    def __dir__(self) -> list[str]:
        return list(dict.fromkeys([*self._attributes, *dir(self._prototype.lookup_target)]))

    # Display ----------------------------------------------------------
    def __str__(self) -> str:
        hook = self._prototype.meta_slots.get(MetaSlot.TOSTRING)
        if hook is None:
            return default_tostring(self)
        return hook(self)

    def __repr__(self) -> str:
        return default_tostring(self)

    # Arithmetic and bitwise -------------------------------------------
    __add__, __radd__ = _binary(MetaSlot.ADD)
    __sub__, __rsub__ = _binary(MetaSlot.SUB)
    __mul__, __rmul__ = _binary(MetaSlot.MUL)
    __truediv__, __rtruediv__ = _binary(MetaSlot.DIV)
    __mod__, __rmod__ = _binary(MetaSlot.MOD)
    __pow__, __rpow__ = _binary(MetaSlot.POW)
    __floordiv__, __rfloordiv__ = _binary(MetaSlot.IDIV)
    __and__, __rand__ = _binary(MetaSlot.BAND)
    __or__, __ror__ = _binary(MetaSlot.BOR)
    __xor__, __rxor__ = _binary(MetaSlot.BXOR)
    __lshift__, __rlshift__ = _binary(MetaSlot.SHL)
    __rshift__, __rrshift__ = _binary(MetaSlot.SHR)

    __neg__ = _unary(MetaSlot.UNM)
    __invert__ = _unary(MetaSlot.BNOT)

    # Comparison -------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, InstanceRecord):
            return NotImplemented
        hook = _either_hook(self, other, MetaSlot.EQ)
        if hook is None:
            return False
        return bool(hook(self, other))

    __hash__ = object.__hash__

    __lt__ = _ordering(MetaSlot.LT, swapped=False)
    __le__ = _ordering(MetaSlot.LE, swapped=False)
    __gt__ = _ordering(MetaSlot.LT, swapped=True)
    __ge__ = _ordering(MetaSlot.LE, swapped=True)

    # Protocols --------------------------------------------------------
    def __bool__(self) -> bool:
        # Truthiness never consults LEN.
        return True

    def __len__(self) -> int:
        hook = self._prototype.meta_slots.get(MetaSlot.LEN)
        if hook is None:
            raise TypeError(f"object of type {self._prototype.name!r} has no len()")
        return hook(self)

    def __iter__(self) -> Iterator[Any]:
        hook = self._prototype.meta_slots.get(MetaSlot.PAIRS)
        if hook is None:
            raise TypeError(f"{self._prototype.name!r} instance is not iterable")
        return iter(hook(self))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        hook = self._prototype.meta_slots[MetaSlot.CALL]
        return hook(self, *args, **kwargs)

    def __enter__(self) -> InstanceRecord:
        if MetaSlot.CLOSE not in self._prototype.meta_slots:
            raise TypeError(f"{self._prototype.name!r} instance has no close meta-method")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._prototype.meta_slots[MetaSlot.CLOSE](self, exc)

    def __del__(self) -> None:
        proto = getattr(self, "_prototype", None)
        if proto is None:
            return
        hook = proto.meta_slots.get(MetaSlot.GC)
        if hook is not None:
            logger.debug("Finalizing %s instance", proto.name)
            hook(self)
