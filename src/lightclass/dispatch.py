# lightclass/dispatch.py
"""Explicit meta-method dispatch and raw member access."""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidArgumentError, InvalidOperationError
from .introspection import kind_of, prototype_of
from .meta import MetaSlot
from .records import ClassRecord, InstanceRecord

__all__ = ["concat", "invoke_meta", "rawget", "rawset"]


def _require_record(obj: Any) -> ClassRecord | InstanceRecord:
    if not isinstance(obj, (ClassRecord, InstanceRecord)):
        raise InvalidArgumentError(f"expected a class or instance record (got {kind_of(obj)})")
    return obj


def rawget(obj: Any, key: str, default: Any = None) -> Any:
    """Read `key` from `obj`'s own members, skipping the lookup chain."""
    return _require_record(obj)._attributes.get(key, default)


def rawset(obj: Any, key: str, value: Any) -> None:
    """Write `key` into `obj`'s own members without NEWINDEX dispatch."""
    record = _require_record(obj)
    if isinstance(record, ClassRecord):
        with record._lock:
            record._attributes[key] = value
    else:
        record._attributes[key] = value


def invoke_meta(obj: Any, slot: MetaSlot, *args: Any) -> Any:
    """
    Call `obj`'s resolved `slot` hook with `obj` followed by `args`.

    :raises InvalidOperationError: If `obj` has no hook for `slot`.
    """
    proto = prototype_of(obj)
    hook = proto.get_meta(slot) if proto is not None else None
    if hook is None:
        raise InvalidOperationError(f"{kind_of(obj)} has no {slot.name.lower()} meta-method")
    if not callable(hook):
        raise InvalidOperationError(f"{slot.name.lower()} meta-method of {proto.name!r} is not callable")
    return hook(obj, *args)


def concat(left: Any, right: Any) -> Any:
    """
    Concatenate two values.

    Dispatches the CONCAT hook of `left`, else of `right`, with operands in
    source order. Strings and numbers concatenate as text.
    """
    for operand in (left, right):
        if isinstance(operand, InstanceRecord):
            hook = operand._prototype.get_meta(MetaSlot.CONCAT)
            if hook is not None:
                return hook(left, right)

    if _is_text(left) and _is_text(right):
        return f"{left}{right}"
    kind = kind_of(right if _is_text(left) else left)
    article = "an" if kind[:1].lower() in "aeiou" else "a"
    raise InvalidOperationError(f"attempt to concatenate {article} {kind} value")


def _is_text(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)
