# lightclass/meta.py
"""Meta-method slot and descriptor role enumerations.

`MetaSlot` is the closed set of protocol hooks a class may define and an
instance inherits. Each member's value is the key under which the hook is
stored in a class body, so ``Point.__add__ = fn`` defines `MetaSlot.ADD`.
Translation between slots and Python's operator protocol happens only in
:mod:`lightclass.records`.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["MetaSlot", "Role", "INITIALIZER_KEY"]

# Body key of the initializer. Not a meta-slot: it is resolved through the
# class chain at construction time instead of being snapshotted.
INITIALIZER_KEY = "__init__"


class Role(str, Enum):
    """Discriminant stored on every resolution descriptor."""

    CLASS = "class"
    INSTANCE = "instance"
    PLAIN = "plain"


class MetaSlot(str, Enum):
    """The fixed meta-method set, in canonical order."""

    MODE = "__mode__"
    METATABLE = "__metatable__"
    TOSTRING = "__str__"
    GC = "__del__"
    ADD = "__add__"
    SUB = "__sub__"
    MUL = "__mul__"
    DIV = "__truediv__"
    MOD = "__mod__"
    POW = "__pow__"
    UNM = "__neg__"
    IDIV = "__floordiv__"
    BAND = "__and__"
    BOR = "__or__"
    BXOR = "__xor__"
    BNOT = "__invert__"
    SHL = "__lshift__"
    SHR = "__rshift__"
    CONCAT = "__concat__"
    LEN = "__len__"
    EQ = "__eq__"
    LT = "__lt__"
    LE = "__le__"
    NEWINDEX = "__newindex__"
    CALL = "__call__"
    PAIRS = "__iter__"
    CLOSE = "__close__"

    @property
    def key(self) -> str:
        """Body key the slot is defined under."""
        return self.value

    @classmethod
    def from_key(cls, key: str) -> MetaSlot | None:
        """Return the slot stored under `key`, or None for ordinary members."""
        try:
            return cls(key)
        except ValueError:
            return None
