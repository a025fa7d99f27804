"""Active class-registry tracking.

A ``ContextVar`` holds the registry used by the module-level API when no
``registry=`` argument is given. Without an explicit one, a process-wide
default registry is created lazily on first use. Tests and embedders push
their own with :func:`push_registry`.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from threading import Lock
from typing import Generator

from .registry import ClassRegistry

_current_registry: ContextVar[ClassRegistry | None] = ContextVar("lightclass_registry", default=None)
_default_registry: ClassRegistry | None = None
_default_lock = Lock()


def get_default_registry() -> ClassRegistry:
    """Return the process-wide default registry, creating it once."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = ClassRegistry(label="default")
        return _default_registry


def get_current_registry() -> ClassRegistry:
    """Return the active registry, falling back to the default one."""
    registry = _current_registry.get()
    if registry is None:
        registry = get_default_registry()
    return registry


def set_current_registry(registry: ClassRegistry | None) -> None:
    _current_registry.set(registry)


@contextmanager
def push_registry(registry: ClassRegistry | None = None) -> Generator[ClassRegistry, None, None]:
    """Make `registry` (a fresh one if omitted) active for the enclosed block."""
    if registry is None:
        registry = ClassRegistry(label="scoped")
    token = _current_registry.set(registry)
    try:
        yield registry
    finally:
        _current_registry.reset(token)


__all__ = [
    "get_current_registry",
    "get_default_registry",
    "push_registry",
    "set_current_registry",
]
