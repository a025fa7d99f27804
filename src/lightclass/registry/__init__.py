"""Class registries."""

from .base import ClassRegistry
from .exceptions import DuplicateNameError, NotFoundError, RegistryError, RegistryFrozenError

__all__ = [
    "ClassRegistry",
    "RegistryError",
    "DuplicateNameError",
    "NotFoundError",
    "RegistryFrozenError",
]
