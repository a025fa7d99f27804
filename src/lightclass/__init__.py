"""
lightclass: single-inheritance light classes with meta-method inheritance.

A light class is a named, registry-tracked record of members. Calling it
constructs an instance whose missing attributes resolve through the class
chain, and whose operators dispatch to meta-methods inherited eagerly from
its ancestors.

Usage:
------
    from lightclass import create_class, extend_class, is_instance_of

    Animal = create_class("Animal")

    def _init(self, name):
        self.name = name

    Animal.__init__ = _init
    Animal.__str__ = lambda self: f"<{self.name}>"

    Dog = extend_class("Dog", Animal)
    rex = Dog("rex")
    assert is_instance_of(rex, Animal) and str(rex) == "<rex>"
"""

from importlib.metadata import PackageNotFoundError, version

from ._state import get_current_registry, push_registry, set_current_registry
from .api import ClassNamespace, classes, create_class, extend_class, lookup_class, try_lookup_class
from .dispatch import concat, invoke_meta, rawget, rawset
from .exceptions import InvalidArgumentError, InvalidOperationError, LightClassError, UnknownSettingError
from .factory import new_class, new_instance
from .introspection import (
    is_class,
    is_instance,
    is_instance_of,
    kind_of,
    name_of,
    prototype_of,
)
from .meta import MetaSlot, Role
from .prototype import Prototype
from .records import ClassRecord, InstanceRecord
from .registry import ClassRegistry, DuplicateNameError, NotFoundError, RegistryError, RegistryFrozenError

try:
    __version__ = version("lightclass")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    # API
    "create_class", "extend_class", "lookup_class", "try_lookup_class",
    "classes", "ClassNamespace", "new_class", "new_instance",
    # Introspection
    "is_class", "is_instance", "is_instance_of", "kind_of", "name_of", "prototype_of",
    # Dispatch
    "concat", "invoke_meta", "rawget", "rawset",
    # Types
    "ClassRecord", "InstanceRecord", "Prototype", "MetaSlot", "Role",
    # Registries
    "ClassRegistry", "get_current_registry", "set_current_registry", "push_registry",
    # Errors
    "LightClassError", "InvalidArgumentError", "InvalidOperationError", "UnknownSettingError",
    "RegistryError", "DuplicateNameError", "NotFoundError", "RegistryFrozenError",
]
