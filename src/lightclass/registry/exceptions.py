# lightclass/registry/exceptions.py
"""Registry exceptions"""
from lightclass.exceptions import LightClassError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(LightClassError): ...


class DuplicateNameError(RegistryError):
    """Raised when a class name is already present in the registry."""


class NotFoundError(RegistryError, AttributeError):
    """Raised when no class is registered under the requested name."""


class RegistryFrozenError(RuntimeError, RegistryError): ...
