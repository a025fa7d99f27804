# lightclass/exceptions.py
"""Unified exception hierarchy for lightclass."""


class LightClassError(Exception):
    """Base class for every error raised by lightclass."""


class InvalidArgumentError(LightClassError, TypeError):
    """Raised when a class name or superclass argument is malformed."""


class InvalidOperationError(LightClassError, TypeError):
    """Raised when an instance is called as though it were a class."""


class UnknownSettingError(LightClassError, KeyError):
    """Raised when a settings key is not a registry option."""


__all__ = [
    "LightClassError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "UnknownSettingError",
]
