"""Configuration for lightclass registries."""

from .defaults import DEFAULTS
from .models import RegistryConfig
from .settings import CONFIG_MODULE_ENVVAR, MODULE_PREFIX, Settings, settings

__all__ = ["DEFAULTS", "CONFIG_MODULE_ENVVAR", "MODULE_PREFIX", "RegistryConfig", "Settings", "settings"]
