"""
Process-wide registry options.

Layers, highest first: runtime overrides, the module named by
``LIGHTCLASS_CONFIG_MODULE``, then :data:`DEFAULTS`. Every key must name a
`RegistryConfig` field (``NAME_MAX_LENGTH`` is ``name_max_length``), so a
typo in a config module fails at load time instead of being ignored.
"""

from __future__ import annotations

import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Iterator, Mapping, MutableMapping

from ..exceptions import UnknownSettingError
from .defaults import DEFAULTS
from .models import RegistryConfig

logger = logging.getLogger(__name__)

CONFIG_MODULE_ENVVAR = "LIGHTCLASS_CONFIG_MODULE"
MODULE_PREFIX = "LIGHTCLASS_"

__all__ = ["CONFIG_MODULE_ENVVAR", "MODULE_PREFIX", "Settings", "settings"]


def _known_keys() -> frozenset[str]:
    return frozenset(name.upper() for name in RegistryConfig.model_fields)


def _checked(options: Mapping[str, Any], source: str) -> dict[str, Any]:
    unknown = sorted(set(options) - _known_keys())
    if unknown:
        raise UnknownSettingError(f"Unknown lightclass setting(s) in {source}: {', '.join(unknown)}")
    return dict(options)


class Settings(MutableMapping[str, Any]):
    """Layered registry options validated against `RegistryConfig`."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._storage = ChainMap({}, *(_checked(layer, "overlay") for layer in layers), dict(DEFAULTS))

    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.maps[0].update(_checked({key: value}, "override"))

    def __delitem__(self, key: str) -> None:
        del self._storage.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def load_module(self, module_name: str) -> None:
        """
        Overlay the ``LIGHTCLASS_``-prefixed names defined in `module_name`.

        The overlay sits above the defaults and below runtime overrides.
        Other names in the module are ignored.
        """
        module = importlib.import_module(module_name)
        options = {
            key[len(MODULE_PREFIX):]: value
            for key, value in vars(module).items()
            if key.startswith(MODULE_PREFIX)
        }
        self._storage.maps.insert(1, _checked(options, module_name))
        logger.debug("Loaded lightclass settings %s from %s", sorted(options), module_name)

    def load_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR) -> bool:
        """Load the module named by `envvar`; return False when it is unset."""
        module_name = os.environ.get(envvar)
        if not module_name:
            return False
        self.load_module(module_name)
        return True

    def reset(self) -> None:
        """Drop runtime overrides, keeping loaded modules and defaults."""
        self._storage.maps[0].clear()

    def registry_config(self) -> RegistryConfig:
        """Validate the current values into a `RegistryConfig`."""
        return RegistryConfig.from_settings(self)


settings = Settings()
settings.load_from_envvar()
