# lightclass/registry/base.py
from __future__ import annotations

import logging
from threading import RLock
from typing import TYPE_CHECKING, Any, Callable, Iterator, Literal, overload

from asgiref.sync import sync_to_async

from ..conf import RegistryConfig, settings
from ..utils.names import validate_class_name
from .exceptions import DuplicateNameError, NotFoundError, RegistryFrozenError

if TYPE_CHECKING:
    from ..records import ClassRecord

logger = logging.getLogger(__name__)


class ClassRegistry:
    """
    Name-keyed store of class records.

    Entries are added by class creation and never replaced: registering a
    name twice raises `DuplicateNameError`. Check-and-insert happens under
    a re-entrant lock so concurrent definitions cannot both succeed.
    """

    def __init__(self, config: RegistryConfig | None = None, *, label: str = "default") -> None:
        self.config = config if config is not None else settings.registry_config()
        self.label = label
        self._pattern = self.config.compiled_pattern
        self._lock = RLock()
        self._store: dict[str, ClassRecord] = {}
        self._frozen = False

    def coerce_name(self, name: Any) -> str:
        """Validate `name` against this registry's config and return the key."""
        return validate_class_name(
            name,
            max_length=self.config.name_max_length,
            pattern=self._pattern,
            strip=self.config.strip_names,
        )

    # --- registration ---

    def register(self, name: Any, cls: "ClassRecord") -> None:
        """
        Register `cls` under `name`.

        :raises InvalidArgumentError: If `name` is not a valid class name.
        :raises DuplicateNameError: If `name` is already registered.
        :raises RegistryFrozenError: If the registry is frozen.
        """
        key = self.coerce_name(name)
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Registry {self.label!r} is frozen")
            if key in self._store:
                raise DuplicateNameError(f"Class {key!r} is already defined.")
            self._store[key] = cls
        logger.debug("Registered class %r in registry %r", key, self.label)

    async def aregister(self, name: Any, cls: "ClassRecord") -> None:
        """Async wrapper around `register`."""
        return await sync_to_async(self.register)(name, cls)

    # --- retrieval ---

    def get(self, name: Any) -> "ClassRecord":
        """
        Return the class registered under `name`.

        :raises InvalidArgumentError: If `name` is not a string.
        :raises NotFoundError: If no class is registered under `name`.
        """
        key = self.coerce_name(name)
        with self._lock:
            try:
                return self._store[key]
            except KeyError as err:
                raise NotFoundError(f"Class {key!r} is not defined.") from err

    async def aget(self, name: Any) -> "ClassRecord":
        """Async wrapper around `get`."""
        return await sync_to_async(self.get)(name)

    def try_get(self, name: Any) -> "ClassRecord | None":
        """Like `get`, but return None when the class is not defined."""
        try:
            return self.get(name)
        except NotFoundError:
            return None

    async def atry_get(self, name: Any) -> "ClassRecord | None":
        try:
            return await self.aget(name)
        except NotFoundError:
            return None

    # --- enumeration ---

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    async def acount(self) -> int:
        return await sync_to_async(self.count)()

    @overload
    def names(self) -> tuple[str, ...]: ...
    @overload
    def names(self, *, as_csv: Literal[True]) -> str: ...
    @overload
    def names(self, *, as_csv: Literal[False]) -> tuple[str, ...]: ...

    def names(self, *, as_csv: bool = False):
        """Return registered names in definition order, or a comma-separated string."""
        with self._lock:
            keys = tuple(self._store)
        if as_csv:
            return ",".join(keys)
        return keys

    def items(self) -> tuple[tuple[str, "ClassRecord"], ...]:
        with self._lock:
            return tuple(self._store.items())

    def filter(self, pred: Callable[["ClassRecord"], bool]) -> tuple["ClassRecord", ...]:
        """Return all registered classes matching predicate `pred`."""
        with self._lock:
            return tuple(c for c in self._store.values() if pred(c))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        with self._lock:
            return name in self._store

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject any further registrations."""
        with self._lock:
            self._frozen = True
        logger.debug("Registry %r frozen with %d classes", self.label, len(self._store))

    def clear(self) -> None:
        """Forget every registered class. Existing records stay usable."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Registry {self.label!r} is frozen")
            self._store.clear()
        logger.debug("Registry %r cleared", self.label)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ClassRegistry({self.label!r}, classes={self.names(as_csv=True)!r})"
