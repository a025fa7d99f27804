# lightclass/utils/names.py
"""Class-name validation."""

from __future__ import annotations

import re

from ..exceptions import InvalidArgumentError

__all__ = ["validate_class_name"]


def validate_class_name(
    value: object,
    *,
    max_length: int,
    pattern: re.Pattern[str] | None = None,
    strip: bool = False,
) -> str:
    """
    Validate a class name and return the registry key for it.

    Rules:
    - must be a string
    - cannot be empty (after stripping, when `strip` is set)
    - length <= `max_length`
    - must fully match `pattern`, when one is configured

    Raises InvalidArgumentError on failure.
    """
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Class name must be a string (got {type(value).__name__})")
    name = value.strip() if strip else value
    if not name:
        raise InvalidArgumentError("Class name cannot be empty")
    if len(name) > max_length:
        raise InvalidArgumentError(f"Class name too long (> {max_length}): {name[:32]!r}...")
    if pattern is not None and not pattern.fullmatch(name):
        raise InvalidArgumentError(
            f"Class name {name!r} does not match pattern {pattern.pattern!r}"
        )
    return name
