# lightclass/conf/models.py
from __future__ import annotations

import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# REGISTRY CONFIG
# ---------------------------------------------------------------------------
class RegistryConfig(BaseModel):
    """
    Validated per-registry configuration.

    Built from the uppercase settings keys (``NAME_MAX_LENGTH`` ->
    ``name_max_length``) or passed directly to `ClassRegistry`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name_max_length: int = Field(default=128, ge=1)
    name_pattern: str | None = None
    strip_names: bool = False

    @field_validator("name_pattern")
    @classmethod
    def _check_pattern(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid NAME_PATTERN {value!r}: {exc}") from exc
        return value

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        return re.compile(self.name_pattern) if self.name_pattern is not None else None

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> RegistryConfig:
        fields = cls.model_fields
        data = {
            key.lower(): value
            for key, value in settings.items()
            if key.lower() in fields
        }
        return cls.model_validate(data)
