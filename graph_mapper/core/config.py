"""Mapper configuration.

MapperConfig is a Pydantic model holding the per-mapper policy: the strict
flag and the accessor-name suffixes stripped during accessor resolution.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_SUFFIXES: tuple[str, ...] = ("_dto", "_bo")


class MapperConfig(BaseModel):
    """Configuration for a Mapper instance."""

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES

    @field_validator("suffixes")
    @classmethod
    def _no_empty_suffix(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not suffix for suffix in value):
            raise ValueError("suffixes must be non-empty strings")
        return value
