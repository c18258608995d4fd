"""graph-mapper - map object graphs onto unrelated types by accessor name."""

from __future__ import annotations

from graph_mapper.core.config import MapperConfig
from graph_mapper.core.enums import ContainerKind, ValueKind
from graph_mapper.core.exceptions import (
    ConfigurationError,
    ContainerTypeError,
    GraphMapperError,
    InstantiationError,
    MappingError,
    StrictModeViolation,
)
from graph_mapper.mapping.context import MappingContext
from graph_mapper.mapping.engine import Mapper

__all__ = [
    # Mapping
    "Mapper",
    "MappingContext",
    # Config
    "MapperConfig",
    # Enums
    "ValueKind",
    "ContainerKind",
    # Exceptions
    "GraphMapperError",
    "ConfigurationError",
    "MappingError",
    "StrictModeViolation",
    "InstantiationError",
    "ContainerTypeError",
]
