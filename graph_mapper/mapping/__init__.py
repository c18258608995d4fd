"""Mapping layer - copy object graphs onto destination types."""

from __future__ import annotations

from graph_mapper.mapping.accessors import find_mutators, resolve_accessor
from graph_mapper.mapping.context import MappingContext
from graph_mapper.mapping.dispatch import classify
from graph_mapper.mapping.engine import Mapper
from graph_mapper.mapping.plan import (
    Accessor,
    CustomMapperEntry,
    CustomMapperResult,
    HookEntry,
    Mutator,
)
from graph_mapper.mapping.registry import CustomMapperRegistry, HookRegistry

__all__ = [
    "Mapper",
    "MappingContext",
    "CustomMapperRegistry",
    "HookRegistry",
    "find_mutators",
    "resolve_accessor",
    "classify",
    "Accessor",
    "Mutator",
    "CustomMapperEntry",
    "CustomMapperResult",
    "HookEntry",
]
