"""Mapping plan data classes.

Frozen dataclasses describing the resolved pieces the engine works with:
accessor/mutator pairs and registry entries.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Accessor:
    """A zero-argument read on the source object."""

    name: str
    owner: type | None  # None for plain instance attributes
    is_method: bool

    def read(self, source: Any) -> Any:
        value = getattr(source, self.name)
        return value() if self.is_method else value

    def qualname(self, source: Any) -> str:
        owner = self.owner or type(source)
        suffix = "()" if self.is_method else ""
        return f"{owner.__qualname__}.{self.name}{suffix}"


@dataclass(frozen=True)
class Mutator:
    """A single-value write on the destination object."""

    name: str  # property name, e.g. "address" for set_address()
    member: str  # attribute or method actually written
    owner: type
    declared_type: Any  # annotation as declared, generic arguments kept
    parameter_class: type  # runtime class of the annotation, object if unknown
    is_method: bool = False
    arity: int = 1

    def apply(self, destination: Any, value: Any) -> None:
        if self.is_method:
            getattr(destination, self.member)(value)
        else:
            setattr(destination, self.member, value)

    @property
    def qualname(self) -> str:
        suffix = "()" if self.is_method else ""
        return f"{self.owner.__qualname__}.{self.member}{suffix}"


@dataclass(frozen=True)
class CustomMapperEntry:
    """A user transform from source_type to destination_type."""

    source_type: type
    destination_type: type
    fn: Callable[[Any, Any], Any]


@dataclass(frozen=True)
class HookEntry:
    """A post-mapping callback for (source_type, destination_type) pairs."""

    source_type: type
    destination_type: type
    fn: Callable[[Any, Any], None]


@dataclass(frozen=True)
class CustomMapperResult:
    """Outcome of a custom mapper lookup."""

    matched: bool
    value: Any = None


UNMATCHED = CustomMapperResult(matched=False)
