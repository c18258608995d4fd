"""Extension protocols.

Custom mappers replace structural mapping for a (source, destination) type
pair. Hooks observe a finished mapping. Both are plain callables.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from graph_mapper.mapping.context import MappingContext

S_contra = TypeVar("S_contra", contravariant=True)
D_co = TypeVar("D_co", covariant=True)
D_contra = TypeVar("D_contra", contravariant=True)


class CustomMapper(Protocol[S_contra, D_co]):
    """Transforms a source value into a destination value.

    The context is passed so that the transform can map nested values with
    ``mapper.map(value, SomeType, context)`` and keep identity sharing.
    """

    def __call__(self, source: S_contra, context: MappingContext) -> D_co: ...


class Hook(Protocol[S_contra, D_contra]):
    """Called with the source and its fully mapped destination."""

    def __call__(self, source: S_contra, destination: D_contra) -> None: ...
