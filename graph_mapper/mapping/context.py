"""Per-invocation mapping state.

A MappingContext lives for one top-level ``map`` call. It holds the identity
cache (source object -> destination object) that keeps cycles finite and
shared references shared, plus the read-only type override table.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from graph_mapper.core.exceptions import InstantiationError


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


class MappingContext:
    """Identity cache and type overrides for one mapping session.

    Args:
        overrides: Source class -> destination class overrides.
        parent: An existing context. The new context shares its identity
            cache and layers its overrides on top of ``overrides``.
    """

    def __init__(
        self,
        overrides: Mapping[type, type] | None = None,
        parent: MappingContext | None = None,
    ) -> None:
        merged: dict[type, type] = dict(overrides or {})
        # id(source) -> (source, destination); the source is kept alive so
        # its id cannot be reused during the session
        self._already_mapped: dict[int, tuple[Any, Any]] = {}
        if parent is not None:
            merged.update(parent.overrides)
            self._already_mapped = parent._already_mapped
        self._overrides: Mapping[type, type] = MappingProxyType(merged)

    @property
    def overrides(self) -> Mapping[type, type]:
        """Read-only view of the override table."""
        return self._overrides

    def get_override(self, source_class: type) -> type | None:
        return self._overrides.get(source_class)

    def resolve_override(self, source_class: type, declared_class: type) -> type:
        """Pick the destination class for a value of ``source_class``.

        The registered override wins unless the declared class is already a
        subclass of it.
        """
        override = self._overrides.get(source_class)
        if override is None or issubclass(declared_class, override):
            return declared_class
        return override

    def create_destination_instance(self, cls: type) -> Any:
        """Construct an empty destination instance.

        Pydantic models are built with ``model_construct()`` so that
        required fields do not need values up front.

        Raises:
            InstantiationError: If the class cannot be constructed without
                arguments.
        """
        factory = cls.model_construct if _is_pydantic_model(cls) else cls
        try:
            return factory()
        except Exception as e:
            raise InstantiationError(cls, str(e)) from e

    def get_already_mapped(self, source: Any) -> Any | None:
        entry = self._already_mapped.get(id(source))
        if entry is None or entry[0] is not source:
            return None
        return entry[1]

    def put_already_mapped(self, source: Any, destination: Any) -> None:
        self._already_mapped[id(source)] = (source, destination)

    def __len__(self) -> int:
        """Number of source objects mapped so far."""
        return len(self._already_mapped)
