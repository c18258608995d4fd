"""Custom mapper and hook registries.

Both registries are ordered: entries are scanned in registration order and
the first match wins (custom mappers) or every match runs (hooks). They are
populated at configuration time and read-only while mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graph_mapper.core.exceptions import ConfigurationError
from graph_mapper.mapping.plan import (
    UNMATCHED,
    CustomMapperEntry,
    CustomMapperResult,
    HookEntry,
)

if TYPE_CHECKING:
    from graph_mapper.mapping.context import MappingContext
    from graph_mapper.mapping.protocol import CustomMapper, Hook


def _check_types(source_type: Any, destination_type: Any, fn: Any) -> None:
    for label, value in (("source", source_type), ("destination", destination_type)):
        if not isinstance(value, type):
            raise ConfigurationError(f"{label} type must be a class, got {value!r}")
    if not callable(fn):
        raise ConfigurationError(f"Expected a callable, got {fn!r}")


class CustomMapperRegistry:
    """Ordered registry of user-supplied transforms."""

    def __init__(self) -> None:
        self._entries: list[CustomMapperEntry] = []

    def register(
        self,
        source_type: type,
        destination_type: type,
        fn: CustomMapper[Any, Any],
    ) -> None:
        _check_types(source_type, destination_type, fn)
        self._entries.append(CustomMapperEntry(source_type, destination_type, fn))

    def try_apply(
        self,
        value: Any,
        destination_class: type,
        context: MappingContext,
    ) -> CustomMapperResult:
        """Apply the first entry matching the value and destination class.

        Exceptions raised by the transform are not caught.
        """
        for entry in self._entries:
            if isinstance(value, entry.source_type) and issubclass(
                entry.destination_type, destination_class
            ):
                return CustomMapperResult(matched=True, value=entry.fn(value, context))
        return UNMATCHED

    @property
    def entries(self) -> list[CustomMapperEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class HookRegistry:
    """Ordered registry of post-mapping callbacks."""

    def __init__(self) -> None:
        self._entries: list[HookEntry] = []

    def register(self, source_type: type, destination_type: type, fn: Hook[Any, Any]) -> None:
        _check_types(source_type, destination_type, fn)
        self._entries.append(HookEntry(source_type, destination_type, fn))

    def apply(self, source: Any, destination: Any) -> None:
        """Run every hook matching the runtime types of both values."""
        for entry in self._entries:
            if isinstance(source, entry.source_type) and isinstance(
                destination, entry.destination_type
            ):
                entry.fn(source, destination)

    @property
    def entries(self) -> list[HookEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
