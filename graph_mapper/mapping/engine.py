"""Object graph mapping engine.

The Mapper copies an object graph onto unrelated destination types by
pairing source accessors with destination mutators, recursing into nested
objects, collections and dicts. A per-call MappingContext keeps cycles
finite and shared references shared.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from enum import Enum
from typing import Any, TypeVar, get_origin

from graph_mapper.core.config import MapperConfig
from graph_mapper.core.enums import ValueKind
from graph_mapper.core.exceptions import StrictModeViolation
from graph_mapper.mapping.accessors import find_mutators, resolve_accessor
from graph_mapper.mapping.context import MappingContext
from graph_mapper.mapping.dispatch import (
    add_element,
    classify,
    container_arguments,
    container_kind,
    find_enum_member,
    is_compatible,
    is_enum_class,
    new_container,
    runtime_class,
)
from graph_mapper.mapping.plan import Mutator
from graph_mapper.mapping.protocol import CustomMapper, Hook
from graph_mapper.mapping.registry import CustomMapperRegistry, HookRegistry

logger = logging.getLogger(__name__)

D = TypeVar("D")
S = TypeVar("S")


def _name(cls: Any) -> str:
    return getattr(cls, "__qualname__", repr(cls))


class Mapper:
    """Maps objects onto destination types using accessors and mutators.

    Configuration methods return the mapper for chaining. Once configured, a
    mapper can be shared between threads: every ``map`` call works on its
    own MappingContext unless the caller passes one in.

    Args:
        config: Strict flag and accessor-name suffixes. Defaults to a
            lenient mapper stripping ``_dto`` and ``_bo``.
    """

    def __init__(self, config: MapperConfig | None = None) -> None:
        self._config = config or MapperConfig()
        self._overrides: dict[type, type] = {}
        self._custom_mappers = CustomMapperRegistry()
        self._hooks = HookRegistry()

    @property
    def config(self) -> MapperConfig:
        return self._config

    @property
    def strict(self) -> bool:
        return self._config.strict

    # --- Configuration ---

    def strict_mode(self, enabled: bool = True) -> Mapper:
        """Enable or disable strict mode (lenient by default).

        In strict mode a missing accessor, a type mismatch or a failing
        accessor/mutator raises StrictModeViolation instead of being skipped.
        """
        self._config = self._config.model_copy(update={"strict": enabled})
        return self

    def mapping(self, source_class: type, destination_class: type) -> Mapper:
        """Map instances of ``source_class`` to ``destination_class``.

        Only needed with inheritance, when the declared destination type of
        a field is less specific than the one wanted.
        """
        self._overrides[source_class] = destination_class
        return self

    def bi_mapping(self, source_class: type, destination_class: type) -> Mapper:
        """Same as mapping() but in both directions."""
        self.mapping(source_class, destination_class)
        return self.mapping(destination_class, source_class)

    def custom_mapper(
        self,
        source_type: type[S],
        destination_type: type[D],
        fn: CustomMapper[S, D],
    ) -> Mapper:
        """Use ``fn(source, context)`` instead of structural mapping."""
        self._custom_mappers.register(source_type, destination_type, fn)
        return self

    def custom_bi_mapper(
        self,
        source_type: type[S],
        destination_type: type[D],
        forward: CustomMapper[S, D],
        backward: CustomMapper[D, S],
    ) -> Mapper:
        """Register a custom mapper for each direction."""
        self.custom_mapper(source_type, destination_type, forward)
        return self.custom_mapper(destination_type, source_type, backward)

    def hook(self, source_type: type[S], destination_type: type[D], fn: Hook[S, D]) -> Mapper:
        """Call ``fn(source, destination)`` once a value is fully mapped."""
        self._hooks.register(source_type, destination_type, fn)
        return self

    def new_context(self, parent: MappingContext | None = None) -> MappingContext:
        """Create a context seeded with this mapper's overrides.

        Pass it to several ``map`` calls to share identity across them.
        """
        return MappingContext(self._overrides, parent)

    # --- Public entry points ---

    def map(self, source: Any, destination_type: Any, context: MappingContext | None = None) -> Any:
        """Map ``source`` onto a new ``destination_type`` instance.

        A collection source with a plain destination class is mapped element
        by element, see map_collection(). A parameterized destination such as
        ``list[UserDTO]`` or ``dict[str, UserDTO]`` is honoured directly.

        Args:
            source: The object to map. Never modified.
            destination_type: The destination class or generic alias.
            context: An existing context to share identity and overrides.

        Returns:
            The mapped destination, or None for a None source.
        """
        if source is None:
            return None
        ctx = self.new_context(context)
        if get_origin(destination_type) is None and classify(source) is ValueKind.COLLECTION:
            return self._map_collection(source, destination_type, ctx)
        return self._nominal_map(source, destination_type, runtime_class(destination_type), ctx)

    def map_collection(
        self,
        source: Collection[Any] | None,
        element_type: Any,
        context: MappingContext | None = None,
    ) -> Any:
        """Map every element of a collection; the collection kind is mirrored.

        Sets give sets, deques give deques and other sequences give lists.
        None elements are dropped.
        """
        if source is None:
            return None
        return self._map_collection(source, element_type, self.new_context(context))

    def map_dict(
        self,
        source: dict[Any, Any] | None,
        key_type: Any,
        value_type: Any,
        context: MappingContext | None = None,
    ) -> dict[Any, Any] | None:
        """Map the keys and values of a dict independently."""
        if source is None:
            return None
        return self._map_dict(source, key_type, value_type, self.new_context(context))

    # --- Recursion ---

    def _report(self, message: str, cause: BaseException | None = None) -> None:
        """Raise in strict mode, otherwise log and let the caller skip."""
        if self._config.strict:
            raise StrictModeViolation(message) from cause
        logger.debug("%s, ignore...", message)

    def _nominal_map(
        self,
        source: Any,
        declared_type: Any,
        destination_class: type,
        context: MappingContext,
    ) -> Any:
        if source is None:
            return None

        kind = classify(source)

        if kind is ValueKind.COLLECTION:
            (element_type,) = container_arguments(declared_type, 1)
            return self._map_collection(source, element_type, context)

        if kind is ValueKind.MAPPING:
            key_type, value_type = container_arguments(declared_type, 2)
            return self._map_dict(source, key_type, value_type, context)

        if kind is ValueKind.ENUM:
            return self._map_enum(source, destination_class)

        # Reuse the destination already built for this source, if any
        already_mapped = context.get_already_mapped(source)
        if already_mapped is not None:
            return already_mapped

        result = self._custom_mappers.try_apply(source, destination_class, context)
        if result.matched:
            return result.value

        if kind is ValueKind.NATIVE:
            return self._map_native(source, destination_class)

        return self._map_composite(source, destination_class, context)

    def _map_collection(self, source: Any, element_type: Any, context: MappingContext) -> Any:
        kind = container_kind(source)
        if kind is None:
            self._report(f"Unhandled collection type {_name(type(source))}")
            return None

        element_class = runtime_class(element_type)
        out = new_container(kind)
        for element in source:
            mapped = self._nominal_map(element, element_type, element_class, context)
            if mapped is not None:
                add_element(out, mapped)
        return out

    def _map_dict(
        self,
        source: Any,
        key_type: Any,
        value_type: Any,
        context: MappingContext,
    ) -> dict[Any, Any]:
        key_class = runtime_class(key_type)
        value_class = runtime_class(value_type)
        out: dict[Any, Any] = {}
        for key, value in source.items():
            mapped_key = self._nominal_map(key, key_type, key_class, context)
            out[mapped_key] = self._nominal_map(value, value_type, value_class, context)
        return out

    def _map_enum(self, source: Enum, destination_class: type) -> Enum | None:
        member = None
        if is_enum_class(destination_class):
            member = find_enum_member(source, destination_class)
        if member is None:
            self._report(
                f"Unable to map {_name(type(source))}.{source.name} -> {_name(destination_class)}"
            )
        return member

    def _map_native(self, source: Any, destination_class: type) -> Any:
        if not is_compatible(source, destination_class):
            self._report(f"Unable to map {_name(type(source))} -> {_name(destination_class)}")
            return None
        self._hooks.apply(source, source)
        return source

    def _map_composite(self, source: Any, destination_class: type, context: MappingContext) -> Any:
        target_class = context.resolve_override(type(source), destination_class)
        if target_class is object:
            self._report(f"No destination type known for {_name(type(source))}")
            return None

        destination = context.create_destination_instance(target_class)
        # Registered before population so back-references resolve to it
        context.put_already_mapped(source, destination)

        for mutator in find_mutators(target_class):
            self._transfer(source, destination, mutator, context)

        self._hooks.apply(source, destination)
        return destination

    def _transfer(
        self,
        source: Any,
        destination: Any,
        mutator: Mutator,
        context: MappingContext,
    ) -> None:
        """Copy one property from source to destination."""
        accessor = resolve_accessor(source, mutator, self._config.suffixes)
        if accessor is None:
            self._report(f"No suitable accessor for {mutator.qualname} in {_name(type(source))}")
            return

        logger.debug("%s -> %s", accessor.qualname(source), mutator.qualname)

        try:
            value = accessor.read(source)
        except Exception as e:
            self._report(f"Unable to read {accessor.qualname(source)} for {mutator.qualname}", e)
            return

        if value is None:
            return

        # Errors raised below the recursion (instantiation, extensions,
        # strict violations) propagate untouched
        mapped = self._nominal_map(value, mutator.declared_type, mutator.parameter_class, context)
        if mapped is None:
            return

        try:
            mutator.apply(destination, mapped)
        except Exception as e:
            self._report(f"Unable to map {mutator.qualname} in {_name(type(source))}", e)
