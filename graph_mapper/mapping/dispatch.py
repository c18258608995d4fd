"""Type dispatcher.

Classifies values into a closed set of kinds and provides the helpers the
engine needs per kind: native compatibility, enum member lookup, container
construction and generic argument extraction.
"""

from __future__ import annotations

import inspect
import types
from collections import deque
from collections.abc import Collection, Mapping, MappingView, Sequence
from collections.abc import Set as AbstractSet
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ForwardRef, Union, get_args, get_origin
from uuid import UUID

from graph_mapper.core.enums import ContainerKind, ValueKind
from graph_mapper.core.exceptions import ContainerTypeError

NATIVE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    datetime,
    date,
    time,
    timedelta,
    UUID,
)


def classify(value: Any) -> ValueKind:
    """Return the kind of a (non-None) value.

    Enums are checked first: IntEnum and StrEnum members are also ints/strs.
    """
    if isinstance(value, Enum):
        return ValueKind.ENUM
    if isinstance(value, NATIVE_TYPES):
        return ValueKind.NATIVE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Collection):
        return ValueKind.COLLECTION
    return ValueKind.COMPOSITE


# --- Type annotations ---


def unwrap_optional(declared: Any) -> Any:
    """Strip ``Optional[X]`` / ``X | None`` and ``Annotated[X, ...]`` wrappers."""
    origin = get_origin(declared)
    if origin is Annotated:
        return unwrap_optional(get_args(declared)[0])
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(declared) if arg is not type(None)]
        if len(args) == 1:
            return unwrap_optional(args[0])
    return declared


def runtime_class(declared: Any) -> type:
    """Runtime class for an annotation; ``object`` when it cannot be known."""
    declared = unwrap_optional(declared)
    if declared is None or declared is Any or declared is inspect.Parameter.empty:
        return object
    origin = get_origin(declared)
    if origin is Union or origin is types.UnionType:
        return object
    if origin is not None:
        declared = origin
    return declared if isinstance(declared, type) else object


def container_arguments(declared: Any, count: int) -> tuple[Any, ...]:
    """Generic arguments of a container annotation.

    ``list[Address]`` gives ``(Address,)`` and ``dict[str, Address]`` gives
    ``(str, Address)``. Bare container annotations are not supported.
    """
    unwrapped = unwrap_optional(declared)
    if isinstance(unwrapped, str):
        raise ContainerTypeError(declared, f"unresolved forward reference {unwrapped!r}")
    args = tuple(arg for arg in get_args(unwrapped) if arg is not Ellipsis)
    for arg in args:
        if isinstance(arg, (str, ForwardRef)):
            name = arg if isinstance(arg, str) else arg.__forward_arg__
            raise ContainerTypeError(declared, f"unresolved forward reference {name!r}")
    if len(args) < count:
        raise ContainerTypeError(
            declared,
            f"expected {count} generic argument(s), e.g. list[Item] or dict[str, Item]",
        )
    return args[:count]


# --- Native values ---


def is_compatible(value: Any, destination_class: type) -> bool:
    """Whether a native value can be passed through to destination_class.

    Follows the numeric tower: an int is accepted for float, an int or
    float for complex. bool is an int, so it is accepted for all three.
    """
    if destination_class is object or isinstance(value, destination_class):
        return True
    if destination_class is float:
        return isinstance(value, int)
    if destination_class is complex:
        return isinstance(value, (int, float))
    return False


# --- Enums ---


def is_enum_class(destination_class: type) -> bool:
    return isinstance(destination_class, type) and issubclass(destination_class, Enum)


def find_enum_member(value: Enum, destination_class: type[Enum]) -> Enum | None:
    """Destination member with exactly the same name, or None."""
    return destination_class.__members__.get(value.name)


# --- Collections ---


def container_kind(value: Collection[Any]) -> ContainerKind | None:
    # dict views are unsupported, keys() and items() included
    if isinstance(value, MappingView):
        return None
    # deque is a MutableSequence, check it first
    if isinstance(value, deque):
        return ContainerKind.QUEUE
    if isinstance(value, AbstractSet):
        return ContainerKind.SET
    if isinstance(value, Sequence):
        return ContainerKind.SEQUENCE
    return None


def new_container(kind: ContainerKind) -> set[Any] | list[Any] | deque[Any]:
    if kind is ContainerKind.SET:
        return set()
    if kind is ContainerKind.QUEUE:
        return deque()
    return []


def add_element(container: set[Any] | list[Any] | deque[Any], element: Any) -> None:
    if isinstance(container, set):
        container.add(element)
    else:
        container.append(element)
