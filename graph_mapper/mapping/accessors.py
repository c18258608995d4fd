"""Accessor resolution and mutator discovery.

Mutators are found on the destination class:

- ``set_<name>(self, value)`` methods
- writable properties
- dataclass fields, Pydantic model fields and annotated class attributes

Accessors are found on the source object, walking its MRO (excluding
``object``) before its instance attributes:

- ``get_<name>()`` and ``is_<name>()`` methods
- readable properties and slots, instance attributes
- plain class attributes, last
"""

from __future__ import annotations

import dataclasses
import inspect
import sys
import typing
from collections.abc import Iterable
from typing import Any, ClassVar

from pydantic import BaseModel

from graph_mapper.mapping.dispatch import runtime_class
from graph_mapper.mapping.plan import Accessor, Mutator

SETTER_PREFIX = "set_"
GETTER_PREFIXES = ("get_", "is_")

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def strip_suffix(name: str, suffixes: Iterable[str]) -> str:
    """Remove the first suffix in ``suffixes`` that ``name`` ends with."""
    for suffix in suffixes:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def _walk_mro(cls: type) -> list[type]:
    return [klass for klass in cls.__mro__ if klass is not object]


def _own_annotations(obj: Any) -> dict[str, Any]:
    try:
        return inspect.get_annotations(obj)
    except NameError:
        return {}


def _evaluate(annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    """Evaluate a string annotation, leaving it a string if it cannot be resolved."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation


def _safe_type_hints(obj: Any) -> dict[str, Any]:
    """get_type_hints, resolving field by field when a reference is unresolvable.

    Annotations that still cannot be resolved are kept as strings.
    """
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError):
        pass

    if not isinstance(obj, type):
        globalns = getattr(obj, "__globals__", {})
        return {
            name: _evaluate(annotation, globalns, {})
            for name, annotation in _own_annotations(obj).items()
        }

    hints: dict[str, Any] = {}
    for klass in reversed(_walk_mro(obj)):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in _own_annotations(klass).items():
            hints[name] = _evaluate(annotation, globalns, localns)
    return hints


def _positional_parameters(func: Any) -> list[inspect.Parameter] | None:
    """Positional parameters of a function declared in a class body, minus self."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    params = [p for p in signature.parameters.values() if p.kind in _POSITIONAL]
    return params[1:]


# --- Mutators ---


def _field_types(cls: type) -> dict[str, Any]:
    """Declared data fields of a class, in declaration order."""
    if issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}

    hints = _safe_type_hints(cls)
    if dataclasses.is_dataclass(cls):
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}

    return {
        name: annotation
        for name, annotation in hints.items()
        if not name.startswith("_") and not _is_class_var(annotation)
    }


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return typing.get_origin(annotation) is ClassVar


def _property_type(prop: property) -> Any:
    if prop.fset is not None:
        params = _positional_parameters(prop.fset) or []
        if params:
            hints = _safe_type_hints(prop.fset)
            if params[0].name in hints:
                return hints[params[0].name]
    if prop.fget is not None:
        return _safe_type_hints(prop.fget).get("return", Any)
    return Any


def _member_mutators(cls: type) -> dict[str, Mutator]:
    """Setter methods and writable properties, subclass members first."""
    mutators: dict[str, Mutator] = {}
    seen: set[str] = set()
    for klass in _walk_mro(cls):
        for member_name, member in vars(klass).items():
            if member_name.startswith("_") or member_name in seen:
                continue
            seen.add(member_name)

            if isinstance(member, property):
                if member.fset is None:
                    continue
                declared = _property_type(member)
                mutators.setdefault(
                    member_name,
                    Mutator(
                        name=member_name,
                        member=member_name,
                        owner=klass,
                        declared_type=declared,
                        parameter_class=runtime_class(declared),
                    ),
                )
            elif inspect.isfunction(member) and member_name.startswith(SETTER_PREFIX):
                params = _positional_parameters(member)
                if params is None:
                    continue
                declared = Any
                if params:
                    declared = _safe_type_hints(member).get(params[0].name, Any)
                name = member_name[len(SETTER_PREFIX) :]
                mutators.setdefault(
                    name,
                    Mutator(
                        name=name,
                        member=member_name,
                        owner=klass,
                        declared_type=declared,
                        parameter_class=runtime_class(declared),
                        is_method=True,
                        arity=len(params),
                    ),
                )
    return mutators


def find_mutators(cls: type) -> list[Mutator]:
    """All mutators of a destination class, in declaration order.

    Declared fields come first; a setter method or property with the same
    name takes the field's place.
    """
    members = _member_mutators(cls)
    ordered: list[Mutator] = []
    for name, declared in _field_types(cls).items():
        mutator = members.pop(name, None)
        if mutator is None:
            mutator = Mutator(
                name=name,
                member=name,
                owner=cls,
                declared_type=declared,
                parameter_class=runtime_class(declared),
            )
        ordered.append(mutator)
    ordered.extend(members.values())
    return ordered


# --- Accessors ---


def resolve_accessor(
    source: Any,
    mutator: Mutator,
    suffixes: Iterable[str] = (),
) -> Accessor | None:
    """Find the accessor on ``source`` feeding ``mutator``.

    Both the candidate names and the inspected member names have the first
    matching suffix stripped before comparison, so ``get_address_dto()``
    feeds ``set_address()``.

    Returns:
        The first matching accessor, or None if there is none.
    """
    suffixes = tuple(suffixes)
    if mutator.arity != 1 or not mutator.name:
        return None

    getter_names = {strip_suffix(prefix + mutator.name, suffixes) for prefix in GETTER_PREFIXES}
    attribute_names = getter_names | {strip_suffix(mutator.name, suffixes)}

    # Plain class attributes, e.g. ``timeout: int = 30`` never set per instance
    class_attribute: Accessor | None = None

    for klass in _walk_mro(type(source)):
        for member_name, member in vars(klass).items():
            if member_name.startswith("_"):
                continue
            stripped = strip_suffix(member_name, suffixes)
            if inspect.isfunction(member):
                if stripped in getter_names and _positional_parameters(member) == []:
                    return Accessor(name=member_name, owner=klass, is_method=True)
            elif inspect.isdatadescriptor(member):
                if stripped in attribute_names:
                    return Accessor(name=member_name, owner=klass, is_method=False)
            elif (
                class_attribute is None
                and stripped in attribute_names
                and not callable(member)
                and not isinstance(member, (classmethod, staticmethod))
            ):
                class_attribute = Accessor(name=member_name, owner=klass, is_method=False)

    for attr_name in getattr(source, "__dict__", {}):
        if not attr_name.startswith("_") and strip_suffix(attr_name, suffixes) in attribute_names:
            return Accessor(name=attr_name, owner=None, is_method=False)

    return class_attribute
