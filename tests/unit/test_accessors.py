"""Unit tests for accessor resolution and mutator discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from pydantic import BaseModel

from graph_mapper.mapping.accessors import find_mutators, resolve_accessor, strip_suffix
from graph_mapper.mapping.plan import Mutator

SUFFIXES = ("_dto", "_bo")


def _mutator(name: str, arity: int = 1) -> Mutator:
    return Mutator(
        name=name,
        member=name,
        owner=object,
        declared_type=Any,
        parameter_class=object,
        arity=arity,
    )


class JavaStyleSource:
    def __init__(self) -> None:
        self._first_name = "Ada"
        self._active = True

    def get_first_name(self) -> str:
        return self._first_name

    def is_active(self) -> bool:
        return self._active

    def get_greeting(self, prefix: str) -> str:
        return prefix + self._first_name


class SuffixedSource:
    def get_address_bo(self) -> str:
        return "1 Main St"


class BaseSource:
    def get_inherited(self) -> str:
        return "from base"


class ChildSource(BaseSource):
    pass


class PropertySource:
    @property
    def total(self) -> int:
        return 42


@dataclass(slots=True)
class SlottedSource:
    code: str


class ClassDefaultSource:
    timeout: int = 30
    retries = 3

    @classmethod
    def factory(cls) -> ClassDefaultSource:
        return cls()

    @staticmethod
    def default_timeout() -> int:
        return 30


class JavaStyleDestination:
    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    def set_first_name(self, value: str) -> None:
        self.values["first_name"] = value

    def set_active(self, value: bool) -> None:
        self.values["active"] = value

    def set_range(self, low: int, high: int) -> None:
        self.values["range"] = (low, high)


@dataclass
class DataclassDestination:
    id: int = 0
    tags: list[str] = field(default_factory=list)
    label: str | None = None


class AnnotatedDestination:
    registry: ClassVar[dict[str, int]] = {}
    _hidden: int = 0
    name: str | None = None

    @property
    def read_only(self) -> int:
        return 1

    @property
    def score(self) -> float:
        return 0.0

    @score.setter
    def score(self, value: float) -> None:
        pass


class OverridingDestination(DataclassDestination):
    def set_label(self, value: str) -> None:
        self.label = value.upper()


class ModelDestination(BaseModel):
    id: int
    name: str


class TestStripSuffix:
    def test_strips_first_matching_suffix(self) -> None:
        assert strip_suffix("get_address_dto", SUFFIXES) == "get_address"
        assert strip_suffix("address_bo", SUFFIXES) == "address"

    def test_no_match_unchanged(self) -> None:
        assert strip_suffix("get_address", SUFFIXES) == "get_address"

    def test_name_equal_to_suffix_unchanged(self) -> None:
        assert strip_suffix("_dto", SUFFIXES) == "_dto"

    def test_only_one_suffix_removed(self) -> None:
        assert strip_suffix("value_bo_dto", SUFFIXES) == "value_bo"


class TestResolveAccessor:
    def test_getter_method(self) -> None:
        accessor = resolve_accessor(JavaStyleSource(), _mutator("first_name"), SUFFIXES)
        assert accessor is not None
        assert accessor.name == "get_first_name"
        assert accessor.is_method
        assert accessor.read(JavaStyleSource()) == "Ada"

    def test_boolean_getter(self) -> None:
        accessor = resolve_accessor(JavaStyleSource(), _mutator("active"), SUFFIXES)
        assert accessor is not None
        assert accessor.name == "is_active"

    def test_getter_with_parameters_ignored(self) -> None:
        assert resolve_accessor(JavaStyleSource(), _mutator("greeting"), SUFFIXES) is None

    def test_suffix_stripped_from_source(self) -> None:
        accessor = resolve_accessor(SuffixedSource(), _mutator("address"), SUFFIXES)
        assert accessor is not None
        assert accessor.read(SuffixedSource()) == "1 Main St"

    def test_suffix_stripped_from_destination(self) -> None:
        accessor = resolve_accessor(SuffixedSource(), _mutator("address_dto"), SUFFIXES)
        assert accessor is not None
        assert accessor.name == "get_address_bo"

    def test_no_suffixes_configured(self) -> None:
        assert resolve_accessor(SuffixedSource(), _mutator("address")) is None

    def test_inherited_getter(self) -> None:
        accessor = resolve_accessor(ChildSource(), _mutator("inherited"), SUFFIXES)
        assert accessor is not None
        assert accessor.owner is BaseSource

    def test_property(self) -> None:
        accessor = resolve_accessor(PropertySource(), _mutator("total"), SUFFIXES)
        assert accessor is not None
        assert not accessor.is_method
        assert accessor.read(PropertySource()) == 42

    def test_slot(self) -> None:
        accessor = resolve_accessor(SlottedSource("X1"), _mutator("code"), SUFFIXES)
        assert accessor is not None
        assert accessor.read(SlottedSource("X1")) == "X1"

    def test_instance_attribute(self) -> None:
        source = DataclassDestination(id=7)
        accessor = resolve_accessor(source, _mutator("id"), SUFFIXES)
        assert accessor is not None
        assert accessor.owner is None
        assert accessor.read(source) == 7

    def test_class_attribute(self) -> None:
        source = ClassDefaultSource()
        accessor = resolve_accessor(source, _mutator("timeout"), SUFFIXES)
        assert accessor is not None
        assert accessor.owner is ClassDefaultSource
        assert accessor.read(source) == 30

    def test_unannotated_class_attribute(self) -> None:
        accessor = resolve_accessor(ClassDefaultSource(), _mutator("retries"), SUFFIXES)
        assert accessor is not None
        assert accessor.read(ClassDefaultSource()) == 3

    def test_instance_value_shadows_class_attribute(self) -> None:
        source = ClassDefaultSource()
        source.timeout = 5
        accessor = resolve_accessor(source, _mutator("timeout"), SUFFIXES)
        assert accessor is not None
        assert accessor.owner is None
        assert accessor.read(source) == 5

    def test_class_callables_not_matched(self) -> None:
        source = ClassDefaultSource()
        assert resolve_accessor(source, _mutator("factory"), SUFFIXES) is None
        assert resolve_accessor(source, _mutator("default_timeout"), SUFFIXES) is None

    def test_private_attribute_not_matched(self) -> None:
        assert resolve_accessor(JavaStyleSource(), _mutator("_active"), SUFFIXES) is None

    def test_missing(self) -> None:
        assert resolve_accessor(JavaStyleSource(), _mutator("email"), SUFFIXES) is None

    def test_multi_argument_mutator_rejected(self) -> None:
        mutator = _mutator("first_name", arity=2)
        assert resolve_accessor(JavaStyleSource(), mutator, SUFFIXES) is None

    def test_empty_name_rejected(self) -> None:
        assert resolve_accessor(JavaStyleSource(), _mutator(""), SUFFIXES) is None


class TestFindMutators:
    def test_setter_methods(self) -> None:
        mutators = {m.name: m for m in find_mutators(JavaStyleDestination)}
        assert set(mutators) == {"first_name", "active", "range"}
        assert mutators["first_name"].is_method
        assert mutators["first_name"].parameter_class is str
        assert mutators["active"].parameter_class is bool
        assert mutators["range"].arity == 2

    def test_setter_method_applies(self) -> None:
        destination = JavaStyleDestination()
        (mutator,) = [m for m in find_mutators(JavaStyleDestination) if m.name == "first_name"]
        mutator.apply(destination, "Ada")
        assert destination.values == {"first_name": "Ada"}

    def test_dataclass_fields_in_order(self) -> None:
        mutators = find_mutators(DataclassDestination)
        assert [m.name for m in mutators] == ["id", "tags", "label"]
        tags = mutators[1]
        assert tags.declared_type == list[str]
        assert tags.parameter_class is list
        assert mutators[2].parameter_class is str

    def test_annotated_class_attributes(self) -> None:
        names = [m.name for m in find_mutators(AnnotatedDestination)]
        assert names == ["name", "score"]

    def test_writable_property_type(self) -> None:
        (score,) = [m for m in find_mutators(AnnotatedDestination) if m.name == "score"]
        assert score.parameter_class is float
        assert not score.is_method

    def test_setter_replaces_field(self) -> None:
        mutators = find_mutators(OverridingDestination)
        assert [m.name for m in mutators] == ["id", "tags", "label"]
        assert mutators[2].is_method
        assert mutators[2].member == "set_label"

    def test_pydantic_fields(self) -> None:
        mutators = find_mutators(ModelDestination)
        assert [(m.name, m.parameter_class) for m in mutators] == [("id", int), ("name", str)]

    def test_unresolvable_annotation_keeps_other_fields(self) -> None:
        class LocalOnly:
            pass

        class Box:
            items: list[DataclassDestination] | None = None
            helper: LocalOnly | None = None

        mutators = {m.name: m for m in find_mutators(Box)}
        assert mutators["items"].declared_type == list[DataclassDestination] | None
        assert mutators["items"].parameter_class is list
        assert mutators["helper"].declared_type == "LocalOnly | None"
        assert mutators["helper"].parameter_class is object

    def test_unresolvable_class_var_skipped(self) -> None:
        class LocalOnly:
            pass

        class Box:
            cache: ClassVar[LocalOnly]
            name: str | None = None

        assert [m.name for m in find_mutators(Box)] == ["name"]

    def test_qualname(self) -> None:
        (mutator,) = [m for m in find_mutators(JavaStyleDestination) if m.name == "active"]
        assert mutator.qualname == "JavaStyleDestination.set_active()"
