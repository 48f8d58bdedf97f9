"""Tests for the layered value synthesizer."""

import collections.abc
from collections.abc import Sequence
from typing import Annotated, Any, Literal, NewType, Optional, Tuple, TypeVar

import pytest

from beancheck.config import SynthesisConfig
from beancheck.errors import CannotConstruct, RecursionLimitExceeded
from beancheck.models import SynthesisStrategy
from beancheck.synthesis import PrimitiveValueCatalog, Synthesizer, synthesize
from tests.fixtures.sample_beans.beans import (
    AbstractShape,
    Account,
    Address,
    Child,
    Fussy,
    Greeter,
    Leaf,
    Node,
    Person,
)

pytestmark = pytest.mark.synthesis

UserId = NewType("UserId", int)
Bounded = TypeVar("Bounded", bound=int)
Unbounded = TypeVar("Unbounded")


class TestCatalogLayer:
    """Recognized types come straight from the catalog."""

    def test_primitive(self, synthesizer):
        result = synthesizer.synthesize(int)

        assert result.ok
        assert result.value == 42
        assert result.strategy == SynthesisStrategy.CATALOG

    def test_module_level_helper(self):
        assert synthesize(str).value == "sample"

    def test_empty_catalog_is_used(self):
        synthesizer = Synthesizer(catalog=PrimitiveValueCatalog(()))

        assert synthesizer.synthesize(int).strategy != SynthesisStrategy.CATALOG


class TestTypingNormalization:
    """Typing constructs are reduced to something synthesizable."""

    @pytest.mark.parametrize(
        "annotation,expected",
        [
            (Optional[int], 42),
            (int | None, 42),
            (Annotated[int, "meta"], 42),
            (Literal["first", "second"], "first"),
            (UserId, 42),
            (Bounded, 42),
            (Unbounded, "sample"),
            ("Unresolved", "sample"),
            (list[int], [42]),
            (set[str], {"sample"}),
            (frozenset[int], frozenset({42})),
            (dict[str, int], {"sample": 42}),
            (tuple[int, str], (42, "sample")),
            (tuple[int, ...], (42,)),
            (tuple[()], ()),
            (Tuple, ("sample",)),
            (Sequence[str], ["sample"]),
            (collections.abc.Mapping[str, bool], {"sample": True}),
        ],
    )
    def test_annotations(self, synthesizer, annotation, expected):
        result = synthesizer.synthesize(annotation)

        assert result.ok, result.error
        assert result.value == expected

    def test_type_of_class(self, synthesizer):
        assert synthesizer.synthesize(type[Person]).value is Person

    def test_union_falls_through_to_usable_arm(self, strict_synthesizer):
        result = strict_synthesizer.synthesize(AbstractShape | int)

        assert result.value == 42

    def test_none_fails(self, synthesizer):
        result = synthesizer.synthesize(None)

        assert not result.ok
        assert isinstance(result.error, CannotConstruct)


class TestDoubleLayer:
    """Extensible classes get a spec'd mock."""

    def test_abstract_class_doubled(self, synthesizer):
        result = synthesizer.synthesize(AbstractShape)

        assert result.strategy == SynthesisStrategy.DOUBLE
        assert isinstance(result.value, AbstractShape)

    def test_protocol_doubled(self, synthesizer):
        result = synthesizer.synthesize(Greeter)

        assert result.strategy == SynthesisStrategy.DOUBLE

    def test_list_of_user_class(self, synthesizer):
        result = synthesizer.synthesize(list[Child])

        assert len(result.value) == 1
        assert isinstance(result.value[0], Child)

    def test_doubles_disabled(self, strict_synthesizer):
        result = strict_synthesizer.synthesize(AbstractShape)

        assert not result.ok
        assert "abstract" in result.error.reason


class TestConstructedLayer:
    """Final classes and construct() build real instances."""

    def test_final_class_constructed(self, synthesizer):
        result = synthesizer.synthesize(Leaf)

        assert result.strategy == SynthesisStrategy.CONSTRUCTED
        assert isinstance(result.value, Leaf)
        assert result.value.value == 42

    def test_construct_skips_doubles(self, synthesizer):
        result = synthesizer.construct(Person)

        assert type(result.value) is Person

    def test_construct_with_required_arguments(self, synthesizer):
        result = synthesizer.construct(Account)

        assert isinstance(result.value, Account)
        assert result.value.number == "sample"
        assert isinstance(result.value.owner, Person)

    def test_construct_dataclass(self, synthesizer):
        result = synthesizer.construct(Address)

        assert result.value == Address(street="sample")

    def test_strict_builds_nested_real_objects(self, strict_synthesizer):
        result = strict_synthesizer.synthesize(list[Child])

        assert type(result.value[0]) is Child
        assert result.value[0].label == "sample"

    def test_constructor_exception_reported(self, synthesizer):
        result = synthesizer.synthesize(Fussy, requester="Holder.fussy")

        assert not result.ok
        assert isinstance(result.error, CannotConstruct)
        assert isinstance(result.error.__cause__, ValueError)
        assert result.error.requester == "Holder.fussy"

    def test_abstract_construct_fails(self, synthesizer):
        result = synthesizer.construct(AbstractShape)

        assert not result.ok
        assert "Could not create object of class AbstractShape" in str(result.error)


class TestRecursionLimit:
    """Self-referential final types terminate."""

    def test_self_referential_final_type(self, synthesizer):
        result = synthesizer.synthesize(Node, requester="Holder.node")

        assert not result.ok
        assert isinstance(result.error, RecursionLimitExceeded)
        assert result.error.max_depth == synthesizer.config.max_depth
        assert result.error.chain[0] == "Holder.node"
        assert "Node(successor)" in result.error.chain

    def test_small_depth_limit(self):
        synthesizer = Synthesizer(SynthesisConfig(max_depth=1))

        assert synthesizer.synthesize(Leaf).ok
        assert not synthesizer.synthesize(list[list[int]]).ok

    def test_context_not_shared_between_calls(self, synthesizer):
        synthesizer.synthesize(Node)

        assert synthesizer.synthesize(Leaf).ok

    def test_any_nested_value(self, synthesizer):
        assert synthesizer.synthesize(list[Any]).value == ["sample"]
