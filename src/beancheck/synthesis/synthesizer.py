"""
Value Synthesizer.

Produces one representative value for an arbitrary type using a layered
strategy where the first success wins:

1. Catalog: fixed samples for builtin and standard-library types
2. Double: a mock spec'd on the class, for classes that can be subclassed
3. Constructed: a real instance, synthesizing each required constructor
   argument recursively with this same algorithm

Typing constructs are normalized before the layers run: ``Annotated``,
``Optional``/unions, ``Literal``, ``NewType``, type variables and
parameterized containers such as ``list[Child]`` or ``dict[str, int]``.

Failures never raise. They come back as a failed ``SynthesisResult`` whose
error names the type that could not be built and the chain of requesters
leading to it, outermost first.
"""

import collections
import collections.abc
import inspect
import logging
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from beancheck.config.models import SynthesisConfig
from beancheck.errors import CannotConstruct, RecursionLimitExceeded
from beancheck.introspection.members import StructuralIntrospector
from beancheck.models.base import SynthesisStrategy
from beancheck.models.results import SynthesisResult
from beancheck.synthesis.catalog import PrimitiveValueCatalog, get_catalog
from beancheck.synthesis.doubles import DoubleFactory, MockDoubleFactory
from beancheck.typenames import type_name

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)

# Containers built with one synthesized element per slot
_SEQUENCE_ORIGINS = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    collections.deque: collections.deque,
}
_SET_ORIGINS = {
    set: set,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
}
_MAPPING_ORIGINS = {
    dict: dict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.defaultdict: dict,
    collections.OrderedDict: collections.OrderedDict,
}
_ABSTRACT_CONTAINERS = (
    set(_SEQUENCE_ORIGINS) | set(_SET_ORIGINS) | set(_MAPPING_ORIGINS)
) - {list, set, frozenset, dict}


@dataclass
class _SynthesisContext:
    """Per-call recursion state; never shared between calls."""

    max_depth: int
    chain: list[str] = field(default_factory=list)
    depth: int = 0


class Synthesizer:
    """Synthesizes representative values for types.

    A Synthesizer holds only configuration and collaborators, so a single
    instance may be shared across threads.

    Usage:
        synthesizer = Synthesizer()
        result = synthesizer.synthesize(list[Child], requester="Parent.children")
        if result.ok:
            value = result.value
    """

    def __init__(
        self,
        config: SynthesisConfig | None = None,
        introspector: StructuralIntrospector | None = None,
        double_factory: DoubleFactory | None = None,
        catalog: PrimitiveValueCatalog | None = None,
    ) -> None:
        """Initialize the synthesizer.

        Args:
            config: Depth limit and double usage
            introspector: Reads constructor signatures
            double_factory: Creates test doubles (unittest.mock by default)
            catalog: Sample value table (the process-wide catalog by default)
        """
        self._config = config or SynthesisConfig()
        self._introspector = introspector or StructuralIntrospector()
        self._doubles = double_factory or MockDoubleFactory()
        self._catalog = catalog if catalog is not None else get_catalog()

    @property
    def config(self) -> SynthesisConfig:
        return self._config

    def synthesize(self, tp: Any, requester: str | None = None) -> SynthesisResult:
        """Synthesize a value for a type using every strategy in order.

        Args:
            tp: Class or typing annotation
            requester: Label of whoever needs the value (e.g. ``Order.total``),
                reported in failures

        Returns:
            SynthesisResult with the value or the failure
        """
        ctx = self._new_context(requester)
        return self._synthesize(tp, ctx)

    def construct(self, cls: type, requester: str | None = None) -> SynthesisResult:
        """Build a real instance of a class through its constructor.

        Skips the catalog and double layers; used for the bean under test,
        whose setters must actually run.
        """
        ctx = self._new_context(requester)
        return self._construct(cls, ctx)

    def _new_context(self, requester: str | None) -> _SynthesisContext:
        ctx = _SynthesisContext(max_depth=self._config.max_depth)
        if requester:
            ctx.chain.append(requester)
        return ctx

    def _synthesize(self, tp: Any, ctx: _SynthesisContext) -> SynthesisResult:
        if tp is None or tp is _NONE_TYPE:
            return self._fail(tp, "None is not a usable value", ctx)
        if isinstance(tp, (str, typing.ForwardRef)):
            # Unresolved forward reference
            tp = Any

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is typing.Annotated:
            return self._synthesize(args[0], ctx)
        if origin in (typing.ClassVar, typing.Final):
            return self._synthesize(args[0] if args else Any, ctx)
        if origin is typing.Union or origin is types.UnionType:
            return self._synthesize_union(tp, args, ctx)
        if origin is typing.Literal:
            return self._synthesize_literal(tp, args, ctx)
        if isinstance(tp, typing.NewType):
            return self._synthesize(tp.__supertype__, ctx)
        if isinstance(tp, typing.TypeVar):
            return self._synthesize(tp.__bound__ or Any, ctx)

        if origin is type:
            return self._synthesize_class_object(tp, args, ctx)
        if origin is not None or tp in _ABSTRACT_CONTAINERS:
            container = self._synthesize_container(tp, origin or tp, args, ctx)
            if container is not None:
                return container
            # Some other generic class: fall through with its origin
            tp = origin if origin is not None else tp

        if self._catalog.is_recognized(tp):
            return self._ok(tp, self._catalog.sample(tp), SynthesisStrategy.CATALOG)

        if self._config.use_doubles and self._doubles.can_double(tp):
            try:
                return self._ok(tp, self._doubles.create_double(tp), SynthesisStrategy.DOUBLE)
            except Exception as e:
                logger.debug(f"Double for {type_name(tp)} failed, trying constructor: {e!r}")

        return self._construct(tp, ctx)

    def _construct(self, cls: Any, ctx: _SynthesisContext) -> SynthesisResult:
        if not isinstance(cls, type):
            return self._fail(cls, "not a class", ctx)
        if inspect.isabstract(cls):
            return self._fail(cls, "class is abstract", ctx)
        if getattr(cls, "_is_protocol", False):
            return self._fail(cls, "protocols cannot be instantiated", ctx)

        signature = self._introspector.constructor_signature(cls)
        positional: list[Any] = []
        keywords: dict[str, Any] = {}
        for param in signature.required:
            result = self._nested(param.annotation, ctx, f"{cls.__qualname__}({param.name})")
            if not result.ok:
                return result
            if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                positional.append(result.value)
            else:
                keywords[param.name] = result.value

        try:
            instance = cls(*positional, **keywords)
        except Exception as e:
            error = CannotConstruct(cls, f"constructor raised {e!r}", ctx.chain)
            error.__cause__ = e
            return SynthesisResult.failure(error)

        if instance is None:
            return self._fail(cls, "constructor produced None", ctx)
        return self._ok(cls, instance, SynthesisStrategy.CONSTRUCTED)

    def _nested(self, tp: Any, ctx: _SynthesisContext, label: str) -> SynthesisResult:
        """Synthesize a value needed to build an enclosing one."""
        if ctx.depth >= ctx.max_depth:
            return SynthesisResult.failure(
                RecursionLimitExceeded(tp, ctx.max_depth, [*ctx.chain, label])
            )
        ctx.chain.append(label)
        ctx.depth += 1
        try:
            return self._synthesize(tp, ctx)
        finally:
            ctx.chain.pop()
            ctx.depth -= 1

    def _synthesize_union(
        self, tp: Any, args: tuple[Any, ...], ctx: _SynthesisContext
    ) -> SynthesisResult:
        first_failure: SynthesisResult | None = None
        for arm in args:
            if arm is _NONE_TYPE:
                continue
            result = self._synthesize(arm, ctx)
            if result.ok:
                return result
            first_failure = first_failure or result
        return first_failure or self._fail(tp, "union has no usable member", ctx)

    def _synthesize_literal(
        self, tp: Any, args: tuple[Any, ...], ctx: _SynthesisContext
    ) -> SynthesisResult:
        for value in args:
            if value is not None:
                return self._ok(tp, value, SynthesisStrategy.CATALOG)
        return self._fail(tp, "literal has no non-None value", ctx)

    def _synthesize_class_object(
        self, tp: Any, args: tuple[Any, ...], ctx: _SynthesisContext
    ) -> SynthesisResult:
        target = args[0] if args else object
        if isinstance(target, type):
            return self._ok(tp, target, SynthesisStrategy.CONSTRUCTED)
        return self._fail(tp, "type[...] argument is not a class", ctx)

    def _synthesize_container(
        self,
        tp: Any,
        origin: Any,
        args: tuple[Any, ...],
        ctx: _SynthesisContext,
    ) -> SynthesisResult | None:
        """Build a one-element container; None when origin is not a known container."""
        label = type_name(tp)

        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                slots = [args[0]]
            elif args == ((),) or (not args and tp not in (tuple, typing.Tuple)):
                # tuple[()] is the empty tuple; bare Tuple is tuple[Any, ...]
                slots = []
            else:
                slots = list(args) or [Any]
            values = []
            for index, slot in enumerate(slots):
                result = self._nested(slot, ctx, f"{label}[{index}]")
                if not result.ok:
                    return result
                values.append(result.value)
            return self._ok(tp, tuple(values), SynthesisStrategy.CONSTRUCTED)

        if origin in _SEQUENCE_ORIGINS or origin in _SET_ORIGINS:
            builder: Callable[[list[Any]], Any] = (
                _SEQUENCE_ORIGINS.get(origin) or _SET_ORIGINS[origin]
            )
            element = self._nested(args[0] if args else Any, ctx, f"{label} element")
            if not element.ok:
                return element
            try:
                return self._ok(tp, builder([element.value]), SynthesisStrategy.CONSTRUCTED)
            except TypeError as e:
                return self._fail(tp, f"element cannot be stored: {e}", ctx)

        if origin in _MAPPING_ORIGINS:
            key_type, value_type = args if len(args) == 2 else (Any, Any)
            key = self._nested(key_type, ctx, f"{label} key")
            if not key.ok:
                return key
            value = self._nested(value_type, ctx, f"{label} value")
            if not value.ok:
                return value
            try:
                mapping = _MAPPING_ORIGINS[origin]({key.value: value.value})
            except TypeError as e:
                return self._fail(tp, f"key cannot be stored: {e}", ctx)
            return self._ok(tp, mapping, SynthesisStrategy.CONSTRUCTED)

        return None

    @staticmethod
    def _ok(tp: Any, value: Any, strategy: SynthesisStrategy) -> SynthesisResult:
        logger.debug(f"Synthesized {type_name(tp)} via {strategy.value}")
        return SynthesisResult.success(tp, value, strategy)

    @staticmethod
    def _fail(tp: Any, reason: str, ctx: _SynthesisContext) -> SynthesisResult:
        return SynthesisResult.failure(CannotConstruct(tp, reason, ctx.chain))


def synthesize(tp: Any, requester: str | None = None) -> SynthesisResult:
    """Synthesize a value with a default-configured Synthesizer."""
    return Synthesizer().synthesize(tp, requester)
