"""
Structural Introspection Module.

Reads accessor pairs and constructor signatures from live classes. This is
the only place that touches ``inspect``/``typing`` metadata; synthesis and
verification work with the resulting ``AccessorPair`` and
``ConstructorSignature`` objects.

Accessor pairs come from two sources:
- ``property`` objects with both a getter and a setter, resolved across the
  MRO so that a subclass definition wins
- writable fields of non-frozen dataclasses and pydantic models
"""

import dataclasses
import inspect
import logging
import operator
import typing
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from beancheck.errors import InvalidArgument
from beancheck.models.base import AccessorKind
from beancheck.models.results import AccessorPair
from beancheck.typenames import type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstructorParameter:
    """One parameter of a constructor.

    Attributes:
        name: Parameter name
        annotation: Resolved annotation (``Any`` when missing or unresolvable)
        kind: inspect parameter kind
        has_default: Whether the parameter may be omitted
    """

    name: str
    annotation: Any
    kind: inspect._ParameterKind
    has_default: bool = False

    @property
    def required(self) -> bool:
        return not self.has_default

    @property
    def positional(self) -> bool:
        return self.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        )

    def render(self) -> str:
        """Render as ``name: Type`` for signatures in reports."""
        if self.annotation is Any:
            return self.name
        return f"{self.name}: {type_name(self.annotation)}"


@dataclass(frozen=True)
class ConstructorSignature:
    """Constructor parameters of a class, excluding ``self``.

    Attributes:
        owner: The class
        parameters: Named parameters in declaration order
        var_positional: The constructor accepts ``*args``
        var_keyword: The constructor accepts ``**kwargs``
    """

    owner: type
    parameters: tuple[ConstructorParameter, ...] = field(default_factory=tuple)
    var_positional: bool = False
    var_keyword: bool = False

    @property
    def required(self) -> tuple[ConstructorParameter, ...]:
        return tuple(p for p in self.parameters if p.required)

    @property
    def positional(self) -> tuple[ConstructorParameter, ...]:
        return tuple(p for p in self.parameters if p.positional)

    def render(self, parameters: Iterable[ConstructorParameter] | None = None) -> str:
        """Render ``Owner(a: int, b: str)`` for the given (or all) parameters."""
        shown = self.parameters if parameters is None else tuple(parameters)
        return f"{self.owner.__qualname__}({', '.join(p.render() for p in shown)})"


def safe_type_hints(obj: Any) -> dict[str, Any]:
    """Resolve type hints, tolerating forward references that cannot resolve.

    Falls back to the raw ``__annotations__`` with unresolved string entries
    replaced by ``Any``.
    """
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except Exception as e:  # get_type_hints raises NameError, TypeError and others
        logger.debug(f"Could not resolve type hints of {obj!r}: {e}")
        raw = getattr(obj, "__annotations__", None) or {}
        return {name: (Any if isinstance(hint, str) else hint) for name, hint in raw.items()}


class StructuralIntrospector:
    """Enumerates accessor pairs and constructor parameters of classes.

    Usage:
        introspector = StructuralIntrospector()
        for pair in introspector.find_accessor_pairs(Person, excluded={"id"}):
            ...
        signature = introspector.constructor_signature(Person)
    """

    def __init__(self, include_fields: bool = True) -> None:
        """Initialize the introspector.

        Args:
            include_fields: Also report writable dataclass/pydantic fields
        """
        self._include_fields = include_fields

    def find_accessor_pairs(
        self,
        cls: type,
        excluded: Iterable[str] = (),
    ) -> list[AccessorPair]:
        """Find every readable and writable member of a class.

        Args:
            cls: Class to inspect
            excluded: Member names to leave out

        Returns:
            Accessor pairs sorted by name

        Raises:
            InvalidArgument: If cls is not a class
        """
        if not isinstance(cls, type):
            raise InvalidArgument(f"Expected a class, got {cls!r}")

        excluded = set(excluded)
        pairs: dict[str, AccessorPair] = {}

        for name, prop in self._resolve_properties(cls).items():
            if prop.fget is None or prop.fset is None:
                continue
            pairs[name] = self._make_pair(
                cls, name, self._property_type(prop), AccessorKind.PROPERTY
            )

        if self._include_fields:
            for name, annotation in self._writable_fields(cls).items():
                if name not in pairs:
                    pairs[name] = self._make_pair(cls, name, annotation, AccessorKind.FIELD)

        unknown = excluded - pairs.keys()
        if unknown:
            logger.debug(f"Excluded names not found on {cls.__qualname__}: {sorted(unknown)}")

        return [
            pair
            for name, pair in sorted(pairs.items())
            if name not in excluded and not name.startswith("_")
        ]

    def constructor_signature(self, cls: type) -> ConstructorSignature:
        """Read the constructor parameters of a class.

        Builtins without an introspectable signature are reported as taking
        no parameters.
        """
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            logger.debug(f"No introspectable signature for {cls.__qualname__}")
            return ConstructorSignature(owner=cls)

        hints = dict(safe_type_hints(cls))
        init = getattr(cls, "__init__", None)
        if inspect.isfunction(init):
            hints.update(safe_type_hints(init))

        parameters: list[ConstructorParameter] = []
        var_positional = var_keyword = False
        for param in signature.parameters.values():
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                var_positional = True
                continue
            if param.kind is inspect.Parameter.VAR_KEYWORD:
                var_keyword = True
                continue
            annotation = hints.get(param.name, param.annotation)
            if annotation is inspect.Parameter.empty or isinstance(annotation, str):
                annotation = Any
            parameters.append(
                ConstructorParameter(
                    name=param.name,
                    annotation=annotation,
                    kind=param.kind,
                    has_default=param.default is not inspect.Parameter.empty,
                )
            )

        return ConstructorSignature(
            owner=cls,
            parameters=tuple(parameters),
            var_positional=var_positional,
            var_keyword=var_keyword,
        )

    def _resolve_properties(self, cls: type) -> dict[str, property]:
        """Collect properties across the MRO, later (more derived) classes winning."""
        resolved: dict[str, property] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, property):
                    resolved[name] = attr
                elif name in resolved:
                    # Shadowed by a plain attribute or method in a subclass
                    del resolved[name]
        return resolved

    def _property_type(self, prop: property) -> Any:
        """Declared type of a property: getter return hint, else setter value hint."""
        returned = safe_type_hints(prop.fget).get("return")
        if returned is not None:
            return returned

        try:
            params = list(inspect.signature(prop.fset).parameters)
        except (TypeError, ValueError):
            return Any
        if len(params) >= 2:
            return safe_type_hints(prop.fset).get(params[1], Any)
        return Any

    def _writable_fields(self, cls: type) -> dict[str, Any]:
        """Writable fields of dataclasses and pydantic models."""
        if dataclasses.is_dataclass(cls):
            if cls.__dataclass_params__.frozen:
                return {}
            hints = safe_type_hints(cls)
            return {f.name: hints.get(f.name, Any) for f in dataclasses.fields(cls)}

        if issubclass(cls, BaseModel):
            if cls.model_config.get("frozen"):
                return {}
            return {
                name: info.annotation if info.annotation is not None else Any
                for name, info in cls.model_fields.items()
                if not info.frozen
            }

        return {}

    @staticmethod
    def _make_pair(owner: type, name: str, declared_type: Any, kind: AccessorKind) -> AccessorPair:
        getter: Callable[[Any], Any] = operator.attrgetter(name)

        def setter(instance: Any, value: Any) -> None:
            setattr(instance, name, value)

        return AccessorPair(
            owner=owner,
            property_name=name,
            declared_type=declared_type,
            getter=getter,
            setter=setter,
            kind=kind,
        )


def find_accessor_pairs(
    cls: type,
    excluded: Iterable[str] = (),
    include_fields: bool = True,
) -> list[AccessorPair]:
    """Convenience wrapper around StructuralIntrospector.find_accessor_pairs."""
    return StructuralIntrospector(include_fields=include_fields).find_accessor_pairs(cls, excluded)
