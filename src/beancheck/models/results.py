"""
Result and descriptor models for synthesis and verification.

These are plain frozen dataclasses rather than pydantic models: they carry
arbitrary user objects (synthesized values, bound accessors) that have no
schema of their own.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from beancheck.errors import BeanCheckError, SynthesisError
from beancheck.models.base import AccessorKind, OutcomeStatus, SynthesisStrategy


class _Omitted:
    """Marker for an explicit-argument position that should be synthesized."""

    _instance: "_Omitted | None" = None

    def __new__(cls) -> "_Omitted":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMITTED"


OMITTED = _Omitted()


@dataclass(frozen=True)
class AccessorPair:
    """A readable and writable member of a class.

    Attributes:
        owner: Class the pair was enumerated from
        property_name: Attribute name
        declared_type: Annotation describing the value (``Any`` when unknown)
        getter: Callable taking an instance and returning the value
        setter: Callable taking an instance and a value
        kind: Whether the pair is a property or a plain field
    """

    owner: type
    property_name: str
    declared_type: Any
    getter: Callable[[Any], Any] = field(repr=False, compare=False)
    setter: Callable[[Any, Any], None] = field(repr=False, compare=False)
    kind: AccessorKind = AccessorKind.PROPERTY

    @property
    def label(self) -> str:
        """Dotted ``Owner.property`` label used in reports."""
        return f"{self.owner.__qualname__}.{self.property_name}"


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of synthesizing a value for a type.

    Exactly one of ``strategy`` (success) or ``error`` (failure) is set.
    """

    target: Any
    value: Any = None
    strategy: SynthesisStrategy | None = None
    error: SynthesisError | None = None

    @classmethod
    def success(cls, target: Any, value: Any, strategy: SynthesisStrategy) -> "SynthesisResult":
        return cls(target=target, value=value, strategy=strategy)

    @classmethod
    def failure(cls, error: SynthesisError) -> "SynthesisResult":
        return cls(target=error.target, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of round-tripping one accessor pair."""

    status: OutcomeStatus
    owner: type
    property_name: str
    expected: Any = None
    actual: Any = None
    error: BeanCheckError | None = None

    @property
    def passed(self) -> bool:
        return self.status == OutcomeStatus.PASS

    @property
    def label(self) -> str:
        return f"{self.owner.__qualname__}.{self.property_name}"

    def describe(self) -> str:
        """One-line description used by the reporting layer."""
        if self.passed:
            return f"{self.label}: ok"
        if self.error is not None:
            return str(self.error)
        return (
            f"Failed when testing property {self.label}: "
            f"expected {self.expected!r} but got {self.actual!r}"
        )


@dataclass(frozen=True)
class ExceptionContractCase:
    """An exception type under test plus optional explicit arguments.

    ``supplied_args`` is ``None`` when arguments should be synthesized for
    every constructor shape; otherwise it is used positionally as the only
    shape, with ``OMITTED`` entries synthesized.
    """

    exception_type: type[BaseException]
    supplied_args: Sequence[Any] | None = None

    @property
    def has_explicit_args(self) -> bool:
        return self.supplied_args is not None


@dataclass(frozen=True)
class ContractCheck:
    """Result of constructing an exception through one constructor shape."""

    status: OutcomeStatus
    exception_type: type[BaseException]
    signature: str
    arguments: tuple[Any, ...] = ()
    error: BeanCheckError | None = None

    @property
    def passed(self) -> bool:
        return self.status == OutcomeStatus.PASS

    def describe(self) -> str:
        if self.passed:
            return f"{self.signature}: ok"
        return str(self.error) if self.error is not None else f"{self.signature}: failed"

