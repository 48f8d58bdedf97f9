"""
Exception taxonomy for beancheck.

Synthesis and verification code returns these as values inside results
rather than raising them; only the entry points raise ``InvalidArgument``
and only the reporting layer raises ``VerificationFailure``.
"""

from collections.abc import Sequence
from typing import Any

from beancheck.typenames import type_name


class BeanCheckError(Exception):
    """Base class for all beancheck errors."""


class InvalidArgument(BeanCheckError, ValueError):
    """Raised when a required input is missing or of the wrong kind."""


class SynthesisError(BeanCheckError):
    """Raised when no strategy can produce a value for a type.

    Attributes:
        target: The type that could not be synthesized
        reason: Human-readable description of why
        chain: Requester labels from the top-level request down to the
            failing type
    """

    def __init__(self, target: Any, reason: str, chain: Sequence[str] = ()) -> None:
        self.target = target
        self.reason = reason
        self.chain = tuple(chain)
        super().__init__(self._format())

    @property
    def requester(self) -> str | None:
        """The label of the outermost requester, if any."""
        return self.chain[0] if self.chain else None

    def _format(self) -> str:
        msg = f"Could not create object of class {type_name(self.target)}: {self.reason}"
        if self.chain:
            msg = f"{msg} (requested via {' -> '.join(self.chain)})"
        return msg


class UnsupportedType(SynthesisError):
    """The catalog does not recognize the requested type."""

    def __init__(self, target: Any, chain: Sequence[str] = ()) -> None:
        super().__init__(target, "type is not in the value catalog", chain)


class CannotConstruct(SynthesisError):
    """The type could not be instantiated through its constructor."""


class RecursionLimitExceeded(SynthesisError):
    """Nested synthesis went deeper than the configured limit."""

    def __init__(self, target: Any, max_depth: int, chain: Sequence[str] = ()) -> None:
        self.max_depth = max_depth
        super().__init__(target, f"recursion limit of {max_depth} exceeded", chain)


class PropertyAccessError(BeanCheckError):
    """A getter or setter raised while testing a property."""

    def __init__(self, owner: type, property_name: str, cause: BaseException) -> None:
        self.owner = owner
        self.property_name = property_name
        super().__init__(
            f"An exception was thrown during bean test {owner.__qualname__}.{property_name}: "
            f"{cause!r}"
        )
        self.__cause__ = cause


class AssertionMismatch(BeanCheckError):
    """The value read back from a getter differs from the value set."""

    def __init__(self, owner: type, property_name: str, expected: Any, actual: Any) -> None:
        self.owner = owner
        self.property_name = property_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Failed when testing property {owner.__qualname__}.{property_name}: "
            f"expected {expected!r} but got {actual!r}"
        )


class ConstructorInvocationError(BeanCheckError):
    """An exception constructor raised or broke message/cause propagation.

    Attributes:
        signature: Rendered constructor shape, e.g. ``OrderError(message: str)``
    """

    def __init__(self, signature: str, reason: str) -> None:
        self.signature = signature
        self.reason = reason
        super().__init__(f"Constructor {signature} violated its contract: {reason}")


class ConfigurationError(BeanCheckError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        path: Any = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path:
            msg = f"{msg} (file: {self.path})"
        if self.errors:
            details = []
            for err in self.errors[:5]:
                loc = ".".join(str(x) for x in err.get("loc", []))
                details.append(f"  - {loc}: {err.get('msg', 'Unknown error')}")
            if len(self.errors) > 5:
                details.append(f"  ... and {len(self.errors) - 5} more errors")
            msg = f"{msg}\n" + "\n".join(details)
        return msg


class VerificationFailure(AssertionError):
    """Raised by the reporting layer when any check failed.

    Subclasses ``AssertionError`` so test runners report it as a failure
    rather than an error.

    Attributes:
        failures: The failing outcomes or contract checks
    """

    def __init__(self, message: str, failures: Sequence[Any]) -> None:
        super().__init__(message)
        self.failures = list(failures)
