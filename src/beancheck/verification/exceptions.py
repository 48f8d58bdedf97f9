"""
Exception-Contract Verifier.

Checks that exception classes follow the usual construction conventions:

- every constructor shape can be called with plausible arguments
- a message argument ends up as the exception's message
- a cause argument ends up as the exception's cause

Python classes have a single ``__init__``; the overloads other languages
would declare are modelled as positional prefixes of its signature, from
the required parameters up to every positional parameter. An exception
that keeps ``BaseException.__init__`` (or takes ``*args``) is checked with
no arguments and with a single message; the Unicode errors keep their fixed
builtin argument lists.
"""

import inspect
import logging
import types
import typing
from collections.abc import Iterable, Sequence
from types import ModuleType
from typing import Any

from beancheck.errors import ConstructorInvocationError, InvalidArgument
from beancheck.introspection.members import (
    ConstructorParameter,
    ConstructorSignature,
    StructuralIntrospector,
)
from beancheck.models.base import OutcomeStatus
from beancheck.models.results import OMITTED, ContractCheck, ExceptionContractCase, SynthesisResult
from beancheck.synthesis.synthesizer import Synthesizer
from beancheck.typenames import type_name

logger = logging.getLogger(__name__)

_MESSAGE_NAMES = ("message", "msg", "reason")

# Stand-in parameter for exceptions that only accept *args
_VARARG_MESSAGE = ConstructorParameter(
    name="message",
    annotation=str,
    kind=inspect.Parameter.POSITIONAL_ONLY,
    has_default=True,
)


def _builtin_parameters(*specs: tuple[str, type]) -> tuple[ConstructorParameter, ...]:
    return tuple(
        ConstructorParameter(name=name, annotation=tp, kind=inspect.Parameter.POSITIONAL_ONLY)
        for name, tp in specs
    )


# Builtin exceptions whose __init__ takes a fixed argument list instead of *args
_BUILTIN_PARAMETERS: dict[type[BaseException], tuple[ConstructorParameter, ...]] = {
    UnicodeDecodeError: _builtin_parameters(
        ("encoding", str), ("object", bytes), ("start", int), ("end", int), ("reason", str)
    ),
    UnicodeEncodeError: _builtin_parameters(
        ("encoding", str), ("object", str), ("start", int), ("end", int), ("reason", str)
    ),
    UnicodeTranslateError: _builtin_parameters(
        ("object", str), ("start", int), ("end", int), ("reason", str)
    ),
}


def _exception_class(annotation: Any) -> type[BaseException] | None:
    """The exception class named by an annotation, looking through unions."""
    if isinstance(annotation, type) and issubclass(annotation, BaseException):
        return annotation
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        for arm in typing.get_args(annotation):
            found = _exception_class(arm)
            if found is not None:
                return found
    return None


def _is_exception_class(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, BaseException)


def message_of(exc: BaseException) -> str:
    """Message accessor: a string ``message`` attribute, else ``str(exc)``."""
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    return str(exc)


def _reflects_message(exc: BaseException, message: str) -> bool:
    """Whether the message accessor or the stored ``args`` carry the message.

    ``args`` covers builtins that decorate ``str(exc)``, such as ``KeyError``
    quoting its key.
    """
    if message_of(exc) == message:
        return True
    return any(isinstance(arg, str) and arg == message for arg in exc.args)


def cause_of(exc: BaseException) -> Any:
    """Cause accessor: ``__cause__``, else a ``cause`` attribute."""
    if exc.__cause__ is not None:
        return exc.__cause__
    return getattr(exc, "cause", None)


class ExceptionContractVerifier:
    """Verifies construction conventions of exception classes.

    Usage:
        verifier = ExceptionContractVerifier()
        checks = verifier.verify_exception(OrderError)
        checks = verifier.verify_exception_with_args(OrderError, "boom", OMITTED)
        checks = verifier.verify_exceptions(myapp.errors)
    """

    def __init__(
        self,
        synthesizer: Synthesizer | None = None,
        introspector: StructuralIntrospector | None = None,
    ) -> None:
        self._introspector = introspector or StructuralIntrospector()
        self._synthesizer = synthesizer or Synthesizer(introspector=self._introspector)

    def verify_exception(self, exc_type: type[BaseException]) -> list[ContractCheck]:
        """Check every constructor shape of an exception class with synthesized arguments.

        Raises:
            InvalidArgument: If exc_type is None or not an exception class
        """
        if exc_type is None:
            raise InvalidArgument("Input exception class is null")
        return self.verify(ExceptionContractCase(exception_type=exc_type))

    def verify_exception_with_args(
        self,
        exc_type: type[BaseException],
        *explicit_args: Any,
    ) -> list[ContractCheck]:
        """Check one constructor call using the given positional arguments.

        ``OMITTED`` entries are synthesized from the matching parameter.

        Raises:
            InvalidArgument: If exc_type is None or not an exception class
        """
        if exc_type is None:
            raise InvalidArgument("Input exception class is null")
        return self.verify(ExceptionContractCase(exception_type=exc_type, supplied_args=explicit_args))

    def verify_exceptions(self, container: type | ModuleType) -> list[ContractCheck]:
        """Check every exception class declared by a container.

        Raises:
            InvalidArgument: If container is None or neither a class nor a module
        """
        checks: list[ContractCheck] = []
        for exc_type in self.exception_types_in(container):
            checks.extend(self.verify(ExceptionContractCase(exception_type=exc_type)))
        return checks

    def exception_types_in(self, container: type | ModuleType) -> list[type[BaseException]]:
        """Exception classes declared by a class or module.

        For an exception class this is the class itself and all of its
        subclasses; for any class, the exception classes nested in it; for a
        module, the exception classes defined (not imported) there.
        """
        if container is None:
            raise InvalidArgument("Input class is null")

        found: dict[type, None] = {}
        if isinstance(container, type):
            if issubclass(container, BaseException):
                found[container] = None
                pending = list(container.__subclasses__())
                while pending:
                    sub = pending.pop(0)
                    if sub not in found:
                        found[sub] = None
                        pending.extend(sub.__subclasses__())
            for attr in vars(container).values():
                if _is_exception_class(attr):
                    found.setdefault(attr, None)
        elif isinstance(container, ModuleType):
            for _, obj in inspect.getmembers(container, _is_exception_class):
                if obj.__module__ == container.__name__:
                    found[obj] = None
        else:
            raise InvalidArgument(f"Expected a class or module, got {container!r}")

        return list(found)

    def verify(self, case: ExceptionContractCase) -> list[ContractCheck]:
        """Run every check for one case."""
        exc_type = case.exception_type
        if not _is_exception_class(exc_type):
            raise InvalidArgument(f"{exc_type!r} is not an exception class")

        signature = self._signature(exc_type)
        if case.has_explicit_args:
            checks = [self._check_explicit(signature, case.supplied_args)]
        else:
            checks = [self._check_shape(signature, shape) for shape in self._shapes(signature)]

        for check in checks:
            if not check.passed:
                logger.error(check.describe())
        failed = sum(1 for c in checks if not c.passed)
        logger.info(
            f"Verified {len(checks)} constructor shapes of {exc_type.__qualname__}: {failed} failed"
        )
        return checks

    def _signature(self, exc_type: type[BaseException]) -> ConstructorSignature:
        if not inspect.isfunction(getattr(exc_type, "__init__", None)):
            fixed = next((base for base in exc_type.__mro__ if base in _BUILTIN_PARAMETERS), None)
            if fixed is not None:
                return ConstructorSignature(owner=exc_type, parameters=_BUILTIN_PARAMETERS[fixed])
            # Inherits a builtin __init__ that takes *args
            return ConstructorSignature(
                owner=exc_type, parameters=(_VARARG_MESSAGE,), var_positional=True
            )
        signature = self._introspector.constructor_signature(exc_type)
        if signature.var_positional and not signature.positional:
            return ConstructorSignature(
                owner=exc_type,
                parameters=(_VARARG_MESSAGE, *signature.parameters),
                var_positional=True,
                var_keyword=signature.var_keyword,
            )
        return signature

    @staticmethod
    def _shapes(signature: ConstructorSignature) -> list[tuple[ConstructorParameter, ...]]:
        positional = signature.positional
        required_count = sum(1 for p in positional if p.required)
        keyword_only = tuple(p for p in signature.parameters if not p.positional and p.required)
        return [
            positional[:count] + keyword_only
            for count in range(required_count, len(positional) + 1)
        ]

    def _check_shape(
        self,
        signature: ConstructorSignature,
        shape: Sequence[ConstructorParameter],
    ) -> ContractCheck:
        rendered = signature.render(shape)
        positional: list[Any] = []
        keywords: dict[str, Any] = {}
        message_arg: Any = None
        for param in shape:
            result = self._argument(signature.owner, param)
            if not result.ok:
                return self._failure(signature.owner, rendered, (), str(result.error))
            if param.positional:
                positional.append(result.value)
            else:
                keywords[param.name] = result.value
            if param.name in _MESSAGE_NAMES and isinstance(result.value, str):
                message_arg = result.value

        arguments = (*positional, *keywords.values())
        return self._invoke(signature.owner, rendered, positional, keywords, arguments, message_arg)

    def _check_explicit(self, signature: ConstructorSignature, supplied: Sequence[Any]) -> ContractCheck:
        exc_type = signature.owner
        params = signature.positional
        positional: list[Any] = []
        for index, value in enumerate(supplied):
            if value is OMITTED:
                param = params[index] if index < len(params) else _VARARG_MESSAGE
                result = self._argument(exc_type, param)
                if not result.ok:
                    rendered = f"{exc_type.__qualname__}(...)"
                    return self._failure(exc_type, rendered, (), str(result.error))
                value = result.value
            positional.append(value)

        keywords: dict[str, Any] = {}
        for param in signature.parameters:
            if not param.positional and param.required:
                result = self._argument(exc_type, param)
                if not result.ok:
                    return self._failure(exc_type, signature.render(), (), str(result.error))
                keywords[param.name] = result.value

        rendered = f"{exc_type.__qualname__}({', '.join(type_name(type(v)) for v in positional)})"
        message_arg = None
        for index, value in enumerate(positional):
            if index < len(params) and params[index].name in _MESSAGE_NAMES and isinstance(value, str):
                message_arg = value
        arguments = (*positional, *keywords.values())
        return self._invoke(exc_type, rendered, positional, keywords, arguments, message_arg)

    def _argument(self, exc_type: type, param: ConstructorParameter) -> SynthesisResult:
        label = f"{exc_type.__qualname__}({param.name})"
        annotation = param.annotation
        if annotation is Any and param.name == "cause":
            annotation = Exception

        cause_type = _exception_class(annotation)
        if cause_type is not None:
            # Causes must be real exceptions; a mock cannot be chained
            return self._synthesizer.construct(cause_type, requester=label)
        return self._synthesizer.synthesize(annotation, requester=label)

    def _invoke(
        self,
        exc_type: type[BaseException],
        rendered: str,
        positional: list[Any],
        keywords: dict[str, Any],
        arguments: tuple[Any, ...],
        message_arg: Any,
    ) -> ContractCheck:
        try:
            instance = exc_type(*positional, **keywords)
        except Exception as e:
            error = ConstructorInvocationError(rendered, f"constructor raised {e!r}")
            error.__cause__ = e
            return ContractCheck(
                status=OutcomeStatus.FAIL,
                exception_type=exc_type,
                signature=rendered,
                arguments=arguments,
                error=error,
            )

        if message_arg is None:
            message_arg = next((a for a in arguments if isinstance(a, str)), None)
        if message_arg is not None:
            if not _reflects_message(instance, message_arg):
                return self._failure(
                    exc_type,
                    rendered,
                    arguments,
                    f"message {message_of(instance)!r} does not match argument {message_arg!r}",
                )

        cause_arg = next((a for a in arguments if isinstance(a, BaseException)), None)
        if cause_arg is not None:
            actual_cause = cause_of(instance)
            if actual_cause is not cause_arg:
                return self._failure(
                    exc_type,
                    rendered,
                    arguments,
                    f"cause {actual_cause!r} is not the argument {cause_arg!r}",
                )

        logger.debug(f"{rendered}: ok")
        return ContractCheck(
            status=OutcomeStatus.PASS,
            exception_type=exc_type,
            signature=rendered,
            arguments=arguments,
        )

    @staticmethod
    def _failure(
        exc_type: type[BaseException],
        rendered: str,
        arguments: Iterable[Any],
        reason: str,
    ) -> ContractCheck:
        return ContractCheck(
            status=OutcomeStatus.FAIL,
            exception_type=exc_type,
            signature=rendered,
            arguments=tuple(arguments),
            error=ConstructorInvocationError(rendered, reason),
        )
