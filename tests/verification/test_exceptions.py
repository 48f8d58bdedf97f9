"""Tests for the exception-contract verifier."""

import pytest

from beancheck.errors import ConstructorInvocationError, InvalidArgument
from beancheck.models import OMITTED
from beancheck.verification.exceptions import cause_of, message_of
from tests.fixtures.sample_beans import broken_errors, errors
from tests.fixtures.sample_beans.beans import Person
from tests.fixtures.sample_beans.broken_errors import (
    ExplodingError,
    LostCauseError,
    SwallowedMessageError,
)
from tests.fixtures.sample_beans.errors import (
    AppError,
    ChainedError,
    CodedError,
    MessageError,
    MissingKeyError,
    NotFoundError,
    PaymentService,
    PrefixedError,
    SimpleError,
    TruncatedError,
    UntypedCauseError,
)

pytestmark = pytest.mark.verification


def _signatures(checks):
    return [check.signature for check in checks]


class TestConstructorShapes:
    """Each positional prefix of __init__ is checked once."""

    def test_builtin_init(self, exception_verifier):
        checks = exception_verifier.verify_exception(SimpleError)

        assert _signatures(checks) == ["SimpleError()", "SimpleError(message: str)"]
        assert all(check.passed for check in checks)

    def test_message_only(self, exception_verifier):
        checks = exception_verifier.verify_exception(MessageError)

        assert _signatures(checks) == ["MessageError(message: str)"]
        assert checks[0].passed
        assert checks[0].arguments == ("sample",)

    def test_message_and_cause(self, exception_verifier):
        checks = exception_verifier.verify_exception(ChainedError)

        assert len(checks) == 2
        assert all(check.passed for check in checks)
        message, cause = checks[1].arguments
        assert message == "sample"
        assert type(cause) is Exception

    def test_untyped_cause_attribute(self, exception_verifier):
        checks = exception_verifier.verify_exception(UntypedCauseError)

        assert _signatures(checks) == [
            "UntypedCauseError(message)",
            "UntypedCauseError(message, cause)",
        ]
        assert all(check.passed for check in checks)

    def test_message_attribute(self, exception_verifier):
        assert all(c.passed for c in exception_verifier.verify_exception(PrefixedError))

    def test_keyword_only_always_passed(self, exception_verifier):
        checks = exception_verifier.verify_exception(CodedError)

        assert _signatures(checks) == ["CodedError(message: str, code: int)"]
        assert checks[0].passed

    def test_quoted_builtin_message(self, exception_verifier):
        checks = exception_verifier.verify_exception(MissingKeyError)

        assert _signatures(checks) == ["MissingKeyError()", "MissingKeyError(message: str)"]
        assert all(check.passed for check in checks), [c.describe() for c in checks]

    def test_fixed_builtin_arguments(self, exception_verifier):
        [check] = exception_verifier.verify_exception(TruncatedError)

        assert check.signature == (
            "TruncatedError(encoding: str, object: bytes, start: int, end: int, reason: str)"
        )
        assert check.passed, check.describe()
        assert check.arguments[1] == b"sample"


class TestBrokenContracts:
    def test_message_not_propagated(self, exception_verifier):
        [check] = exception_verifier.verify_exception(SwallowedMessageError)

        assert not check.passed
        assert isinstance(check.error, ConstructorInvocationError)
        assert check.error.signature == "SwallowedMessageError(message: str)"
        assert "does not match argument 'sample'" in check.describe()

    def test_cause_not_propagated(self, exception_verifier):
        [check] = exception_verifier.verify_exception(LostCauseError)

        assert not check.passed
        assert "cause None is not the argument" in check.describe()

    def test_constructor_raises(self, exception_verifier):
        [check] = exception_verifier.verify_exception(ExplodingError)

        assert not check.passed
        assert isinstance(check.error.__cause__, ValueError)
        assert "Constructor ExplodingError(message: str) violated its contract" in str(check.error)


class TestExplicitArguments:
    def test_explicit_message_and_omitted_cause(self, exception_verifier):
        [check] = exception_verifier.verify_exception_with_args(ChainedError, "custom", OMITTED)

        assert check.passed
        assert check.signature == "ChainedError(str, Exception)"
        assert check.arguments[0] == "custom"

    def test_explicit_cause_instance(self, exception_verifier):
        cause = KeyError("missing")

        [check] = exception_verifier.verify_exception_with_args(ChainedError, "custom", cause)

        assert check.passed
        assert check.arguments[1] is cause

    def test_too_many_arguments(self, exception_verifier):
        [check] = exception_verifier.verify_exception_with_args(MessageError, "a", "b")

        assert not check.passed
        assert isinstance(check.error.__cause__, TypeError)


class TestContainers:
    def test_exception_hierarchy(self, exception_verifier):
        found = exception_verifier.exception_types_in(AppError)

        assert found[0] is AppError
        assert NotFoundError in found

    def test_nested_exceptions(self, exception_verifier):
        checks = exception_verifier.verify_exceptions(PaymentService)
        owners = {check.exception_type for check in checks}

        assert owners == {PaymentService.DeclinedError, PaymentService.GatewayError}
        assert all(check.passed for check in checks)

    def test_module(self, exception_verifier):
        checks = exception_verifier.verify_exceptions(errors)

        assert {c.exception_type for c in checks} >= {SimpleError, ChainedError, AppError}
        assert all(check.passed for check in checks)

    def test_broken_module(self, exception_verifier):
        checks = exception_verifier.verify_exceptions(broken_errors)

        assert len([c for c in checks if not c.passed]) == 3


class TestInvalidInput:
    def test_null_exception(self, exception_verifier):
        with pytest.raises(InvalidArgument):
            exception_verifier.verify_exception(None)

    def test_null_container(self, exception_verifier):
        with pytest.raises(InvalidArgument):
            exception_verifier.verify_exceptions(None)

    def test_not_an_exception(self, exception_verifier):
        with pytest.raises(InvalidArgument):
            exception_verifier.verify_exception(Person)

    def test_not_a_container(self, exception_verifier):
        with pytest.raises(InvalidArgument):
            exception_verifier.verify_exceptions("errors")


class TestAccessors:
    def test_message_prefers_attribute(self):
        assert message_of(PrefixedError("boom")) == "boom"
        assert message_of(MessageError("boom")) == "boom"

    def test_cause_prefers_dunder(self):
        cause = ValueError()
        try:
            raise MessageError("outer") from cause
        except MessageError as e:
            assert cause_of(e) is cause

    def test_cause_attribute_fallback(self):
        cause = ValueError()

        assert cause_of(UntypedCauseError("x", cause)) is cause
        assert cause_of(MessageError("x")) is None
