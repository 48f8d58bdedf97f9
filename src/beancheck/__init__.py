"""
beancheck - Reflective verification of accessor pairs and exception contracts.

beancheck removes the boilerplate of testing plain data classes: it finds
every property with a getter and a setter, synthesizes a representative
value for the declared type, sets it, reads it back and checks the two are
equal. Exception classes are checked for the usual message and cause
propagation through each of their constructor shapes.

Typical use inside a pytest suite:

    from beancheck import verify_classes, verify_exceptions

    def test_dtos():
        verify_classes(Person, Address)

    def test_errors():
        verify_exceptions(myapp.errors)
"""

from beancheck.config import BeanCheckConfig, ClassCriteria, configure_logging, get_config
from beancheck.errors import (
    AssertionMismatch,
    BeanCheckError,
    CannotConstruct,
    ConfigurationError,
    ConstructorInvocationError,
    InvalidArgument,
    PropertyAccessError,
    RecursionLimitExceeded,
    SynthesisError,
    UnsupportedType,
    VerificationFailure,
)
from beancheck.introspection import StructuralIntrospector, find_accessor_pairs, find_classes
from beancheck.models import (
    OMITTED,
    AccessorPair,
    ContractCheck,
    OutcomeStatus,
    SynthesisResult,
    SynthesisStrategy,
    VerificationOutcome,
)
from beancheck.synthesis import PrimitiveValueCatalog, Synthesizer, get_catalog, synthesize
from beancheck.verification import (
    BeanTester,
    ExceptionContractVerifier,
    PropertyVerifier,
    assert_checks,
    assert_outcomes,
    collect_class,
    collect_classes,
    collect_exception,
    collect_exceptions,
    collect_package,
    verify,
    verify_class,
    verify_classes,
    verify_exception,
    verify_exception_with_args,
    verify_exceptions,
    verify_package,
)
from beancheck.version import __version__

__all__ = [
    "__version__",
    # Entry points
    "BeanTester",
    "collect_class",
    "collect_classes",
    "collect_exception",
    "collect_exceptions",
    "collect_package",
    "verify",
    "verify_class",
    "verify_classes",
    "verify_exception",
    "verify_exception_with_args",
    "verify_exceptions",
    "verify_package",
    "OMITTED",
    # Components
    "ExceptionContractVerifier",
    "PrimitiveValueCatalog",
    "PropertyVerifier",
    "StructuralIntrospector",
    "Synthesizer",
    "assert_checks",
    "assert_outcomes",
    "find_accessor_pairs",
    "find_classes",
    "get_catalog",
    "synthesize",
    # Models
    "AccessorPair",
    "ContractCheck",
    "OutcomeStatus",
    "SynthesisResult",
    "SynthesisStrategy",
    "VerificationOutcome",
    # Config
    "BeanCheckConfig",
    "ClassCriteria",
    "configure_logging",
    "get_config",
    # Errors
    "AssertionMismatch",
    "BeanCheckError",
    "CannotConstruct",
    "ConfigurationError",
    "ConstructorInvocationError",
    "InvalidArgument",
    "PropertyAccessError",
    "RecursionLimitExceeded",
    "SynthesisError",
    "UnsupportedType",
    "VerificationFailure",
]
