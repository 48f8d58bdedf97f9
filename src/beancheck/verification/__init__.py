"""
Verification of accessor pairs and exception contracts.

- properties: round-trips getter/setter pairs of one class
- exceptions: checks constructor shapes of exception classes
- batch: BeanTester and module-level entry points
- reporting: turns failed results into a VerificationFailure
"""

from beancheck.verification.batch import (
    BeanTester,
    collect_class,
    collect_classes,
    collect_exception,
    collect_exceptions,
    collect_package,
    get_tester,
    reset_tester,
    verify,
    verify_class,
    verify_classes,
    verify_exception,
    verify_exception_with_args,
    verify_exceptions,
    verify_package,
)
from beancheck.verification.exceptions import ExceptionContractVerifier, cause_of, message_of
from beancheck.verification.properties import PropertyVerifier
from beancheck.verification.reporting import assert_checks, assert_outcomes, format_failures

__all__ = [
    "BeanTester",
    "ExceptionContractVerifier",
    "PropertyVerifier",
    "assert_checks",
    "assert_outcomes",
    "cause_of",
    "collect_class",
    "collect_classes",
    "collect_exception",
    "collect_exceptions",
    "collect_package",
    "format_failures",
    "get_tester",
    "message_of",
    "reset_tester",
    "verify",
    "verify_class",
    "verify_classes",
    "verify_exception",
    "verify_exception_with_args",
    "verify_exceptions",
    "verify_package",
]
