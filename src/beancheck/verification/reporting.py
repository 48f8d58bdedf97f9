"""
Reporting layer.

The only place where failed results turn into a raised exception. Callers
in test suites get a single ``VerificationFailure`` (an ``AssertionError``)
listing every failing property or constructor; successful runs are silent.
"""

from collections.abc import Sequence

from beancheck.errors import VerificationFailure
from beancheck.models.results import ContractCheck, VerificationOutcome


def format_failures(failures: Sequence[VerificationOutcome | ContractCheck], noun: str) -> str:
    """Render failures as a header plus one bullet per failure."""
    plural = "" if len(failures) == 1 else "s"
    lines = [f"{len(failures)} {noun} check{plural} failed:"]
    lines.extend(f"  - {failure.describe()}" for failure in failures)
    return "\n".join(lines)


def assert_outcomes(outcomes: Sequence[VerificationOutcome]) -> Sequence[VerificationOutcome]:
    """Raise VerificationFailure if any property outcome failed.

    Returns:
        The outcomes unchanged, when all passed

    Raises:
        VerificationFailure: Naming each failing property and both values
    """
    failures = [o for o in outcomes if not o.passed]
    if failures:
        raise VerificationFailure(format_failures(failures, "property"), failures)
    return outcomes


def assert_checks(checks: Sequence[ContractCheck]) -> Sequence[ContractCheck]:
    """Raise VerificationFailure if any exception contract check failed.

    Raises:
        VerificationFailure: Naming each failing constructor signature
    """
    failures = [c for c in checks if not c.passed]
    if failures:
        raise VerificationFailure(format_failures(failures, "constructor"), failures)
    return checks
