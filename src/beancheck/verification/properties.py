"""
Property Verifier.

Round-trips every accessor pair of a class: synthesize a value for the
declared type, build a fresh instance, call the setter, call the getter and
compare with ``==``. Any exception along the way becomes a failed outcome
for that property rather than aborting the class.
"""

import logging
from collections.abc import Iterable

from beancheck.config.models import VerificationConfig
from beancheck.errors import AssertionMismatch, PropertyAccessError
from beancheck.introspection.members import StructuralIntrospector
from beancheck.models.base import OutcomeStatus
from beancheck.models.results import AccessorPair, VerificationOutcome
from beancheck.synthesis.synthesizer import Synthesizer

logger = logging.getLogger(__name__)


class PropertyVerifier:
    """Verifies getter/setter wiring of classes.

    By default every property of a class is verified and all failures are
    collected; with ``VerificationConfig.fail_fast`` a class stops at its
    first failing property.

    Usage:
        verifier = PropertyVerifier()
        outcomes = verifier.verify(Person, excluded={"created_at"})
        failed = [o for o in outcomes if not o.passed]
    """

    def __init__(
        self,
        synthesizer: Synthesizer | None = None,
        introspector: StructuralIntrospector | None = None,
        config: VerificationConfig | None = None,
    ) -> None:
        """Initialize the verifier.

        Args:
            synthesizer: Produces property values and target instances
            introspector: Enumerates accessor pairs
            config: Fail-fast and field inclusion settings
        """
        self._config = config or VerificationConfig()
        self._introspector = introspector or StructuralIntrospector(
            include_fields=self._config.include_fields
        )
        self._synthesizer = synthesizer or Synthesizer(introspector=self._introspector)

    @property
    def config(self) -> VerificationConfig:
        return self._config

    def verify(self, cls: type, excluded: Iterable[str] = ()) -> list[VerificationOutcome]:
        """Verify every accessor pair of a class.

        Args:
            cls: Class under test
            excluded: Property names to skip

        Returns:
            One outcome per verified accessor pair
        """
        pairs = self._introspector.find_accessor_pairs(cls, excluded)
        logger.debug(f"Found {len(pairs)} accessor pairs on {cls.__qualname__}")

        outcomes: list[VerificationOutcome] = []
        for pair in pairs:
            outcome = self.verify_pair(pair)
            outcomes.append(outcome)
            if not outcome.passed:
                logger.error(outcome.describe())
                if self._config.fail_fast:
                    logger.info(f"Stopping {cls.__qualname__} at first failure (fail_fast)")
                    break

        failed = sum(1 for o in outcomes if not o.passed)
        logger.info(f"Verified {len(outcomes)} properties of {cls.__qualname__}: {failed} failed")
        return outcomes

    def verify_pair(self, pair: AccessorPair) -> VerificationOutcome:
        """Round-trip a single accessor pair."""
        expected_result = self._synthesizer.synthesize(pair.declared_type, requester=pair.label)
        if not expected_result.ok:
            return self._failure(pair, error=expected_result.error)
        expected = expected_result.value

        bean_result = self._synthesizer.construct(pair.owner, requester=pair.label)
        if not bean_result.ok:
            return self._failure(pair, expected=expected, error=bean_result.error)
        bean = bean_result.value

        try:
            pair.setter(bean, expected)
            actual = pair.getter(bean)
            matches = bool(expected == actual)
        except Exception as e:
            return self._failure(
                pair,
                expected=expected,
                error=PropertyAccessError(pair.owner, pair.property_name, e),
            )

        if not matches:
            return self._failure(
                pair,
                expected=expected,
                actual=actual,
                error=AssertionMismatch(pair.owner, pair.property_name, expected, actual),
            )

        logger.debug(f"{pair.label}: ok ({expected_result.strategy.value})")
        return VerificationOutcome(
            status=OutcomeStatus.PASS,
            owner=pair.owner,
            property_name=pair.property_name,
            expected=expected,
            actual=actual,
        )

    @staticmethod
    def _failure(pair: AccessorPair, expected=None, actual=None, error=None) -> VerificationOutcome:
        return VerificationOutcome(
            status=OutcomeStatus.FAIL,
            owner=pair.owner,
            property_name=pair.property_name,
            expected=expected,
            actual=actual,
            error=error,
        )
