"""
Batch Driver.

Entry points for test suites. ``BeanTester`` wires an introspector, a
synthesizer and both verifiers from one ``BeanCheckConfig``; the
``verify_*`` methods assert through the reporting layer, the ``collect_*``
methods return the raw results.

Module-level functions delegate to a default tester built from
``get_config()``.
"""

import logging
import warnings
from types import ModuleType
from typing import Any

from beancheck.config.loader import get_config
from beancheck.config.log import configure_logging
from beancheck.config.models import BeanCheckConfig, ClassCriteria
from beancheck.errors import InvalidArgument
from beancheck.introspection.discovery import ClassDiscovery
from beancheck.introspection.members import StructuralIntrospector
from beancheck.models.results import ContractCheck, VerificationOutcome
from beancheck.synthesis.doubles import DoubleFactory
from beancheck.synthesis.synthesizer import Synthesizer
from beancheck.verification.exceptions import ExceptionContractVerifier
from beancheck.verification.properties import PropertyVerifier
from beancheck.verification.reporting import assert_checks, assert_outcomes

logger = logging.getLogger(__name__)


def _flatten_classes(classes: tuple[Any, ...]) -> tuple[Any, ...]:
    """Allow ``verify_classes([A, B])`` as well as ``verify_classes(A, B)``."""
    if len(classes) == 1 and isinstance(classes[0], (list, tuple)):
        return tuple(classes[0])
    return classes


class BeanTester:
    """Verifies accessor pairs and exception contracts in bulk.

    Usage:
        tester = BeanTester()
        tester.verify_classes(Person, Address)
        tester.verify_package("myapp.dto")
        tester.verify_exceptions(myapp.errors)

        outcomes = tester.collect_class(Person, "created_at")
    """

    def __init__(
        self,
        config: BeanCheckConfig | None = None,
        double_factory: DoubleFactory | None = None,
    ) -> None:
        """Initialize the tester.

        Args:
            config: Configuration (the loaded global config by default); its
                logging section is applied to the ``beancheck`` logger
            double_factory: Replacement for the unittest.mock double factory
        """
        self._config = config or get_config()
        configure_logging(self._config.logging)
        self._introspector = StructuralIntrospector(
            include_fields=self._config.verification.include_fields
        )
        self._synthesizer = Synthesizer(
            config=self._config.synthesis,
            introspector=self._introspector,
            double_factory=double_factory,
        )
        self._properties = PropertyVerifier(
            synthesizer=self._synthesizer,
            introspector=self._introspector,
            config=self._config.verification,
        )
        self._exceptions = ExceptionContractVerifier(
            synthesizer=self._synthesizer,
            introspector=self._introspector,
        )

    @property
    def config(self) -> BeanCheckConfig:
        return self._config

    @property
    def synthesizer(self) -> Synthesizer:
        return self._synthesizer

    # =========================================================================
    # Properties
    # =========================================================================

    def collect_class(self, cls: type, *excluded: str) -> list[VerificationOutcome]:
        """Verify one class, skipping the excluded property names.

        Raises:
            InvalidArgument: If cls is None
        """
        if cls is None:
            raise InvalidArgument("Input class is null")
        return self._properties.verify(cls, excluded)

    def collect_classes(self, *classes: type) -> list[VerificationOutcome]:
        """Verify every class, continuing past failing ones.

        Raises:
            InvalidArgument: If classes is None or contains None; raised
                before any class is verified
        """
        classes = _flatten_classes(classes)
        if any(cls is None for cls in classes):
            raise InvalidArgument("Input classes is null")

        outcomes: list[VerificationOutcome] = []
        for cls in classes:
            outcomes.extend(self._properties.verify(cls))
        return outcomes

    def collect_package(
        self,
        package: ModuleType | str,
        criteria: ClassCriteria | None = None,
    ) -> list[VerificationOutcome]:
        """Discover classes in a package and verify each of them.

        Args:
            package: Module object or dotted package name
            criteria: Discovery policy (the configured ``discovery`` criteria by default)

        Raises:
            InvalidArgument: If package is None
        """
        if package is None:
            raise InvalidArgument("Input package is null")

        result = ClassDiscovery(criteria or self._config.discovery).discover(package)
        if not result.classes:
            logger.warning(f"No classes matched in {package!r}")
        return self.collect_classes(*result.classes)

    def verify_class(self, cls: type, *excluded: str) -> list[VerificationOutcome]:
        """Verify one class and raise VerificationFailure on any failed property."""
        return list(assert_outcomes(self.collect_class(cls, *excluded)))

    def verify_classes(self, *classes: type) -> list[VerificationOutcome]:
        """Verify classes and raise VerificationFailure listing every failed property."""
        return list(assert_outcomes(self.collect_classes(*classes)))

    def verify_package(
        self,
        package: ModuleType | str,
        criteria: ClassCriteria | None = None,
    ) -> list[VerificationOutcome]:
        """Verify a package and raise VerificationFailure listing every failed property."""
        return list(assert_outcomes(self.collect_package(package, criteria)))

    def verify(self, *classes: type) -> list[VerificationOutcome]:
        """Deprecated alias of verify_classes."""
        warnings.warn(
            "verify() is deprecated, use verify_classes() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.verify_classes(*classes)

    # =========================================================================
    # Exceptions
    # =========================================================================

    def collect_exception(self, exc_type: type[BaseException]) -> list[ContractCheck]:
        return self._exceptions.verify_exception(exc_type)

    def collect_exception_with_args(
        self, exc_type: type[BaseException], *explicit_args: Any
    ) -> list[ContractCheck]:
        return self._exceptions.verify_exception_with_args(exc_type, *explicit_args)

    def collect_exceptions(self, container: type | ModuleType) -> list[ContractCheck]:
        return self._exceptions.verify_exceptions(container)

    def verify_exception(self, exc_type: type[BaseException]) -> list[ContractCheck]:
        """Check an exception class and raise VerificationFailure on any broken shape."""
        return list(assert_checks(self.collect_exception(exc_type)))

    def verify_exception_with_args(
        self, exc_type: type[BaseException], *explicit_args: Any
    ) -> list[ContractCheck]:
        """Check one explicit constructor call; ``OMITTED`` entries are synthesized."""
        return list(assert_checks(self.collect_exception_with_args(exc_type, *explicit_args)))

    def verify_exceptions(self, container: type | ModuleType) -> list[ContractCheck]:
        """Check every exception class declared by a class or module."""
        return list(assert_checks(self.collect_exceptions(container)))


_default_tester: BeanTester | None = None


def get_tester() -> BeanTester:
    """Get the default tester, rebuilding it when the global config changed."""
    global _default_tester
    config = get_config()
    if _default_tester is None or _default_tester.config is not config:
        _default_tester = BeanTester(config)
    return _default_tester


def reset_tester() -> None:
    """Drop the default tester (mainly for testing)."""
    global _default_tester
    _default_tester = None


def verify_class(cls: type, *excluded: str) -> list[VerificationOutcome]:
    return get_tester().verify_class(cls, *excluded)


def verify_classes(*classes: type) -> list[VerificationOutcome]:
    return get_tester().verify_classes(*classes)


def verify_package(
    package: ModuleType | str,
    criteria: ClassCriteria | None = None,
) -> list[VerificationOutcome]:
    return get_tester().verify_package(package, criteria)


def verify(*classes: type) -> list[VerificationOutcome]:
    """Deprecated alias of verify_classes."""
    warnings.warn(
        "verify() is deprecated, use verify_classes() instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return get_tester().verify_classes(*classes)


def collect_classes(*classes: type) -> list[VerificationOutcome]:
    return get_tester().collect_classes(*classes)


def collect_package(
    package: ModuleType | str,
    criteria: ClassCriteria | None = None,
) -> list[VerificationOutcome]:
    return get_tester().collect_package(package, criteria)


def verify_exception(exc_type: type[BaseException]) -> list[ContractCheck]:
    return get_tester().verify_exception(exc_type)


def verify_exception_with_args(
    exc_type: type[BaseException], *explicit_args: Any
) -> list[ContractCheck]:
    return get_tester().verify_exception_with_args(exc_type, *explicit_args)


def verify_exceptions(container: type | ModuleType) -> list[ContractCheck]:
    return get_tester().verify_exceptions(container)


def collect_exceptions(container: type | ModuleType) -> list[ContractCheck]:
    return get_tester().collect_exceptions(container)


def collect_class(cls: type, *excluded: str) -> list[VerificationOutcome]:
    return get_tester().collect_class(cls, *excluded)


def collect_exception(exc_type: type[BaseException]) -> list[ContractCheck]:
    return get_tester().collect_exception(exc_type)
