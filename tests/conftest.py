"""
beancheck Test Configuration and Fixtures

Fixture Categories:
- Isolation: global config, default tester and BEANCHECK_* variables reset per test
- Components: synthesizer, introspector and verifiers built from explicit config
- Sample classes: the tests.fixtures.sample_beans package
"""

import logging
from collections.abc import Generator

import pytest

import beancheck.config.environment as env_module
from beancheck.config import (
    ENV_VAR_OVERRIDES,
    BeanCheckConfig,
    SynthesisConfig,
    VerificationConfig,
    reset_config,
    reset_environment,
)
from beancheck.introspection import StructuralIntrospector
from beancheck.synthesis import Synthesizer
from beancheck.verification import (
    BeanTester,
    ExceptionContractVerifier,
    PropertyVerifier,
    reset_tester,
)

# =============================================================================
# Isolation
# =============================================================================


def _reset_beancheck_logger() -> None:
    logger = logging.getLogger("beancheck")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep the global config and default tester independent between tests."""
    reset_config()
    reset_environment()
    reset_tester()

    monkeypatch.delenv("BEANCHECK_CONFIG", raising=False)
    for var in ENV_VAR_OVERRIDES:
        monkeypatch.delenv(var, raising=False)

    # Tests set their own variables; never pick up a developer's .env
    monkeypatch.setattr(env_module, "_dotenv_loaded", True)

    yield

    reset_config()
    reset_environment()
    reset_tester()
    # BeanTester applies the logging section; drop its handler and level
    _reset_beancheck_logger()


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def config() -> BeanCheckConfig:
    return BeanCheckConfig()


@pytest.fixture
def introspector() -> StructuralIntrospector:
    return StructuralIntrospector()


@pytest.fixture
def synthesizer(introspector: StructuralIntrospector) -> Synthesizer:
    return Synthesizer(SynthesisConfig(), introspector=introspector)


@pytest.fixture
def strict_synthesizer(introspector: StructuralIntrospector) -> Synthesizer:
    """Synthesizer that never falls back to mock doubles."""
    return Synthesizer(SynthesisConfig(use_doubles=False), introspector=introspector)


@pytest.fixture
def property_verifier(
    synthesizer: Synthesizer, introspector: StructuralIntrospector
) -> PropertyVerifier:
    return PropertyVerifier(synthesizer, introspector, VerificationConfig())


@pytest.fixture
def exception_verifier(
    synthesizer: Synthesizer, introspector: StructuralIntrospector
) -> ExceptionContractVerifier:
    return ExceptionContractVerifier(synthesizer, introspector)


@pytest.fixture
def tester(config: BeanCheckConfig) -> BeanTester:
    return BeanTester(config)


# =============================================================================
# Sample Package
# =============================================================================


@pytest.fixture
def sample_package_name() -> str:
    return "tests.fixtures.sample_beans"


@pytest.fixture
def nested_package_name(sample_package_name: str) -> str:
    return f"{sample_package_name}.nested"
