"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from beancheck.config.models import (
    BeanCheckConfig,
    ClassCriteria,
    LoggingConfig,
    LogLevel,
    SynthesisConfig,
    VerificationConfig,
)

pytestmark = pytest.mark.config


class TestSynthesisConfig:
    def test_defaults(self):
        config = SynthesisConfig()

        assert config.max_depth == 8
        assert config.use_doubles is True

    @pytest.mark.parametrize("depth", [0, 65, -1])
    def test_depth_bounds(self, depth):
        with pytest.raises(ValidationError):
            SynthesisConfig(max_depth=depth)


class TestVerificationConfig:
    def test_defaults(self):
        config = VerificationConfig()

        assert config.fail_fast is False
        assert config.include_fields is True


class TestClassCriteria:
    """Tests for the discovery policy."""

    def test_default_matches_public_names(self):
        criteria = ClassCriteria.create_default()

        assert criteria.matches_name("Person")
        assert not criteria.matches_name("_Hidden")

    def test_full_match(self):
        criteria = ClassCriteria(name_pattern=".*Dto")

        assert criteria.matches_name("OrderDto")
        assert not criteria.matches_name("OrderDtoFactory")

    def test_include_private(self):
        assert ClassCriteria(include_private=True).matches_name("_Hidden")

    def test_invalid_pattern(self):
        with pytest.raises(ValidationError, match="Invalid name pattern"):
            ClassCriteria(name_pattern="(unclosed")


class TestLoggingConfig:
    def test_lower_case_level(self):
        assert LoggingConfig(level="debug").level == LogLevel.DEBUG

    def test_unknown_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")


class TestBeanCheckConfig:
    def test_defaults(self):
        config = BeanCheckConfig()

        assert config.synthesis == SynthesisConfig()
        assert config.discovery == ClassCriteria.create_default()
        assert config.logging.level == LogLevel.WARNING

    def test_nested_dict(self):
        config = BeanCheckConfig(
            synthesis={"max_depth": 4},
            verification={"fail_fast": True},
            discovery={"name_pattern": ".*Bean", "recursive": False},
        )

        assert config.synthesis.max_depth == 4
        assert config.verification.fail_fast
        assert not config.discovery.recursive

    def test_to_yaml_dict(self):
        data = BeanCheckConfig().to_yaml_dict()

        assert data["logging"]["level"] == "WARNING"
        assert "required_marker" not in data["discovery"]
