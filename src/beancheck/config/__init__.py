"""
beancheck - Configuration Management

This module provides configuration management including:
- YAML configuration loading and validation
- .env loading and BEANCHECK_* environment overrides
- Class discovery criteria
- Logging setup
"""

from beancheck.config.environment import ensure_dotenv_loaded, reset_environment
from beancheck.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATHS,
    ENV_VAR_OVERRIDES,
    ConfigLoader,
    get_config,
    load_config,
    load_config_from_env,
    reset_config,
)
from beancheck.config.log import configure_logging
from beancheck.config.models import (
    BeanCheckConfig,
    ClassCriteria,
    LoggingConfig,
    LogLevel,
    SynthesisConfig,
    VerificationConfig,
)
from beancheck.errors import ConfigurationError

__all__ = [
    # Config models
    "BeanCheckConfig",
    "ClassCriteria",
    "LoggingConfig",
    "LogLevel",
    "SynthesisConfig",
    "VerificationConfig",
    # Loader
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATHS",
    "ENV_VAR_OVERRIDES",
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
    "load_config",
    "load_config_from_env",
    "reset_config",
    # Environment and logging
    "configure_logging",
    "ensure_dotenv_loaded",
    "reset_environment",
]
