"""
Configuration Loader.

Loads and validates configuration from YAML files with environment
variable substitution. A configuration file is optional: without one the
defaults of ``BeanCheckConfig`` apply, still subject to ``BEANCHECK_*``
environment overrides.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from beancheck.config.environment import ensure_dotenv_loaded
from beancheck.config.models import BeanCheckConfig
from beancheck.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default configuration file locations
DEFAULT_CONFIG_PATHS = [
    "beancheck.yaml",
    "beancheck.yml",
    ".beancheck.yaml",
    ".beancheck.yml",
]

# Environment variable for config path
CONFIG_ENV_VAR = "BEANCHECK_CONFIG"

# Maps env var name to config path (dot-separated)
ENV_VAR_OVERRIDES = {
    "BEANCHECK_MAX_DEPTH": "synthesis.max_depth",
    "BEANCHECK_USE_DOUBLES": "synthesis.use_doubles",
    "BEANCHECK_FAIL_FAST": "verification.fail_fast",
    "BEANCHECK_INCLUDE_FIELDS": "verification.include_fields",
    "BEANCHECK_LOG_LEVEL": "logging.level",
}


class ConfigLoader:
    """Loads configuration from YAML files.

    Supports:
    - YAML configuration files
    - Environment variable substitution (${VAR} and ${VAR:-default} syntax)
    - BEANCHECK_* environment overrides
    - Validation via Pydantic

    Usage:
        loader = ConfigLoader("beancheck.yaml")
        config = loader.load()

        # Or search BEANCHECK_CONFIG and the default locations
        config = ConfigLoader().load_from_env()
    """

    # Matches: ${VAR_NAME} or ${VAR_NAME:-default_value} or ${VAR_NAME:default_value}
    ENV_PATTERN = re.compile(r"\$\{(\w+)(?::-?([^}]*))?\}")

    def __init__(
        self,
        config_path: str | Path | None = None,
        env_file: str = ".env",
    ) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to YAML config file (optional)
            env_file: Path to .env file for environment loading
        """
        self._config_path = Path(config_path) if config_path else None
        self._env_file = env_file
        self._config: BeanCheckConfig | None = None
        self._loaded_from_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        """Get config file path."""
        return self._config_path

    @property
    def loaded_from_path(self) -> Path | None:
        """Get the path the config was actually loaded from."""
        return self._loaded_from_path

    @property
    def config(self) -> BeanCheckConfig | None:
        """Get loaded configuration, or None if not loaded yet."""
        return self._config

    def load(self, path: str | Path | None = None) -> BeanCheckConfig:
        """Load and validate configuration.

        Args:
            path: Optional path overriding the one given to __init__.
                Without any path, defaults plus environment overrides apply.

        Returns:
            Validated BeanCheckConfig

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If config file not found
        """
        if path is not None:
            self._config_path = Path(path)

        ensure_dotenv_loaded(self._env_file)

        if self._config_path:
            raw = self._load_yaml()
            self._loaded_from_path = self._config_path
        else:
            raw = {}
            self._loaded_from_path = None

        processed = self._substitute_env_vars(raw)
        processed = self._apply_env_overrides(processed)
        processed = self._clean_none_values(processed)

        try:
            self._config = BeanCheckConfig(**processed)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e.error_count()} errors",
                errors=e.errors(),
                path=self._loaded_from_path,
            ) from e

        logger.debug(f"Loaded configuration from {self._loaded_from_path or 'defaults'}")
        return self._config

    def load_from_env(self) -> BeanCheckConfig:
        """Load configuration from BEANCHECK_CONFIG or default locations.

        Falls back to defaults when no file exists.

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If BEANCHECK_CONFIG names a missing file
        """
        ensure_dotenv_loaded(self._env_file)

        env_config_path = os.environ.get(CONFIG_ENV_VAR)
        if env_config_path:
            config_path = Path(env_config_path)
            if not config_path.exists():
                raise FileNotFoundError(
                    f"Config file specified by {CONFIG_ENV_VAR} not found: {env_config_path}"
                )
            self._config_path = config_path
            return self.load()

        for default_path in DEFAULT_CONFIG_PATHS:
            path = Path(default_path)
            if path.exists():
                self._config_path = path
                return self.load()

        self._config_path = None
        return self.load()

    def save(self, path: str | Path | None = None) -> None:
        """Save current configuration to YAML file.

        Raises:
            ValueError: If no config loaded or no path specified
        """
        if self._config is None:
            raise ValueError("No configuration loaded")

        save_path = Path(path) if path else self._config_path
        if save_path is None:
            raise ValueError("No path specified for saving")

        with open(save_path, "w") as f:
            yaml.safe_dump(self._config.to_yaml_dict(), f, default_flow_style=False, sort_keys=False)

    def _load_yaml(self) -> dict[str, Any]:
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=self._config_path) from e

        if not isinstance(data, dict):
            raise ConfigurationError("Top-level YAML value must be a mapping", path=self._config_path)
        return data

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute ${VAR} references in config values."""
        if isinstance(data, dict):
            return {k: self._substitute_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            return self._substitute_string(data)
        return data

    def _clean_none_values(self, data: Any) -> Any:
        """Drop None dict values so Pydantic defaults apply to empty sections."""
        if isinstance(data, dict):
            return {k: self._clean_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._clean_none_values(item) for item in data]
        return data

    def _substitute_string(self, value: str) -> Any:
        full_match = self.ENV_PATTERN.fullmatch(value)
        if full_match:
            env_value = os.environ.get(full_match.group(1))
            resolved = env_value if env_value is not None else full_match.group(2)
            if resolved is not None:
                return self._coerce_type(resolved)
            return value

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return self.ENV_PATTERN.sub(replace, value)

    def _coerce_type(self, value: str) -> Any:
        """Coerce string value to bool, int, float, None or the original string."""
        if value == "":
            return None

        lower_value = value.lower()
        if lower_value in ("true", "yes", "on"):
            return True
        if lower_value in ("false", "no", "off"):
            return False

        try:
            if "." not in value and "e" not in lower_value:
                return int(value)
            return float(value)
        except ValueError:
            pass

        return value

    def _apply_env_overrides(self, config_dict: dict[str, Any]) -> dict[str, Any]:
        """Apply BEANCHECK_* overrides; they take precedence over the file."""
        for env_var, config_path in ENV_VAR_OVERRIDES.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                self._set_nested_value(config_dict, config_path, self._coerce_type(env_value))
        return config_dict

    def _set_nested_value(self, config_dict: dict[str, Any], path: str, value: Any) -> None:
        parts = path.split(".")
        current = config_dict
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value


# Global configuration cache
_global_loader: ConfigLoader | None = None
_global_config: BeanCheckConfig | None = None


def load_config(
    config_path: str | Path | None = None,
    env_file: str = ".env",
) -> BeanCheckConfig:
    """Load configuration from a file and make it the global configuration."""
    global _global_loader, _global_config

    _global_loader = ConfigLoader(config_path, env_file)
    _global_config = _global_loader.load()
    return _global_config


def load_config_from_env(env_file: str = ".env") -> BeanCheckConfig:
    """Load configuration from BEANCHECK_CONFIG or the default locations."""
    global _global_loader, _global_config

    _global_loader = ConfigLoader(env_file=env_file)
    _global_config = _global_loader.load_from_env()
    return _global_config


def get_config() -> BeanCheckConfig:
    """Get the global configuration, loading it from the environment on first use."""
    if _global_config is None:
        return load_config_from_env()
    return _global_config


def reset_config() -> None:
    """Reset global configuration. Useful for testing."""
    global _global_loader, _global_config
    _global_loader = None
    _global_config = None
