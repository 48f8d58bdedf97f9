"""
Configuration Data Models.

Defines all configuration schemas using Pydantic for validation
and type safety.
"""

import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Log levels accepted by the logging configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Configuration for the ``beancheck`` logger.

    Attributes:
        level: Minimum level emitted by beancheck loggers
        format: Format string for the stream handler
    """

    level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Log level for beancheck loggers",
    )
    format: str = Field(
        default="%(levelname)s %(name)s: %(message)s",
        description="Log record format",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class SynthesisConfig(BaseModel):
    """Configuration for value synthesis.

    Attributes:
        max_depth: Maximum nesting depth for constructed values
        use_doubles: Whether test doubles may stand in for extensible classes
    """

    max_depth: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum recursion depth when constructing nested values",
    )
    use_doubles: bool = Field(
        default=True,
        description="Allow mock doubles for extensible classes",
    )


class VerificationConfig(BaseModel):
    """Configuration for property verification.

    Attributes:
        fail_fast: Stop verifying a class at its first failing property
        include_fields: Also verify writable dataclass and pydantic fields
    """

    fail_fast: bool = Field(
        default=False,
        description="Stop at the first failing property of each class",
    )
    include_fields: bool = Field(
        default=True,
        description="Verify writable dataclass/pydantic fields as well as properties",
    )


class ClassCriteria(BaseModel):
    """Policy deciding which classes of a package are verified.

    Attributes:
        name_pattern: Regular expression the class name must fully match
        recursive: Descend into subpackages
        include_abstract: Include abstract classes
        include_private: Include classes whose name starts with an underscore
        include_enums: Include Enum subclasses
        include_exceptions: Include BaseException subclasses
        required_marker: Attribute that must be truthy on the class
    """

    name_pattern: str = Field(
        default=".*",
        description="Regex matched against the class name",
        examples=[".*Dto", "(Order|Invoice).*"],
    )
    recursive: bool = Field(default=True, description="Search subpackages")
    include_abstract: bool = Field(default=False, description="Include abstract classes")
    include_private: bool = Field(default=False, description="Include _private classes")
    include_enums: bool = Field(default=False, description="Include enums")
    include_exceptions: bool = Field(default=False, description="Include exception classes")
    required_marker: Optional[str] = Field(
        default=None,
        description="Attribute name that must be truthy on matching classes",
        examples=["__bean__"],
    )

    @field_validator("name_pattern")
    @classmethod
    def validate_name_pattern(cls, v: str) -> str:
        """Validate that the pattern compiles."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid name pattern {v!r}: {e}") from e
        return v

    @classmethod
    def create_default(cls) -> "ClassCriteria":
        """Criteria matching every public, concrete, non-enum, non-exception class."""
        return cls()

    def matches_name(self, name: str) -> bool:
        """Check a class name against the pattern and privacy rule."""
        if not self.include_private and name.startswith("_"):
            return False
        return re.fullmatch(self.name_pattern, name) is not None


class BeanCheckConfig(BaseModel):
    """Root configuration.

    Attributes:
        synthesis: Value synthesis settings
        verification: Property verification settings
        discovery: Default class criteria for package verification
        logging: Logging settings
    """

    synthesis: SynthesisConfig = Field(
        default_factory=SynthesisConfig,
        description="Value synthesis",
    )
    verification: VerificationConfig = Field(
        default_factory=VerificationConfig,
        description="Property verification",
    )
    discovery: ClassCriteria = Field(
        default_factory=ClassCriteria.create_default,
        description="Default class discovery criteria",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-friendly dictionary.

        Returns:
            Dict suitable for YAML serialization
        """
        return self.model_dump(mode="json", exclude_none=True)
