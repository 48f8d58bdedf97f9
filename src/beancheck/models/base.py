"""
Base enumerations used throughout the data models.

These enums provide type-safe values for the categorical fields of
synthesis results, verification outcomes and contract checks.
"""

from enum import Enum


class SynthesisStrategy(str, Enum):
    """Strategy that produced a synthesized value."""

    CATALOG = "catalog"  # Fixed sample from the primitive value catalog
    DOUBLE = "double"  # Behaviour-less test double
    CONSTRUCTED = "constructed"  # Real instance built through its constructor


class OutcomeStatus(str, Enum):
    """Result status of a single property or constructor check."""

    PASS = "pass"
    FAIL = "fail"


class AccessorKind(str, Enum):
    """How an accessor pair is exposed on its owning class."""

    PROPERTY = "property"  # property object with fget and fset
    FIELD = "field"  # writable dataclass or pydantic field

