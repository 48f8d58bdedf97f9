"""
Introspection of live classes.

- members: accessor pairs and constructor signatures
- discovery: classes defined in a package, filtered by ClassCriteria
"""

from beancheck.introspection.discovery import ClassDiscovery, DiscoveryResult, find_classes
from beancheck.introspection.members import (
    ConstructorParameter,
    ConstructorSignature,
    StructuralIntrospector,
    find_accessor_pairs,
    safe_type_hints,
)

__all__ = [
    "ClassDiscovery",
    "ConstructorParameter",
    "ConstructorSignature",
    "DiscoveryResult",
    "StructuralIntrospector",
    "find_accessor_pairs",
    "find_classes",
    "safe_type_hints",
]
