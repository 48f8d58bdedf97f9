"""
Value synthesis.

- catalog: fixed, non-default samples for builtin and stdlib types
- doubles: unittest.mock stand-ins for extensible classes
- synthesizer: the layered catalog -> double -> constructed strategy
"""

from beancheck.synthesis.catalog import (
    CatalogEntry,
    PrimitiveValueCatalog,
    get_catalog,
    is_recognized,
    sample,
)
from beancheck.synthesis.doubles import DoubleFactory, MockDoubleFactory, is_extensible
from beancheck.synthesis.synthesizer import Synthesizer, synthesize

__all__ = [
    "CatalogEntry",
    "DoubleFactory",
    "MockDoubleFactory",
    "PrimitiveValueCatalog",
    "Synthesizer",
    "get_catalog",
    "is_extensible",
    "is_recognized",
    "sample",
    "synthesize",
]
