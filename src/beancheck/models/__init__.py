"""
Data models for beancheck.

- base: enumerations shared by results and reports
- results: accessor pairs, synthesis results, verification outcomes and
  exception contract checks
"""

from beancheck.models.base import AccessorKind, OutcomeStatus, SynthesisStrategy
from beancheck.models.results import (
    OMITTED,
    AccessorPair,
    ContractCheck,
    ExceptionContractCase,
    SynthesisResult,
    VerificationOutcome,
)

__all__ = [
    "OMITTED",
    "AccessorKind",
    "AccessorPair",
    "ContractCheck",
    "ExceptionContractCase",
    "OutcomeStatus",
    "SynthesisResult",
    "SynthesisStrategy",
    "VerificationOutcome",
]
