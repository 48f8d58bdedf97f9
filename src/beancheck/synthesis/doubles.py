"""
Test-double generation.

A double stands in for a class whose real instances are hard or
impossible to build (abstract bases, protocols, classes with demanding
constructors). Doubles come from ``unittest.mock`` and are spec'd on the
requested class, so ``isinstance(double, cls)`` holds and setters that
type-check their argument still accept it.
"""

import collections.abc
import logging
import typing
from typing import Any, Protocol, runtime_checkable
from unittest.mock import MagicMock, NonCallableMagicMock

logger = logging.getLogger(__name__)

# Py_TPFLAGS_BASETYPE: set on types that allow subclassing
_TPFLAGS_BASETYPE = 1 << 10


@runtime_checkable
class DoubleFactory(Protocol):
    """Creates behaviour-less stand-ins for extensible classes."""

    def can_double(self, tp: Any) -> bool:
        """Whether a double can be created for this type."""
        ...

    def create_double(self, tp: Any) -> Any:
        """Create a double; only called when can_double returned True."""
        ...


def is_extensible(tp: Any) -> bool:
    """Whether a class may be subclassed.

    Classes marked with ``typing.final`` and builtin types whose layout
    forbids subclassing (``bool``, ``NoneType``, ``range``...) are not.
    """
    if not isinstance(tp, type) or typing.get_origin(tp) is not None:
        return False
    if getattr(tp, "__final__", False):
        return False
    return bool(tp.__flags__ & _TPFLAGS_BASETYPE)


class MockDoubleFactory:
    """DoubleFactory backed by ``unittest.mock.NonCallableMagicMock``.

    Doubles compare equal only to themselves, which is exactly what a
    getter/setter round trip needs.
    """

    def can_double(self, tp: Any) -> bool:
        return is_extensible(tp)

    def create_double(self, tp: Any) -> Any:
        logger.debug(f"Creating mock double for {tp.__qualname__}")
        if tp is collections.abc.Callable:
            return MagicMock(name="CallableDouble")
        return NonCallableMagicMock(spec=tp, name=f"{tp.__qualname__}Double")
