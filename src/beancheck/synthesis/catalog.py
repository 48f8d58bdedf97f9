"""
Primitive Value Catalog.

Maps well-known builtin and standard-library types to a deterministic
sample value. Every sample differs from the zero value of its type (``0``,
``""``, an empty container, the epoch) so that a setter which silently
does nothing cannot pass a round-trip check by accident.

Entries hold factories rather than values: mutable samples such as lists
and dicts are rebuilt on every lookup, so no state is shared between
callers while repeated lookups stay value-equal.
"""

import datetime
import enum
import threading
import uuid
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from pathlib import Path, PurePath
from typing import Any

from beancheck.errors import UnsupportedType

SAMPLE_STRING = "sample"
SAMPLE_UUID = uuid.UUID("0b6f6a1e-4c7d-4f3a-9a55-1f2e3d4c5b6a")
EPOCH = datetime.datetime(1970, 1, 1)


@dataclass(frozen=True)
class CatalogEntry:
    """One recognized type.

    Attributes:
        type: The exact type this entry answers for
        factory: Builds a fresh sample value
        zero: The type's default/zero value, kept for comparison
    """

    type: Any
    factory: Callable[[], Any]
    zero: Any

    def sample(self) -> Any:
        return self.factory()


def _build_entries() -> tuple[CatalogEntry, ...]:
    return (
        CatalogEntry(bool, lambda: True, False),
        CatalogEntry(int, lambda: 42, 0),
        CatalogEntry(float, lambda: 4.2, 0.0),
        CatalogEntry(complex, lambda: complex(4, 2), 0j),
        CatalogEntry(str, lambda: SAMPLE_STRING, ""),
        CatalogEntry(bytes, lambda: SAMPLE_STRING.encode(), b""),
        CatalogEntry(bytearray, lambda: bytearray(SAMPLE_STRING.encode()), bytearray()),
        CatalogEntry(Decimal, lambda: Decimal("4.2"), Decimal(0)),
        CatalogEntry(Fraction, lambda: Fraction(1, 3), Fraction(0)),
        CatalogEntry(
            datetime.datetime,
            lambda: datetime.datetime(2014, 3, 15, 12, 30, 45),
            EPOCH,
        ),
        CatalogEntry(datetime.date, lambda: datetime.date(2014, 3, 15), EPOCH.date()),
        CatalogEntry(datetime.time, lambda: datetime.time(12, 30, 45), datetime.time()),
        CatalogEntry(
            datetime.timedelta,
            lambda: datetime.timedelta(hours=1, minutes=30),
            datetime.timedelta(),
        ),
        CatalogEntry(
            datetime.timezone,
            lambda: datetime.timezone(datetime.timedelta(hours=2)),
            datetime.timezone.utc,
        ),
        CatalogEntry(uuid.UUID, lambda: SAMPLE_UUID, uuid.UUID(int=0)),
        CatalogEntry(Path, lambda: Path(SAMPLE_STRING), Path()),
        CatalogEntry(PurePath, lambda: PurePath(SAMPLE_STRING), PurePath()),
        CatalogEntry(list, lambda: [SAMPLE_STRING], []),
        CatalogEntry(tuple, lambda: (SAMPLE_STRING,), ()),
        CatalogEntry(dict, lambda: {"key": SAMPLE_STRING}, {}),
        CatalogEntry(set, lambda: {SAMPLE_STRING}, set()),
        CatalogEntry(frozenset, lambda: frozenset({SAMPLE_STRING}), frozenset()),
        CatalogEntry(Any, lambda: SAMPLE_STRING, None),
    )


class PrimitiveValueCatalog:
    """Read-only lookup table of sample values.

    Enum classes with at least one member are recognized as well and
    sample to their first member.
    """

    def __init__(self, entries: tuple[CatalogEntry, ...]) -> None:
        self._entries = {entry.type: entry for entry in entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries.values())

    def entry(self, tp: Any) -> CatalogEntry | None:
        """Exact-match entry for a type (``bool`` does not match ``int``)."""
        try:
            return self._entries.get(tp)
        except TypeError:
            # Unhashable annotation objects are never catalog keys
            return None

    def is_recognized(self, tp: Any) -> bool:
        return self.entry(tp) is not None or _is_populated_enum(tp)

    def sample(self, tp: Any) -> Any:
        """Sample value for a recognized type.

        Raises:
            UnsupportedType: If the type is not recognized
        """
        entry = self.entry(tp)
        if entry is not None:
            return entry.sample()
        if _is_populated_enum(tp):
            return next(iter(tp))
        raise UnsupportedType(tp)


def _is_populated_enum(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, enum.Enum) and len(tp) > 0


_catalog: PrimitiveValueCatalog | None = None
_catalog_lock = threading.Lock()


def get_catalog() -> PrimitiveValueCatalog:
    """Process-wide catalog, built on first use."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = PrimitiveValueCatalog(_build_entries())
    return _catalog


def is_recognized(tp: Any) -> bool:
    """Whether the catalog has a sample for this type."""
    return get_catalog().is_recognized(tp)


def sample(tp: Any) -> Any:
    """Sample value for a recognized type; raises UnsupportedType otherwise."""
    return get_catalog().sample(tp)
