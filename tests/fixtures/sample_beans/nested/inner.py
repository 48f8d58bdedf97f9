"""Classes for discovery filtering."""

from enum import Enum


class InnerBean:
    def __init__(self) -> None:
        self._title = ""

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value


class InnerDto:
    __bean__ = True

    def __init__(self) -> None:
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value: int) -> None:
        self._size = value


class _PrivateBean:
    pass


class Shade(Enum):
    LIGHT = "light"
    DARK = "dark"


class InnerError(Exception):
    pass
