"""Exception classes that break the message or cause conventions."""


class SwallowedMessageError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__("something else happened")


class LostCauseError(Exception):
    def __init__(self, message: str, cause: Exception) -> None:
        super().__init__(message)


class ExplodingError(Exception):
    def __init__(self, message: str) -> None:
        raise ValueError("constructor exploded")
