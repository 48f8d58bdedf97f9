"""Rendering of classes and typing annotations for messages."""

from typing import Any


def type_name(tp: Any) -> str:
    """Human-readable name for a class or typing annotation.

    Classes render as their qualified name, parameterized annotations
    keep their arguments (``list[Child]``).
    """
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type) and not getattr(tp, "__args__", None):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
