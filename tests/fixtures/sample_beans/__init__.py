"""
Sample classes used as verification targets.

- beans: correct beans, value objects, dataclasses and pydantic models
- broken_beans: beans with miswired accessors
- errors: exception classes that propagate message and cause
- broken_errors: exception classes that break the convention
- nested: subpackage used by discovery tests
"""
