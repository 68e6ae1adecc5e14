"""
UnitGraph Errors
================

None of these are fatal: a failed query leaves the graph untouched and the
caller free to ask again.

All errors subclass ValueError, the same exception an unknown unit raises
in a plain unit registry lookup.
"""

from typing import Optional


class UnitGraphError(ValueError):
    """Base class for conversion engine errors."""
    pass


class MalformedTableLine(UnitGraphError):
    """A table entry could not be parsed into an equivalence."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: '{line.strip()}'")


class UnresolvedUnit(UnitGraphError):
    """A query token matched no unit, or more than one."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"'{token}' is not a valid unit")


class NoConversionPath(UnitGraphError):
    """Both units resolved but no chain of equivalences connects them."""

    def __init__(self, source: str, target: str):
        self.source = source
        self.target = target
        super().__init__(f"Not a valid conversion: {source} -> {target}")


class InvalidQuantity(UnitGraphError):
    """The numeric value of a query is not a number."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"'{text}' is not a valid quantity")


class MalformedQuery(UnitGraphError):
    """A query does not follow '<number> <unit> to <unit>'."""

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        self.reason = reason
        message = f"Cannot parse conversion: '{text}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
