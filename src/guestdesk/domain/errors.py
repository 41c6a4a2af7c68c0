"""Check-in error taxonomy.

Propagation policy:
- NotFoundError escalates to the operator as a rejected commit.
- ParseError never escapes the lenient parsers; the value is defaulted.
- TransientReadError is swallowed on read paths (empty result) and logged.
"""


class CheckInError(Exception):
    """Base class for check-in workflow errors."""


class NotFoundError(CheckInError):
    """Raised when the target room or a required table does not exist."""

    def __init__(self, what: str, key: str) -> None:
        self.what = what
        self.key = key
        super().__init__(f"{what} not found: {key}")


class ParseError(CheckInError, ValueError):
    """Raised by strict parsers on malformed rate, date or night count."""

    def __init__(self, field: str, raw: str) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"Cannot parse {field}")


class TransientReadError(CheckInError):
    """Raised when a table read fails for a reason other than absence."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Failed to read table {table}")
