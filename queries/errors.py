"""
Error kinds raised by the records engine.

Every failure path raises one of these so callers can tell them apart.
"""


class RecordsError(Exception):
    """Base class for all records engine errors."""


class DuplicateKeyError(RecordsError):
    def __init__(self, key: str, field: str = 'roll_no'):
        self.key = key
        self.field = field
        super().__init__(f"A record with {field} '{key}' already exists")


class NotFoundError(RecordsError, LookupError):
    def __init__(self, key: str, field: str = 'roll_no'):
        self.key = key
        self.field = field
        super().__init__(f"No record with {field} '{key}'")


class InvalidRangeError(RecordsError, ValueError):
    def __init__(self, low: float, high: float):
        self.low = low
        self.high = high
        super().__init__(f"Invalid marks range: minimum {low:g} is greater than maximum {high:g}")


class MalformedRangeError(RecordsError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Malformed marks range '{text}' (expected 'min-max', e.g. 70-90)")


class OutOfDomainError(RecordsError, ValueError):
    def __init__(self, value: float, low: float = 0.0, high: float = 100.0):
        self.value = value
        super().__init__(f"Marks must be between {low:g} and {high:g}, got {value}")


class InvalidFieldError(RecordsError, ValueError):
    """A form field is missing or ill-formed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class StoreUnavailableError(RecordsError):
    """The backing store could not be reached or refused the operation."""
