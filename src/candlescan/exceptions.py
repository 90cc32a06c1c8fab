"""Errors raised by the classifier and the CSV loader."""

from typing import Iterable, Optional, Sequence


class UnsupportedPatternError(ValueError):
    """Raised when a scan is requested for a pattern nobody registered."""

    def __init__(self, pattern_name: str, supported: Iterable[str] = ()):
        self.pattern_name = pattern_name
        self.supported = tuple(supported)
        message = f"Unsupported pattern: {pattern_name!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class RowParseError(ValueError):
    """Raised when one input row cannot be turned into a DayRecord."""

    def __init__(self, message: str, line_number: Optional[int] = None, row: Optional[Sequence[str]] = None):
        self.line_number = line_number
        self.row = tuple(row) if row is not None else None
        self.reason = message
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
