"""Package-specific exception types."""

from __future__ import annotations


class TinymarkError(Exception):
    """Base class for all tinymark errors."""


class ParseError(TinymarkError, ValueError):
    """Base class for parsing-related errors.

    Represents errors encountered while converting markup content.
    """


class MalformedDelimiterError(ParseError):
    """Raised when a mandatory delimiter is missing.

    Args:
        expected: Character the construct requires at this position.
        found: Character actually read, or None at the end of the line.
        line_number: One-based index of the offending line.
        column: One-based column of the offending character, or one past the
            end of the line when the line was exhausted.
    """

    def __init__(self, expected: str, found: str | None, line_number: int, column: int):
        self.expected = expected
        self.found = found
        self.line_number = line_number
        self.column = column
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Expecting character {self.expected!r} on line {self.line_number}, "
            f"column {self.column}"
        )


class ConvertFileError(TinymarkError):
    """Raised when converting a file fails."""
