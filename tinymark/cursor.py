"""Line and character lookahead over a document."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .constants import CODE_DELIMITER
from .exceptions import MalformedDelimiterError


def split_lines(text: str) -> list[str]:
    r"""Split a document into lines.

    Lines end at ``\n``; a trailing ``\r`` is removed from each line, and a
    final line ending does not produce an extra empty line.

    Args:
        text: Full document text.

    Returns:
        list[str]: Document lines without their line endings.

    Examples:
        split_lines("a\r\nb\n")  # ["a", "b"]
        split_lines("")  # []
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Cursor:
    """Two-level cursor over the lines of a document and the characters of
    the current line.

    Line and column numbers are one-based for error reporting: `line_number`
    is the number of lines consumed so far and `column` the number of
    characters consumed from the current line.

    Examples:
        cursor = Cursor("# Title\\nbody")
        cursor.advance_line()  # "# Title"
        cursor.advance_char()  # "#"
    """

    def __init__(self, text: str = ""):
        self._lines = split_lines(text)
        self._next_line = 0
        self._current: str | None = None
        self._offset = 0

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Cursor:
        cursor = cls()
        cursor._lines = list(lines)
        return cursor

    @property
    def line_number(self) -> int:
        return self._next_line

    @property
    def column(self) -> int:
        return self._offset

    def advance_line(self) -> str | None:
        """Move to the next line and return it, or None at the end of input."""
        if self._next_line >= len(self._lines):
            return None
        line = self._lines[self._next_line]
        self._next_line += 1
        self._current = line
        self._offset = 0
        return line

    def peek_line(self) -> str | None:
        """Return the upcoming line without consuming it."""
        if self._next_line >= len(self._lines):
            return None
        return self._lines[self._next_line]

    def peek_char(self) -> str | None:
        """Return the next character of the current line without consuming it."""
        if self._current is None or self._offset >= len(self._current):
            return None
        return self._current[self._offset]

    def advance_char(self) -> str | None:
        """Consume and return the next character of the current line."""
        char = self.peek_char()
        if char is not None:
            self._offset += 1
        return char

    def consume_while(
        self, predicate: Callable[[str], bool], toggle_escape: bool = False
    ) -> str | None:
        """Consume characters from the current line while `predicate` holds.

        With `toggle_escape`, a backtick never ends the scan: it flips an
        escape flag and is dropped from the result, and every character read
        while the flag is set is kept regardless of `predicate`.

        Args:
            predicate: Test applied to each upcoming character.
            toggle_escape: Whether backticks toggle literal scanning.

        Returns:
            str | None: The consumed text, or None when nothing was consumed.

        Examples:
            cursor.consume_while(str.isdigit)  # "12" for "12. item"
        """
        chars: list[str] = []
        escaped = False
        while (char := self.peek_char()) is not None:
            if toggle_escape and char == CODE_DELIMITER:
                escaped = not escaped
                self.advance_char()
                continue
            if not (escaped or predicate(char)):
                break
            chars.append(char)
            self.advance_char()
        return "".join(chars) or None

    def consume_until(self, stop: str) -> str | None:
        """Consume characters up to, but not including, `stop`.

        Backtick spans inside the scanned text are taken literally unless the
        stop character is the backtick itself.
        """
        return self.consume_while(lambda char: char != stop, toggle_escape=stop != CODE_DELIMITER)

    def consume_rest(self) -> str | None:
        """Consume the remainder of the current line verbatim."""
        return self.consume_while(lambda _char: True)

    def skip_whitespace(self) -> None:
        self.consume_while(str.isspace)

    def expect_char(self, expected: str) -> None:
        """Consume one character and require it to be `expected`.

        Raises:
            MalformedDelimiterError: If the character differs or the line is
                exhausted.
        """
        found = self.advance_char()
        if found == expected:
            return
        column = self._offset if found is not None else self._offset + 1
        raise MalformedDelimiterError(expected, found, self.line_number, column)
