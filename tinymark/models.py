"""Data models for tinymark."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


class BlockKind(Enum):
    """Block constructs recognised from a line's leading character.

    Attributes:
        BLANK: Empty line; closes an open paragraph.
        HTML: Raw HTML passed through verbatim.
        HEADING: ``#`` heading.
        UNORDERED_ITEM: ``-`` list item.
        ORDERED_ITEM: Numbered list item.
        QUOTE: ``>`` blockquote line.
        CODE: Line starting with a backtick (fence or inline code).
        PARAGRAPH: Any other text.
    """

    BLANK = auto()
    HTML = auto()
    HEADING = auto()
    UNORDERED_ITEM = auto()
    ORDERED_ITEM = auto()
    QUOTE = auto()
    CODE = auto()
    PARAGRAPH = auto()


@dataclass
class BlockContext:
    """Block-mode flags carried from one line to the next.

    Attributes:
        in_list: A ``<ul>`` or ``<ol>`` is open.
        in_block: A ``<blockquote>`` is open.
        paragraph: A ``<p>`` is open and waiting for a blank line.
    """

    in_list: bool = False
    in_block: bool = False
    paragraph: bool = False


@dataclass
class HtmlOutput:
    """Append-only accumulator for emitted HTML fragments.

    Every non-empty fragment is followed by a newline; empty fragments are
    dropped.
    """

    fragments: list[str] = field(default_factory=list)

    def emit(self, fragment: str) -> None:
        if fragment:
            self.fragments.append(f"{fragment}\n")

    def getvalue(self) -> str:
        return "".join(self.fragments)


@dataclass
class ConversionResult:
    """Outcome of converting one file in a batch.

    Attributes:
        source: Path of the markup file.
        target: Path the HTML was (or would have been) written to, or None when
            no output path could be derived.
        error: Failure message, or None on success.
        html: Converted document when it was kept in memory instead of written.
        skipped: The file was passed over because its extension is not a
            recognised markup extension.
    """

    source: Path
    target: Path | None
    error: str | None = None
    html: str | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None
