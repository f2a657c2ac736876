"""Line-oriented block parsing and the top-level converter."""

from __future__ import annotations

from collections.abc import Callable

from .constants import (
    BULLET_MARKER,
    CODE_DELIMITER,
    CODE_FENCE,
    DIGITS,
    DOCTYPE,
    HEADING_MARKER,
    HTML_CLOSE,
    HTML_MARKER,
    HTML_OPEN,
    ORDERED_DELIMITER,
    QUOTE_MARKER,
)
from .cursor import Cursor
from .inline import transform_inline
from .models import BlockContext, BlockKind, HtmlOutput


def _is_digit(char: str) -> bool:
    return char in DIGITS


def classify_line(line: str) -> BlockKind:
    """Classify a line by its leading character.

    Args:
        line: Line without its line ending.

    Returns:
        BlockKind: The block construct the line starts.

    Examples:
        classify_line("## Usage")  # BlockKind.HEADING
        classify_line("12. twelfth")  # BlockKind.ORDERED_ITEM
    """
    if not line:
        return BlockKind.BLANK

    leading = line[0]
    if leading == HTML_MARKER:
        return BlockKind.HTML
    if leading == HEADING_MARKER:
        return BlockKind.HEADING
    if leading == BULLET_MARKER:
        return BlockKind.UNORDERED_ITEM
    if leading == QUOTE_MARKER:
        return BlockKind.QUOTE
    if leading == CODE_DELIMITER:
        return BlockKind.CODE
    if _is_digit(leading):
        return BlockKind.ORDERED_ITEM
    return BlockKind.PARAGRAPH


def _continues(line: str | None, kind: BlockKind) -> bool:
    return line is not None and classify_line(line) is kind


def _open_paragraph(ctx: BlockContext, output: HtmlOutput) -> None:
    if not ctx.paragraph:
        output.emit("<p>")
    ctx.paragraph = True


def _handle_blank(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    if ctx.paragraph:
        output.emit("</p>")
    ctx.paragraph = False


def _handle_html(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    output.emit(cursor.consume_rest() or "")


def _handle_heading(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    marker = cursor.consume_while(lambda char: char == HEADING_MARKER)
    level = len(marker) if marker else 1
    cursor.skip_whitespace()
    content = transform_inline(cursor)
    output.emit(f"<h{level}>{content}</h{level}>")


def _handle_unordered_item(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    if not ctx.in_list:
        output.emit("<ul>")
        ctx.in_list = True
    cursor.expect_char(BULLET_MARKER)
    cursor.skip_whitespace()
    content = transform_inline(cursor)
    output.emit(f"<li>{content}</li>")

    if not _continues(cursor.peek_line(), BlockKind.UNORDERED_ITEM):
        output.emit("</ul>")
        ctx.in_list = False


def _handle_ordered_item(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    _open_paragraph(ctx, output)
    if not ctx.in_list:
        output.emit("<ol>")
        ctx.in_list = True
    cursor.consume_while(_is_digit)
    cursor.expect_char(ORDERED_DELIMITER)
    content = transform_inline(cursor)
    output.emit(f"<li>{content}</li>")

    if not _continues(cursor.peek_line(), BlockKind.ORDERED_ITEM):
        output.emit("</ol>")
        ctx.in_list = False

    # The item falls through to the paragraph transform as well. The line is
    # already exhausted here, so this emits nothing.
    output.emit(transform_inline(cursor))


def _handle_quote(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    _open_paragraph(ctx, output)
    if not ctx.in_block:
        output.emit("<blockquote>")
        ctx.in_block = True
    cursor.expect_char(QUOTE_MARKER)
    cursor.skip_whitespace()
    output.emit(transform_inline(cursor))

    if not _continues(cursor.peek_line(), BlockKind.QUOTE):
        output.emit("</blockquote>")
        ctx.in_block = False


def _handle_code(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    _open_paragraph(ctx, output)
    fence = cursor.consume_while(lambda char: char == CODE_DELIMITER) or ""
    if fence != CODE_FENCE:
        output.emit(transform_inline(cursor, escaped=True))
        return

    code_lines: list[str] = []
    while (line := cursor.advance_line()) is not None:
        if line == CODE_FENCE:
            break
        code_lines.append(line)

    output.emit("<pre><code>")
    for line in code_lines:
        output.emit(line)
    output.emit("</pre></code>")


def _handle_paragraph(ctx: BlockContext, cursor: Cursor, output: HtmlOutput) -> None:
    _open_paragraph(ctx, output)
    output.emit(transform_inline(cursor))


BlockHandler = Callable[[BlockContext, Cursor, HtmlOutput], None]

BLOCK_HANDLERS: dict[BlockKind, BlockHandler] = {
    BlockKind.BLANK: _handle_blank,
    BlockKind.HTML: _handle_html,
    BlockKind.HEADING: _handle_heading,
    BlockKind.UNORDERED_ITEM: _handle_unordered_item,
    BlockKind.ORDERED_ITEM: _handle_ordered_item,
    BlockKind.QUOTE: _handle_quote,
    BlockKind.CODE: _handle_code,
    BlockKind.PARAGRAPH: _handle_paragraph,
}


def convert_lines(cursor: Cursor, ctx: BlockContext | None = None) -> str:
    """Convert every remaining line of `cursor` into HTML.

    Args:
        cursor: Cursor positioned before the first line to convert.
        ctx: Block-mode flags to start from. Defaults to a fresh
            `BlockContext`.

    Returns:
        str: The complete HTML document.

    Raises:
        MalformedDelimiterError: If any line has an unterminated construct.
    """
    ctx = ctx or BlockContext()
    output = HtmlOutput()
    output.emit(DOCTYPE)
    output.emit(HTML_OPEN)

    while (line := cursor.advance_line()) is not None:
        BLOCK_HANDLERS[classify_line(line)](ctx, cursor, output)

    output.emit(HTML_CLOSE)
    return output.getvalue()


def convert_markdown(content: str) -> str:
    """Convert a markup document into an HTML document.

    Args:
        content: Full document text.

    Returns:
        str: The HTML document, one emitted fragment per line, wrapped in
            ``<!DOCTYPE html>``/``<html>`` and ``</html>``.

    Raises:
        MalformedDelimiterError: If a link, anchor or emphasis span is missing
            its closing delimiter; no partial output is produced.

    Examples:
        convert_markdown("# Title\\n\\nSome *bold* text\\n")
    """
    return convert_lines(Cursor(content))
