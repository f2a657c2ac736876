"""Inline transformations applied to the text of a single line."""

from __future__ import annotations

from .constants import (
    ANCHOR_CLOSE,
    ANCHOR_OPEN,
    CODE_DELIMITER,
    EMPHASIS_TAGS,
    ESCAPE_CHAR,
    HARD_BREAK_SUFFIX,
    HARD_BREAK_TAG,
    LINK_TARGET_CLOSE,
    LINK_TARGET_OPEN,
    LINK_TEXT_CLOSE,
    LINK_TEXT_OPEN,
    MIN_RULE_LENGTH,
    RULE_CHAR,
)
from .cursor import Cursor


def transform_link(cursor: Cursor) -> str:
    """Render ``[text](target)`` with the cursor just past the ``[``.

    Returns an empty string when the text or the target is empty; in the
    first case the remaining characters are left for the caller.

    Raises:
        MalformedDelimiterError: If ``]``, ``(`` or ``)`` is missing.
    """
    text = cursor.consume_until(LINK_TEXT_CLOSE)
    if text is None:
        return ""
    cursor.expect_char(LINK_TEXT_CLOSE)
    cursor.expect_char(LINK_TARGET_OPEN)
    target = cursor.consume_until(LINK_TARGET_CLOSE)
    if target is None:
        return ""
    cursor.expect_char(LINK_TARGET_CLOSE)
    return f'<a href="{target}">{text}</a>'


def transform_emphasis(cursor: Cursor, delimiter: str) -> str:
    """Render a ``*``, ``~`` or ``_`` span with the cursor just past the opener.

    A delimiter followed by whitespace or the end of the line is literal.

    Raises:
        MalformedDelimiterError: If the closing delimiter is missing.
    """
    following = cursor.peek_char()
    if following is None or following.isspace():
        return delimiter

    text = cursor.consume_until(delimiter)
    cursor.expect_char(delimiter)
    if text is None:
        return ""
    tag = EMPHASIS_TAGS[delimiter]
    return f"<{tag}>{text}</{tag}>"


def transform_anchor(cursor: Cursor) -> str:
    """Render ``{name}`` as a named anchor with the cursor just past the ``{``.

    Raises:
        MalformedDelimiterError: If the closing ``}`` is missing.
    """
    name = cursor.consume_until(ANCHOR_CLOSE)
    if name is None:
        return ""
    cursor.expect_char(ANCHOR_CLOSE)
    return f'<a name="{name}"></a>'


def transform_rule(cursor: Cursor) -> str:
    """Render a run of ``=`` with the cursor just past the first one.

    Only the run after that first ``=`` is measured: ``===`` is a rule, while
    ``==`` is left as a single literal ``=``.
    """
    run = cursor.consume_while(lambda char: char == RULE_CHAR)
    if run is None:
        return RULE_CHAR
    if len(run) >= MIN_RULE_LENGTH:
        return "<hr>"
    return run


def transform_inline(cursor: Cursor, escaped: bool = False) -> str:
    """Transform the remaining characters of the current line into HTML.

    Backticks toggle a literal mode in which characters are copied as-is;
    the backticks themselves are dropped and no ``<code>`` tag is emitted.
    A line ending in two spaces gets a ``<br />`` in their place.

    Args:
        cursor: Cursor positioned on the first character to transform.
        escaped: Start inside a backtick span.

    Returns:
        str: HTML for the rest of the line, possibly empty.

    Raises:
        MalformedDelimiterError: If a bracketed or delimited construct is
            left unterminated.

    Examples:
        cursor = Cursor("see [docs](/docs)")
        cursor.advance_line()
        transform_inline(cursor)  # 'see <a href="/docs">docs</a>'
    """
    out: list[str] = []

    while (char := cursor.advance_char()) is not None:
        if escaped:
            if char == CODE_DELIMITER:
                escaped = False
            else:
                out.append(char)
            continue

        if char == CODE_DELIMITER:
            escaped = True
            out.append(cursor.consume_until(CODE_DELIMITER) or "")
        elif char == LINK_TEXT_OPEN:
            out.append(transform_link(cursor))
        elif char in EMPHASIS_TAGS:
            out.append(transform_emphasis(cursor, char))
        elif char == ANCHOR_OPEN:
            out.append(transform_anchor(cursor))
        elif char == ESCAPE_CHAR:
            out.append(cursor.advance_char() or "")
        elif char == RULE_CHAR:
            out.append(transform_rule(cursor))
        else:
            out.append(char)

    html = "".join(out)
    # Two trailing spaces mark a hard line break
    if html.endswith(HARD_BREAK_SUFFIX):
        html = html[: -len(HARD_BREAK_SUFFIX)] + HARD_BREAK_TAG
    return html
