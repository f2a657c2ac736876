from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st
from tinymark.blocks import convert_markdown
from tinymark.cursor import Cursor, split_lines
from tinymark.exceptions import MalformedDelimiterError
from tinymark.inline import transform_inline

# Characters with no inline meaning
plain_alphabet = string.ascii_letters + string.digits + " .,;:!?()]}<>#-+/'\"&"


@given(st.text(alphabet=plain_alphabet, max_size=80))
def test_plain_lines_transform_to_themselves(line: str):
    cursor = Cursor.from_lines([line])
    cursor.advance_line()

    html = transform_inline(cursor)

    if line.endswith("  "):
        assert html == line[:-2] + "<br />"
    else:
        assert html == line


@given(st.text(max_size=200))
def test_conversion_returns_document_or_positional_error(content: str):
    try:
        html = convert_markdown(content)
    except MalformedDelimiterError as error:
        assert 1 <= error.line_number <= len(split_lines(content))
        assert error.column >= 1
    else:
        assert html.startswith("<!DOCTYPE html>\n<html>\n")
        assert html.endswith("</html>\n")


@given(st.text(max_size=200))
def test_conversion_is_deterministic(content: str):
    def run():
        try:
            return convert_markdown(content)
        except MalformedDelimiterError as error:
            return str(error)

    assert run() == run()


@given(
    st.lists(
        st.text(alphabet=string.ascii_letters + " ", min_size=1, max_size=20).filter(str.strip),
        min_size=1,
        max_size=10,
    )
)
def test_consecutive_items_share_one_list(items: list[str]):
    html = convert_markdown("\n".join(f"- {item}" for item in items))

    assert html.count("<ul>") == 1
    assert html.count("</ul>") == 1
    assert html.count("<li>") == len(items)
