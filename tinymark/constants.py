"""Constants used across the tinymark package."""

from __future__ import annotations

from .config import TinymarkConfig

DEFAULT_CONFIG = TinymarkConfig()

# Document wrapper
DOCTYPE = "<!DOCTYPE html>"
HTML_OPEN = "<html>"
HTML_CLOSE = "</html>"

# Block markers
HTML_MARKER = "<"
HEADING_MARKER = "#"
BULLET_MARKER = "-"
QUOTE_MARKER = ">"
ORDERED_DELIMITER = "."
DIGITS = "0123456789"
CODE_FENCE = "```"

# Inline delimiters
CODE_DELIMITER = "`"
LINK_TEXT_OPEN = "["
LINK_TEXT_CLOSE = "]"
LINK_TARGET_OPEN = "("
LINK_TARGET_CLOSE = ")"
ANCHOR_OPEN = "{"
ANCHOR_CLOSE = "}"
ESCAPE_CHAR = "\\"
RULE_CHAR = "="
MIN_RULE_LENGTH = 2

# Single-character span delimiters and the tag each one wraps its text in
EMPHASIS_TAGS = {
    "*": "strong",
    "~": "em",
    "_": "u",
}

HARD_BREAK_SUFFIX = "  "
HARD_BREAK_TAG = "<br />"

# Configuration defaults
DEFAULT_INPUT_EXTENSIONS = tuple(DEFAULT_CONFIG.input_extensions)
DEFAULT_OUTPUT_EXTENSION = DEFAULT_CONFIG.output_extension
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
