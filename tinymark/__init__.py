"""
tinymark: Markdown to HTML converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    tinymark README.md docs/guide.md

Library Usage:
    from tinymark import convert_markdown

    html = convert_markdown("# Title\\n\\nSome *bold* text\\n")
"""

from .blocks import classify_line, convert_lines, convert_markdown
from .converter import convert_file, convert_files, render_file
from .cursor import Cursor
from .exceptions import ConvertFileError, MalformedDelimiterError, ParseError, TinymarkError
from .inline import transform_inline
from .models import BlockContext, BlockKind, ConversionResult

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_markdown",
    "convert_lines",
    "transform_inline",
    "classify_line",
    "Cursor",
    # File conversion
    "convert_file",
    "convert_files",
    "render_file",
    # Data models
    "BlockContext",
    "BlockKind",
    "ConversionResult",
    # Exceptions
    "ConvertFileError",
    "MalformedDelimiterError",
    "ParseError",
    "TinymarkError",
    # Version
    "__version__",
]
