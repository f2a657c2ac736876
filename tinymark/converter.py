"""Convert markup files on disk to HTML files."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from .blocks import convert_markdown
from .config import ConfigError, ConfigResolver, TinymarkConfig, validate_config
from .exceptions import ConvertFileError, ParseError
from .filesystem import derive_output_path, read_source, write_output
from .models import ConversionResult


def render_file(filepath: Path, config: TinymarkConfig | None = None) -> str:
    """Read a markup file and return its HTML without writing anything.

    Args:
        filepath: Path to the markup file.
        config: Conversion settings; defaults to a new `TinymarkConfig`.

    Returns:
        str: The converted HTML document.

    Raises:
        ConvertFileError: If the file cannot be read or decoded, exceeds the
            size limit, or contains an unterminated construct.
    """
    config = config or TinymarkConfig()

    try:
        content = read_source(filepath, config.max_file_size)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    try:
        return convert_markdown(content)
    except ParseError as error:
        raise ConvertFileError(f"{filepath}: {error}") from error


def convert_file(filepath: Path, config: TinymarkConfig | None = None) -> Path:
    """Convert one markup file and write the HTML next to it.

    The output path is the input path with its markup extension replaced by
    the configured output extension. Nothing is written when conversion
    fails.

    Args:
        filepath: Path to the markup file.
        config: Conversion settings; defaults to a new `TinymarkConfig`.

    Returns:
        Path: Path of the written HTML file.

    Raises:
        ConvertFileError: If the configuration is invalid, the extension is not
            recognised, or reading, converting or writing fails.

    Examples:
        convert_file(Path("README.md"))  # Path("README.html")
    """
    config = config or TinymarkConfig()
    try:
        validate_config(config)
        target = derive_output_path(filepath, config.input_extensions, config.output_extension)
    except ValueError as error:
        raise ConvertFileError(str(error)) from error

    html = render_file(filepath, config)

    try:
        write_output(target, html, overwrite=config.overwrite)
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    return target


def convert_files(
    filepaths: Iterable[Path],
    config: TinymarkConfig | ConfigResolver | None = None,
    write: bool = True,
    warn: Callable[[str], None] | None = None,
) -> list[ConversionResult]:
    """Convert several markup files, isolating failures per file.

    Args:
        filepaths: Markup files to convert, in order.
        config: Settings shared by every file, or a `ConfigResolver` that
            looks up the settings of each file from its own directory.
        write: When False, keep the HTML on the result instead of writing it.
        warn: Optional callback for non-fatal conditions, such as a file
            skipped because its extension is not recognised.

    Returns:
        list[ConversionResult]: One result per input path, in input order.

    Examples:
        convert_files([Path("a.md"), Path("notes.txt")], warn=print)
    """
    resolver = config if isinstance(config, ConfigResolver) else None
    shared_config = None if resolver else (config or TinymarkConfig())
    results: list[ConversionResult] = []

    for filepath in filepaths:
        filepath = Path(filepath)
        try:
            file_config = resolver.for_file(filepath) if resolver else shared_config
        except ConfigError as error:
            results.append(ConversionResult(filepath, None, error=str(error)))
            continue

        try:
            target = derive_output_path(
                filepath, file_config.input_extensions, file_config.output_extension
            )
        except ValueError as error:
            if warn is not None:
                warn(f"Skipping {filepath}: {error}")
            results.append(ConversionResult(filepath, None, error=str(error), skipped=True))
            continue

        try:
            if write:
                convert_file(filepath, file_config)
                results.append(ConversionResult(filepath, target))
            else:
                html = render_file(filepath, file_config)
                results.append(ConversionResult(filepath, target, html=html))
        except ConvertFileError as error:
            results.append(ConversionResult(filepath, target, error=str(error)))

    return results
