"""Filesystem helpers for tinymark."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from .constants import DEFAULT_INPUT_EXTENSIONS, DEFAULT_MAX_FILE_SIZE, DEFAULT_OUTPUT_EXTENSION

MAX_FILE_SIZE_ENV_VAR = "TINYMARK_MAX_FILE_SIZE"


def max_file_size_from_env() -> int | None:
    """Read the size limit set through ``TINYMARK_MAX_FILE_SIZE``.

    Returns:
        int | None: The limit in bytes, or None when the variable is unset.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.

    Examples:
        os.environ["TINYMARK_MAX_FILE_SIZE"] = "204800"
        max_file_size_from_env()  # 204800
    """
    raw_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_value is None:
        return None

    try:
        limit = int(raw_value.strip())
    except ValueError:
        limit = 0
    if limit <= 0:
        raise ValueError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive number of bytes, got {raw_value!r}"
        )
    return limit


def is_markup_file(path: Path, extensions: Iterable[str] = DEFAULT_INPUT_EXTENSIONS) -> bool:
    return path.suffix.lower() in tuple(extensions)


def derive_output_path(
    path: Path,
    extensions: Iterable[str] = DEFAULT_INPUT_EXTENSIONS,
    output_extension: str = DEFAULT_OUTPUT_EXTENSION,
) -> Path:
    """Replace a recognised markup extension with the output extension.

    Args:
        path: Path to the markup file.
        extensions: Recognised markup extensions, lowercase with leading dot.
        output_extension: Extension of the generated HTML file.

    Returns:
        Path: Sibling path carrying `output_extension`.

    Raises:
        ValueError: If `path` does not carry a recognised extension.

    Examples:
        derive_output_path(Path("docs/guide.md"))  # Path("docs/guide.html")
    """
    extensions = tuple(extensions)
    if not is_markup_file(path, extensions):
        error_message = f"{path} is not a Markdown file.\n"
        error_message += f"Supported extensions are: {', '.join(extensions)}"
        raise ValueError(error_message)
    return path.with_suffix(output_extension)


def _regular_file_stat(filepath: Path) -> os.stat_result:
    # lstat, so a symlink is reported as itself rather than as its target
    try:
        stat_result = Path(filepath).lstat()
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return stat_result


def read_source(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a whole markup file after checking its type and size.

    Args:
        filepath: Path to the markup file.
        max_size: Maximum allowed size in bytes.

    Returns:
        str: File content decoded as UTF-8, line endings untouched.

    Raises:
        IOError: If the file is missing, a symlink, not a regular file, too
            large, or unreadable.
        UnicodeDecodeError: If the content is not valid UTF-8.

    Examples:
        text = read_source(Path("README.md"), 1024 * 1024)
    """
    size = _regular_file_stat(filepath).st_size
    if size > max_size:
        raise IOError(
            f"{filepath} is {size} bytes, over the maximum allowed size of {max_size} bytes."
        )

    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as handle:
            return handle.read()
    except OSError as error:
        raise IOError(f"Error reading {filepath}: {error}") from error


def _default_permissions() -> int:
    # NamedTemporaryFile creates files readable by the owner only
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_output(filepath: Path, content: str, overwrite: bool = True):
    """Write `content` to `filepath` atomically.

    The content goes to a temporary file in the destination directory, which
    then replaces the destination.

    Args:
        filepath: Destination path.
        content: Text to write.
        overwrite: Whether an existing destination may be replaced.

    Returns:
        None.

    Raises:
        IOError: If the destination exists and `overwrite` is False, is a
            symlink or not a regular file, or cannot be written.

    Examples:
        write_output(Path("README.html"), html)
    """
    permissions = _default_permissions()
    if os.path.lexists(filepath):
        if not overwrite:
            raise IOError(f"{filepath} already exists; refusing to overwrite.")
        permissions = stat.S_IMODE(_regular_file_stat(filepath).st_mode)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, newline=""
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                Path(temp_path).unlink(missing_ok=True)
            except OSError:
                pass
