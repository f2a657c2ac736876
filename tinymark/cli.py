"""
Converts Markdown files to HTML.
Each `name.md` is written next to itself as `name.html`, using the settings
found above its own directory. A failing file is reported and the remaining
files are still converted.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, ConfigResolver
from .converter import convert_files
from .filesystem import max_file_size_from_env

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option("--output-extension", help="Extension of the generated files (default: .html)")
@click.option("--max-file-size", type=int, help="Largest file to convert, in bytes")
@click.option(
    "--overwrite/--no-overwrite",
    default=None,
    help="Replace existing output files (default: overwrite)",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print HTML instead of writing files")
@click.argument("filepaths", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def cli(
    ctx: click.Context,
    filepaths: tuple[Path, ...],
    output_extension: str | None = None,
    max_file_size: int | None = None,
    overwrite: bool | None = None,
    to_stdout: bool = False,
):
    """
    Entry point for converting Markdown files to HTML.

    Args:
        ctx: Click context, used to print help and set the exit status.
        filepaths: Markdown files to convert.
        output_extension: Override for the generated file extension.
        max_file_size: Override for the maximum input size in bytes.
        overwrite: Whether existing output files may be replaced.
        to_stdout: Print each document instead of writing it.

    Returns:
        None.

    Raises:
        click.BadParameter: If a command line override is invalid.
        click.ClickException: If the size limit from the environment is invalid.

    Examples:
        tinymark README.md docs/guide.md
    """
    if not filepaths:
        click.echo(ctx.get_help())
        return

    overrides: dict[str, object] = {
        "output_extension": output_extension,
        "max_file_size": max_file_size,
        "overwrite": overwrite,
    }
    # Command line flag wins over the environment
    if max_file_size is None:
        try:
            overrides["max_file_size"] = max_file_size_from_env()
        except ValueError as error:
            raise click.ClickException(str(error)) from error

    def warn(message: str) -> None:
        click.echo(message, err=True)

    # Each file reads the config found above its own directory
    resolver = ConfigResolver(overrides, warn=warn)
    try:
        resolver.check_overrides()
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    failures = 0
    for result in convert_files(filepaths, resolver, write=not to_stdout, warn=warn):
        if result.skipped:
            continue
        if not result.ok:
            failures += 1
            destination = f" => {result.target}" if result.target is not None else ""
            click.echo(f"Failure: {result.source}{destination}: {result.error}", err=True)
        elif to_stdout:
            click.echo(result.html, nl=False)
        else:
            click.echo(f"Success: {result.source} => {result.target}")

    if failures:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
