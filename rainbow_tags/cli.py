"""
Colorizes markup tags in an HTML, JSX, or TSX file by nesting depth.
Prints the highlighted source, or the colored ranges, to stdout.
"""

from __future__ import annotations

import click
from .config import ConfigError, build_config
from .exceptions import ScanFileError
from .filesystem import (
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    read_source,
)
from .logger import configure_logging, get_logger
from .render import format_ranges, render_ansi
from .scanner import compute_color_ranges

__all__ = ["cli"]

logger = get_logger(__name__)


@click.command()
@click.version_option()
@click.option("--color", "colors", multiple=True, help="Palette color; repeat for each depth")
@click.option("--ignore-tag", "ignored_tags", multiple=True, help="Tag name to leave uncolored")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["ansi", "ranges"]),
    default="ansi",
    show_default=True,
    help="Highlighted source or a list of colored ranges",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    colors: tuple[str, ...] = (),
    ignored_tags: tuple[str, ...] = (),
    output_format: str = "ansi",
    verbose: bool = False,
):
    """
    Entry point for colorizing the tags of a markup source file.

    Args:
        filepath: Path to the HTML, JSX, or TSX file to scan.
        colors: Override for the color palette.
        ignored_tags: Override for the tag names to skip.
        output_format: `ansi` for highlighted source, `ranges` for a range list.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path is unsupported or the configuration is
            invalid.
        click.ClickException: If the file is too large or cannot be read.

    Examples:
        rainbow-tags src/App.tsx --ignore-tag br --format ranges
    """
    configure_logging(verbose)

    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            path.parent,
            colors=colors or None,
            ignored_tags=ignored_tags or None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(path, max_file_size)
        text = read_source(path)
    except (IOError, ScanFileError) as error:
        raise click.ClickException(str(error)) from error

    buckets = compute_color_ranges(text, config.palette_size, config.ignored_keys)
    logger.debug(
        "Found %d ranges in %s",
        sum(len(ranges) for ranges in buckets.values()),
        path,
    )

    if output_format == "ranges":
        click.echo("".join(format_ranges(text, buckets, config.colors)), nl=False)
    else:
        click.echo(render_ansi(text, buckets, config.colors), nl=False)


if __name__ == "__main__":
    cli()
