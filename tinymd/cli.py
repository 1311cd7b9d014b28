"""
Converts a lightweight Markdown document to an HTML fragment.
Reads from a file or stdin and writes to a file or stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import RenderError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    get_max_line_length,
    read_document,
    read_stream,
    write_output,
)
from .renderer import iter_html

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option(
    "--close-blocks/--no-close-blocks",
    default=None,
    help="Close a quote, list, or code block left open at the end of the document",
)
@click.option("--max-line-length", type=int, help="Maximum line length in characters")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
@click.argument(
    "input_path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.argument("output_path", required=False, type=click.Path(dir_okay=False, path_type=Path))
def cli(
    input_path: Path | None = None,
    output_path: Path | None = None,
    close_blocks: bool | None = None,
    max_line_length: int | None = None,
    verbose: bool = False,
):
    """
    Entry point for rendering Markdown to HTML.

    With no arguments, reads stdin and writes stdout. With INPUT_PATH, reads
    that file. With OUTPUT_PATH as well, writes the HTML to that file.

    Args:
        input_path: Markdown file to read, or None for stdin.
        output_path: File to write, or None for stdout.
        close_blocks: Override for `close_trailing_blocks`.
        max_line_length: Override for the maximum line length.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration or an override is invalid.
        click.ClickException: If the input cannot be read, the document is
            malformed, or the output cannot be written.

    Examples:
        tinymd notes.md notes.html --close-blocks
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    search_path = input_path.parent if input_path is not None else Path.cwd()
    try:
        env_max_file_size = get_max_file_size(default=None)
        env_max_line_length = get_max_line_length(default=None)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    # Flags beat environment variables, which beat config files
    if max_line_length is None:
        max_line_length = env_max_line_length
    try:
        config = build_config(
            search_path,
            close_trailing_blocks=close_blocks,
            max_file_size=env_max_file_size,
            max_line_length=max_line_length,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        if input_path is not None:
            enforce_file_size(collect_file_stat(input_path), config.max_file_size, input_path)
            text = read_document(input_path)
        else:
            text = read_stream(click.get_binary_stream("stdin"))
    except UnicodeDecodeError as error:
        source = input_path or "stdin"
        raise click.ClickException(f"Invalid UTF-8 sequence in {source}: {error}") from error
    except IOError as error:
        raise click.ClickException(str(error)) from error

    fragments = iter_html(text, config)

    try:
        if output_path is not None:
            write_output(fragments, output_path)
        else:
            for fragment in fragments:
                click.echo(fragment, nl=False)
    except RenderError as error:
        raise click.ClickException(str(error)) from error
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
