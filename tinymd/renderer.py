"""Document rendering: drives the block classifier over every line."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .blocks import classify_line, close_open_blocks
from .config import ConfigError, RenderConfig, validate_config
from .exceptions import LineTooLongError, RenderError
from .filesystem import collect_file_stat, enforce_file_size, read_document
from .models import BlockState, ClassifierContext

logger = logging.getLogger(__name__)


def _numbered_lines(text: str) -> Iterator[tuple[int, str]]:
    # Runs of line feeds collapse: empty lines are never classified
    for line_number, line in enumerate(text.split("\n"), start=1):
        if line:
            yield line_number, line


def split_document(text: str) -> list[str]:
    """Split normalized text into the lines that get classified.

    Empty lines are dropped, so they never open, close, or separate blocks.
    Lines holding only spaces or tabs are kept.

    Args:
        text: Document text with carriage returns already removed.

    Returns:
        list[str]: Non-empty lines in document order.

    Examples:
        split_document("# Title\\n\\n\\ntext\\n")  # ['# Title', 'text']
    """
    return [line for _, line in _numbered_lines(text)]


def iter_html(text: str, config: RenderConfig | None = None) -> Iterator[str]:
    """Render a document lazily, one fragment at a time.

    Fragments come out in document order as each line is classified. When a
    line fails, everything yielded before it remains valid and nothing from
    the failing line is yielded.

    Args:
        text: Document text with carriage returns already removed.
        config: Rendering configuration. Defaults to a new `RenderConfig`.

    Yields:
        str: HTML fragments; every fragment but ``<pre><code>`` ends with a
            line feed.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds `config.max_line_length`.
        MalformedListItem: If an ordered item has no ``.`` separator.
        MalformedInlineSyntax: If a link or image is not closed.

    Examples:
        "".join(iter_html("# Hi\\n---\\n"))  # '<h1>Hi</h1>\\n<hr>\\n'
    """
    config = config or RenderConfig()
    validate_config(config)

    ctx = ClassifierContext()
    line_count = 0

    for line_number, line in _numbered_lines(text):
        if config.max_line_length is not None and len(line) > config.max_line_length:
            raise LineTooLongError(line_number, config.max_line_length)

        try:
            classification = classify_line(ctx, line)
        except RenderError as error:
            error.line_number = line_number
            raise

        line_count += 1
        yield from classification.output

    if config.close_trailing_blocks:
        yield from close_open_blocks(ctx)
    elif ctx.block is not BlockState.NONE or ctx.in_code:
        logger.debug(
            "Document ended with open blocks left unclosed (block=%s, in_code=%s)",
            ctx.block.name,
            ctx.in_code,
        )

    logger.debug("Rendered %d lines", line_count)


def render_markdown(text: str, config: RenderConfig | None = None) -> list[str]:
    """Render a document to a list of HTML fragments.

    Args:
        text: Document text with carriage returns already removed.
        config: Rendering configuration. Defaults to a new `RenderConfig`.

    Returns:
        list[str]: Fragments as produced by `iter_html`.

    Raises:
        RenderError: If the document is malformed or exceeds a limit.
        ConfigError: If the configuration fails validation.
    """
    return list(iter_html(text, config))


def render_html(text: str, config: RenderConfig | None = None) -> str:
    """Render a document to a single HTML string.

    Examples:
        render_html("**bold** text")  # '<p><b>bold</b> text</p>\\n'
    """
    return "".join(iter_html(text, config))


class RenderFileError(Exception):
    """Raised when rendering a file fails."""


def render_file(filepath: Path, config: RenderConfig | None = None) -> str:
    """Read a Markdown file and render it to HTML.

    Args:
        filepath: Path to the file to render.
        config: Rendering configuration; defaults to a new `RenderConfig`.

    Returns:
        str: The rendered HTML.

    Raises:
        RenderFileError: If configuration is invalid, the file cannot be read,
            is too large or not UTF-8, or its content is malformed.

    Examples:
        html = render_file(Path("README.md"), RenderConfig(close_trailing_blocks=True))
    """
    config = config or RenderConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise RenderFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size, filepath)
        text = read_document(filepath)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise RenderFileError(error_message) from error
    except IOError as error:
        raise RenderFileError(str(error)) from error

    try:
        return render_html(text, config)
    except RenderError as error:
        raise RenderFileError(f"{filepath}: {error}") from error
