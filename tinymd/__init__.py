"""
tinymd: a small Markdown to HTML converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    tinymd README.md README.html

Library Usage:
    from tinymd import render_html

    html = render_html("# Title\\n\\nSome **bold** text\\n")
"""

from .blocks import classify_line, close_open_blocks
from .config import ConfigError, RenderConfig
from .exceptions import LineTooLongError, MalformedInlineSyntax, MalformedListItem, RenderError
from .inline import emit_image, emit_link, render_inline
from .models import BlockState, ClassifierContext, InlineResult, LineKind
from .renderer import RenderFileError, iter_html, render_file, render_html, render_markdown

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render_html",
    "render_markdown",
    "iter_html",
    "render_file",
    "classify_line",
    "close_open_blocks",
    "render_inline",
    "emit_link",
    "emit_image",
    # Data models
    "BlockState",
    "ClassifierContext",
    "InlineResult",
    "LineKind",
    "RenderConfig",
    # Exceptions
    "ConfigError",
    "LineTooLongError",
    "MalformedInlineSyntax",
    "MalformedListItem",
    "RenderError",
    "RenderFileError",
    # Version
    "__version__",
]
