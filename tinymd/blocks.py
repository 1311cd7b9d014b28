"""Block-level line classification."""

from __future__ import annotations

import logging
import string

from .constants import (
    BLANK_CHARS,
    CODE_FENCE,
    EMPHASIS_MARKER,
    HEADING_MARKER,
    HORIZONTAL_RULE,
    ORDERED_ITEM_SEPARATOR,
    QUOTE_MARKER,
    UNORDERED_ITEM_PREFIX,
)
from .exceptions import MalformedListItem
from .inline import render_inline
from .models import BlockState, Classification, ClassifierContext, LineKind

logger = logging.getLogger(__name__)

_OPENING_TAGS = {
    BlockState.IN_QUOTE: "<blockquote><p>\n",
    BlockState.IN_ORDERED_LIST: "<ol>\n",
    BlockState.IN_UNORDERED_LIST: "<ul>\n",
}

_CLOSING_TAGS = {
    BlockState.IN_QUOTE: "</p></blockquote>\n",
    BlockState.IN_ORDERED_LIST: "</ol>\n",
    BlockState.IN_UNORDERED_LIST: "</ul>\n",
}


def trim(text: str) -> str:
    """Strip leading and trailing spaces and tabs.

    Examples:
        trim("\\t  title  ")  # "title"
    """
    return text.strip(BLANK_CHARS)


def _open_block(ctx: ClassifierContext, state: BlockState) -> list[str]:
    if ctx.block is state:
        return []

    output = []
    if ctx.block is not BlockState.NONE:
        # Only one block can be held; close the displaced one
        output.append(_close_block(ctx))

    logger.debug("Opening %s", state.name)
    ctx.block = state
    output.append(_OPENING_TAGS[state])
    return output


def _close_block(ctx: ClassifierContext) -> str:
    logger.debug("Closing %s", ctx.block.name)
    closing = _CLOSING_TAGS[ctx.block]
    ctx.block = BlockState.NONE
    return closing


def _closed(ctx: ClassifierContext) -> Classification:
    return Classification(LineKind.CLOSED_BLOCK, [_close_block(ctx)])


def _try_heading(ctx: ClassifierContext, line: str) -> Classification | None:
    """Emit ``<hN>`` for lines starting with ``#``; `N` is not capped."""
    if not line.startswith(HEADING_MARKER):
        return None

    level = len(line) - len(line.lstrip(HEADING_MARKER))
    content = trim(line[level:])
    return Classification(LineKind.HEADING, [f"<h{level}>{content}</h{level}>\n"])


def _try_quote(ctx: ClassifierContext, line: str) -> Classification | None:
    if line.startswith(QUOTE_MARKER):
        output = _open_block(ctx, BlockState.IN_QUOTE)
        output.append(f"{trim(line[1:])}\n")
        return Classification(LineKind.QUOTE, output)

    if ctx.block is BlockState.IN_QUOTE:
        return _closed(ctx)

    return None


def _try_ordered_item(ctx: ClassifierContext, line: str) -> Classification | None:
    """Handle numbered items and the line that ends an ordered list.

    Raises:
        MalformedListItem: If the line starts with a digit but has no ``.``.
    """
    if line and line[0] in string.digits:
        separator = line.find(ORDERED_ITEM_SEPARATOR)
        if separator == -1:
            raise MalformedListItem(line)

        output = _open_block(ctx, BlockState.IN_ORDERED_LIST)
        # Items are written flush left, without a leading tab
        output.append(f"<li>{trim(line[separator + 1 :])}</li>\n")
        return Classification(LineKind.ORDERED_ITEM, output)

    if ctx.block is BlockState.IN_ORDERED_LIST:
        return _closed(ctx)

    return None


def _try_unordered_item(ctx: ClassifierContext, line: str) -> Classification | None:
    if line.startswith(UNORDERED_ITEM_PREFIX):
        output = _open_block(ctx, BlockState.IN_UNORDERED_LIST)
        # Flush left, as for ordered items
        output.append(f"<li>{trim(line[1:])}</li>\n")
        return Classification(LineKind.UNORDERED_ITEM, output)

    # Any line starting with "*" keeps the list open, e.g. "*emphasis*"
    if ctx.block is BlockState.IN_UNORDERED_LIST and not line.startswith(EMPHASIS_MARKER):
        return _closed(ctx)

    return None


def _try_fence(ctx: ClassifierContext, line: str) -> Classification | None:
    if trim(line) != CODE_FENCE:
        return None

    ctx.in_code = not ctx.in_code
    if ctx.in_code:
        logger.debug("Opening code block")
        return Classification(LineKind.FENCE, ["<pre><code>"])

    logger.debug("Closing code block")
    return Classification(LineKind.FENCE, ["</code></pre>\n"])


def _try_code(ctx: ClassifierContext, line: str) -> Classification | None:
    if not ctx.in_code:
        return None
    return Classification(LineKind.CODE, [f"{line}\n"])


def _try_rule(ctx: ClassifierContext, line: str) -> Classification | None:
    if trim(line) != HORIZONTAL_RULE:
        return None
    return Classification(LineKind.RULE, ["<hr>\n"])


_CLASSIFIERS = (
    _try_heading,
    _try_quote,
    _try_ordered_item,
    _try_unordered_item,
    _try_fence,
    _try_code,
    _try_rule,
)


def classify_line(ctx: ClassifierContext, line: str) -> Classification:
    """Classify a line and produce its HTML.

    Roles are tested in priority order: heading, quote, ordered item,
    unordered item, code fence, code passthrough, horizontal rule. A line
    that matches none of them is a paragraph rendered with
    `render_inline`. When an open quote or list is ended by a line, that
    line is spent on the closing tag and yields `LineKind.CLOSED_BLOCK`.

    Args:
        ctx: Classifier state; updated in place.
        line: Line without its line feed.

    Returns:
        Classification: Role of the line and its HTML fragments, each ending
            with a line feed except the ``<pre><code>`` opener.

    Raises:
        MalformedListItem: If an ordered item has no ``.`` separator.
        MalformedInlineSyntax: If a paragraph has an unclosed link or image.

    Examples:
        ctx = ClassifierContext()
        classify_line(ctx, "## Title").output  # ['<h2>Title</h2>\\n']
    """
    for classifier in _CLASSIFIERS:
        classification = classifier(ctx, line)
        if classification is not None:
            return classification

    inline = render_inline(line)
    return Classification(LineKind.PARAGRAPH, [f"<p>{inline.html}</p>\n"])


def close_open_blocks(ctx: ClassifierContext) -> list[str]:
    """Close whatever is still open at the end of a document.

    The held quote or list is closed first, then the code block.

    Args:
        ctx: Classifier state; reset in place.

    Returns:
        list[str]: Closing fragments, empty when nothing is open.
    """
    output = []
    if ctx.block is not BlockState.NONE:
        output.append(_close_block(ctx))
    if ctx.in_code:
        logger.debug("Closing code block at end of document")
        ctx.in_code = False
        output.append("</code></pre>\n")
    return output
