"""Inline span rendering for paragraph lines."""

from __future__ import annotations

from .constants import (
    EMPHASIS_MARKER,
    IMAGE_MARKER,
    LINK_CLOSE,
    LINK_OPEN,
    TARGET_CLOSE,
    TARGET_OPEN,
    UNDERLINE_MARKER,
)
from .exceptions import MalformedInlineSyntax
from .models import InlineResult, InlineTarget, InlineToggles


def _find(line: str, char: str, start: int) -> int:
    index = line.find(char, start)
    if index == -1:
        raise MalformedInlineSyntax(char, start)
    return index


def locate_target(line: str, label_start: int) -> tuple[InlineTarget, int]:
    """Find the ``label](target)`` part of a link or image.

    Searches for the next ``]`` from `label_start`, then the next ``(`` after
    it, then the next ``)`` after that. Text between ``]`` and ``(`` is skipped.

    Args:
        line: Line being scanned.
        label_start: Index of the first label character (just past ``[``).

    Returns:
        tuple[InlineTarget, int]: The label and target, and the index of the
            closing ``)``.

    Raises:
        MalformedInlineSyntax: If any of the three delimiters is missing.

    Examples:
        locate_target("[docs](https://example.com)", 1)
    """
    label_end = _find(line, LINK_CLOSE, label_start)
    target_open = _find(line, TARGET_OPEN, label_end)
    target_close = _find(line, TARGET_CLOSE, target_open + 1)
    target = InlineTarget(
        label=line[label_start:label_end],
        target=line[target_open + 1 : target_close],
    )
    return target, target_close


def emit_link(line: str, start: int) -> tuple[str, int]:
    """Render a ``[label](target)`` link.

    Args:
        line: Line being scanned.
        start: Index of the opening ``[``.

    Returns:
        tuple[str, int]: The ``<a>`` element and the number of characters
            consumed from `start`, covering the whole construct.

    Raises:
        MalformedInlineSyntax: If the construct is not closed.

    Examples:
        emit_link("see [docs](http://x) now", 4)  # ('<a href="http://x">docs</a>', 16)
    """
    link, target_close = locate_target(line, start + 1)
    html = f'<a href="{link.target}">{link.label}</a>'
    return html, target_close + 1 - start


def emit_image(line: str, start: int) -> tuple[str, int]:
    """Render a ``![alt](source)`` image.

    Seeks forward from `start` to the next ``[`` so the leading ``!`` is
    skipped. The consumed count is measured from `start`, not from the ``[``,
    and stops on the closing ``)`` rather than past it.

    Args:
        line: Line being scanned.
        start: Index of the ``!``.

    Returns:
        tuple[str, int]: The ``<img>`` element and the number of characters
            consumed from `start`, up to the closing ``)``.

    Raises:
        MalformedInlineSyntax: If the construct is not closed.

    Examples:
        emit_image("![logo](logo.png)", 0)  # ('<img src="logo.png" alt="logo"></img>', 16)
    """
    label_start = _find(line, LINK_OPEN, start) + 1
    image, target_close = locate_target(line, label_start)
    html = f'<img src="{image.target}" alt="{image.label}"></img>'
    return html, target_close - start


def _count_emphasis(line: str, pos: int) -> int:
    count = 0
    while count < 3 and line.startswith(EMPHASIS_MARKER, pos + count):
        count += 1
    return count


def _toggle_emphasis(toggles: InlineToggles, run: int) -> str:
    if run == 3:
        toggles.bold = not toggles.bold
        toggles.italic = not toggles.italic
        if toggles.bold and toggles.italic:
            return "<b><i>"
        return "</i></b>"
    if run == 2:
        toggles.bold = not toggles.bold
        return "<b>" if toggles.bold else "</b>"
    toggles.italic = not toggles.italic
    return "<i>" if toggles.italic else "</i>"


def render_inline(line: str) -> InlineResult:
    """Render the inline spans of one paragraph line.

    Scans left to right. ``_`` toggles underline; runs of ``*`` toggle italic
    (one), bold (two) or both (three); ``![`` and ``[`` start images and
    links. Everything else is copied through unescaped.

    After an image the cursor rests on its closing ``)``, which is checked
    for ``[`` and otherwise skipped; the next character is scanned normally.

    Args:
        line: Paragraph line without its line feed.

    Returns:
        InlineResult: Markup without the surrounding ``<p>`` element, and the
            toggles as they stand at the end of the line.

    Raises:
        MalformedInlineSyntax: If a link or image is not closed. Nothing is
            returned for the line in that case.

    Examples:
        render_inline("**bold** and _under_").html
        # '<b>bold</b> and <u>under</u>'
    """
    toggles = InlineToggles()
    parts: list[str] = []
    pos = 0
    length = len(line)

    while pos < length:
        char = line[pos]

        if char == UNDERLINE_MARKER:
            toggles.underline = not toggles.underline
            parts.append("<u>" if toggles.underline else "</u>")
            pos += 1
            continue

        if char == EMPHASIS_MARKER:
            run = _count_emphasis(line, pos)
            parts.append(_toggle_emphasis(toggles, run))
            pos += run
            continue

        if line.startswith(IMAGE_MARKER, pos):
            html, consumed = emit_image(line, pos)
            parts.append(html)
            pos += consumed
            if line[pos] != LINK_OPEN:
                # Cursor rests on the closing ")"
                pos += 1
                continue

        if line[pos] == LINK_OPEN:
            html, consumed = emit_link(line, pos)
            parts.append(html)
            pos += consumed
            continue

        parts.append(line[pos])
        pos += 1

    return InlineResult(html="".join(parts), toggles=toggles)
