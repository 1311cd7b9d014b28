"""Data models for tinymd."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class BlockState(Enum):
    """Multi-line block currently held open by the classifier.

    Exactly one member holds at a time. Code mode is tracked separately on
    `ClassifierContext` because it can coexist with any of these.

    Attributes:
        NONE: No quote or list is open.
        IN_QUOTE: Inside ``<blockquote><p>``.
        IN_ORDERED_LIST: Inside ``<ol>``.
        IN_UNORDERED_LIST: Inside ``<ul>``.
    """

    NONE = auto()
    IN_QUOTE = auto()
    IN_ORDERED_LIST = auto()
    IN_UNORDERED_LIST = auto()


class LineKind(Enum):
    """Structural role assigned to a single input line.

    Attributes:
        HEADING: ``#`` heading.
        QUOTE: ``>`` quote line.
        CLOSED_BLOCK: The line was spent closing a quote or list and is not
            classified any further.
        ORDERED_ITEM: Numbered list item.
        UNORDERED_ITEM: ``* `` list item.
        FENCE: Three-backtick line toggling code mode.
        CODE: Line passed through verbatim inside a code block.
        RULE: ``---`` horizontal rule.
        PARAGRAPH: Anything else, rendered inline.
    """

    HEADING = auto()
    QUOTE = auto()
    CLOSED_BLOCK = auto()
    ORDERED_ITEM = auto()
    UNORDERED_ITEM = auto()
    FENCE = auto()
    CODE = auto()
    RULE = auto()
    PARAGRAPH = auto()


@dataclass
class ClassifierContext:
    """Mutable state carried by the block classifier across lines.

    Attributes:
        block: Quote or list currently open.
        in_code: Whether a fenced code block is open.
    """

    block: BlockState = BlockState.NONE
    in_code: bool = False


@dataclass
class Classification:
    """Result of classifying one line.

    Attributes:
        kind: Role assigned to the line.
        output: HTML fragments produced for the line, in order.
    """

    kind: LineKind
    output: list[str] = field(default_factory=list)


@dataclass
class InlineToggles:
    """Inline style toggles, scoped to a single paragraph line."""

    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass
class InlineResult:
    """HTML produced for a paragraph line and the toggles left behind.

    Attributes:
        html: Inline markup without the surrounding ``<p>`` element.
        toggles: Toggle state after the last character was scanned.
    """

    html: str
    toggles: InlineToggles


@dataclass(frozen=True)
class InlineTarget:
    """Label and target of a link or image, copied verbatim from the source."""

    label: str
    target: str
