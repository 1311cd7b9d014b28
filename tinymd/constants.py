"""Constants used across the tinymd package."""

from __future__ import annotations

# Block markers
HEADING_MARKER = "#"
QUOTE_MARKER = ">"
UNORDERED_ITEM_PREFIX = "* "
ORDERED_ITEM_SEPARATOR = "."
CODE_FENCE = "```"
HORIZONTAL_RULE = "---"

# Characters removed by trimming (C ``isblank``)
BLANK_CHARS = " \t"

# Inline markers
UNDERLINE_MARKER = "_"
EMPHASIS_MARKER = "*"
IMAGE_MARKER = "!["
LINK_OPEN = "["
LINK_CLOSE = "]"
TARGET_OPEN = "("
TARGET_CLOSE = ")"

# Configuration
CONFIG_TABLE = "tinymd"
PYPROJECT_FILENAME = "pyproject.toml"
DOTFILE_FILENAME = ".tinymd.toml"

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
