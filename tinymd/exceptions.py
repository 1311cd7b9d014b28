"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for errors that abort rendering.

    Attributes:
        line_number: One-based line index in the split document, filled in by
            the document driver once known.
    """

    line_number: int | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is None:
            return message
        return f"Line {self.line_number}: {message}"


class MalformedInlineSyntax(RenderError):
    """Raised when a link or image is missing a bracket or parenthesis.

    Args:
        missing: The delimiter that could not be found.
        column: Zero-based index in the line where the search started.
    """

    def __init__(self, missing: str, column: int):
        self.missing = missing
        self.column = column
        super().__init__(f"Malformed link or image at column {column + 1}: missing '{missing}'")


class MalformedListItem(RenderError):
    """Raised when an ordered-list line has no ``.`` separator.

    Args:
        line: The offending line.
    """

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Ordered list item without '.' separator: {line!r}")


class LineTooLongError(RenderError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(
            f"exceeds maximum allowed length of {self.max_line_length} characters"
        )
