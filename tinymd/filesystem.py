"""Filesystem helpers for tinymd."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, TextIO

MAX_FILE_SIZE_ENV_VAR = "TINYMD_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "TINYMD_MAX_LINE_LENGTH"


def _positive_env_int(name: str) -> int | None:
    env_value = os.environ.get(name)
    if env_value is None:
        return None

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{name} must be a positive integer, got {value}."
        raise ValueError(error_message)

    return value


def get_max_file_size(default: int | None) -> int | None:
    """Resolve the maximum allowed input file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int | None: Maximum allowed file size in bytes, or `default`.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["TINYMD_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    value = _positive_env_int(MAX_FILE_SIZE_ENV_VAR)
    return default if value is None else value


def get_max_line_length(default: int | None) -> int | None:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in characters when the environment variable is
            unset; None disables the limit.

    Returns:
        int | None: Maximum allowed line length in characters, or None.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    value = _positive_env_int(MAX_LINE_LENGTH_ENV_VAR)
    return default if value is None else value


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for an input file.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Args:
        stat_result: File stat used to determine size in bytes.
        max_size: Maximum allowed size in bytes.
        filepath: Path to the file being checked.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Line endings are left untranslated so carriage returns reach
    `normalize_text`.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("README.md")) as handle:
            text = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def normalize_text(raw: str) -> str:
    """Remove every carriage return from `raw`.

    Examples:
        normalize_text("a\\r\\nb\\r")  # "a\\nb"
    """
    return raw.replace("\r", "")


def read_document(filepath: Path) -> str:
    """Read a whole file as normalized text.

    Raises:
        IOError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with safe_read(filepath) as handle:
        return normalize_text(handle.read())


def read_stream(stream: BinaryIO) -> str:
    """Read a whole binary stream (such as stdin) as normalized UTF-8 text.

    Raises:
        UnicodeDecodeError: If the stream is not valid UTF-8.
    """
    return normalize_text(stream.read().decode("UTF-8"))


def write_output(fragments: Iterable[str], filepath: Path):
    """Write rendered fragments to `filepath` atomically.

    Fragments go to a temporary file in the target directory that replaces
    `filepath` only once every fragment has been written. If iterating
    `fragments` raises, the temporary file is removed and an existing
    `filepath` is left untouched.

    Args:
        fragments: HTML fragments in document order.
        filepath: Destination path.

    Raises:
        IOError: If the destination directory is not writable.

    Examples:
        write_output(iter_html(text), Path("out.html"))
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            for fragment in fragments:
                tmp_file.write(fragment)

            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        # NamedTemporaryFile creates files with 0600
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
