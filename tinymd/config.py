"""Configuration loading and management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import CONFIG_TABLE, DEFAULT_MAX_FILE_SIZE, DOTFILE_FILENAME, PYPROJECT_FILENAME

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Configuration for rendering documents to HTML.

    Attributes:
        close_trailing_blocks: Emit closing tags for a quote, list, or code
            block still open when the document ends. Off by default, which
            leaves such blocks unclosed.
        max_file_size: Maximum input file size in bytes that will be read.
        max_line_length: Maximum line length in characters, or None for no
            limit.

    Examples:
        RenderConfig(close_trailing_blocks=True, max_line_length=500)
    """

    # Rendering
    close_trailing_blocks: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_line_length: int | None = None


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.tinymd]`` table from `pyproject.toml` and the ``[tinymd]`` or
    ``[tool.tinymd]`` table from `.tinymd.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RenderConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / PYPROJECT_FILENAME, table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / DOTFILE_FILENAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenderConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RenderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Loaded [%s] from %s", ".".join(table_path), config_file)
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return RenderConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RenderConfig) -> None:
    """Validate a `RenderConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If `close_trailing_blocks` is not a boolean or a limit is
            not a positive integer.

    Examples:
        validate_config(RenderConfig(max_line_length=120))
    """
    if not isinstance(config.close_trailing_blocks, bool):
        raise ConfigError("`close_trailing_blocks` must be a boolean")

    limits: dict[str, object] = {"max_file_size": config.max_file_size}
    if config.max_line_length is not None:
        limits["max_line_length"] = config.max_line_length

    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Apply override values to a `RenderConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RenderConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RenderConfig`.

    Examples:
        updated = apply_overrides(config, close_trailing_blocks=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RenderConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), close_trailing_blocks=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, object]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
