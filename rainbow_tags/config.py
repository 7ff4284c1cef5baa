"""Configuration loading and management."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_COLORS,
    DEFAULT_DEBOUNCE_DELAY,
    DEFAULT_MAX_FILE_SIZE,
    TERMINAL_COLOR_NAMES,
)
from .logger import get_logger

logger = get_logger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass
class RainbowConfig:
    """Configuration for colorizing markup tags by nesting depth.

    Attributes:
        colors: Palette applied by depth; the first color marks depth 1. Each
            entry is ``#rgb``, ``#rrggbb``, or a terminal color name. An empty
            palette disables highlighting.
        ignored_tags: Tag names that are never colored or tracked.
        debounce_delay: Seconds to wait after an edit before rescanning.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        RainbowConfig(colors=("red", "#00ff00"), ignored_tags=("br",))
    """

    colors: tuple[str, ...] = DEFAULT_COLORS
    ignored_tags: tuple[str, ...] = ()

    # Host behavior
    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    @property
    def palette_size(self) -> int:
        return len(self.colors)

    @property
    def ignored_keys(self) -> frozenset[str]:
        return frozenset(tag.strip().lower() for tag in self.ignored_tags)


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`debounce_delay` must be >= 0")
    """


def load_config(search_path: Path) -> RainbowConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.rainbow-tags]`` table from `pyproject.toml` and the
    ``[rainbow-tags]`` or ``[tool.rainbow-tags]`` table from `.rainbow-tags.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RainbowConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is present but is not a mapping or
            contains unsupported keys.

    Examples:
        load_config(Path("src/components"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "rainbow-tags")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".rainbow-tags.toml",
            table_paths=[("rainbow-tags",), ("tool", "rainbow-tags")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    logger.debug("No configuration found above %s; using defaults", search_path)
    return RainbowConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RainbowConfig | None:
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
        logger.debug("Loaded configuration from %s", config_file)
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
) -> RainbowConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return RainbowConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys use dashes or underscores interchangeably
    raw_config = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return RainbowConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: RainbowConfig) -> RainbowConfig:
    """Convert sequence fields to tuples and normalize ignored tag names.

    Values that are not sequences are left untouched for `validate_config`
    to report.
    """
    colors = config.colors
    if _is_sequence(colors):
        colors = tuple(colors)

    ignored_tags = config.ignored_tags
    if _is_sequence(ignored_tags):
        ignored_tags = tuple(
            tag.strip().lower() if isinstance(tag, str) else tag for tag in ignored_tags
        )

    return replace(config, colors=colors, ignored_tags=ignored_tags)


def validate_config(config: RainbowConfig) -> None:
    """Validate a `RainbowConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If colors are not recognized color strings, ignored tags
            are not non-empty strings, the debounce delay is negative or not
            finite, or the file size limit is not a positive integer.

    Examples:
        validate_config(RainbowConfig(colors=("#fff", "cyan")))
    """
    if not _is_sequence(config.colors):
        raise ConfigError("`colors` must be a list of strings")
    for color in config.colors:
        if not isinstance(color, str) or not _is_valid_color(color):
            raise ConfigError(
                f"`colors` entry {color!r} must be #rgb, #rrggbb, or one of: "
                f"{', '.join(sorted(TERMINAL_COLOR_NAMES))}"
            )

    if not _is_sequence(config.ignored_tags):
        raise ConfigError("`ignored_tags` must be a list of strings")
    for tag in config.ignored_tags:
        if not isinstance(tag, str) or not tag.strip():
            raise ConfigError("`ignored_tags` entries must be non-empty strings")

    delay = config.debounce_delay
    if isinstance(delay, bool) or not isinstance(delay, (int, float)):
        raise ConfigError("`debounce_delay` must be a number")
    if not math.isfinite(delay) or delay < 0:
        raise ConfigError("`debounce_delay` must be a finite number >= 0")

    _ensure_integers({"max_file_size": config.max_file_size})
    _ensure_positive({"max_file_size": config.max_file_size})


def apply_overrides(config: RainbowConfig, **overrides: object) -> RainbowConfig:
    """Apply override values to a `RainbowConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RainbowConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RainbowConfig`.

    Examples:
        updated = apply_overrides(config, colors=("red", "blue"))
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RainbowConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RainbowConfig: Validated configuration ready for scanning.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), ignored_tags=("br", "img"))
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_valid_color(color: str) -> bool:
    return bool(HEX_COLOR_PATTERN.match(color)) or color.lower() in TERMINAL_COLOR_NAMES


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
