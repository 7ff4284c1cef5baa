"""Filesystem helpers for rainbow-tags."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, LANGUAGE_BY_EXTENSION, SUPPORTED_EXTENSIONS
from .exceptions import ScanFileError

MAX_FILE_SIZE_ENV_VAR = "RAINBOW_TAGS_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["RAINBOW_TAGS_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink.

    Args:
        path: Path to inspect.

    Returns:
        bool: True when a symlink is encountered, otherwise False.
    """
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def language_for_path(path: Path) -> str | None:
    """Map a file extension to an editor language identifier.

    Examples:
        language_for_path(Path("App.tsx"))  # "typescriptreact"
        language_for_path(Path("notes.txt"))  # None
    """
    return LANGUAGE_BY_EXTENSION.get(path.suffix.lower())


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate a markup source filepath.

    Args:
        raw_path: User-supplied path to a source file (absolute or relative).

    Returns:
        Path: Absolute path to the source file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("src/App.tsx")
        normalize_filepath("~/site/index.html")
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    if language_for_path(resolved) is None:
        error_message = f"{resolved} is not a supported markup file.\n"
        error_message += f"Supported extensions are: {', '.join(SUPPORTED_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def enforce_file_size(filepath: Path, max_size: int):
    """Guard against files that exceed the configured maximum size.

    The path is expected to have passed `normalize_filepath` already.

    Raises:
        IOError: If the file cannot be inspected or is larger than `max_size`.
    """
    try:
        size = os.stat(filepath).st_size
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8. Line endings are
            preserved so offsets match the bytes on disk.

    Raises:
        IOError: If the file cannot be opened.
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except OSError as error:
        error_message = f"Error opening {filepath}: {error}"
        raise IOError(error_message) from error


def read_source(filepath: Path) -> str:
    """Read a source file as text.

    Raises:
        ScanFileError: If the file cannot be opened, read, or decoded as UTF-8.
    """
    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise ScanFileError(filepath, f"invalid UTF-8 sequence: {error}") from error
    except IOError as error:
        raise ScanFileError(filepath, str(error)) from error
