"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class RainbowTagsError(Exception):
    """Base class for rainbow-tags errors raised outside the scanner core."""


class ScanFileError(RainbowTagsError):
    """Raised when a source file cannot be read or decoded.

    Args:
        filepath: File that failed to load.
        reason: Human-readable cause.
    """

    def __init__(self, filepath: Path, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}: {reason}")


class DecorationDisposedError(RainbowTagsError, RuntimeError):
    """Raised when a disposed decoration palette or closed session is used."""
