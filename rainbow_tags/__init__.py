"""
rainbow-tags: Colorize HTML, JSX, and TSX tags by nesting depth.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    rainbow-tags src/App.tsx

Library Usage:
    from rainbow_tags import compute_color_ranges, scan_tags

    buckets = compute_color_ranges(text, palette_size=7, ignored_keys={"br"})
    depths = [resolved.depth for resolved in scan_tags(text).tags]
"""

from .config import ConfigError, RainbowConfig, build_config, load_config
from .decorations import Decoration, DecorationPalette
from .exceptions import DecorationDisposedError, RainbowTagsError, ScanFileError
from .models import Position, Range, ResolvedTag, ScanResult, TagToken
from .positions import LineIndex
from .reader import read_tag
from .scanner import compute_color_ranges, scan_tags, tag_ranges
from .session import Document, HighlightSession

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "compute_color_ranges",
    "scan_tags",
    "read_tag",
    "tag_ranges",
    # Data models
    "TagToken",
    "ResolvedTag",
    "ScanResult",
    "Position",
    "Range",
    # Host integration
    "Decoration",
    "DecorationPalette",
    "Document",
    "HighlightSession",
    "LineIndex",
    # Configuration
    "RainbowConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "DecorationDisposedError",
    "RainbowTagsError",
    "ScanFileError",
    # Version
    "__version__",
]
