"""Data models for rainbow-tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ScannerMode(Enum):
    """Lexical contexts the scanner moves between while walking source text.

    Only one mode is active at a time; tags are recognized in `NEUTRAL` only.

    Attributes:
        NEUTRAL: Ordinary text where strings, comments, and tags may start.
        STRING: Inside a quoted or backtick-delimited string literal.
        LINE_COMMENT: Inside a ``//`` comment, up to the next newline.
        BLOCK_COMMENT: Inside a ``/* ... */`` comment.
        MARKUP_COMMENT: Inside an ``<!-- ... -->`` comment.
    """

    NEUTRAL = auto()
    STRING = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    MARKUP_COMMENT = auto()


@dataclass
class ScanContext:
    """Encapsulate scanner state while walking source text.

    Attributes:
        mode: Current scanner mode.
        quote: Quote character that opened the active string, if any.
    """

    mode: ScannerMode = ScannerMode.NEUTRAL
    quote: str | None = None


@dataclass(frozen=True)
class TagToken:
    """A single tag recognized by the tag reader.

    Offsets index into the scanned text. `start` and `end` point at the
    opening ``<`` and the terminating ``>`` (both inclusive).

    Attributes:
        name: Raw tag name, empty for fragments.
        key: Lowercased name or the fragment key, used for matching.
        start: Offset of the opening ``<``.
        end: Offset of the terminating ``>``.
        name_start: Offset where the name begins.
        name_end: Offset just past the name.
        self_closing: True when the tag ends with ``/>``.
        closing: True for ``</name>`` tags.
        next_index: Offset where scanning resumes after the tag.
    """

    name: str
    key: str
    start: int
    end: int
    name_start: int
    name_end: int
    self_closing: bool
    closing: bool
    next_index: int


@dataclass(frozen=True)
class ResolvedTag:
    """A recognized tag together with its nesting depth (1-based)."""

    tag: TagToken
    depth: int


@dataclass
class ScanResult:
    """Structured result of scanning a text buffer for tags.

    Attributes:
        tags: Recognized tags in document order with their depths.
        open_tags: Keys still open when the scan reached the end of input.
    """

    tags: list[ResolvedTag] = field(default_factory=list)
    open_tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Position:
    """Zero-based line and character coordinates."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """Half-open span between two positions."""

    start: Position
    end: Position


RangeBucket = dict[int, list[tuple[int, int]]]
