"""Tag scanning and depth resolution for source text."""

from __future__ import annotations

from collections.abc import Collection

from .constants import (
    BLOCK_COMMENT_CLOSE,
    BLOCK_COMMENT_OPEN,
    LINE_COMMENT_OPEN,
    MARKUP_COMMENT_CLOSE,
    MARKUP_COMMENT_OPEN,
    QUOTE_CHARS,
    WORD_CHARS,
)
from .models import RangeBucket, ResolvedTag, ScanContext, ScannerMode, ScanResult, TagToken
from .reader import read_tag


def _try_enter_context(ctx: ScanContext, text: str, index: int) -> int | None:
    """Enter a string or comment context starting at `index`.

    Checks run in order: string, line comment, block comment, markup comment.

    Args:
        ctx: Scan context to update; must be in `ScannerMode.NEUTRAL`.
        text: Text being scanned.
        index: Offset of the current character.

    Returns:
        int | None: Offset just past the opener when a context was entered,
            otherwise None.

    Examples:
        _try_enter_context(ScanContext(), "// note", 0)  # 2
    """
    if ctx.mode is not ScannerMode.NEUTRAL:
        return None

    ch = text[index]
    if ch in QUOTE_CHARS:
        ctx.mode = ScannerMode.STRING
        ctx.quote = ch
        return index + 1
    if text.startswith(LINE_COMMENT_OPEN, index):
        ctx.mode = ScannerMode.LINE_COMMENT
        return index + len(LINE_COMMENT_OPEN)
    if text.startswith(BLOCK_COMMENT_OPEN, index):
        ctx.mode = ScannerMode.BLOCK_COMMENT
        return index + len(BLOCK_COMMENT_OPEN)
    if text.startswith(MARKUP_COMMENT_OPEN, index):
        ctx.mode = ScannerMode.MARKUP_COMMENT
        return index + len(MARKUP_COMMENT_OPEN)
    return None


def _advance_in_context(ctx: ScanContext, text: str, index: int) -> int:
    """Consume input inside the active string or comment.

    Args:
        ctx: Scan context describing the active string or comment.
        text: Text being scanned.
        index: Offset of the current character.

    Returns:
        int: Offset of the next character to examine. The context returns to
            `ScannerMode.NEUTRAL` when the closing delimiter is consumed.
    """
    ch = text[index]

    if ctx.mode is ScannerMode.STRING:
        if ch == "\\":
            return index + 2
        if ch == ctx.quote:
            ctx.mode = ScannerMode.NEUTRAL
            ctx.quote = None
        return index + 1

    if ctx.mode is ScannerMode.LINE_COMMENT:
        if ch == "\n":
            ctx.mode = ScannerMode.NEUTRAL
        return index + 1

    if ctx.mode is ScannerMode.BLOCK_COMMENT:
        if text.startswith(BLOCK_COMMENT_CLOSE, index):
            ctx.mode = ScannerMode.NEUTRAL
            return index + len(BLOCK_COMMENT_CLOSE)
        return index + 1

    if ctx.mode is ScannerMode.MARKUP_COMMENT:
        if text.startswith(MARKUP_COMMENT_CLOSE, index):
            ctx.mode = ScannerMode.NEUTRAL
            return index + len(MARKUP_COMMENT_CLOSE)
        return index + 1

    return index + 1


def is_false_positive(text: str, tag: TagToken) -> bool:
    """Check whether an opening tag is really generic or call syntax.

    A word character directly before ``<`` (``Array<number>``) or a ``(``
    directly after a named tag (``<T>(value)``) marks the tag as code rather
    than markup. Closing tags are never rejected, since text may precede
    ``</tag>`` legitimately.

    Args:
        text: Text being scanned.
        tag: Tag returned by `read_tag`.

    Returns:
        bool: True when the tag should be skipped without being recorded.

    Examples:
        is_false_positive("Array<number>", read_tag("Array<number>", 5))  # True
    """
    if tag.closing:
        return False

    prev_char = text[tag.start - 1] if tag.start > 0 else " "
    if prev_char in WORD_CHARS:
        return True

    after_char = text[tag.end + 1] if tag.end + 1 < len(text) else " "
    return bool(tag.name) and after_char == "("


def resolve_depth(stack: list[str], tag: TagToken) -> int:
    """Compute the nesting depth of a tag and update the open-tag stack.

    Opening tags sit one level below the current stack and are pushed unless
    self-closing. Closing tags match the most recent open tag with the same
    key; anything opened after it is dropped. An unmatched closing tag keeps
    the stack intact and reports the current depth, floored at 1.

    Args:
        stack: Keys of currently open tags, most recent last. Mutated in place.
        tag: Tag to resolve.

    Returns:
        int: One-based depth of the tag.

    Examples:
        stack = ["a", "b", "c"]
        resolve_depth(stack, read_tag("</a>", 0))  # 1, stack becomes []
    """
    if not tag.closing:
        depth = len(stack) + 1
        if not tag.self_closing:
            stack.append(tag.key)
        return depth

    for position in range(len(stack) - 1, -1, -1):
        if stack[position] == tag.key:
            del stack[position:]
            return position + 1

    return max(len(stack), 1)


def scan_tags(text: str, ignored_keys: Collection[str] = frozenset()) -> ScanResult:
    """Find every markup tag in `text` and resolve its nesting depth.

    Walks the text once. Tags inside string literals, ``//`` and ``/* */``
    comments, and ``<!-- -->`` comments are ignored, as are opening tags that
    look like generics or call expressions. Text that ends inside a string or
    comment simply stops producing tags.

    Args:
        text: Source text to scan.
        ignored_keys: Lowercased tag keys to skip entirely.

    Returns:
        ScanResult: Resolved tags in document order and the keys left open at
            the end of the text.

    Examples:
        result = scan_tags("<a><b></b></a>")
        [resolved.depth for resolved in result.tags]  # [1, 2, 2, 1]
    """
    ctx = ScanContext()
    result = ScanResult()
    stack = result.open_tags

    i = 0
    while i < len(text):
        if ctx.mode is not ScannerMode.NEUTRAL:
            i = _advance_in_context(ctx, text, i)
            continue

        entered = _try_enter_context(ctx, text, i)
        if entered is not None:
            i = entered
            continue

        if text[i] != "<":
            i += 1
            continue

        tag = read_tag(text, i)
        if tag is None:
            i += 1
            continue

        if not is_false_positive(text, tag) and tag.key not in ignored_keys:
            depth = resolve_depth(stack, tag)
            result.tags.append(ResolvedTag(tag=tag, depth=depth))

        i = tag.next_index

    return result


def tag_ranges(tag: TagToken) -> list[tuple[int, int]]:
    """Return the half-open ranges to colorize for a tag.

    The ranges cover the opening bracket (``<`` or ``</``), the tag name when
    present, and the terminating bracket (``>`` or ``/>``), in that order.

    Args:
        tag: Tag to split into ranges.

    Returns:
        list[tuple[int, int]]: Two ranges for fragments, three otherwise.

    Examples:
        tag_ranges(read_tag("<br/>", 0))  # [(0, 1), (1, 3), (3, 5)]
    """
    ranges = [(tag.start, tag.start + (2 if tag.closing else 1))]
    if tag.name:
        ranges.append((tag.name_start, tag.name_end))
    closing_start = tag.end - 1 if tag.self_closing else tag.end
    ranges.append((closing_start, tag.end + 1))
    return ranges


def add_ranges(bucket: RangeBucket, depth: int, palette_size: int, tag: TagToken) -> None:
    """File a tag's ranges under the color index derived from its depth.

    Does nothing for an empty palette.

    Args:
        bucket: Mapping of color index to ranges. Mutated in place.
        depth: One-based depth of the tag.
        palette_size: Number of configured colors.
        tag: Tag whose ranges are recorded.
    """
    if palette_size == 0:
        return
    color_index = (depth - 1) % palette_size
    bucket.setdefault(color_index, []).extend(tag_ranges(tag))


def compute_color_ranges(
    text: str, palette_size: int, ignored_keys: Collection[str] = frozenset()
) -> RangeBucket:
    """Compute colorized tag ranges for `text`, grouped by color index.

    Args:
        text: Full source text.
        palette_size: Number of configured colors; zero yields no ranges.
        ignored_keys: Lowercased tag keys to skip entirely.

    Returns:
        RangeBucket: Mapping of ``(depth - 1) % palette_size`` to half-open
            ranges in document order.

    Examples:
        compute_color_ranges("<a></a>", 7)  # {0: [(0, 1), (1, 2), (2, 3), (3, 5), (5, 6), (6, 7)]}
    """
    bucket: RangeBucket = {}
    if palette_size == 0:
        return bucket

    for resolved in scan_tags(text, ignored_keys).tags:
        add_ranges(bucket, resolved.depth, palette_size, resolved.tag)
    return bucket
