"""Terminal rendering of color buckets."""

from __future__ import annotations

import click

from .models import RangeBucket
from .positions import LineIndex


def terminal_color(color: str) -> str | tuple[int, int, int]:
    """Convert a configured color into a value accepted by `click.style`.

    Examples:
        terminal_color("#f80")  # (255, 136, 0)
        terminal_color("Cyan")  # "cyan"
    """
    if not color.startswith("#"):
        return color.lower()
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(digit * 2 for digit in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _ordered_spans(buckets: RangeBucket) -> list[tuple[int, int, int]]:
    return sorted(
        (start, end, index) for index, ranges in buckets.items() for start, end in ranges
    )


def render_ansi(text: str, buckets: RangeBucket, colors: tuple[str, ...]) -> str:
    """Return `text` with every bucketed range styled in its palette color.

    Args:
        text: Source text that was scanned.
        buckets: Color index to half-open ranges, as computed by the scanner.
        colors: Palette used for the scan.

    Returns:
        str: Text containing ANSI escape sequences around tag parts.
    """
    parts = []
    offset = 0
    for start, end, index in _ordered_spans(buckets):
        parts.append(text[offset:start])
        parts.append(click.style(text[start:end], fg=terminal_color(colors[index])))
        offset = end
    parts.append(text[offset:])
    return "".join(parts)


def format_ranges(text: str, buckets: RangeBucket, colors: tuple[str, ...]) -> list[str]:
    """Describe every range as ``line:col-line:col<TAB>index<TAB>color``.

    Lines and columns are one-based; ranges are listed in document order.

    Examples:
        format_ranges("<a/>", {0: [(0, 1), (1, 2), (2, 4)]}, ("red",))[0]  # "1:1-1:2\\t0\\tred"
    """
    line_index = LineIndex(text)
    lines = []
    for start, end, index in _ordered_spans(buckets):
        span = line_index.range_at(start, end)
        lines.append(
            f"{span.start.line + 1}:{span.start.character + 1}-"
            f"{span.end.line + 1}:{span.end.character + 1}\t{index}\t{colors[index]}\n"
        )
    return lines
