"""Decoration handles that apply color buckets to an editor-like target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .exceptions import DecorationDisposedError
from .logger import get_logger
from .models import Range, RangeBucket
from .positions import LineIndex

logger = get_logger(__name__)


@dataclass
class Decoration:
    """Handle for one palette color.

    Ranges are half-open, so positions touching either boundary are not part
    of the styled run.

    Attributes:
        index: Color index served by this handle.
        color: Color string from the configuration.
        disposed: True once the owning palette released the handle.
    """

    index: int
    color: str
    disposed: bool = False

    def dispose(self) -> None:
        self.disposed = True


class DecorationTarget(Protocol):
    """Anything able to display ranges for a decoration, e.g. an editor view."""

    def set_decorations(self, decoration: Decoration, ranges: list[Range]) -> None: ...


class DecorationPalette:
    """Own one `Decoration` per configured color.

    Create a new palette whenever the colors change and dispose the old one;
    using the palette as a context manager disposes it on exit.

    Examples:
        with DecorationPalette(("red", "blue")) as palette:
            palette.apply(view, buckets, LineIndex(text))
    """

    def __init__(self, colors: tuple[str, ...]):
        self.decorations = [Decoration(index, color) for index, color in enumerate(colors)]
        self.disposed = False
        logger.debug("Created %d decorations", len(self.decorations))

    def __enter__(self) -> DecorationPalette:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def dispose(self) -> None:
        if self.disposed:
            return
        for decoration in self.decorations:
            decoration.dispose()
        self.disposed = True
        logger.debug("Disposed %d decorations", len(self.decorations))

    def apply(self, target: DecorationTarget, buckets: RangeBucket, line_index: LineIndex) -> None:
        """Push every color bucket to `target`.

        Indices without ranges receive an empty list so highlights from an
        earlier scan are cleared.

        Raises:
            DecorationDisposedError: If the palette was already disposed.
        """
        if self.disposed:
            raise DecorationDisposedError("Cannot apply a disposed decoration palette")
        for decoration in self.decorations:
            ranges = [
                line_index.range_at(start, end) for start, end in buckets.get(decoration.index, [])
            ]
            target.set_decorations(decoration, ranges)
