"""Highlight session: keeps an editor target in sync with its document."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from .config import RainbowConfig, validate_config
from .constants import SUPPORTED_LANGUAGES
from .decorations import DecorationPalette, DecorationTarget
from .exceptions import DecorationDisposedError
from .logger import get_logger
from .positions import LineIndex
from .scanner import compute_color_ranges
from .scheduler import Debouncer

logger = get_logger(__name__)


@dataclass(frozen=True)
class Document:
    """Snapshot of the active document.

    Attributes:
        text: Full buffer contents.
        language_id: Editor language identifier such as ``"html"``.
    """

    text: str
    language_id: str


class HighlightSession:
    """Rescan the active document after edits and push decorations.

    Edits and configuration changes schedule a debounced update; only the
    latest document snapshot is scanned when the update runs. The session
    owns its decoration palette and replaces it when the colors change.

    Examples:
        with HighlightSession(view, config) as session:
            session.open_document(text, "typescriptreact")
            session.flush()
    """

    def __init__(self, target: DecorationTarget, config: RainbowConfig | None = None):
        config = config or RainbowConfig()
        validate_config(config)
        self.target = target
        self._lock = threading.Lock()
        self._config = config
        self._palette = DecorationPalette(config.colors)
        self._debouncer = Debouncer(config.debounce_delay)
        self._document: Document | None = None
        self.closed = False

    def __enter__(self) -> HighlightSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def config(self) -> RainbowConfig:
        return self._config

    @property
    def document(self) -> Document | None:
        return self._document

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def open_document(self, text: str, language_id: str) -> None:
        """Make a document active and schedule its first scan."""
        self._ensure_open()
        with self._lock:
            self._document = Document(text=text, language_id=language_id)
        self.trigger_update()

    def document_changed(self, text: str) -> None:
        """Record new contents for the active document and schedule a rescan.

        Raises:
            DecorationDisposedError: If the session was closed.
            ValueError: If no document is open.
        """
        self._ensure_open()
        with self._lock:
            if self._document is None:
                raise ValueError("No document is open")
            self._document = Document(text=text, language_id=self._document.language_id)
        self.trigger_update()

    def update_configuration(self, config: RainbowConfig) -> None:
        """Swap in a new configuration, rebuilding decorations.

        Raises:
            ConfigError: If `config` fails validation.
        """
        self._ensure_open()
        validate_config(config)
        with self._lock:
            old_palette = self._palette
            self._config = config
            self._palette = DecorationPalette(config.colors)
            self._debouncer.delay = config.debounce_delay
        old_palette.dispose()
        logger.debug("Configuration updated; %d colors", config.palette_size)
        self.trigger_update()

    def trigger_update(self) -> None:
        self._ensure_open()
        self._debouncer.schedule(self._update)

    def flush(self) -> bool:
        """Run a pending update now instead of waiting for the delay."""
        return self._debouncer.flush()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._debouncer.cancel()
        with self._lock:
            self._palette.dispose()
        logger.debug("Session closed")

    def _ensure_open(self) -> None:
        if self.closed:
            raise DecorationDisposedError("Highlight session is closed")

    def _update(self) -> None:
        with self._lock:
            if self.closed:
                return
            document = self._document
            config = self._config
            palette = self._palette

        if document is None:
            return
        if document.language_id not in SUPPORTED_LANGUAGES:
            logger.debug("Skipping unsupported language %r", document.language_id)
            return

        buckets = compute_color_ranges(document.text, config.palette_size, config.ignored_keys)
        with self._lock:
            # A newer configuration replaced the palette while scanning
            if palette is not self._palette or self.closed:
                return

        # The target may call back into the session, so apply without the lock
        try:
            palette.apply(self.target, buckets, LineIndex(document.text))
        except DecorationDisposedError:
            logger.debug("Palette replaced before decorations were applied")
