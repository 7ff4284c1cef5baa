"""Constants used across the rainbow-tags package."""

from __future__ import annotations

import string

# Reserved key shared by `<>` and `</>`; never a valid tag name.
FRAGMENT_KEY = "__fragment__"

TAG_NAME_START_CHARS = frozenset(string.ascii_letters + "_")
TAG_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_.:-")
WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")
QUOTE_CHARS = frozenset("\"'`")

LINE_COMMENT_OPEN = "//"
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
MARKUP_COMMENT_OPEN = "<!--"
MARKUP_COMMENT_CLOSE = "-->"

DEFAULT_COLORS = (
    "#ff5555",
    "#ffb86c",
    "#f1fa8c",
    "#50fa7b",
    "#8be9fd",
    "#bd93f9",
    "#ff79c6",
)
DEFAULT_DEBOUNCE_DELAY = 0.01
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

TERMINAL_COLOR_NAMES = frozenset(
    {
        "black",
        "red",
        "green",
        "yellow",
        "blue",
        "magenta",
        "cyan",
        "white",
        "bright_black",
        "bright_red",
        "bright_green",
        "bright_yellow",
        "bright_blue",
        "bright_magenta",
        "bright_cyan",
        "bright_white",
    }
)

SUPPORTED_LANGUAGES = frozenset({"html", "javascriptreact", "typescriptreact"})
LANGUAGE_BY_EXTENSION = {
    ".html": "html",
    ".htm": "html",
    ".jsx": "javascriptreact",
    ".tsx": "typescriptreact",
}
SUPPORTED_EXTENSIONS = tuple(LANGUAGE_BY_EXTENSION)
