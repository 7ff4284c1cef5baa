"""Tag reading: recognize a single markup tag at a given offset."""

from __future__ import annotations

from .constants import FRAGMENT_KEY, QUOTE_CHARS, TAG_NAME_CHARS, TAG_NAME_START_CHARS
from .models import TagToken


def skip_string(text: str, index: int) -> int:
    """Skip a string literal that starts at `index`.

    The character at `index` is the opening quote. Backslashes escape the
    following character, so an escaped quote never ends the literal.

    Args:
        text: Text containing the literal.
        index: Offset of the opening quote.

    Returns:
        int: Offset just past the closing quote, or ``len(text)`` when the
            literal is unterminated.

    Examples:
        skip_string('"ab" c', 0)  # 4
        skip_string("'open", 0)  # 5
    """
    quote = text[index]
    i = index + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        i += 1
        if ch == quote:
            return i
    return len(text)


def _fragment(start: int, index: int, closing: bool) -> TagToken:
    return TagToken(
        name="",
        key=FRAGMENT_KEY,
        start=start,
        end=index,
        name_start=index,
        name_end=index,
        self_closing=False,
        closing=closing,
        next_index=index + 1,
    )


def read_tag(text: str, start: int) -> TagToken | None:
    """Parse one complete tag starting at `start`.

    Recognizes opening (``<name ...>``), closing (``</name>``),
    self-closing (``<name ... />``) and fragment (``<>``, ``</>``) tags.
    Attribute text is skipped rather than parsed: string literals, balanced
    ``{...}`` expressions, and a generic parameter block directly after the
    name (``<Select<Option> ...>``) never terminate the tag early.

    Args:
        text: Text being scanned.
        start: Offset of a ``<`` character.

    Returns:
        TagToken | None: The recognized tag, or None when the ``<`` does not
            begin a tag (invalid name start or no terminating ``>``).

    Examples:
        read_tag("<div class='a'>", 0).name  # "div"
        read_tag("x < 10", 2)  # None
    """
    i = start + 1
    closing = False
    if i < len(text) and text[i] == "/":
        closing = True
        i += 1

    while i < len(text) and text[i].isspace():
        i += 1

    if i < len(text) and text[i] == ">":
        return _fragment(start, i, closing)

    # A leading digit or operator means a comparison such as `a < 10`
    name_start = i
    if i >= len(text) or text[i] not in TAG_NAME_START_CHARS:
        return None
    i += 1
    while i < len(text) and text[i] in TAG_NAME_CHARS:
        i += 1
    name = text[name_start:i]
    if not name:
        return None
    name_end = i
    key = name.lower()

    brace_depth = 0
    angle_depth = 0
    allow_generics = True

    while i < len(text):
        ch = text[i]

        if ch in QUOTE_CHARS:
            i = skip_string(text, i)
            continue

        if ch == "{":
            brace_depth += 1
            i += 1
            continue
        if ch == "}":
            if brace_depth > 0:
                brace_depth -= 1
            i += 1
            continue

        # Generic parameters are only accepted right after the name (TSX)
        if allow_generics and brace_depth == 0 and ch == "<":
            angle_depth += 1
            i += 1
            continue
        if angle_depth > 0:
            if ch == "<":
                angle_depth += 1
            elif ch == ">":
                angle_depth -= 1
            i += 1
            continue
        allow_generics = False

        if brace_depth == 0:
            if ch == "/" and not closing and i + 1 < len(text) and text[i + 1] == ">":
                return TagToken(
                    name=name,
                    key=key,
                    start=start,
                    end=i + 1,
                    name_start=name_start,
                    name_end=name_end,
                    self_closing=True,
                    closing=False,
                    next_index=i + 2,
                )
            if ch == ">":
                return TagToken(
                    name=name,
                    key=key,
                    start=start,
                    end=i,
                    name_start=name_start,
                    name_end=name_end,
                    self_closing=False,
                    closing=closing,
                    next_index=i + 1,
                )

        i += 1

    return None
