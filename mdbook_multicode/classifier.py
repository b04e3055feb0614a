"""Whole-line recognizers for multicode markers.

Each recognizer matches the complete line. A marker with leading or trailing
characters, including whitespace, is ordinary content.
"""

from __future__ import annotations

from .constants import (
    BLOCK_CLOSE_PATTERN,
    BLOCK_OPEN_PATTERN,
    SECTION_CLOSE_PATTERN,
    SECTION_OPEN_PATTERN,
)


def is_block_open(line: str) -> bool:
    """Return True when `line` is exactly the ```` ```multicode ```` marker."""
    return BLOCK_OPEN_PATTERN.fullmatch(line) is not None


def is_block_close(line: str) -> bool:
    """Return True when `line` is exactly the closing ```` ``` ```` fence."""
    return BLOCK_CLOSE_PATTERN.fullmatch(line) is not None


def match_section_open(line: str) -> str | None:
    """Extract the language of a ``>>>>> <language>`` line.

    Args:
        line: Line without its trailing newline.

    Returns:
        str | None: The language identifier, or None when the line is not a
            section-open marker.

    Examples:
        match_section_open(">>>>> rust")  # "rust"
        match_section_open(">>>>> c++")  # None
    """
    match = SECTION_OPEN_PATTERN.fullmatch(line)
    if match is None:
        return None
    return match.group("language")


def is_section_close(line: str) -> bool:
    return SECTION_CLOSE_PATTERN.fullmatch(line) is not None
