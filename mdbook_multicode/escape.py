"""HTML escaping for code sample text."""

from __future__ import annotations

# `&` must come first: every other substitution introduces an ampersand.
_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(text: str) -> str:
    """Escape text for safe inclusion inside HTML elements and attributes.

    Replaces ``&``, ``<``, ``>``, ``"`` and ``'`` with their entity
    equivalents. Every other character, including newlines, is left as is.

    Args:
        text: Raw text to escape.

    Returns:
        str: Escaped text.

    Examples:
        escape_html("fn id<X>(x: X) -> X")  # "fn id&lt;X&gt;(x: X) -&gt; X"
        escape_html("a && b")  # "a &amp;&amp; b"
    """
    for character, entity in _REPLACEMENTS:
        text = text.replace(character, entity)
    return text
