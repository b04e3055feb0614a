"""Markup generation for multicode blocks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .constants import ACTIVATE_FUNCTION, GROUP_ID_PREFIX, SELECT_CLASS
from .escape import escape_html
from .models import MulticodeBlock


def group_id(sequence_number: int) -> str:
    """Return the id shared by a block's selector and panels.

    Examples:
        group_id(0)  # "code-example-tab-0"
    """
    return f"{GROUP_ID_PREFIX}{sequence_number}"


def emit(
    sequence_number: int,
    language_order: Sequence[str],
    language_text: Mapping[str, str],
) -> str:
    """Render a tabbed code example.

    Produces a ``<select>`` with one option per language, one panel per
    language holding the escaped sample, and an inline script that activates
    the first language. Language identifiers are restricted to ASCII letters
    and digits, so they are inserted without escaping.

    Args:
        sequence_number: Index of the block within its document.
        language_order: Languages in the order their options and panels appear.
            Must not be empty.
        language_text: Sample text for every language in `language_order`.

    Returns:
        str: The block's markup, without a trailing newline.

    Raises:
        ValueError: If `language_order` is empty.
        KeyError: If a language has no entry in `language_text`.

    Examples:
        emit(0, ["rust"], {"rust": "fn main() {}\\n"})
    """
    if not language_order:
        raise ValueError("Cannot render a multicode block without languages")

    group = group_id(sequence_number)
    first_language = language_order[0]

    options = "".join(
        f'<option value="{group}-{language}">{language}</option>' for language in language_order
    )
    parts = [
        f"<div><select onchange=\"{ACTIVATE_FUNCTION}('{group}', event.target.value)\" "
        f'value="{first_language}" class="{SELECT_CLASS}" autocomplete="off">',
        options,
        "</select></div>\n",
    ]

    for language in language_order:
        parts.append(
            f'<div id="{group}-{language}" class="{group}">'
            f'<pre><code class="language-{language}">'
        )
        parts.append(escape_html(language_text[language]))
        parts.append("</code></pre></div>")

    parts.append(
        f'<script>(()=>{{{ACTIVATE_FUNCTION}("{group}", "{group}-{first_language}")}})()</script>'
    )
    return "".join(parts)


def render_block(block: MulticodeBlock) -> str:
    """Render a collected block; see `emit`."""
    return emit(block.sequence_number, block.language_order, block.language_text)
