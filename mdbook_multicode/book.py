"""mdbook preprocessor protocol: reading the context and walking the book.

mdbook writes ``[context, book]`` as JSON to the preprocessor's stdin and
expects the processed book back on stdout. The book is kept as decoded JSON
so that fields this package does not know about survive the round trip.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, TextIO

from .exceptions import BookFormatError

# mdbook 0.4 serializes the top-level items as `sections`, later releases as `items`
BOOK_ITEM_KEYS = ("sections", "items")


@dataclass
class PreprocessorContext:
    """Context mdbook passes alongside the book.

    Attributes:
        root: Book root directory.
        config: Deserialized book.toml.
        renderer: Name of the renderer the book is being prepared for.
        mdbook_version: Version of the mdbook running the preprocessor.
    """

    root: Path
    config: dict[str, Any] = field(default_factory=dict)
    renderer: str = "html"
    mdbook_version: str = ""

    @classmethod
    def from_json(cls, raw: object) -> PreprocessorContext:
        """Build a context from its JSON form.

        Raises:
            BookFormatError: If required fields are missing or mistyped.
        """
        if not isinstance(raw, dict):
            raise BookFormatError("Preprocessor context must be an object", "context")

        root = raw.get("root")
        if not isinstance(root, str):
            raise BookFormatError("Missing or invalid `root`", "context.root")

        config = raw.get("config", {})
        if not isinstance(config, dict):
            raise BookFormatError("Invalid `config`", "context.config")

        renderer = raw.get("renderer")
        if not isinstance(renderer, str):
            raise BookFormatError("Missing or invalid `renderer`", "context.renderer")

        mdbook_version = raw.get("mdbook_version", "")
        if not isinstance(mdbook_version, str):
            raise BookFormatError("Invalid `mdbook_version`", "context.mdbook_version")

        return cls(
            root=Path(root),
            config=config,
            renderer=renderer,
            mdbook_version=mdbook_version,
        )


def parse_input(
    data: str | bytes | TextIO | BinaryIO,
) -> tuple[PreprocessorContext, dict[str, Any]]:
    """Decode mdbook's preprocessor input.

    Args:
        data: JSON text, UTF-8 encoded bytes, or a stream holding either.
            mdbook always writes UTF-8, so bytes are never decoded with the
            locale encoding.

    Returns:
        tuple[PreprocessorContext, dict[str, Any]]: The context and the book.

    Raises:
        BookFormatError: If the input is not UTF-8, not valid JSON, or not a
            ``[context, book]`` pair.

    Examples:
        ctx, book = parse_input(sys.stdin.buffer)
    """
    raw = data if isinstance(data, (str, bytes)) else data.read()
    try:
        text = raw.decode("UTF-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as error:
        raise BookFormatError(f"Preprocessor input is not valid UTF-8: {error}") from error
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as error:
        raise BookFormatError(f"Invalid preprocessor input: {error}") from error

    if not isinstance(decoded, list) or len(decoded) != 2:
        raise BookFormatError("Preprocessor input must be a [context, book] array")

    raw_context, book = decoded
    ctx = PreprocessorContext.from_json(raw_context)
    if not isinstance(book, dict):
        raise BookFormatError("Book must be an object", "book")
    return ctx, book


def book_items(book: dict[str, Any]) -> list[Any]:
    """Return the top-level item list of `book`.

    Raises:
        BookFormatError: If the book has no item list.
    """
    for key in BOOK_ITEM_KEYS:
        items = book.get(key)
        if isinstance(items, list):
            return items
    raise BookFormatError("Book has no `sections` or `items` list", "book")


def _walk(items: list[Any], path: str) -> Iterator[tuple[dict[str, Any], str]]:
    for index, item in enumerate(items):
        item_path = f"{path}[{index}]"
        # "Separator" is a bare string; {"PartTitle": ...} has no content
        if not isinstance(item, dict) or "Chapter" not in item:
            continue

        chapter = item["Chapter"]
        chapter_path = f"{item_path}.Chapter"
        if not isinstance(chapter, dict) or not isinstance(chapter.get("content"), str):
            raise BookFormatError("Chapter has no string `content`", chapter_path)

        yield chapter, chapter_path

        sub_items = chapter.get("sub_items", [])
        if not isinstance(sub_items, list):
            raise BookFormatError("Invalid `sub_items`", f"{chapter_path}.sub_items")
        yield from _walk(sub_items, f"{chapter_path}.sub_items")


def iter_chapters(book: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield every chapter of `book` depth-first, in reading order.

    Chapters are the mutable dictionaries inside the book, so assigning to
    ``chapter["content"]`` rewrites the book in place.

    Raises:
        BookFormatError: If a chapter lacks string content or has malformed
            sub-items.
    """
    for chapter, _ in _walk(book_items(book), "book"):
        yield chapter


def write_output(book: dict[str, Any], stream: TextIO) -> None:
    """Serialize the processed book for mdbook.

    Non-ASCII text is written as JSON escapes, so the output does not depend
    on the encoding of `stream`.
    """
    json.dump(book, stream)
