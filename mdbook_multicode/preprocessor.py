"""The multicode preprocessor: applies the transform to every chapter of a book."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .book import PreprocessorContext, iter_chapters
from .config import MulticodeConfig, config_from_context
from .constants import PREPROCESSOR_NAME, SUPPORTED_RENDERERS
from .exceptions import BlowUpError
from .parser import transform_markdown
from .template import load_template


class MulticodePreprocessor:
    """Turn multicode blocks into tabbed code examples.

    Args:
        header: Template header to use instead of the one selected by the
            book configuration.
        warn: Callback receiving diagnostics. Chapter-level diagnostics are
            only produced when ``warn-unterminated`` is enabled.

    Examples:
        preprocessor = MulticodePreprocessor(warn=print)
        book = preprocessor.run(ctx, book)
    """

    def __init__(
        self,
        header: str | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        self.header = header
        self.warn = warn

    @property
    def name(self) -> str:
        return PREPROCESSOR_NAME

    def supports_renderer(self, renderer: str) -> bool:
        """Return True for renderers that accept raw HTML."""
        return renderer in SUPPORTED_RENDERERS

    def check_config(self, config: MulticodeConfig) -> None:
        """Fail the run when the configuration asks for it.

        Raises:
            BlowUpError: If the ``blow-up`` key is present.
        """
        if config.blow_up:
            raise BlowUpError(self.name)

    def run(self, ctx: PreprocessorContext, book: dict[str, Any]) -> dict[str, Any]:
        """Rewrite the content of every chapter in `book`.

        Args:
            ctx: Context mdbook supplied with the book.
            book: Decoded book; modified in place and returned.

        Returns:
            dict[str, Any]: The processed book. Returned unchanged when the
                renderer is not supported.

        Raises:
            BlowUpError: If the configuration requests a failure. Raised
                before any chapter is touched.
            ConfigError: If the configuration or template override is invalid.
            BookFormatError: If the book structure is malformed. The book is
                left untouched in that case.
        """
        config = config_from_context(ctx.config)
        self.check_config(config)

        if not self.supports_renderer(ctx.renderer):
            if self.warn is not None:
                self.warn(
                    f"{self.name}: renderer `{ctx.renderer}` is not supported; "
                    "leaving the book unchanged"
                )
            return book

        # Malformed chapters are reported before any chapter is rewritten
        chapters = list(iter_chapters(book))
        header = self.header if self.header is not None else load_template(config, ctx.root)
        chapter_warn = self.warn if config.warn_unterminated else None

        for chapter in chapters:
            warn = None
            if chapter_warn is not None:
                label = chapter.get("source_path") or chapter.get("path") or chapter.get("name")
                warn = _prefixed(chapter_warn, f"{self.name}: {label}: ")
            result = transform_markdown(chapter["content"], header, warn)
            chapter["content"] = result.content

        return book


def _prefixed(warn: Callable[[str], None], prefix: str) -> Callable[[str], None]:
    return lambda message: warn(f"{prefix}{message}")
