"""
mdbook preprocessor that renders ```multicode blocks as tabbed code examples.

Invoked by mdbook with no arguments (book JSON on stdin) and with
`supports <renderer>`; `render` previews a single Markdown file.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import replace

import click

from .book import parse_input, write_output
from .config import ConfigError, find_book_root, load_config
from .exceptions import BlowUpError, BookFormatError
from .filesystem import enforce_file_size, normalize_filepath, safe_read
from .parser import transform_markdown
from .preprocessor import MulticodePreprocessor
from .template import load_template

__all__ = ["cli"]


def _warn(message: str) -> None:
    click.echo(message, err=True)


def _file_warn(label: str) -> Callable[[str], None]:
    return lambda message: _warn(f"{label}: {message}")


@click.group(invoke_without_command=True)
@click.version_option()
@click.pass_context
def cli(ctx: click.Context):
    """
    Preprocess an mdbook book read from stdin and write it to stdout.

    Returns:
        None.

    Raises:
        click.ClickException: If the input is malformed, the configuration is
            invalid, or the configuration requests a deliberate failure. Nothing
            is written to stdout in that case.
    """
    if ctx.invoked_subcommand is not None:
        return

    preprocessor = MulticodePreprocessor(warn=_warn)
    try:
        book_ctx, book = parse_input(sys.stdin.buffer)
        book = preprocessor.run(book_ctx, book)
    except (BlowUpError, BookFormatError, ConfigError) as error:
        raise click.ClickException(str(error)) from error

    write_output(book, sys.stdout)
    sys.stdout.flush()


@cli.command()
@click.argument("renderer")
def supports(renderer: str):
    """
    Exit with status 0 when RENDERER is supported, 1 otherwise.

    Examples:
        mdbook-multicode supports html
    """
    if not MulticodePreprocessor().supports_renderer(renderer):
        sys.exit(1)


@cli.command()
@click.option(
    "--template",
    "template_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Template header file (defaults to the book's or the bundled one)",
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def render(filepath: str, template_path: str | None = None):
    """
    Print FILEPATH with its multicode blocks rendered.

    Configuration is read from the `[preprocessor.multicode]` table of the
    nearest book.toml above the file.

    Raises:
        click.BadParameter: If the path is not a Markdown file.
        click.ClickException: If the file is too large or unreadable, or the
            configuration is invalid or requests a deliberate failure.

    Examples:
        mdbook-multicode render src/chapter_1.md > preview.md
    """
    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = load_config(path.parent)
        MulticodePreprocessor().check_config(config)
        if template_path is not None:
            header = load_template(replace(config, template=template_path))
        else:
            header = load_template(config, find_book_root(path.parent))
    except (BlowUpError, ConfigError) as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(path)
        with safe_read(path) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise click.ClickException(f"Invalid UTF-8 sequence in {path}: {error}") from error
    except (IOError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    warn = _file_warn(filepath) if config.warn_unterminated else None
    result = transform_markdown(content, header, warn)
    click.echo(result.content, nl=False)


if __name__ == "__main__":
    cli()
