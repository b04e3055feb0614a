"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .constants import PREPROCESSOR_NAME

BOOK_TOML = "book.toml"

# Keys mdbook itself reads from every `[preprocessor.*]` table
MDBOOK_RESERVED_KEYS = frozenset({"command", "renderers", "before", "after", "optional"})


@dataclass
class MulticodeConfig:
    """Settings read from the ``[preprocessor.multicode]`` table.

    Attributes:
        blow_up: Fail the whole run before any chapter is processed. Set by
            the mere presence of the ``blow-up`` key, whatever its value.
        template: Path of a replacement template header, relative to the book
            root. None selects the bundled header.
        warn_unterminated: Report unterminated and empty multicode blocks on
            stderr.

    Examples:
        MulticodeConfig(template="theme/multicode.html")
    """

    blow_up: bool = False
    template: str | None = None
    warn_unterminated: bool = False


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`template` must be a string")
    """


_MISSING = object()


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def config_from_table(raw_config: object, source: str = PREPROCESSOR_NAME) -> MulticodeConfig:
    """Build a `MulticodeConfig` from a raw preprocessor table.

    Keys use book.toml's kebab-case spelling. mdbook's own preprocessor keys
    (``command``, ``renderers``, ...) are ignored.

    Args:
        raw_config: The table as decoded from TOML or JSON; None means empty.
        source: Description of where the table came from, for error messages.

    Returns:
        MulticodeConfig: Validated configuration.

    Raises:
        ConfigError: If the table is not a mapping, holds unknown keys, or
            holds values of the wrong type.

    Examples:
        config_from_table({"warn-unterminated": True})
    """
    if raw_config is None:
        return MulticodeConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[preprocessor.{PREPROCESSOR_NAME}]` settings in {source}")

    # `blow-up` is a presence switch and wins over any other setting,
    # valid or not; `blow-up = false` still blows up
    if "blow-up" in raw_config or "blow_up" in raw_config:
        return MulticodeConfig(blow_up=True)

    known = {field.name for field in fields(MulticodeConfig)}
    values: dict[str, Any] = {}
    for key, value in raw_config.items():
        if key in MDBOOK_RESERVED_KEYS:
            continue
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigError(
                f"Unsupported key `{key}` in `[preprocessor.{PREPROCESSOR_NAME}]` ({source})"
            )
        values[name] = value

    config = MulticodeConfig(**values)
    validate_config(config)
    return config


def validate_config(config: MulticodeConfig) -> None:
    """Validate a `MulticodeConfig` instance.

    Raises:
        ConfigError: If a field holds a value of the wrong type or the
            template path is empty.
    """
    if not isinstance(config.blow_up, bool):
        raise ConfigError("`blow-up` must be a boolean")
    if config.template is not None:
        if not isinstance(config.template, str):
            raise ConfigError("`template` must be a string")
        if not config.template.strip():
            raise ConfigError("`template` must not be empty")
    if not isinstance(config.warn_unterminated, bool):
        raise ConfigError("`warn-unterminated` must be a boolean")


def config_from_context(book_config: object) -> MulticodeConfig:
    """Read the preprocessor table out of mdbook's serialized book config.

    Args:
        book_config: The ``config`` object of the preprocessor context.

    Returns:
        MulticodeConfig: Configuration, with defaults when the table is absent.

    Raises:
        ConfigError: If the table exists but is invalid.
    """
    raw_config = _extract_table(book_config, ("preprocessor", PREPROCESSOR_NAME))
    if raw_config is _MISSING:
        return MulticodeConfig()
    return config_from_table(raw_config, source="book configuration")


def find_book_root(search_path: Path) -> Path | None:
    """Return the nearest directory at or above `search_path` holding a book.toml."""
    current = search_path.resolve()
    while True:
        if (current / BOOK_TOML).is_file():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(search_path: Path) -> MulticodeConfig:
    """Load configuration from the nearest book.toml.

    Walks parent directories from `search_path` to the filesystem root and
    reads the ``[preprocessor.multicode]`` table of the first book.toml
    found. Returns defaults when there is no book.toml or it has no such
    table.

    Args:
        search_path: Directory used as the starting point for the lookup.

    Returns:
        MulticodeConfig: Loaded configuration.

    Raises:
        ConfigError: If book.toml cannot be read or decoded, or the table is
            invalid.

    Examples:
        load_config(Path("book/src"))
    """
    book_root = find_book_root(search_path)
    if book_root is None:
        return MulticodeConfig()

    config_file = book_root / BOOK_TOML
    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        raise ConfigError(f"Cannot read {config_file}: {error}") from error

    raw_config = _extract_table(data, ("preprocessor", PREPROCESSOR_NAME))
    if raw_config is _MISSING:
        return MulticodeConfig()
    return config_from_table(raw_config, source=str(config_file))
