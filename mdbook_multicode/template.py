"""Template header prepended to every processed chapter."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from .config import ConfigError, MulticodeConfig
from .constants import TEMPLATE_RESOURCE
from .filesystem import safe_read


def default_template() -> str:
    """Return the bundled header defining ``changeCodeExample``.

    The trailing newline of the resource file is stripped; the parser adds
    its own after the header.
    """
    text = resources.files(__package__).joinpath(TEMPLATE_RESOURCE).read_text(encoding="UTF-8")
    return text.rstrip("\n")


def load_template(config: MulticodeConfig, book_root: Path | None = None) -> str:
    """Resolve the header for a run.

    Args:
        config: Configuration naming an optional override file.
        book_root: Directory that relative override paths are resolved
            against. Defaults to the current directory.

    Returns:
        str: Header text without a trailing newline.

    Raises:
        ConfigError: If the override file cannot be read or decoded.

    Examples:
        load_template(MulticodeConfig(template="theme/tabs.html"), Path("book"))
    """
    if config.template is None:
        return default_template()

    path = Path(config.template).expanduser()
    if not path.is_absolute():
        path = (book_root or Path.cwd()) / path

    try:
        with safe_read(path) as file:
            return file.read().rstrip("\n")
    except UnicodeDecodeError as error:
        raise ConfigError(f"Invalid UTF-8 sequence in template {path}: {error}") from error
    except IOError as error:
        raise ConfigError(f"Cannot read template: {error}") from error
