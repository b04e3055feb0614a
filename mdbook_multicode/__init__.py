"""
mdbook-multicode: tabbed multi-language code examples for mdbook.

This package can be used both as an mdbook preprocessor and as a library.

book.toml:
    [preprocessor.multicode]
    command = "mdbook-multicode"

Library Usage:
    from mdbook_multicode import default_template, transform_markdown

    result = transform_markdown(content, default_template())
    html_ready = result.content
"""

from .config import ConfigError, MulticodeConfig
from .emitter import emit, group_id, render_block
from .escape import escape_html
from .exceptions import BlowUpError, BookFormatError, MulticodeError
from .models import Idle, InBlock, InLanguageSection, MulticodeBlock, TransformResult
from .parser import transform_markdown
from .preprocessor import MulticodePreprocessor
from .template import default_template

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "transform_markdown",
    "emit",
    "render_block",
    "group_id",
    "escape_html",
    # Preprocessor
    "MulticodePreprocessor",
    "MulticodeConfig",
    "default_template",
    # Data models
    "Idle",
    "InBlock",
    "InLanguageSection",
    "MulticodeBlock",
    "TransformResult",
    # Exceptions
    "BlowUpError",
    "BookFormatError",
    "ConfigError",
    "MulticodeError",
    # Version
    "__version__",
]
