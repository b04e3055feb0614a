"""Package-specific exception types."""

from __future__ import annotations


class MulticodeError(Exception):
    """Base class for errors raised by mdbook-multicode."""


class BlowUpError(MulticodeError):
    """Raised when the preprocessor configuration requests a deliberate failure.

    Args:
        preprocessor: Name of the preprocessor table holding the ``blow-up`` key.
    """

    def __init__(self, preprocessor: str):
        self.preprocessor = preprocessor
        super().__init__("Blowing up!")


class BookFormatError(MulticodeError, ValueError):
    """Raised when mdbook's preprocessor input cannot be interpreted.

    Args:
        message: Description of the problem.
        path: Location of the offending value inside the input, if known.
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message} (at {path})" if path else message)
