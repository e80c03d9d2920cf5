"""Error hierarchy for accesslens."""
from __future__ import annotations


class AccessLensError(Exception):
    """Base error for all accesslens errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InputError(AccessLensError):
    """The markup handed to the analyzer cannot be analyzed at all.

    Raised before analysis starts: empty or non-string input, input that
    contains no elements, or input over the configured size limit.
    """


class ColorParseError(AccessLensError, ValueError):
    """A color value could not be parsed."""

    def __init__(self, value: object, *, cause: Exception | None = None) -> None:
        super().__init__(f"Unparseable color: {value!r}", cause=cause)
        self.value = value


class InternalError(AccessLensError):
    """Unexpected fault inside the engine.

    The message is deliberately generic; the original exception is kept on
    ``cause`` (and chained) for logging.
    """

    def __init__(self, message: str = "Internal error during analysis", *, cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)


class ParseRecoveryWarning(UserWarning):
    """A malformed style fragment or selector that was skipped.

    These are collected, never raised.
    """

    def __init__(self, message: str, fragment: str = "") -> None:
        super().__init__(message)
        self.fragment = fragment


class StyleParseError(AccessLensError):
    """Raised when a selector cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
