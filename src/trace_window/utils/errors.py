"""Exceptions raised by the trace window components."""


class TraceWindowError(Exception):
    """Base exception for all trace window errors."""


class InvalidArgumentError(TraceWindowError, ValueError):
    """A caller passed an argument that violates a precondition."""


class SourceUnavailableError(TraceWindowError):
    """The source of the faulting file could not be loaded.

    Attributes:
        path: Path that was requested from the loader, if known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class MarkupParseError(TraceWindowError, ValueError):
    """Highlighter output could not be read as markup."""
