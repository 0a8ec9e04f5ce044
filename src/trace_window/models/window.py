"""Data model for the context window around a fault location."""

from __future__ import annotations

from dataclasses import dataclass

from trace_window.utils.errors import InvalidArgumentError

DEFAULT_CONTEXT_BEFORE = 8
DEFAULT_CONTEXT_AFTER = 3


@dataclass(frozen=True)
class WindowSpec:
    """Bounds of the slice of source lines shown around a fault.

    Raises:
        InvalidArgumentError: If the error line is not positive or any size
            is negative
    """

    error_line: int  # 1-based
    total_lines: int
    context_before: int = DEFAULT_CONTEXT_BEFORE
    context_after: int = DEFAULT_CONTEXT_AFTER

    def __post_init__(self) -> None:
        if self.error_line <= 0:
            raise InvalidArgumentError(f"Error line must be positive, got {self.error_line}")
        if self.total_lines < 0:
            raise InvalidArgumentError(f"Total lines must not be negative, got {self.total_lines}")
        if self.context_before < 0 or self.context_after < 0:
            raise InvalidArgumentError(
                f"Context sizes must not be negative, got "
                f"{self.context_before} before and {self.context_after} after"
            )

    @property
    def start(self) -> int:
        """0-based index of the first line in the window."""
        return max(0, self.error_line - self.context_before - 1)

    @property
    def length(self) -> int:
        """Number of lines in the window, before clamping to the file end."""
        return (self.error_line - 1 - self.start) + self.context_after + 1

    @property
    def covers_whole_file(self) -> bool:
        """Short files are shown in full."""
        return self.total_lines <= self.context_before
