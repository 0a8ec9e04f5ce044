"""Data models for captured faults and their display reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from trace_window.models.frames import CallBlock, CallFrame
from trace_window.models.markup import RepairedLine


@dataclass(frozen=True)
class Fault:
    """A raised fault as handed over by an error or exception hook."""

    file: str
    line: int
    message: str
    frames: tuple[CallFrame, ...] = ()  # innermost call first
    exception_type: str | None = None


@dataclass(frozen=True)
class FaultReport:
    """Everything a renderer needs to display a fault."""

    file: str
    line: int
    message: str
    window: tuple[RepairedLine, ...]
    blocks: tuple[CallBlock, ...]
    exception_type: str | None = None
    source_available: bool = True

    @property
    def error_line(self) -> RepairedLine | None:
        """The window line flagged as the fault location, if it is shown."""
        for line in self.window:
            if line.is_error_line:
                return line
        return None

    @property
    def title(self) -> str:
        """
        Short heading for the report.

        Format: 'ExceptionType: message' or just the message.
        """
        if self.exception_type:
            return f"{self.exception_type}: {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable mapping."""
        return {
            "file": self.file,
            "line": self.line,
            "message": self.message,
            "exception_type": self.exception_type,
            "source_available": self.source_available,
            "window": [
                {
                    "number": line.number,
                    "is_error_line": line.is_error_line,
                    "text": line.text,
                    "runs": [{"text": run.text, "color": run.color} for run in line.runs],
                }
                for line in self.window
            ],
            "blocks": [{"file": block.file, "calls": list(block.calls)} for block in self.blocks],
        }
