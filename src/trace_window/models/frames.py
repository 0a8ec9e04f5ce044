"""Data models for captured call stacks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallFrame:
    """A single entry of a captured call stack.

    Frames are supplied innermost-call-first. Arguments are already
    stringified by whoever captured the stack.
    """

    function_name: str
    file: str | None = None
    line: int | None = None
    class_name: str | None = None
    args: tuple[str, ...] = ()

    def render(self) -> str:
        """
        Format the frame as a call string.

        Format: '<line>: <class>::<function>(<arg>, <arg>)' where the line
        and class prefixes are omitted when unknown.
        """
        call = f"{self.line}: " if self.line is not None else ""
        if self.class_name:
            call += f"{self.class_name}::"
        return f"{call}{self.function_name}({', '.join(self.args)})"


@dataclass(frozen=True)
class CallBlock:
    """Chronologically consecutive calls attributed to the same file."""

    file: str | None
    calls: tuple[str, ...] = ()
