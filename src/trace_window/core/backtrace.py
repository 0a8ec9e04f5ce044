"""Grouping of captured call stacks into per-file call blocks.

Stack capture facilities hand frames over innermost call first. For display
the order is reversed, so the call that started the chain comes first, and
consecutive calls made from the same file are merged into one block.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce

import structlog

from trace_window.models.frames import CallBlock, CallFrame
from trace_window.utils.logging import LogEventNames
from trace_window.utils.security import SecretRedactor

log = structlog.get_logger()


@dataclass(frozen=True)
class _Accumulator:
    """Rolling state of the grouping fold."""

    blocks: tuple[CallBlock, ...] = ()
    current: CallBlock | None = None
    current_file: str | None = None  # sticky across frames without a file

    def finish(self) -> tuple[CallBlock, ...]:
        if self.current is None or not self.current.calls:
            return self.blocks
        return (*self.blocks, self.current)


class BacktraceGrouper:
    """Turns an innermost-first call stack into chronological call blocks.

    A frame without a file (code evaluated at runtime, builtins) starts a
    block without a file heading. The last known file of the scope is kept,
    so following frames from that same file continue the headless block.

    Example:
        grouper = BacktraceGrouper()
        for block in grouper.group(frames):
            print(block.file)
            for call in block.calls:
                print("   ", call)
    """

    def __init__(self, redactor: SecretRedactor | None = None) -> None:
        """Initialize the BacktraceGrouper.

        Args:
            redactor: Redacts secrets from rendered call strings when given
        """
        self._redactor = redactor

    def group(self, frames: Sequence[CallFrame]) -> tuple[CallBlock, ...]:
        """Group frames into call blocks.

        Args:
            frames: Call frames, innermost call first

        Returns:
            Call blocks, outermost call first
        """
        blocks = reduce(self._step, reversed(frames), _Accumulator()).finish()

        log.debug(
            LogEventNames.BACKTRACE_GROUPED,
            frame_count=len(frames),
            block_count=len(blocks),
        )

        return blocks

    def _step(self, acc: _Accumulator, frame: CallFrame) -> _Accumulator:
        """Fold one chronological frame into the accumulator."""
        call = self._render(frame)

        if frame.file is None:
            # Scope is unknown, the call starts a block without a file heading
            return _Accumulator(
                blocks=acc.finish(),
                current=CallBlock(file=None, calls=(call,)),
                current_file=acc.current_file,
            )

        if acc.current is None or frame.file != acc.current_file:
            return _Accumulator(
                blocks=acc.finish(),
                current=CallBlock(file=frame.file, calls=(call,)),
                current_file=frame.file,
            )

        return _Accumulator(
            blocks=acc.blocks,
            current=CallBlock(file=acc.current.file, calls=(*acc.current.calls, call)),
            current_file=acc.current_file,
        )

    def _render(self, frame: CallFrame) -> str:
        call = frame.render()
        if self._redactor is not None:
            call = self._redactor.redact(call)
        return call
