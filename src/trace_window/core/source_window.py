"""Extraction of a self-contained context window from highlighted source.

This module implements the SourceWindowExtractor class that turns the line
sequence of a syntax highlighter into a bounded window around a fault. It
handles:
- Boundary repair of color spans that the highlighter left open across lines
- Stripping of all color from the faulting line
- Slicing of the repaired lines around the fault location

Repair always runs over the whole file before slicing, because a span that
is still open at the window start may have been opened many lines earlier.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from trace_window.models.markup import (
    HighlightedLine,
    MarkupToken,
    RepairedLine,
    TokenKind,
    is_blank,
)
from trace_window.models.window import (
    DEFAULT_CONTEXT_AFTER,
    DEFAULT_CONTEXT_BEFORE,
    WindowSpec,
)
from trace_window.utils.errors import InvalidArgumentError
from trace_window.utils.logging import LogEventNames

log = structlog.get_logger()

# Colors of the spans left open at the end of a line, outermost first.
Carry = tuple[str, ...]


def repair_line(
    number: int,
    tokens: HighlightedLine,
    carry: Carry,
    is_error_line: bool = False,
) -> tuple[RepairedLine, Carry]:
    """Make a single line self-contained.

    This is the step function of the repair fold: it takes the colors left
    open by the previous line and returns the repaired line together with the
    colors that remain open for the next one.

    Args:
        number: 1-based line number
        tokens: Markup tokens of the line as emitted by the highlighter
        carry: Colors left open by the previous line
        is_error_line: Whether this is the faulting line. A blank faulting
            line is flagged but keeps the carry like any other blank line

    Returns:
        Tuple of (repaired line, carry for the next line)
    """
    if is_blank(tokens):
        return RepairedLine(number, tokens, is_error_line=is_error_line), carry

    if is_error_line:
        # The renderer styles the faulting line itself, inherited color is dropped
        stripped = tuple(token for token in tokens if token.kind is TokenKind.TEXT)
        return RepairedLine(number, stripped, is_error_line=True), ()

    stack: list[str] = []
    repaired: list[MarkupToken] = []
    dropped = 0

    for token in (*(MarkupToken.open(color) for color in carry), *tokens):
        if token.kind is TokenKind.OPEN:
            stack.append(token.color or "")
        elif token.kind is TokenKind.CLOSE:
            if not stack:
                dropped += 1
                continue
            stack.pop()
        repaired.append(token)

    if dropped:
        log.debug(LogEventNames.UNMATCHED_CLOSE_DROPPED, line=number, count=dropped)

    repaired.extend(MarkupToken.close() for _ in stack)

    return RepairedLine(number, tuple(repaired)), tuple(stack)


class SourceWindowExtractor:
    """Extracts a bounded, self-contained window of highlighted source lines.

    Example:
        extractor = SourceWindowExtractor()
        window = extractor.extract(highlighted_lines, error_line=42)
        for line in window:
            print(line.number, line.text)
    """

    def __init__(
        self,
        context_before: int = DEFAULT_CONTEXT_BEFORE,
        context_after: int = DEFAULT_CONTEXT_AFTER,
    ) -> None:
        """Initialize the SourceWindowExtractor.

        Args:
            context_before: Lines shown before the faulting line, files no
                longer than this are shown in full
            context_after: Lines shown after the faulting line

        Raises:
            InvalidArgumentError: If a context size is negative
        """
        if context_before < 0 or context_after < 0:
            raise InvalidArgumentError("Context sizes must not be negative")
        self._context_before = context_before
        self._context_after = context_after

    def repair(
        self,
        lines: Sequence[HighlightedLine],
        error_line: int,
    ) -> tuple[RepairedLine, ...]:
        """Repair every line of a highlighted file.

        Args:
            lines: Highlighted lines of the whole file
            error_line: 1-based number of the faulting line

        Returns:
            One RepairedLine per input line, in order

        Raises:
            InvalidArgumentError: If error_line is not positive
        """
        if error_line <= 0:
            raise InvalidArgumentError(f"Error line must be positive, got {error_line}")

        repaired: list[RepairedLine] = []
        carry: Carry = ()

        for number, tokens in enumerate(lines, start=1):
            line, carry = repair_line(number, tuple(tokens), carry, number == error_line)
            repaired.append(line)

        return tuple(repaired)

    def extract(
        self,
        lines: Sequence[HighlightedLine],
        error_line: int,
    ) -> tuple[RepairedLine, ...]:
        """Extract the context window around a faulting line.

        An error line past the end of the file shows the last lines of the
        file instead, with no line flagged.

        Args:
            lines: Highlighted lines of the whole file
            error_line: 1-based number of the faulting line

        Returns:
            Repaired lines of the window, in order

        Raises:
            InvalidArgumentError: If error_line is not positive
        """
        repaired = self.repair(lines, error_line)
        total = len(repaired)

        if not total:
            return ()

        spec = WindowSpec(
            error_line=min(error_line, total),
            total_lines=total,
            context_before=self._context_before,
            context_after=self._context_after,
        )

        if spec.covers_whole_file:
            window = repaired
        else:
            window = repaired[spec.start : spec.start + spec.length]

        log.debug(
            LogEventNames.SOURCE_WINDOW_EXTRACTED,
            error_line=error_line,
            total_lines=total,
            first_line=window[0].number if window else None,
            line_count=len(window),
        )

        return window
