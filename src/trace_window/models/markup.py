"""Data models for syntax-highlighted source lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TokenKind(StrEnum):
    """Kind of a markup token emitted by a highlighter."""

    OPEN = "open"
    CLOSE = "close"
    TEXT = "text"


@dataclass(frozen=True)
class MarkupToken:
    """A single element of a highlighter's markup stream.

    OPEN tokens carry a color, TEXT tokens carry visible text and CLOSE
    tokens carry neither. A close always terminates the innermost open span.
    """

    kind: TokenKind
    text: str = ""
    color: str | None = None

    @classmethod
    def open(cls, color: str) -> MarkupToken:
        """Create a token opening a span of the given color."""
        return cls(TokenKind.OPEN, color=color)

    @classmethod
    def close(cls) -> MarkupToken:
        """Create a token closing the innermost open span."""
        return cls(TokenKind.CLOSE)

    @classmethod
    def plain(cls, text: str) -> MarkupToken:
        """Create a token of visible text."""
        return cls(TokenKind.TEXT, text=text)


# One physical source line as emitted by the highlighter, before repair.
HighlightedLine = tuple[MarkupToken, ...]


@dataclass(frozen=True)
class ColorRun:
    """A contiguous piece of visible text sharing one color (None is plain)."""

    text: str
    color: str | None = None


def visible_text(tokens: tuple[MarkupToken, ...]) -> str:
    """Concatenate the visible text of a token sequence, ignoring markup."""
    return "".join(token.text for token in tokens if token.kind is TokenKind.TEXT)


def is_blank(tokens: tuple[MarkupToken, ...]) -> bool:
    """Check if a line carries no markup and only whitespace text."""
    return all(token.kind is TokenKind.TEXT and not token.text.strip() for token in tokens)


@dataclass(frozen=True)
class RepairedLine:
    """A highlighted line that is self-contained.

    Every span opened on the line is also closed on it, so the line can be
    rendered on its own without inheriting state from its neighbours.
    """

    number: int  # 1-based physical line number
    tokens: HighlightedLine
    is_error_line: bool = False

    @property
    def text(self) -> str:
        """Visible text of the line without any markup."""
        return visible_text(self.tokens)

    @property
    def opens(self) -> int:
        """Number of span openings on the line."""
        return sum(1 for token in self.tokens if token.kind is TokenKind.OPEN)

    @property
    def closes(self) -> int:
        """Number of span closings on the line."""
        return sum(1 for token in self.tokens if token.kind is TokenKind.CLOSE)

    @property
    def runs(self) -> tuple[ColorRun, ...]:
        """
        Resolve the markup into color runs.

        The innermost open span decides the color of each piece of text.
        Adjacent text of the same color is merged into one run.
        """
        stack: list[str] = []
        runs: list[ColorRun] = []

        for token in self.tokens:
            if token.kind is TokenKind.OPEN:
                stack.append(token.color or "")
            elif token.kind is TokenKind.CLOSE:
                if stack:
                    stack.pop()
            elif token.text:
                color = stack[-1] if stack else None
                if runs and runs[-1].color == color:
                    runs[-1] = ColorRun(runs[-1].text + token.text, color)
                else:
                    runs.append(ColorRun(token.text, color))

        return tuple(runs)
