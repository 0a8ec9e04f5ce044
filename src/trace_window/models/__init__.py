"""Data models and value objects."""

from .frames import CallBlock, CallFrame
from .markup import ColorRun, HighlightedLine, MarkupToken, RepairedLine, TokenKind
from .report import Fault, FaultReport
from .window import WindowSpec

__all__ = [
    # Markup models
    "TokenKind",
    "MarkupToken",
    "HighlightedLine",
    "ColorRun",
    "RepairedLine",
    # Window models
    "WindowSpec",
    # Call stack models
    "CallFrame",
    "CallBlock",
    # Report models
    "Fault",
    "FaultReport",
]
