"""Shared test fixtures for trace-window."""

from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path

import pytest

from trace_window.models.frames import CallFrame
from trace_window.models.markup import HighlightedLine, MarkupToken

FIXTURES_DIR = Path(__file__).parent / "fixtures"

COLORS = ("#0000BB", "#007700", "#DD0000", "#FF8000")


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def highlighted_php() -> str:
    """Load a PHP file as emitted by highlight_file()."""
    return (FIXTURES_DIR / "highlighted.php.html").read_text()


@pytest.fixture
def make_plain_lines() -> Callable[[int], tuple[HighlightedLine, ...]]:
    """Return a factory for uncolored files of the given length."""

    def make(count: int) -> tuple[HighlightedLine, ...]:
        return tuple((MarkupToken.plain(f"line {n}"),) for n in range(1, count + 1))

    return make


@pytest.fixture
def make_random_lines() -> Callable[[int, int], tuple[HighlightedLine, ...]]:
    """Return a factory for random highlighted files.

    Spans open and close at random and are frequently left open at the end
    of a line. Every close matches an earlier open, possibly on a previous
    line, and nesting never goes deeper than two spans.
    """

    def make(seed: int, count: int) -> tuple[HighlightedLine, ...]:
        rng = random.Random(seed)
        depth = 0
        lines: list[HighlightedLine] = []

        for n in range(count):
            tokens: list[MarkupToken] = []
            if rng.random() < 0.1:
                lines.append(() if rng.random() < 0.5 else (MarkupToken.plain("   "),))
                continue
            for i in range(rng.randint(1, 6)):
                roll = rng.random()
                if roll < 0.35 and depth < 2:
                    tokens.append(MarkupToken.open(rng.choice(COLORS)))
                    depth += 1
                elif roll < 0.6 and depth > 0:
                    tokens.append(MarkupToken.close())
                    depth -= 1
                else:
                    tokens.append(MarkupToken.plain(f"t{n}.{i} "))
            lines.append(tuple(tokens))

        return tuple(lines)

    return make


@pytest.fixture
def sample_frames() -> tuple[CallFrame, ...]:
    """Return frames of a small call chain, innermost call first."""
    return (
        CallFrame("parse", file="/app/src/parser.py", line=88, args=("'x=1'",)),
        CallFrame("load", file="/app/src/loader.py", line=31, class_name="Loader", args=()),
        CallFrame("run", file="/app/src/loader.py", line=12, args=("'config.yaml'", "True")),
        CallFrame("main", file="/app/main.py", line=5),
    )
