"""Conversion between color-span HTML and markup tokens.

Highlighters such as PHP's highlight_file() emit a whole file as one block
of HTML: a <code> wrapper around <span style="color: #rrggbb"> runs, with
<br /> between physical lines. A span is only closed when the color
changes, which is often several lines later. This module splits such
output into one HighlightedLine per physical line and renders repaired
lines back to HTML.
"""

from __future__ import annotations

import html
import re
from pathlib import Path

from trace_window.models.markup import HighlightedLine, MarkupToken, RepairedLine, TokenKind
from trace_window.utils.errors import MarkupParseError

# Leading <code> plus the span wrapping the whole file, and their closing tags
WRAPPER_START = re.compile(
    r"^\s*(?:<pre>)?<code[^>]*>\s*(<span style=\"color:\s*#[0-9a-f]{3,6}\">\r?\n)?", re.I
)
WRAPPER_END = re.compile(r"\s*</code>(?:</pre>)?\s*$", re.I)
WRAPPER_SPAN_END = re.compile(r"\s*</span>\s*</code>(?:</pre>)?\s*$", re.I)
LINE_BREAK = re.compile(r"<br\s*/?>", re.I)
TAG = re.compile(r"<(/?)([a-z][a-z0-9]*)([^>]*)>", re.I)
STYLE_COLOR = re.compile(r"color:\s*([^;\"']+)", re.I)
CLASS_NAME = re.compile(r"class=\"([^\"]+)\"", re.I)


def _span_color(attributes: str) -> str:
    """Color identifier of a span: its style color, else its class, else empty."""
    match = STYLE_COLOR.search(attributes) or CLASS_NAME.search(attributes)
    return match.group(1).strip() if match else ""


def _unescape(text: str) -> str:
    return html.unescape(text).replace("\xa0", " ")


def parse_line(markup: str) -> HighlightedLine:
    """Tokenize the markup of a single line.

    Spans become OPEN/CLOSE tokens, entities in text are decoded and any
    other tag is dropped.

    Args:
        markup: HTML of one physical line

    Returns:
        Markup tokens of the line
    """
    tokens: list[MarkupToken] = []
    position = 0

    for match in TAG.finditer(markup):
        if match.start() > position:
            tokens.append(MarkupToken.plain(_unescape(markup[position : match.start()])))
        position = match.end()

        closing, name, attributes = match.groups()
        if name.lower() != "span":
            continue
        tokens.append(MarkupToken.close() if closing else MarkupToken.open(_span_color(attributes)))

    if position < len(markup):
        tokens.append(MarkupToken.plain(_unescape(markup[position:])))

    return tuple(tokens)


def parse_highlighted_html(markup: str | bytes) -> tuple[HighlightedLine, ...]:
    """Split highlighter HTML into one HighlightedLine per physical line.

    Args:
        markup: HTML emitted by the highlighter for a whole file

    Returns:
        Highlighted lines in file order

    Raises:
        MarkupParseError: If the markup is neither text nor bytes
    """
    if isinstance(markup, bytes):
        markup = markup.decode("utf-8", errors="replace")
    if not isinstance(markup, str):
        raise MarkupParseError(f"Expected highlighted markup as text, got {type(markup).__name__}")

    body = markup
    start = WRAPPER_START.match(body)
    if start:
        body = body[start.end() :]
        end = WRAPPER_SPAN_END if start.group(1) else WRAPPER_END
        body = end.sub("", body, count=1)

    if not body:
        return ()

    if LINE_BREAK.search(body):
        raw_lines = [line.replace("\n", "").replace("\r", "") for line in LINE_BREAK.split(body)]
    else:
        raw_lines = body.splitlines()

    return tuple(parse_line(line) for line in raw_lines)


def render_line_html(line: RepairedLine) -> str:
    """Render a repaired line back to color-span HTML with escaped text."""
    parts: list[str] = []
    for token in line.tokens:
        if token.kind is TokenKind.OPEN:
            parts.append(f'<span style="color: {html.escape(token.color or "")}">')
        elif token.kind is TokenKind.CLOSE:
            parts.append("</span>")
        else:
            parts.append(html.escape(token.text))
    return "".join(parts)


def load_plain_source(path: str) -> tuple[HighlightedLine, ...]:
    """Load a source file without any highlighting.

    Args:
        path: Path of the source file

    Returns:
        One uncolored line per physical line

    Raises:
        OSError: If the file cannot be read
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return tuple((MarkupToken.plain(line),) if line else () for line in text.splitlines())


def html_file_loader(path: str) -> tuple[HighlightedLine, ...]:
    """Load a pre-highlighted HTML dump of a source file.

    Raises:
        OSError: If the file cannot be read
    """
    return parse_highlighted_html(Path(path).read_text(encoding="utf-8", errors="replace"))
