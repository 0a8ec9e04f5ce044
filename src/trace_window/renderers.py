"""Renderers turning FaultReports into text or HTML.

Renderers emit window lines and call strings verbatim. Every window line is
already self-contained, so no markup state is tracked here.
"""

from __future__ import annotations

import html
import json

from trace_window.adapters.span_markup import render_line_html
from trace_window.models.report import FaultReport
from trace_window.utils.security import sanitize_for_terminal

ERROR_MARKER = ">"

HTML_STYLE = """
            html { font: 16px/1.2 Trebuchet MS, sans-serif; }
            ol { background: #eee; border-left: 3em solid #ccc; font-family: monospace;
                 padding: 8px 12px 8px 3.5em; white-space: pre; }
            ol, blockquote { font-size: 0.8em; }
            li span.highlight { background: #c00; color: #fff; font-weight: bold; }"""


def render_text(report: FaultReport) -> str:
    """Render a report for a terminal.

    The faulting line is marked with '>' in the gutter and every call block
    is listed under its file.
    """
    out = [
        sanitize_for_terminal(report.title),
        f"  in {sanitize_for_terminal(report.file)}, line {report.line}",
        "",
    ]

    if report.window:
        width = len(str(report.window[-1].number))
        out.append("Extract:")
        for line in report.window:
            marker = ERROR_MARKER if line.is_error_line else " "
            text = sanitize_for_terminal(line.text)
            out.append(f"{marker} {line.number:>{width}} | {text}".rstrip())
    elif not report.source_available:
        out.append("Extract: source unavailable")

    if report.blocks:
        out.extend(["", "Backtrace:"])
        for block in report.blocks:
            out.append(f"  {sanitize_for_terminal(block.file or '(unknown file)')}")
            out.extend(f"    {sanitize_for_terminal(call)}" for call in block.calls)

    return "\n".join(out) + "\n"


def render_html(report: FaultReport) -> str:
    """Render a report as a standalone HTML page.

    The extract is an ordered list starting at the first window line, the
    faulting line is wrapped in a 'highlight' span and the backtrace shows
    one blockquote per file.
    """
    escape = html.escape
    body = [
        f"<h3>Error in {escape(report.file)}, line {report.line}:</h3>",
        f"<h4>{escape(report.title)}</h4>",
    ]

    if report.window:
        body.append("<h3>Extract</h3>")
        body.append(f'<ol start="{report.window[0].number}">')
        for line in report.window:
            content = render_line_html(line)
            if line.is_error_line:
                content = f'<span class="highlight">{content}</span>'
            body.append(f"<li>{content}</li>")
        body.append("</ol>")

    if report.blocks:
        body.append("<h3>Backtrace</h3>")
        for block in report.blocks:
            calls = "<br/>".join(escape(call) for call in block.calls)
            if block.file is None:
                body.append(f"<tt>{calls}</tt>")
            else:
                body.append(
                    f"<p><strong>{escape(block.file)}</strong></p>"
                    f"<blockquote><tt>{calls}</tt></blockquote>"
                )

    return (
        "<!doctype html>\n<html>\n<head>\n"
        f"<title>{escape(report.exception_type or 'error')} | trace-window</title>\n"
        f'<style type="text/css">{HTML_STYLE}\n</style>\n'
        "</head>\n<body>\n" + "\n".join(body) + "\n</body>\n</html>\n"
    )


def render_json(report: FaultReport) -> str:
    """Render a report as indented JSON."""
    return json.dumps(report.to_dict(), indent=2)


RENDERERS = {
    "text": render_text,
    "html": render_html,
    "json": render_json,
}
