"""Adapters for highlighter output and runtime stack capture."""

from trace_window.adapters.python_runtime import fault_from_exception, frames_from_traceback
from trace_window.adapters.span_markup import (
    html_file_loader,
    load_plain_source,
    parse_highlighted_html,
    render_line_html,
)

__all__ = [
    "fault_from_exception",
    "frames_from_traceback",
    "html_file_loader",
    "load_plain_source",
    "parse_highlighted_html",
    "render_line_html",
]
