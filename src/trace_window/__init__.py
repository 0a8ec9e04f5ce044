"""Trace window and backtrace formatting for fault reports."""

from trace_window.adapters import fault_from_exception, load_plain_source
from trace_window.core import (
    BacktraceGrouper,
    FaultHook,
    FaultReporter,
    SourceWindowExtractor,
    WarningCollector,
    capture,
)
from trace_window.models import (
    CallBlock,
    CallFrame,
    ColorRun,
    Fault,
    FaultReport,
    MarkupToken,
    RepairedLine,
    WindowSpec,
)
from trace_window.renderers import render_html, render_json, render_text

__all__ = [
    "BacktraceGrouper",
    "CallBlock",
    "CallFrame",
    "ColorRun",
    "Fault",
    "FaultHook",
    "FaultReport",
    "FaultReporter",
    "MarkupToken",
    "RepairedLine",
    "SourceWindowExtractor",
    "WarningCollector",
    "WindowSpec",
    "capture",
    "fault_from_exception",
    "load_plain_source",
    "render_html",
    "render_json",
    "render_text",
]
