"""Core components.

This module exports the main classes:
- SourceWindowExtractor: Self-contained context window around a fault line
- BacktraceGrouper: Chronological per-file call blocks from a call stack
- FaultReporter: Composes both into a FaultReport
- FaultHook / WarningCollector: Exception hook and warning collection
"""

from trace_window.core.backtrace import BacktraceGrouper
from trace_window.core.fault_report import FaultReporter, SourceLoader, capture, create_reporter
from trace_window.core.hooks import (
    CollectedWarning,
    FaultHook,
    Severity,
    WarningCollector,
    create_fault_hook,
    severity_of,
)
from trace_window.core.source_window import SourceWindowExtractor, repair_line

__all__ = [
    "BacktraceGrouper",
    "CollectedWarning",
    "FaultHook",
    "FaultReporter",
    "Severity",
    "SourceLoader",
    "SourceWindowExtractor",
    "WarningCollector",
    "capture",
    "create_fault_hook",
    "create_reporter",
    "repair_line",
    "severity_of",
]
