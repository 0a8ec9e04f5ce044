"""Utility functions and helpers.

This module provides various utilities for trace-window:
- errors: Exception hierarchy
- security: Secret redaction, terminal sanitization
- logging: Structured logging with secret sanitization
"""

from trace_window.utils.errors import (
    InvalidArgumentError,
    MarkupParseError,
    SourceUnavailableError,
    TraceWindowError,
)
from trace_window.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from trace_window.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    sanitize_for_terminal,
)

__all__ = [
    # Errors
    "InvalidArgumentError",
    "MarkupParseError",
    "SourceUnavailableError",
    "TraceWindowError",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "sanitize_for_terminal",
]
